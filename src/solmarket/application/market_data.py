"""
Market Data Service - On-chain Market Snapshot Facade

This module is the public entry point. It refreshes the SOL price, resolves
the token's pool and turns reserves into a MarketSnapshot:

- price: quote reserve / token reserve, times the SOL price unless the
  quote side is a stablecoin;
- liquidity: 2 x the quote reserve value. A constant-product pool holds equal
  value on both sides at the current price, so this approximates TVL rather
  than measuring it;
- market cap: price x the caller-supplied circulating supply;
- buys/sells: recent signature count split evenly. This is a placeholder
  with no directional signal, not a classification of trades.

get_market_data and get_lp_lock_info never raise: failures are logged and
collapse to the empty snapshot / unlocked verdict.

Files that USE this module:
- Dashboard and agent layers (consume MarketSnapshot and LockVerdict)
- tests.test_market_data (unit tests)

Files that this module USES:
- solmarket.adapters.rpc.gateway (RpcGateway)
- solmarket.application.price_oracle (NativePriceOracle)
- solmarket.application.pool_resolver (PoolResolver)
- solmarket.application.lp_lock (LpLockAnalyzer)
- solmarket.config (settings for default wiring)
"""

from __future__ import annotations

import logging
from typing import Optional, Tuple

from solmarket.adapters.rpc.gateway import RpcGateway
from solmarket.application.lp_lock import LpLockAnalyzer
from solmarket.application.pool_resolver import PoolResolver
from solmarket.application.price_oracle import NativePriceOracle
from solmarket.config import Settings, settings
from solmarket.domain.addresses import is_stable_mint
from solmarket.domain.errors import RpcError
from solmarket.domain.models import LockVerdict, MarketSnapshot, PoolRecord
from solmarket.domain.result import Ok

log = logging.getLogger(__name__)


class MarketDataService:
    """Composes oracle, resolver and lock analyzer into market snapshots."""

    def __init__(
        self,
        gateway: RpcGateway,
        oracle: Optional[NativePriceOracle] = None,
        resolver: Optional[PoolResolver] = None,
        lock_analyzer: Optional[LpLockAnalyzer] = None,
        signature_limit: Optional[int] = None,
    ):
        self.gateway = gateway
        self.oracle = oracle or NativePriceOracle(gateway)
        self.lock_analyzer = lock_analyzer or LpLockAnalyzer(gateway)
        self.resolver = resolver or PoolResolver.default(gateway, self.lock_analyzer)
        self.signature_limit = signature_limit or settings.activity_signature_limit

    @classmethod
    def from_settings(cls, config: Optional[Settings] = None) -> "MarketDataService":
        """Build the default object graph from settings."""
        config = config or settings
        gateway = RpcGateway(url=config.rpc_url, timeout=config.rpc_timeout_seconds)
        oracle = NativePriceOracle(
            gateway,
            native_vault=config.reference_native_vault,
            stable_vault=config.reference_stable_vault,
            ttl_seconds=config.native_price_ttl_seconds,
            default_price=config.native_price_default,
            min_price=config.native_price_min,
            max_price=config.native_price_max,
        )
        lock_analyzer = LpLockAnalyzer(gateway, holder_sample=config.lp_holder_sample)
        return cls(
            gateway,
            oracle=oracle,
            resolver=PoolResolver.default(gateway, lock_analyzer),
            lock_analyzer=lock_analyzer,
            signature_limit=config.activity_signature_limit,
        )

    def current_native_asset_price(self) -> float:
        """Cached SOL/USD price; does not trigger a refresh."""
        return self.oracle.get_current_price()

    def get_market_data(self, token_mint: str, circulating_supply: Optional[float]) -> MarketSnapshot:
        """
        Build a market snapshot for a token.

        Args:
            token_mint: Mint address of the token
            circulating_supply: Supply used for market cap (not read on-chain)

        Returns:
            MarketSnapshot; the empty snapshot when no priced pool is found
        """
        try:
            self.oracle.refresh()

            resolved = self.resolver.resolve(token_mint)
            if not isinstance(resolved, Ok):
                log.info("No pool for %s: %s", token_mint, resolved.detail)
                return MarketSnapshot.empty()

            pool = resolved.value
            if not pool.has_price:
                log.info("Pool %s for %s has an empty token reserve", pool.address, token_mint)
                return MarketSnapshot.empty()

            return self._snapshot(pool, circulating_supply)
        except Exception as e:
            log.warning("Market data for %s failed: %s", token_mint, e)
            return MarketSnapshot.empty()

    def _snapshot(self, pool: PoolRecord, circulating_supply: Optional[float]) -> MarketSnapshot:
        # Quote value in USD per quote unit
        quote_usd = 1.0 if is_stable_mint(pool.quote_mint) else self.oracle.get_current_price()

        price = pool.quote_reserve / pool.token_reserve * quote_usd
        liquidity = pool.quote_reserve * quote_usd * 2
        market_cap = price * circulating_supply if circulating_supply is not None else None

        buys, sells = self.estimate_trading_activity(pool.token_mint)

        return MarketSnapshot(
            price=price,
            market_cap=market_cap,
            liquidity=liquidity,
            volume_24h=None,
            price_change_24h=None,
            buys_24h=buys,
            sells_24h=sells,
            pair_address=pool.address,
            dex_id=pool.dex.value,
        )

    def estimate_trading_activity(self, token_mint: str) -> Tuple[int, int]:
        """
        Split the recent signature count into (buys, sells).

        Placeholder: half the signatures (rounded down) are called buys and
        the rest sells. Nothing here looks at trade direction.
        """
        try:
            signatures = self.gateway.get_signatures_for_address(token_mint, self.signature_limit)
        except RpcError as e:
            log.warning("Signature count for %s failed: %s", token_mint, e)
            return 0, 0
        total = len(signatures)
        return total // 2, total - total // 2

    def get_lp_lock_info(self, lp_mint: Optional[str]) -> LockVerdict:
        """
        Lock verdict for an LP mint.

        Returns:
            LockVerdict; unlocked with zero percentages when it cannot be determined
        """
        try:
            result = self.lock_analyzer.analyze(lp_mint)
        except Exception as e:
            log.warning("LP lock check for %s failed: %s", lp_mint, e)
            return LockVerdict.unlocked()
        if isinstance(result, Ok):
            return result.value
        log.warning("LP lock check for %s failed: %s (%s)", lp_mint, result.kind.value, result.detail)
        return LockVerdict.unlocked()
