"""
Native Price Oracle - SOL/USD from an On-chain Reference Pool

This module keeps one cached SOL price in USD. The value is refreshed from
the vault balances of the deepest SOL/USDC pool at most once per TTL window
and is only replaced by candidates inside a sanity band; anything else
leaves the previous value authoritative.

Time is injected: maybe_refresh takes the current time explicitly and
refresh() reads it from the oracle's clock, so tests drive the TTL without
sleeping.

Files that USE this module:
- solmarket.application.market_data (refreshes before each query, reads price)
- solmarket.application.health (staleness check)
- tests.test_price_oracle (unit tests)

Files that this module USES:
- solmarket.adapters.rpc.gateway (RpcGateway for vault balances)
- solmarket.config (settings for TTL, default price, sanity band, vaults)
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from solmarket.adapters.rpc.gateway import RpcGateway
from solmarket.config import settings
from solmarket.domain.errors import RpcError

log = logging.getLogger(__name__)


class NativePriceOracle:
    """Time-aware cache of the native asset's USD price."""

    def __init__(
        self,
        gateway: RpcGateway,
        native_vault: Optional[str] = None,
        stable_vault: Optional[str] = None,
        ttl_seconds: Optional[float] = None,
        default_price: Optional[float] = None,
        min_price: Optional[float] = None,
        max_price: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.gateway = gateway
        self.native_vault = native_vault or settings.reference_native_vault
        self.stable_vault = stable_vault or settings.reference_stable_vault
        self.ttl = ttl_seconds or settings.native_price_ttl_seconds
        self.min_price = min_price if min_price is not None else settings.native_price_min
        self.max_price = max_price if max_price is not None else settings.native_price_max
        self.clock = clock
        self._price = default_price or settings.native_price_default
        self._refreshed_at: Optional[float] = None

    def get(self) -> float:
        """Return the cached price. Never blocks, never refreshes."""
        return self._price

    get_current_price = get

    @property
    def last_refresh(self) -> Optional[float]:
        return self._refreshed_at

    def age(self, now: float) -> Optional[float]:
        """Seconds since the last successful refresh, or None if never refreshed."""
        if self._refreshed_at is None:
            return None
        return now - self._refreshed_at

    def is_fresh(self, now: float) -> bool:
        age = self.age(now)
        return age is not None and age < self.ttl

    def maybe_refresh(self, now: float) -> bool:
        """
        Refresh the cached price unless it is younger than the TTL.

        Args:
            now: Current time on the oracle's clock

        Returns:
            True if a new price was stored, False otherwise
        """
        if self.is_fresh(now):
            return False

        try:
            native_bal, stable_bal = self.gateway.gather(
                lambda: self.gateway.get_token_account_balance(self.native_vault),
                lambda: self.gateway.get_token_account_balance(self.stable_vault),
            )
        except RpcError as e:
            log.warning("SOL price refresh failed, keeping %.2f: %s", self._price, e)
            return False

        native_amount = RpcGateway.ui_amount(native_bal)
        stable_amount = RpcGateway.ui_amount(stable_bal)
        if native_amount <= 0 or stable_amount <= 0:
            log.warning("Reference pool returned empty vaults (native=%s, stable=%s)", native_amount, stable_amount)
            return False

        candidate = stable_amount / native_amount
        if not self.min_price <= candidate <= self.max_price:
            log.warning(
                "Discarding SOL price %.4f outside [%s, %s]", candidate, self.min_price, self.max_price
            )
            return False

        self._price = candidate
        self._refreshed_at = now
        log.info("SOL price updated: %.4f USD (ttl=%ss)", candidate, self.ttl)
        return True

    def refresh(self) -> bool:
        return self.maybe_refresh(self.clock())
