"""
Pool Resolver - Find the Liquidity Pool for a Token

This module tries an ordered list of discovery strategies and returns the
first pool found. Strategies run one after another, cheapest first, so an
expensive scan is never issued once a cheap lookup has succeeded:

1. BondingCurveStrategy - mints ending in "pump" are looked up under the
   launch platform's program with a single owner/mint query.
2. AmmScanStrategy - a getProgramAccounts scan of the Raydium AMM v4 program,
   first with the token in the base-mint slot, then in the quote-mint slot.

A token that has both a bonding curve and an AMM pool always resolves to the
bonding curve because that strategy runs first.

Files that USE this module:
- solmarket.application.market_data (resolves the pool for each query)
- tests.test_pool_resolver (unit tests)

Files that this module USES:
- solmarket.adapters.rpc.gateway (RpcGateway for account reads and scans)
- solmarket.adapters.decoding (pool layout decoding)
- solmarket.application.lp_lock (LpLockAnalyzer for AMM pools)
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from solmarket.adapters.decoding import RAYDIUM_AMM_V4, PoolLayout, decode_account_data, decode_pool_keys
from solmarket.adapters.rpc.gateway import RpcGateway
from solmarket.application.lp_lock import LpLockAnalyzer
from solmarket.domain.addresses import (
    LAMPORTS_PER_SOL,
    PUMPFUN_MINT_SUFFIX,
    PUMPFUN_PROGRAM,
    RAYDIUM_AMM_V4_PROGRAM,
    SOL_MINT,
)
from solmarket.domain.errors import MalformedLayoutError, RpcError
from solmarket.domain.models import DexId, LockVerdict, PoolRecord
from solmarket.domain.result import Err, ErrorKind, Ok, Result, err_from_exception

log = logging.getLogger(__name__)


def _parsed_token_amount(entry: dict) -> Optional[dict]:
    """tokenAmount of a jsonParsed token account, or None for any other shape."""
    account = entry.get("account") if isinstance(entry, dict) else None
    data = account.get("data") if isinstance(account, dict) else None
    if not isinstance(data, dict):
        return None
    return data.get("parsed", {}).get("info", {}).get("tokenAmount")


class PoolStrategy(ABC):
    """One way of locating a token's pool."""

    name: str = "strategy"

    @abstractmethod
    def try_resolve(self, token_mint: str) -> Result[PoolRecord]:
        """Return Ok(pool) or an Err explaining why no pool was produced."""
        raise NotImplementedError


class BondingCurveStrategy(PoolStrategy):
    """
    Pools still on the launch platform's bonding curve.

    The program itself is treated as the pool authority: the token reserve is
    its token account for the mint and the SOL reserve its lamport balance.
    Bonding-curve liquidity cannot be withdrawn, so it is reported as 100%
    locked.
    """

    name = "bonding-curve"

    def __init__(self, gateway: RpcGateway, program_id: str = PUMPFUN_PROGRAM,
                 mint_suffix: str = PUMPFUN_MINT_SUFFIX):
        self.gateway = gateway
        self.program_id = program_id
        self.mint_suffix = mint_suffix

    def applies_to(self, token_mint: str) -> bool:
        return token_mint.endswith(self.mint_suffix)

    def try_resolve(self, token_mint: str) -> Result[PoolRecord]:
        if not self.applies_to(token_mint):
            return Err(ErrorKind.NOT_FOUND, f"{token_mint} is not a bonding-curve mint")

        try:
            token_accounts, authority_info = self.gateway.gather(
                lambda: self.gateway.get_token_accounts_by_owner(self.program_id, token_mint),
                lambda: self.gateway.get_account_info(self.program_id),
            )
        except RpcError as e:
            log.warning("Bonding curve lookup failed for %s: %s", token_mint, e)
            return err_from_exception(e)

        if not token_accounts:
            return Err(ErrorKind.NOT_FOUND, "no token account under bonding-curve program")
        if not authority_info:
            return Err(ErrorKind.NOT_FOUND, "bonding-curve authority account missing")

        token_amount = _parsed_token_amount(token_accounts[0])
        if token_amount is None:
            return Err(ErrorKind.NOT_FOUND, "bonding-curve token account is not jsonParsed")
        token_reserve = RpcGateway.ui_amount(token_amount)
        quote_reserve = (authority_info.get("lamports") or 0) / LAMPORTS_PER_SOL

        return Ok(PoolRecord(
            address=self.program_id,
            dex=DexId.BONDING_CURVE,
            token_mint=token_mint,
            quote_mint=SOL_MINT,
            token_reserve=token_reserve,
            quote_reserve=quote_reserve,
            lp_locked=True,
            lp_locked_pct=100.0,
        ))


class AmmScanStrategy(PoolStrategy):
    """
    Constant-product AMM pools found by a filtered program-account scan.

    getProgramAccounts is expensive and nothing here throttles it; callers
    that query many tokens should rate-limit above this layer. Only the
    first match is used; pools are not ranked by liquidity.
    """

    name = "amm-scan"

    def __init__(self, gateway: RpcGateway, lock_analyzer: LpLockAnalyzer,
                 program_id: str = RAYDIUM_AMM_V4_PROGRAM, layout: PoolLayout = RAYDIUM_AMM_V4):
        self.gateway = gateway
        self.lock_analyzer = lock_analyzer
        self.program_id = program_id
        self.layout = layout

    def _scan(self, token_mint: str, offset: int) -> List[dict]:
        filters = [
            {"dataSize": self.layout.account_size},
            {"memcmp": {"offset": offset, "bytes": token_mint}},
        ]
        return self.gateway.get_program_accounts(self.program_id, filters)

    def try_resolve(self, token_mint: str) -> Result[PoolRecord]:
        try:
            matches = self._scan(token_mint, self.layout.base_mint_offset)
            is_quote = False
            if not matches:
                matches = self._scan(token_mint, self.layout.quote_mint_offset)
                is_quote = True
            if not matches:
                return Err(ErrorKind.NOT_FOUND, f"no {self.layout.name} pool for {token_mint}")

            match = matches[0]
            return Ok(self._build_pool(match, token_mint, is_quote))
        except (RpcError, MalformedLayoutError) as e:
            log.warning("AMM pool lookup failed for %s: %s", token_mint, e)
            return err_from_exception(e)

    def _build_pool(self, match: dict, token_mint: str, is_quote: bool) -> PoolRecord:
        buffer = decode_account_data(match.get("account", {}).get("data"))
        keys = decode_pool_keys(buffer, self.layout)

        base_bal, quote_bal = self.gateway.gather(
            lambda: self.gateway.get_token_account_balance(keys.base_vault),
            lambda: self.gateway.get_token_account_balance(keys.quote_vault),
        )
        base_reserve = RpcGateway.ui_amount(base_bal)
        quote_reserve = RpcGateway.ui_amount(quote_bal)

        lock = self.lock_analyzer.analyze(keys.lp_mint)
        if isinstance(lock, Ok):
            verdict = lock.value
        else:
            log.warning("LP lock unknown for %s (%s), reporting unlocked", keys.lp_mint, lock.kind.value)
            verdict = LockVerdict.unlocked()

        return PoolRecord(
            address=match.get("pubkey", ""),
            dex=DexId.CONSTANT_PRODUCT_AMM,
            token_mint=token_mint,
            quote_mint=keys.base_mint if is_quote else keys.quote_mint,
            token_reserve=quote_reserve if is_quote else base_reserve,
            quote_reserve=base_reserve if is_quote else quote_reserve,
            lp_mint=keys.lp_mint,
            lp_locked=verdict.locked,
            lp_locked_pct=verdict.locked_pct,
        )


class PoolResolver:
    """Runs strategies in order until one finds a pool."""

    def __init__(self, strategies: Sequence[PoolStrategy]):
        self.strategies = list(strategies)

    @classmethod
    def default(cls, gateway: RpcGateway, lock_analyzer: Optional[LpLockAnalyzer] = None) -> "PoolResolver":
        lock_analyzer = lock_analyzer or LpLockAnalyzer(gateway)
        return cls([
            BondingCurveStrategy(gateway),
            AmmScanStrategy(gateway, lock_analyzer),
        ])

    def resolve(self, token_mint: str) -> Result[PoolRecord]:
        last: Optional[Err] = None
        for strategy in self.strategies:
            result = strategy.try_resolve(token_mint)
            if isinstance(result, Ok):
                log.info("Pool for %s found by %s: %s", token_mint, strategy.name, result.value.address)
                return result
            log.debug("%s: %s (%s)", strategy.name, result.kind.value, result.detail)
            last = result
        detail = last.detail if last else "no strategies configured"
        return Err(ErrorKind.NOT_FOUND, detail)
