"""
Liquidity-Lock Analyzer

Solana has no on-chain "locked" flag for LP tokens, so lock status is
inferred from who owns the largest LP token accounts:

- owners on the lock-program allow-list count toward the locked share;
- owners that look like burn addresses (a long run of leading '1's, or a
  'dead'/'burn' marker) count toward the burned share.

The two shares are accumulated separately and the pool counts as locked
when together they exceed half of the LP supply.

Files that USE this module:
- solmarket.application.pool_resolver (AMM pools carry a lock verdict)
- solmarket.application.market_data (get_lp_lock_info)
- tests.test_lp_lock (unit tests)

Files that this module USES:
- solmarket.adapters.rpc.gateway (largest holders, supply, owner lookups)
- solmarket.domain.addresses (LP_LOCK_PROGRAMS, burn heuristics)
"""

from __future__ import annotations

import logging
from typing import Optional

from solmarket.adapters.rpc.gateway import RpcGateway
from solmarket.config import settings
from solmarket.domain.addresses import BURN_OWNER_MARKERS, BURN_OWNER_PREFIX, LP_LOCK_PROGRAMS
from solmarket.domain.errors import RpcError
from solmarket.domain.models import LockVerdict
from solmarket.domain.result import Ok, Result, err_from_exception

log = logging.getLogger(__name__)


def is_lock_owner(owner: str) -> bool:
    return owner in LP_LOCK_PROGRAMS


def is_burn_owner(owner: str) -> bool:
    lowered = owner.lower()
    return owner.startswith(BURN_OWNER_PREFIX) or any(m in lowered for m in BURN_OWNER_MARKERS)


def _owner_of(account: Optional[dict]) -> Optional[str]:
    if not account:
        return None
    data = account.get("data")
    if not isinstance(data, dict):
        return None
    return data.get("parsed", {}).get("info", {}).get("owner")


def _pct(amount: float, supply: float) -> float:
    return round(min(max(amount / supply * 100, 0.0), 100.0), 1)


class LpLockAnalyzer:
    """Ranks LP holders and classifies their owners."""

    def __init__(self, gateway: RpcGateway, holder_sample: Optional[int] = None):
        self.gateway = gateway
        self.holder_sample = holder_sample or settings.lp_holder_sample

    def analyze(self, lp_mint: Optional[str]) -> Result[LockVerdict]:
        """
        Work out the lock verdict for an LP mint.

        Zero supply, no holders or an empty mint give the unlocked verdict;
        RPC failures give an Err.
        """
        if not lp_mint:
            return Ok(LockVerdict.unlocked())

        try:
            holders, supply_info = self.gateway.gather(
                lambda: self.gateway.get_token_largest_accounts(lp_mint),
                lambda: self.gateway.get_token_supply(lp_mint),
            )
            supply = RpcGateway.ui_amount(supply_info)
            if not holders or supply <= 0:
                log.debug("LP mint %s has no holders or zero supply", lp_mint)
                return Ok(LockVerdict.unlocked())

            top = holders[: self.holder_sample]
            accounts = self.gateway.get_multiple_accounts([h.get("address") for h in top])
        except RpcError as e:
            log.warning("LP lock check failed for %s: %s", lp_mint, e)
            return err_from_exception(e)

        locked_amount = 0.0
        burned_amount = 0.0
        for holder, account in zip(top, accounts):
            owner = _owner_of(account)
            if not owner:
                continue
            amount = RpcGateway.ui_amount(holder)
            if is_lock_owner(owner):
                locked_amount += amount
            if is_burn_owner(owner):
                burned_amount += amount

        verdict = LockVerdict.from_percentages(
            locked_pct=_pct(locked_amount, supply),
            burned_pct=_pct(burned_amount, supply),
        )
        log.info(
            "LP %s: locked=%s%% burned=%s%% -> %s",
            lp_mint, verdict.locked_pct, verdict.burned_pct, "locked" if verdict.locked else "unlocked",
        )
        return Ok(verdict)
