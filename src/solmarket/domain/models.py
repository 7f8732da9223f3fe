"""
Domain Models - Pure Market Objects

This module contains domain models representing core concepts:
- Discovered liquidity pools
- Liquidity-lock verdicts
- Market snapshots returned to consumers

Files that USE this module:
- solmarket.application.* (all services build and return domain models)
- tests.* (tests use domain models for assertions)

Files that this module USES:
- None (pure domain layer, no external dependencies)
"""

from __future__ import annotations  # Enable postponed evaluation of annotations

import math
from dataclasses import asdict, dataclass  # Decorator for creating data classes
from enum import Enum
from typing import Any, Dict, Optional  # Type hints for optional values


class DexId(str, Enum):
    """DEX program layout a pool was discovered under."""
    BONDING_CURVE = "pumpfun"
    CONSTANT_PRODUCT_AMM = "raydium"


@dataclass(frozen=True)
class PoolRecord:
    """
    One liquidity pool, read at a single point in time.

    Attributes:
        address: Pool (or pool authority) account address
        dex: Layout the pool was discovered under
        token_mint: Mint of the token being priced
        quote_mint: Mint of the other side of the pair
        token_reserve: Token-side reserve in UI units
        quote_reserve: Quote-side reserve in UI units
        lp_mint: LP token mint, when the pool issues one
        lp_locked: Whether the LP supply counts as locked
        lp_locked_pct: Locked share of LP supply (0-100)
    """
    address: str
    dex: DexId
    token_mint: str
    quote_mint: str
    token_reserve: float
    quote_reserve: float
    lp_mint: Optional[str] = None
    lp_locked: bool = False
    lp_locked_pct: float = 0.0

    def __post_init__(self):
        if self.token_reserve < 0 or self.quote_reserve < 0:
            raise ValueError("Pool reserves must be non-negative")

    @property
    def has_price(self) -> bool:
        return self.token_reserve > 0


@dataclass(frozen=True)
class LockVerdict:
    """
    Liquidity-lock status inferred from LP holder ownership.

    Attributes:
        locked: True when locked_pct + burned_pct exceeds 50
        locked_pct: Share held by known lock programs (0-100)
        burned_pct: Share held by burn-style owners (0-100)
    """
    locked: bool
    locked_pct: float
    burned_pct: float

    @classmethod
    def unlocked(cls) -> "LockVerdict":
        return cls(locked=False, locked_pct=0.0, burned_pct=0.0)

    @classmethod
    def from_percentages(cls, locked_pct: float, burned_pct: float) -> "LockVerdict":
        """Build a verdict whose flag is consistent with the reported percentages."""
        return cls(
            locked=locked_pct + burned_pct > 50,
            locked_pct=locked_pct,
            burned_pct=burned_pct,
        )


def _finite_or_none(value: Optional[float]) -> Optional[float]:
    if value is None or not math.isfinite(value) or value < 0:
        return None
    return value


@dataclass(frozen=True)
class MarketSnapshot:
    """
    Consolidated market data for one token, produced fresh on every query.

    Numeric fields are finite and non-negative, or None when they could not
    be determined. volume_24h and price_change_24h are always None: they
    need historical state this library does not keep.

    buys_24h/sells_24h are an even split of recent transaction signatures,
    not a classification of trade direction.
    """
    price: Optional[float] = None
    market_cap: Optional[float] = None
    liquidity: Optional[float] = None
    volume_24h: Optional[float] = None
    price_change_24h: Optional[float] = None
    buys_24h: int = 0
    sells_24h: int = 0
    pair_address: Optional[str] = None
    dex_id: Optional[str] = None

    def __post_init__(self):
        # frozen: normalise through object.__setattr__
        for name in ("price", "market_cap", "liquidity", "volume_24h", "price_change_24h"):
            object.__setattr__(self, name, _finite_or_none(getattr(self, name)))

    @classmethod
    def empty(cls) -> "MarketSnapshot":
        return cls()

    @property
    def is_empty(self) -> bool:
        return self.price is None and self.pair_address is None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
