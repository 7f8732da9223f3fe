"""
Application Layer - Market Data Services

This package contains the services that turn raw RPC reads into market
facts. MarketDataService is the public facade; the other services are
exposed for callers that want to wire or test them separately.
"""

from solmarket.application.health import HealthChecker, HealthStatus
from solmarket.application.lp_lock import LpLockAnalyzer
from solmarket.application.market_data import MarketDataService
from solmarket.application.pool_resolver import (
    AmmScanStrategy,
    BondingCurveStrategy,
    PoolResolver,
    PoolStrategy,
)
from solmarket.application.price_oracle import NativePriceOracle

__all__ = [
    "MarketDataService",
    "NativePriceOracle",
    "PoolResolver",
    "PoolStrategy",
    "BondingCurveStrategy",
    "AmmScanStrategy",
    "LpLockAnalyzer",
    "HealthChecker",
    "HealthStatus",
]
