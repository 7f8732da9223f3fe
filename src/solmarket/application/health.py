"""
Health Checker - RPC and Price Cache Diagnostics

This module reports whether the configured RPC node answers and whether the
SOL price cache is being refreshed, so host applications can surface a
degraded data source instead of silently showing stale numbers.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from solmarket.adapters.rpc.gateway import RpcGateway
from solmarket.application.price_oracle import NativePriceOracle
from solmarket.domain.errors import RpcError

logger = logging.getLogger(__name__)

# A price older than this many TTL windows counts as stale
STALE_TTL_MULTIPLIER = 5


@dataclass
class HealthStatus:
    """Represents the health status of a component."""
    is_healthy: bool
    message: str
    last_check: datetime
    details: Optional[Dict[str, Any]] = None


class HealthChecker:
    """Health checks for the RPC node and the price oracle."""

    def __init__(self, gateway: RpcGateway, oracle: NativePriceOracle):
        self.gateway = gateway
        self.oracle = oracle

    def check_rpc(self) -> HealthStatus:
        """Check the node's getHealth endpoint."""
        try:
            status = self.gateway.get_health()
        except RpcError as e:
            logger.error("RPC health check failed: %s", e)
            return HealthStatus(
                is_healthy=False,
                message=f"RPC error: {e}",
                last_check=datetime.now(timezone.utc),
                details={"url": self.gateway.url},
            )
        return HealthStatus(
            is_healthy=status == "ok",
            message=f"RPC node reports {status!r}",
            last_check=datetime.now(timezone.utc),
            details={"url": self.gateway.url, "status": status},
        )

    def check_price_oracle(self, now: Optional[float] = None) -> HealthStatus:
        """Check that the SOL price has been refreshed recently."""
        now = self.oracle.clock() if now is None else now
        age = self.oracle.age(now)
        price = self.oracle.get()
        details = {"price": price, "age_seconds": age, "ttl_seconds": self.oracle.ttl}

        if age is None:
            return HealthStatus(
                is_healthy=False,
                message=f"SOL price never refreshed, using default {price:.2f}",
                last_check=datetime.now(timezone.utc),
                details=details,
            )
        if age > self.oracle.ttl * STALE_TTL_MULTIPLIER:
            return HealthStatus(
                is_healthy=False,
                message=f"SOL price stale ({age:.0f}s old): {price:.2f}",
                last_check=datetime.now(timezone.utc),
                details=details,
            )
        return HealthStatus(
            is_healthy=True,
            message=f"SOL price {price:.2f} ({age:.0f}s old)",
            last_check=datetime.now(timezone.utc),
            details=details,
        )

    def check_all(self) -> Dict[str, HealthStatus]:
        return {
            "rpc": self.check_rpc(),
            "price_oracle": self.check_price_oracle(),
        }
