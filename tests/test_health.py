"""
Health Tests - Unit Tests for RPC and Price Cache Health Checks

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- solmarket.application.health (HealthChecker for testing)
- rpc_fakes (FakeGateway and result builders)
"""
from solmarket.application.health import HealthChecker
from solmarket.application.price_oracle import NativePriceOracle
from solmarket.domain.errors import TransportError

from rpc_fakes import FakeGateway, balance


def _checker(health="ok"):
    gateway = FakeGateway({
        "getHealth": health,
        "getTokenAccountBalance": lambda params: balance(1_000) if params[0] == "Stable" else balance(10, 9),
    })
    oracle = NativePriceOracle(gateway, native_vault="Native", stable_vault="Stable", clock=lambda: 0.0)
    return HealthChecker(gateway, oracle), oracle


class TestHealthChecker:
    def test_rpc_ok(self):
        checker, _ = _checker()
        status = checker.check_rpc()
        assert status.is_healthy
        assert status.details["status"] == "ok"

    def test_rpc_behind(self):
        checker, _ = _checker(health="behind")
        assert not checker.check_rpc().is_healthy

    def test_rpc_unreachable(self):
        checker, _ = _checker(health=TransportError("refused"))
        status = checker.check_rpc()
        assert not status.is_healthy
        assert "refused" in status.message

    def test_oracle_never_refreshed(self):
        checker, _ = _checker()
        status = checker.check_price_oracle(now=10.0)
        assert not status.is_healthy
        assert "never refreshed" in status.message

    def test_oracle_fresh_then_stale(self):
        checker, oracle = _checker()
        oracle.maybe_refresh(now=0.0)

        assert checker.check_price_oracle(now=120.0).is_healthy
        stale = checker.check_price_oracle(now=301.0)
        assert not stale.is_healthy
        assert stale.details["age_seconds"] == 301.0

    def test_check_all(self):
        checker, _ = _checker()
        statuses = checker.check_all()
        assert set(statuses) == {"rpc", "price_oracle"}
