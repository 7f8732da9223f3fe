"""
Market Data Tests - Unit Tests for the MarketDataService Facade

This module tests price/liquidity/market-cap arithmetic for stable and SOL
quoted pools, the empty snapshot on every failure path, the placeholder
buy/sell split and the LP lock entry point. The last class runs the real
object graph against a fake node.

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- solmarket.application.market_data (MarketDataService for testing)
- rpc_fakes (FakeGateway and result builders)
- unittest.mock (Mock for collaborator mocking)
"""
import pytest

from unittest.mock import Mock

from solmarket.application.lp_lock import LpLockAnalyzer
from solmarket.application.market_data import MarketDataService
from solmarket.application.pool_resolver import PoolResolver
from solmarket.application.price_oracle import NativePriceOracle
from solmarket.domain.addresses import PUMPFUN_PROGRAM, SOL_MINT, SOL_USDC_POOL, USDC_MINT
from solmarket.domain.errors import TransportError
from solmarket.domain.models import DexId, LockVerdict, MarketSnapshot, PoolRecord
from solmarket.domain.result import Err, ErrorKind, Ok

from rpc_fakes import FakeGateway, balance, token_accounts

TOKEN_MINT = "DezXAZ8z7PnrnRJjz3wXBoRgixCa6xjnB7YaB1pPB263"
PUMP_MINT = "7GCihgDB8fe6KNjn2MYtkzZcRjQy3t9GHdC8uHYmpump"


def _pool(quote_mint=SOL_MINT, token_reserve=1_000_000.0, quote_reserve=50.0):
    return PoolRecord(
        address="PoolAddress",
        dex=DexId.CONSTANT_PRODUCT_AMM,
        token_mint=TOKEN_MINT,
        quote_mint=quote_mint,
        token_reserve=token_reserve,
        quote_reserve=quote_reserve,
    )


def _service(resolved, signatures=7, sol_price=150.0):
    gateway = FakeGateway({
        "getSignaturesForAddress": [{"signature": f"sig{i}"} for i in range(signatures)],
    })
    oracle = Mock(spec=NativePriceOracle)
    oracle.get_current_price.return_value = sol_price
    resolver = Mock(spec=PoolResolver)
    resolver.resolve.return_value = resolved
    analyzer = Mock(spec=LpLockAnalyzer)
    return MarketDataService(gateway, oracle=oracle, resolver=resolver, lock_analyzer=analyzer), gateway


def _assert_empty(snapshot):
    assert snapshot == MarketSnapshot.empty()
    assert snapshot.price is None
    assert snapshot.market_cap is None
    assert snapshot.liquidity is None
    assert snapshot.buys_24h == 0
    assert snapshot.sells_24h == 0
    assert snapshot.pair_address is None
    assert snapshot.dex_id is None


class TestPricing:
    def test_sol_quoted_pool(self):
        service, _ = _service(Ok(_pool()))

        snap = service.get_market_data(TOKEN_MINT, circulating_supply=1_000_000_000)

        assert snap.price == pytest.approx(50.0 / 1_000_000 * 150.0)
        assert snap.liquidity == pytest.approx(2 * 50.0 * 150.0)
        assert snap.market_cap == pytest.approx(snap.price * 1_000_000_000)
        assert snap.pair_address == "PoolAddress"
        assert snap.dex_id == "raydium"

    def test_stable_quoted_pool(self):
        service, _ = _service(Ok(_pool(quote_mint=USDC_MINT, token_reserve=2_000.0, quote_reserve=500.0)))

        snap = service.get_market_data(TOKEN_MINT, circulating_supply=10_000)

        assert snap.price == pytest.approx(0.25)
        assert snap.liquidity == pytest.approx(1_000.0)
        assert snap.market_cap == pytest.approx(2_500.0)

    @pytest.mark.parametrize("token_reserve, quote_reserve", [(1.0, 0.0), (3.0, 7.0), (1e9, 1e-3), (0.5, 1e6)])
    def test_price_and_liquidity_formulas(self, token_reserve, quote_reserve):
        sol = _service(Ok(_pool(SOL_MINT, token_reserve, quote_reserve)), sol_price=123.0)[0]
        usd = _service(Ok(_pool(USDC_MINT, token_reserve, quote_reserve)), sol_price=123.0)[0]

        sol_snap = sol.get_market_data(TOKEN_MINT, 1)
        usd_snap = usd.get_market_data(TOKEN_MINT, 1)

        assert usd_snap.price == pytest.approx(quote_reserve / token_reserve)
        assert sol_snap.price == pytest.approx(quote_reserve / token_reserve * 123.0)
        assert usd_snap.liquidity == pytest.approx(2 * quote_reserve)
        assert sol_snap.liquidity == pytest.approx(2 * quote_reserve * 123.0)

    def test_history_fields_are_always_null(self):
        service, _ = _service(Ok(_pool()))

        snap = service.get_market_data(TOKEN_MINT, 1_000)

        assert snap.volume_24h is None
        assert snap.price_change_24h is None

    @pytest.mark.parametrize("supply", [None, -5])
    def test_unusable_supply_gives_null_market_cap(self, supply):
        service, _ = _service(Ok(_pool()))

        snap = service.get_market_data(TOKEN_MINT, supply)

        assert snap.market_cap is None
        assert snap.price is not None

    def test_oracle_refreshed_once_per_query(self):
        service, _ = _service(Ok(_pool()))

        service.get_market_data(TOKEN_MINT, 1)

        service.oracle.refresh.assert_called_once_with()


class TestEmptySnapshot:
    def test_no_pool(self):
        service, gateway = _service(Err(ErrorKind.NOT_FOUND, "no pool"))

        _assert_empty(service.get_market_data(TOKEN_MINT, 1_000))
        assert gateway.count("getSignaturesForAddress") == 0

    def test_zero_token_reserve(self):
        service, _ = _service(Ok(_pool(token_reserve=0.0)))

        _assert_empty(service.get_market_data(TOKEN_MINT, 1_000))

    def test_unexpected_exception_never_escapes(self):
        service, _ = _service(Ok(_pool()))
        service.resolver.resolve.side_effect = RuntimeError("boom")

        _assert_empty(service.get_market_data(TOKEN_MINT, 1_000))

    def test_oracle_failure_never_escapes(self):
        service, _ = _service(Ok(_pool()))
        service.oracle.refresh.side_effect = TransportError("down")

        _assert_empty(service.get_market_data(TOKEN_MINT, 1_000))


class TestTradingActivity:
    @pytest.mark.parametrize("count, buys, sells", [(0, 0, 0), (1, 0, 1), (7, 3, 4), (100, 50, 50)])
    def test_even_split(self, count, buys, sells):
        service, _ = _service(Ok(_pool()), signatures=count)

        snap = service.get_market_data(TOKEN_MINT, 1)

        assert (snap.buys_24h, snap.sells_24h) == (buys, sells)

    def test_signature_limit(self):
        service, gateway = _service(Ok(_pool()))

        service.get_market_data(TOKEN_MINT, 1)

        (params,) = gateway.params_for("getSignaturesForAddress")
        assert params == [TOKEN_MINT, {"limit": 100}]

    def test_failure_counts_zero_but_keeps_prices(self):
        service, gateway = _service(Ok(_pool()))
        gateway.handlers["getSignaturesForAddress"] = TransportError("down")

        snap = service.get_market_data(TOKEN_MINT, 1)

        assert (snap.buys_24h, snap.sells_24h) == (0, 0)
        assert snap.price is not None


class TestLpLockInfo:
    def test_passes_verdict_through(self):
        service, _ = _service(Ok(_pool()))
        verdict = LockVerdict(locked=True, locked_pct=60.0, burned_pct=0.0)
        service.lock_analyzer.analyze.return_value = Ok(verdict)

        assert service.get_lp_lock_info("LpMint") == verdict

    def test_err_collapses_to_unlocked(self):
        service, _ = _service(Ok(_pool()))
        service.lock_analyzer.analyze.return_value = Err(ErrorKind.TRANSPORT, "timeout")

        assert service.get_lp_lock_info("LpMint") == LockVerdict.unlocked()

    def test_exception_collapses_to_unlocked(self):
        service, _ = _service(Ok(_pool()))
        service.lock_analyzer.analyze.side_effect = KeyError("address")

        assert service.get_lp_lock_info("LpMint") == LockVerdict.unlocked()


class TestNativePrice:
    def test_current_price_is_a_pure_read(self):
        service, _ = _service(Ok(_pool()), sol_price=187.5)

        assert service.current_native_asset_price() == 187.5
        service.oracle.refresh.assert_not_called()
        service.oracle.maybe_refresh.assert_not_called()


class TestEndToEnd:
    def _gateway(self):
        vaults = {
            SOL_USDC_POOL.native_vault: balance(10_000, decimals=9),
            SOL_USDC_POOL.stable_vault: balance(1_600_000),
        }
        return FakeGateway({
            "getTokenAccountBalance": lambda params: vaults[params[0]],
            "getTokenAccountsByOwner": token_accounts(1_000_000.0),
            "getAccountInfo": {"context": {"slot": 1}, "value": {"lamports": 2_000_000_000}},
            "getSignaturesForAddress": [{"signature": "a"}, {"signature": "b"}, {"signature": "c"}],
        })

    def test_bonding_curve_token(self):
        gateway = self._gateway()
        service = MarketDataService(gateway)

        snap = service.get_market_data(PUMP_MINT, circulating_supply=1_000_000_000)

        assert service.current_native_asset_price() == pytest.approx(160.0)
        assert snap.price == pytest.approx(2.0 / 1_000_000 * 160.0)
        assert snap.liquidity == pytest.approx(2 * 2.0 * 160.0)
        assert snap.market_cap == pytest.approx(snap.price * 1_000_000_000)
        assert snap.pair_address == PUMPFUN_PROGRAM
        assert snap.dex_id == "pumpfun"
        assert (snap.buys_24h, snap.sells_24h) == (1, 2)
        assert gateway.count("getProgramAccounts") == 0

    def test_unknown_token_with_dead_node(self):
        gateway = FakeGateway({})
        service = MarketDataService(gateway)

        _assert_empty(service.get_market_data(PUMP_MINT, 1_000))
        assert service.current_native_asset_price() == 200.0

    def test_from_settings(self):
        from solmarket.config import Settings

        config = Settings(SOLANA_RPC_URL="http://localhost:8899", ACTIVITY_SIGNATURE_LIMIT=25)
        service = MarketDataService.from_settings(config)

        assert service.gateway.url == "http://localhost:8899"
        assert service.signature_limit == 25
        assert service.oracle.ttl == 60
        assert [type(s).__name__ for s in service.resolver.strategies] == ["BondingCurveStrategy", "AmmScanStrategy"]


class TestMarketSnapshot:
    def test_empty_snapshot(self):
        assert MarketSnapshot.empty().is_empty
        assert not MarketSnapshot(price=1.0, pair_address="PoolAddress").is_empty

    def test_non_finite_and_negative_values_become_null(self):
        snap = MarketSnapshot(price=float("nan"), market_cap=float("inf"), liquidity=-1.0)

        assert (snap.price, snap.market_cap, snap.liquidity) == (None, None, None)
        assert snap.is_empty

    def test_to_dict(self):
        service, _ = _service(Ok(_pool()), signatures=2)

        data = service.get_market_data(TOKEN_MINT, 1_000).to_dict()

        assert data["pair_address"] == "PoolAddress"
        assert data["dex_id"] == "raydium"
        assert (data["buys_24h"], data["sells_24h"]) == (1, 1)
        assert data["volume_24h"] is None
        assert set(data) == {
            "price", "market_cap", "liquidity", "volume_24h", "price_change_24h",
            "buys_24h", "sells_24h", "pair_address", "dex_id",
        }
