"""Tests for lookback price changes per asset and portfolio."""

import pytest

from tests.factories import DAY, T0, series
from walletlens.analytics.performance import asset_performance, portfolio_performance
from walletlens.domain.models.market import Holding

NOW = T0 + 30 * DAY


@pytest.fixture()
def history():
    return {
        "ETH": series([100.0 + i for i in range(31)]),
        "USDC": series([1.0] * 31),
    }


@pytest.fixture()
def holdings():
    return [
        Holding(symbol="ETH", quantity=1, price_usd=130),
        Holding(symbol="USDC", quantity=100, price_usd=1),
    ]


class TestAssetPerformance:
    def test_lookback_changes(self, history):
        perf = asset_performance(Holding(symbol="ETH", quantity=1, price_usd=130), history["ETH"], 130, NOW)
        assert perf.changes["24h"].absolute == pytest.approx(1.0)
        assert perf.changes["7d"].absolute == pytest.approx(7.0)
        assert perf.changes["30d"].percentage == pytest.approx(30.0)
        assert perf.allocation == pytest.approx(100.0)

    def test_no_history(self):
        perf = asset_performance(Holding(symbol="XYZ", quantity=1, price_usd=5), [], 5, NOW)
        assert perf.changes["24h"].percentage == 0.0


class TestPortfolioPerformance:
    def test_value_weighted_change(self, holdings, history):
        perf = portfolio_performance(holdings, history, NOW)
        assert perf.total_value == pytest.approx(230)
        assert perf.number_of_assets == 2
        assert perf.changes["30d"].percentage == pytest.approx(30.0 * 130 / 230)
        assert perf.largest_holding_percentage == pytest.approx(130 / 230 * 100)

    def test_best_and_worst_by_day(self, holdings, history):
        perf = portfolio_performance(holdings, history, NOW)
        assert perf.best_performer == "ETH"
        assert perf.worst_performer == "USDC"
        assert [a.symbol for a in perf.assets] == ["ETH", "USDC"]

    def test_empty(self):
        perf = portfolio_performance([], {}, NOW)
        assert perf.total_value == 0
        assert perf.best_performer is None
