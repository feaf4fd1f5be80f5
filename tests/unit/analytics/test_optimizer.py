"""Tests for the rule-based rebalancing advisor."""

import pytest

from walletlens.analytics.optimizer import GROWTH_BUCKET, HIGH_VOLATILITY_BUCKET, OptimizerRules, recommend
from walletlens.domain.enums.risk import Priority, RiskTolerance, Signal
from walletlens.domain.models.market import Holding
from walletlens.domain.models.risk import RiskMetrics


def _holdings(**values: float) -> list[Holding]:
    return [Holding(symbol=symbol, quantity=value, price_usd=1) for symbol, value in values.items()]


class TestConcentration:
    def test_sells_thirty_percent_of_oversized_position(self):
        result = recommend(_holdings(ETH=6000, USDC=4000), RiskMetrics())

        sells = [r for r in result.recommendations if r.type == Signal.SELL]
        assert {r.symbol for r in sells} == {"ETH", "USDC"}
        eth = next(r for r in sells if r.symbol == "ETH")
        assert eth.amount_usd == pytest.approx(1800)
        assert eth.priority == Priority.HIGH

    def test_suggested_allocation_applies_trades(self):
        result = recommend(_holdings(ETH=6000, USDC=4000), RiskMetrics())
        assert result.suggested_allocation["ETH"] == pytest.approx(4200)
        assert result.suggested_allocation["USDC"] == pytest.approx(2800)


class TestThinPositions:
    def test_buys_into_small_positions_when_few_assets(self):
        result = recommend(_holdings(A=2900, B=2900, C=2900, D=1000, E=300), RiskMetrics())
        buys = [r for r in result.recommendations if r.type == Signal.BUY]
        # Five assets: no diversification buys
        assert buys == []

        result = recommend(_holdings(A=3200, B=3200, C=3200, D=400), RiskMetrics())
        buys = [r for r in result.recommendations if r.type == Signal.BUY]
        assert [r.symbol for r in buys] == ["D"]
        assert buys[0].amount_usd == pytest.approx(200)


class TestToleranceRules:
    def test_conservative_with_high_volatility(self):
        result = recommend(
            _holdings(A=2500, B=2500, C=2500, D=2500),
            RiskMetrics(volatility=0.5),
            RiskTolerance.CONSERVATIVE,
        )
        bucket = [r for r in result.recommendations if r.symbol == HIGH_VOLATILITY_BUCKET]
        assert len(bucket) == 1
        assert bucket[0].amount_usd == pytest.approx(2000)
        # Buckets do not move the suggested allocation
        assert HIGH_VOLATILITY_BUCKET not in result.suggested_allocation

    def test_aggressive_with_low_volatility(self):
        result = recommend(
            _holdings(A=2500, B=2500, C=2500, D=2500),
            RiskMetrics(volatility=0.1),
            RiskTolerance.AGGRESSIVE,
        )
        assert [r.symbol for r in result.recommendations] == [GROWTH_BUCKET]
        assert result.recommendations[0].amount_usd == pytest.approx(1000)

    def test_moderate_ignores_volatility(self):
        result = recommend(_holdings(A=2500, B=2500, C=2500, D=2500), RiskMetrics(volatility=0.9))
        assert result.recommendations == []
        assert result.rebalancing_needed is False


class TestCosts:
    def test_rebalancing_cost_is_tenth_of_percent(self):
        result = recommend(_holdings(ETH=6000, USDC=4000), RiskMetrics())
        volume = sum(r.amount_usd for r in result.recommendations)
        assert result.rebalancing_cost == pytest.approx(volume * 0.001)

    def test_custom_rules(self):
        rules = OptimizerRules(concentration_limit=70.0)
        result = recommend(_holdings(ETH=6000, USDC=4000), RiskMetrics(), rules=rules)
        assert result.recommendations == []

    def test_empty_portfolio(self):
        result = recommend([], RiskMetrics())
        assert result.recommendations == []
        assert result.rebalancing_cost == 0.0
