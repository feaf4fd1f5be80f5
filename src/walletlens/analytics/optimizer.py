"""Rule-based rebalancing advisor. Not an optimizer: fixed thresholds only."""

from collections import defaultdict
from collections.abc import Sequence
from dataclasses import dataclass

from walletlens.analytics.risk import total_value
from walletlens.domain.enums.risk import Priority, RiskTolerance, Signal
from walletlens.domain.models.market import Holding
from walletlens.domain.models.optimization import PortfolioOptimization, Recommendation
from walletlens.domain.models.risk import RiskMetrics

HIGH_VOLATILITY_BUCKET = "HIGH_VOLATILITY_TOKENS"
GROWTH_BUCKET = "GROWTH_TOKENS"


@dataclass(frozen=True, slots=True)
class OptimizerRules:
    """Thresholds in percent of portfolio unless noted."""

    concentration_limit: float = 30.0
    concentration_trim: float = 0.3  # Fraction of the position to sell
    thin_position: float = 5.0
    min_assets: int = 5
    thin_position_boost: float = 0.5  # Fraction of the position to add
    conservative_max_volatility: float = 0.4
    conservative_trim: float = 0.2  # Fraction of total value
    aggressive_min_volatility: float = 0.3
    aggressive_boost: float = 0.1  # Fraction of total value
    transaction_cost: float = 0.001


DEFAULT_RULES = OptimizerRules()


def recommend(
    holdings: Sequence[Holding],
    metrics: RiskMetrics,
    risk_tolerance: RiskTolerance = RiskTolerance.MODERATE,
    rules: OptimizerRules = DEFAULT_RULES,
) -> PortfolioOptimization:
    total = total_value(holdings)
    current: dict[str, float] = defaultdict(float)
    for h in holdings:
        current[h.symbol] += h.usd_value

    if total <= 0:
        return PortfolioOptimization(risk_tolerance=risk_tolerance, current_allocation=dict(current))

    recommendations: list[Recommendation] = []
    asset_count = len(current)

    for symbol, value in current.items():
        allocation = value / total * 100

        if allocation > rules.concentration_limit:
            recommendations.append(Recommendation(
                type=Signal.SELL,
                symbol=symbol,
                amount_usd=value * rules.concentration_trim,
                reason="Reduce concentration risk",
                priority=Priority.HIGH,
            ))

        if asset_count < rules.min_assets and allocation < rules.thin_position:
            recommendations.append(Recommendation(
                type=Signal.BUY,
                symbol=symbol,
                amount_usd=value * rules.thin_position_boost,
                reason="Improve portfolio diversification",
                priority=Priority.MEDIUM,
            ))

    if risk_tolerance == RiskTolerance.CONSERVATIVE and metrics.volatility > rules.conservative_max_volatility:
        recommendations.append(Recommendation(
            type=Signal.SELL,
            symbol=HIGH_VOLATILITY_BUCKET,
            amount_usd=total * rules.conservative_trim,
            reason="Reduce portfolio volatility for conservative approach",
            priority=Priority.HIGH,
        ))

    if risk_tolerance == RiskTolerance.AGGRESSIVE and metrics.volatility < rules.aggressive_min_volatility:
        recommendations.append(Recommendation(
            type=Signal.BUY,
            symbol=GROWTH_BUCKET,
            amount_usd=total * rules.aggressive_boost,
            reason="Increase portfolio growth potential",
            priority=Priority.MEDIUM,
        ))

    # Bucket recommendations have no single target position, so only
    # per-asset ones move the suggested allocation
    suggested = dict(current)
    for rec in recommendations:
        if rec.symbol not in suggested:
            continue
        delta = rec.amount_usd if rec.type == Signal.BUY else -rec.amount_usd
        suggested[rec.symbol] = max(0.0, suggested[rec.symbol] + delta)

    volume = sum(rec.amount_usd for rec in recommendations)

    return PortfolioOptimization(
        risk_tolerance=risk_tolerance,
        current_allocation=dict(current),
        suggested_allocation=suggested,
        expected_return=metrics.annualized_return,
        expected_risk=metrics.volatility,
        rebalancing_needed=bool(recommendations),
        rebalancing_cost=volume * rules.transaction_cost,
        recommendations=recommendations,
    )
