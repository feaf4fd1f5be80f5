"""Coarse market phase from the trend and noise of portfolio value."""

from collections.abc import Sequence

from walletlens.analytics.timeseries import mean, prices_of, returns_from_values, sort_series, stddev
from walletlens.domain.enums.risk import MarketPhase
from walletlens.domain.models.insights import MarketCycle
from walletlens.domain.models.market import PricePoint

MIN_POINTS = 30
SECONDS_PER_DAY = 86400


def classify_phase(average_return: float, volatility: float) -> tuple[MarketPhase, float, str]:
    """Phase, confidence and description from mean and spread of periodic returns."""
    if average_return > 0.02 and volatility < 0.05:
        return MarketPhase.BULL, 0.8, "Strong upward trend with low volatility"
    if average_return < -0.02 and volatility > 0.08:
        return MarketPhase.BEAR, 0.7, "Declining trend with high volatility"
    if average_return > 0 and volatility < 0.03:
        return MarketPhase.ACCUMULATION, 0.6, "Gradual accumulation phase"
    return MarketPhase.DISTRIBUTION, 0.5, "Distribution phase with mixed signals"


def analyze_market_cycle(portfolio_values: Sequence[PricePoint]) -> MarketCycle:
    points = sort_series(portfolio_values)
    if len(points) < MIN_POINTS:
        return MarketCycle(
            indicators=["Insufficient data"],
            description="Insufficient data for market cycle analysis",
        )

    rets = returns_from_values(prices_of(points))
    average_return = mean(rets)
    volatility = stddev(rets)
    phase, confidence, description = classify_phase(average_return, volatility)

    return MarketCycle(
        phase=phase,
        confidence=confidence,
        indicators=[
            f"Average Return: {average_return * 100:.2f}%",
            f"Volatility: {volatility * 100:.2f}%",
            f"Trend: {'Positive' if average_return > 0 else 'Negative'}",
        ],
        duration_days=(points[-1].timestamp - points[0].timestamp) // SECONDS_PER_DAY,
        description=description,
    )
