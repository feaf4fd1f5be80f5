"""Portfolio performance against benchmark assets over the same price window."""

import logging
from collections.abc import Mapping, Sequence

from walletlens.analytics.risk import PriceHistory, beta, historical_portfolio_values, sharpe_ratio
from walletlens.analytics.timeseries import (
    align_value_tails,
    correlation,
    prices_of,
    returns_from_values,
    sort_series,
)
from walletlens.domain.enums.period import TimePeriod
from walletlens.domain.models.insights import BenchmarkComparison
from walletlens.domain.models.market import Holding, PricePoint

logger = logging.getLogger(__name__)

DEFAULT_BENCHMARKS = ("ETH", "BTC")


def total_return(values: Sequence[float]) -> float:
    """First-to-last change in percent. 0 with fewer than 2 values or a zero start."""
    if len(values) < 2 or values[0] <= 0:
        return 0.0
    return (values[-1] - values[0]) / values[0] * 100


def compare(
    portfolio_values: Sequence[float],
    benchmark: str,
    benchmark_history: Sequence[PricePoint],
    period: TimePeriod,
    risk_free_rate: float = 0.02,
) -> BenchmarkComparison:
    history = sort_series(benchmark_history)
    benchmark_values = prices_of(history)
    portfolio_return = total_return(portfolio_values)
    benchmark_return = total_return(benchmark_values)
    own, other = align_value_tails(returns_from_values(portfolio_values), returns_from_values(benchmark_values))
    return BenchmarkComparison(
        benchmark=benchmark,
        period=period,
        portfolio_return=portfolio_return,
        benchmark_return=benchmark_return,
        outperformance=portfolio_return - benchmark_return,
        correlation=correlation(own, other),
        beta=beta(portfolio_values, history),
        portfolio_sharpe_ratio=sharpe_ratio(portfolio_values, risk_free_rate),
        benchmark_sharpe_ratio=sharpe_ratio(benchmark_values, risk_free_rate),
    )


def compare_with_benchmarks(
    holdings: Sequence[Holding],
    price_history: PriceHistory,
    benchmarks: Mapping[str, Sequence[PricePoint]],
    period: TimePeriod = TimePeriod.MONTH,
    risk_free_rate: float = 0.02,
) -> list[BenchmarkComparison]:
    """One comparison per benchmark with history, in input order."""
    portfolio_values = prices_of(historical_portfolio_values(holdings, price_history))
    comparisons: list[BenchmarkComparison] = []
    for name, history in benchmarks.items():
        if not history:
            logger.debug("Skipping benchmark %s: no price history", name)
            continue
        comparisons.append(compare(portfolio_values, name, history, period, risk_free_rate))
    return comparisons
