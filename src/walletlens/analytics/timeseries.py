"""Time-series helpers — pure functions, no I/O.

Variance and covariance are population statistics (divide by N): the window is
a fixed slice of history, not a sample of a larger population.
"""

from collections.abc import Mapping, Sequence

import numpy as np

from walletlens.domain.models.market import PricePoint
from walletlens.domain.models.performance import PriceChange


def sort_series(points: Sequence[PricePoint]) -> list[PricePoint]:
    """Ascending by timestamp; on duplicate timestamps the last price seen wins."""
    by_ts: dict[int, PricePoint] = {}
    for p in points:
        by_ts[p.timestamp] = p
    return [by_ts[ts] for ts in sorted(by_ts)]


def prices_of(points: Sequence[PricePoint]) -> list[float]:
    return [p.price for p in points]


def returns(points: Sequence[PricePoint]) -> list[float]:
    """Simple periodic returns. Empty when fewer than 2 points."""
    return returns_from_values(prices_of(points))


def returns_from_values(values: Sequence[float]) -> list[float]:
    if len(values) < 2:
        return []
    out: list[float] = []
    for prev, cur in zip(values, values[1:]):
        # A zero price would be a bad tick, not a real -100%/inf move
        out.append((cur - prev) / prev if prev != 0 else 0.0)
    return out


def mean(values: Sequence[float]) -> float:
    if len(values) == 0:
        return 0.0
    return float(np.mean(values))


def variance(values: Sequence[float]) -> float:
    if len(values) == 0:
        return 0.0
    arr = np.asarray(values, dtype=float)
    # np.mean of identical floats can drift by an ulp; flat is exactly 0
    if arr.min() == arr.max():
        return 0.0
    return float(np.var(arr))


def stddev(values: Sequence[float]) -> float:
    return variance(values) ** 0.5


def covariance(a: Sequence[float], b: Sequence[float]) -> float:
    """Population covariance. 0 when lengths differ or either series is empty."""
    if len(a) != len(b) or len(a) == 0:
        return 0.0
    arr_a = np.asarray(a, dtype=float)
    arr_b = np.asarray(b, dtype=float)
    return float(np.mean((arr_a - arr_a.mean()) * (arr_b - arr_b.mean())))


def correlation(a: Sequence[float], b: Sequence[float]) -> float:
    """Pearson correlation; 0 for flat series instead of dividing by zero."""
    if len(a) != len(b) or len(a) == 0:
        return 0.0
    sd_a = stddev(a)
    sd_b = stddev(b)
    if sd_a == 0 or sd_b == 0:
        return 0.0
    return covariance(a, b) / (sd_a * sd_b)


def nearest_price(points: Sequence[PricePoint], target_ts: int) -> float:
    """Price of the point closest in time to target_ts. First minimum wins."""
    if not points:
        return 0.0
    closest = points[0]
    closest_diff = abs(closest.timestamp - target_ts)
    for p in points:
        diff = abs(p.timestamp - target_ts)
        if diff < closest_diff:
            closest = p
            closest_diff = diff
    return closest.price


def weighted_average(values: Sequence[float], weights: Sequence[float]) -> float:
    """Weights need not sum to 1. 0 when the weights sum to 0."""
    total_weight = sum(weights)
    if total_weight == 0:
        return 0.0
    return sum(v * w for v, w in zip(values, weights)) / total_weight


def align_tails(series: Mapping[str, Sequence[PricePoint]]) -> dict[str, list[PricePoint]]:
    """Sort each series and cut all of them to the shortest common tail.

    Providers return slightly different timestamps per asset, so series are
    aligned by position from the most recent point backwards. Empty series stay
    empty and do not shorten the others.
    """
    cleaned = {symbol: sort_series(points) for symbol, points in series.items()}
    lengths = [len(points) for points in cleaned.values() if points]
    if not lengths:
        return {symbol: [] for symbol in cleaned}
    n = min(lengths)
    return {symbol: points[-n:] if points else [] for symbol, points in cleaned.items()}


def align_value_tails(a: Sequence[float], b: Sequence[float]) -> tuple[list[float], list[float]]:
    n = min(len(a), len(b))
    if n == 0:
        return [], []
    return list(a[-n:]), list(b[-n:])


def price_change(current: float, historical: float, period: str) -> PriceChange:
    absolute = current - historical
    percentage = (absolute / historical) * 100 if historical > 0 else 0.0
    return PriceChange(period=period, absolute=absolute, percentage=percentage)
