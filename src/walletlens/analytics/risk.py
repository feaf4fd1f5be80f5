"""Risk metrics engine — pure functions over holdings and price history.

Every metric degrades to a neutral value (0, or 1 for beta) when history is
missing or too short; compute_risk_metrics always returns a complete result.
"""

import logging
import math
from collections import defaultdict
from collections.abc import Callable, Mapping, Sequence
from typing import TypeVar

from walletlens.analytics.sectors import sector_of
from walletlens.analytics.timeseries import (
    align_tails,
    align_value_tails,
    correlation,
    covariance,
    mean,
    returns,
    returns_from_values,
    sort_series,
    stddev,
    variance,
)
from walletlens.domain.enums.risk import RiskScore
from walletlens.domain.models.market import Holding, PricePoint
from walletlens.domain.models.risk import RiskMetrics
from walletlens.domain.models.settings import RiskSettings
from walletlens.exceptions import InvalidConfigurationError

logger = logging.getLogger(__name__)

PERIODS_PER_YEAR = 365  # Crypto trades every day

# Normal quantiles for the supported VaR confidence levels
Z_SCORES: dict[float, float] = {
    0.95: 1.645,
    0.99: 2.326,
}

PriceHistory = Mapping[str, Sequence[PricePoint]]

T = TypeVar("T")


def validate_risk_settings(settings: RiskSettings) -> list[str]:
    errors: list[str] = []
    if settings.var_confidence not in Z_SCORES:
        errors.append(f"Unsupported VaR confidence: {settings.var_confidence} (use 0.95 or 0.99)")
    if not -1.0 < settings.risk_free_rate < 1.0:
        errors.append("Risk-free rate must be an annual fraction between -1 and 1")
    if not settings.reference_asset.strip():
        errors.append("Reference asset must not be empty")
    return errors


def ensure_valid_risk_settings(settings: RiskSettings) -> None:
    errors = validate_risk_settings(settings)
    if errors:
        raise InvalidConfigurationError(errors)


def total_value(holdings: Sequence[Holding]) -> float:
    return sum(h.usd_value for h in holdings)


def portfolio_weights(holdings: Sequence[Holding]) -> dict[str, float]:
    """Share of total USD value per symbol. Empty when the portfolio is worthless."""
    total = total_value(holdings)
    if total <= 0:
        return {}
    values: dict[str, float] = defaultdict(float)
    for h in holdings:
        values[h.symbol] += h.usd_value
    return {symbol: value / total for symbol, value in values.items()}


def _aligned_returns(symbols: Sequence[str], price_history: PriceHistory) -> dict[str, list[float]]:
    aligned = align_tails({s: price_history.get(s, []) for s in symbols})
    return {s: returns(points) for s, points in aligned.items()}


def portfolio_volatility(holdings: Sequence[Holding], price_history: PriceHistory) -> float:
    """Annualized volatility from the full weight-covariance double sum."""
    weights = portfolio_weights(holdings)
    if not weights:
        return 0.0
    symbols = list(weights)
    rets = _aligned_returns(symbols, price_history)

    daily_variance = 0.0
    for si in symbols:
        for sj in symbols:
            wi, wj = weights[si], weights[sj]
            if wi > 0 and wj > 0:
                daily_variance += wi * wj * covariance(rets[si], rets[sj])

    # Rounding can leave a tiny negative for near-perfect hedges
    daily_variance = max(daily_variance, 0.0)
    return math.sqrt(daily_variance) * math.sqrt(PERIODS_PER_YEAR)


def value_at_risk(portfolio_value: float, volatility: float, confidence: float = 0.95) -> float:
    """Parametric (normal) VaR. An approximation, not a loss guarantee."""
    z = Z_SCORES.get(confidence, Z_SCORES[0.95])
    return portfolio_value * volatility * z


def historical_portfolio_values(holdings: Sequence[Holding], price_history: PriceHistory) -> list[PricePoint]:
    """Rebuild past portfolio value by scaling today's positions with past prices.

    Holdings without usable history contribute their current value flat.
    """
    symbols = [h.symbol for h in holdings]
    aligned = align_tails({s: price_history.get(s, []) for s in symbols})
    with_history = [points for points in aligned.values() if points]
    if not with_history:
        return []

    n = len(with_history[0])
    timeline = [p.timestamp for p in with_history[0]]
    values: list[PricePoint] = []
    for i in range(n):
        value = 0.0
        for h in holdings:
            points = aligned.get(h.symbol) or []
            if points and h.price_usd > 0:
                value += h.usd_value * (points[i].price / h.price_usd)
            else:
                value += h.usd_value
        values.append(PricePoint(timestamp=timeline[i], price=value))
    return values


def max_drawdown(values: Sequence[float]) -> float:
    """Largest peak-to-trough fall, in percent."""
    if not values:
        return 0.0
    worst = 0.0
    peak = values[0]
    for value in values:
        if value > peak:
            peak = value
        if peak <= 0:
            continue
        drawdown = (peak - value) / peak
        if drawdown > worst:
            worst = drawdown
    return worst * 100


def annualized_return(values: Sequence[float]) -> float:
    rets = returns_from_values(values)
    if not rets:
        return 0.0
    return mean(rets) * PERIODS_PER_YEAR


def sharpe_ratio(values: Sequence[float], risk_free_rate: float = 0.02) -> float:
    """(annualized return - rf) / annualized volatility; 0 for a flat series."""
    rets = returns_from_values(values)
    if not rets:
        return 0.0
    sd = stddev(rets)
    if sd == 0:
        return 0.0
    annualized_volatility = sd * math.sqrt(PERIODS_PER_YEAR)
    return (mean(rets) * PERIODS_PER_YEAR - risk_free_rate) / annualized_volatility


def beta(portfolio_values: Sequence[float], reference_history: Sequence[PricePoint]) -> float:
    """Sensitivity of portfolio returns to the reference asset. 1 if undefined."""
    portfolio_returns, reference_returns = align_value_tails(
        returns_from_values(portfolio_values),
        returns(sort_series(reference_history)),
    )
    if len(reference_returns) < 2:
        return 1.0
    reference_variance = variance(reference_returns)
    if reference_variance <= 0:
        return 1.0
    return covariance(portfolio_returns, reference_returns) / reference_variance


def diversification_score(holdings: Sequence[Holding]) -> float:
    """100 minus the Herfindahl-Hirschman index in percent, floored at 0."""
    weights = portfolio_weights(holdings)
    if not weights:
        return 0.0
    hhi = sum(w * w for w in weights.values())
    return max(0.0, 100 - hhi * 100)


def concentration_risk(holdings: Sequence[Holding]) -> float:
    """Percent of total value held in the single largest position."""
    weights = portfolio_weights(holdings)
    if not weights:
        return 0.0
    return max(weights.values()) * 100


def correlation_matrix(holdings: Sequence[Holding], price_history: PriceHistory) -> dict[str, dict[str, float]]:
    symbols = list(dict.fromkeys(h.symbol for h in holdings))
    rets = _aligned_returns(symbols, price_history)
    matrix: dict[str, dict[str, float]] = {}
    for si in symbols:
        matrix[si] = {}
        for sj in symbols:
            matrix[si][sj] = 1.0 if si == sj else correlation(rets[si], rets[sj])
    return matrix


def sector_allocation(holdings: Sequence[Holding]) -> dict[str, float]:
    total = total_value(holdings)
    if total <= 0:
        return {}
    by_sector: dict[str, float] = defaultdict(float)
    for h in holdings:
        by_sector[sector_of(h.symbol)] += h.usd_value
    return {sector: value / total * 100 for sector, value in by_sector.items()}


def classify_risk(volatility: float, concentration: float, diversification: float) -> RiskScore:
    if volatility < 0.3 and concentration < 30 and diversification > 70:
        return RiskScore.LOW
    if volatility < 0.6 and concentration < 50 and diversification > 40:
        return RiskScore.MEDIUM
    return RiskScore.HIGH


def _degrade(name: str, fn: Callable[[], T], default: T) -> T:
    try:
        return fn()
    except (ArithmeticError, ValueError):
        logger.warning("Risk metric %s could not be computed, using neutral value", name, exc_info=True)
        return default


def compute_risk_metrics(
    holdings: Sequence[Holding],
    price_history: PriceHistory,
    reference_history: Sequence[PricePoint] = (),
    settings: RiskSettings | None = None,
) -> RiskMetrics:
    """Compute every risk metric for one cycle."""
    settings = settings or RiskSettings()
    ensure_valid_risk_settings(settings)

    if total_value(holdings) <= 0:
        return RiskMetrics(var_confidence=settings.var_confidence)

    value_series = [p.price for p in historical_portfolio_values(holdings, price_history)]

    volatility = _degrade("volatility", lambda: portfolio_volatility(holdings, price_history), 0.0)
    concentration = _degrade("concentration", lambda: concentration_risk(holdings), 0.0)
    diversification = _degrade("diversification", lambda: diversification_score(holdings), 0.0)

    return RiskMetrics(
        volatility=volatility,
        annualized_return=_degrade("annualized_return", lambda: annualized_return(value_series), 0.0),
        var=_degrade(
            "var",
            lambda: value_at_risk(total_value(holdings), volatility, settings.var_confidence),
            0.0,
        ),
        var_confidence=settings.var_confidence,
        max_drawdown=_degrade("max_drawdown", lambda: max_drawdown(value_series), 0.0),
        sharpe_ratio=_degrade("sharpe_ratio", lambda: sharpe_ratio(value_series, settings.risk_free_rate), 0.0),
        beta=_degrade("beta", lambda: beta(value_series, reference_history), 1.0),
        correlation_matrix=_degrade(
            "correlation_matrix", lambda: correlation_matrix(holdings, price_history), {}
        ),
        diversification_score=diversification,
        concentration_risk=concentration,
        sector_allocation=_degrade("sector_allocation", lambda: sector_allocation(holdings), {}),
        risk_score=classify_risk(volatility, concentration, diversification),
    )
