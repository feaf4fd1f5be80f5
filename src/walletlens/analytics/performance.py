"""Performance tracking: price changes over fixed lookbacks per asset and portfolio."""

from collections.abc import Mapping, Sequence

from walletlens.analytics.risk import total_value
from walletlens.analytics.timeseries import nearest_price, price_change, sort_series
from walletlens.domain.models.market import Holding, PricePoint
from walletlens.domain.models.performance import AssetPerformance, PortfolioPerformance, PriceChange

# Label → days back
LOOKBACKS: dict[str, int] = {"24h": 1, "7d": 7, "30d": 30}

SECONDS_PER_DAY = 86400


def asset_performance(
    holding: Holding,
    history: Sequence[PricePoint],
    portfolio_value: float,
    now_ts: int,
) -> AssetPerformance:
    points = sort_series(history)
    changes: dict[str, PriceChange] = {}
    for label, days in LOOKBACKS.items():
        past = nearest_price(points, now_ts - days * SECONDS_PER_DAY)
        changes[label] = price_change(holding.price_usd, past, label)

    allocation = holding.usd_value / portfolio_value * 100 if portfolio_value > 0 else 0.0
    return AssetPerformance(
        symbol=holding.symbol,
        usd_value=holding.usd_value,
        allocation=allocation,
        changes=changes,
    )


def portfolio_performance(
    holdings: Sequence[Holding],
    price_history: Mapping[str, Sequence[PricePoint]],
    now_ts: int,
) -> PortfolioPerformance:
    """Value-weighted portfolio changes. Assets are sorted by USD value, largest first."""
    total = total_value(holdings)
    assets = [
        asset_performance(h, price_history.get(h.symbol, []), total, now_ts)
        for h in holdings
        if h.usd_value > 0
    ]
    if not assets:
        return PortfolioPerformance(total_value=total)
    assets.sort(key=lambda a: a.usd_value, reverse=True)

    changes: dict[str, PriceChange] = {}
    for label in LOOKBACKS:
        pct = sum(a.changes[label].percentage * a.allocation / 100 for a in assets)
        changes[label] = PriceChange(period=label, absolute=pct / 100 * total, percentage=pct)

    by_day = sorted(assets, key=lambda a: a.changes["24h"].percentage, reverse=True)

    return PortfolioPerformance(
        total_value=total,
        changes=changes,
        number_of_assets=len(assets),
        largest_holding_percentage=max(a.allocation for a in assets),
        best_performer=by_day[0].symbol,
        worst_performer=by_day[-1].symbol,
        assets=assets,
    )
