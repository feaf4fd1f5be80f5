"""Dollar-cost averaging detection over purchase history."""

from collections import defaultdict
from collections.abc import Iterable, Sequence
from decimal import Decimal

from walletlens.analytics.timeseries import mean
from walletlens.domain.models.insights import DCAAnalysis, DCAAssetPattern, DCAPurchase
from walletlens.domain.models.tax import BuyEvent, TaxEvent

INTERVAL_TOLERANCE = 0.2  # Relative deviation from the average interval
MIN_REGULARITY = 0.7
MIN_PURCHASES = 3
SECONDS_PER_DAY = 86400


def purchases_from_events(events: Iterable[TaxEvent]) -> list[DCAPurchase]:
    """Buys only; transfers, airdrops and rewards are not purchases."""
    return [
        DCAPurchase(
            timestamp=e.timestamp,
            symbol=e.symbol,
            quantity=e.quantity,
            price_usd=e.price_usd,
            usd_value=e.value_usd,
        )
        for e in events
        if isinstance(e, BuyEvent) and e.quantity > 0
    ]


def regularity(intervals: Sequence[float]) -> float:
    """Share of intervals within INTERVAL_TOLERANCE of their average.

    Purchases all made at the same moment are not a schedule: 0.
    """
    if not intervals:
        return 0.0
    average = mean(intervals)
    if average <= 0:
        return 0.0
    regular = sum(1 for i in intervals if abs(i - average) / average <= INTERVAL_TOLERANCE)
    return regular / len(intervals)


def asset_pattern(symbol: str, purchases: Sequence[DCAPurchase]) -> DCAAssetPattern:
    ordered = sorted(purchases, key=lambda p: p.timestamp)
    intervals = [
        (cur.timestamp - prev.timestamp).total_seconds() for prev, cur in zip(ordered, ordered[1:])
    ]
    invested = sum((p.usd_value for p in ordered), Decimal(0))
    quantity = sum((p.quantity for p in ordered), Decimal(0))
    score = regularity(intervals)
    return DCAAssetPattern(
        symbol=symbol,
        purchases=len(ordered),
        total_invested=invested,
        average_price=invested / quantity if quantity > 0 else Decimal(0),
        average_interval_days=mean(intervals) / SECONDS_PER_DAY,
        regularity=score,
        is_dca=score > MIN_REGULARITY and len(ordered) >= MIN_PURCHASES,
    )


def analyze_dca(purchases: Sequence[DCAPurchase]) -> DCAAnalysis:
    """Per-asset purchase regularity, averaged over assets bought at least twice."""
    by_symbol: dict[str, list[DCAPurchase]] = defaultdict(list)
    for p in purchases:
        by_symbol[p.symbol].append(p)

    patterns = [asset_pattern(s, ps) for s, ps in by_symbol.items() if len(ps) >= 2]
    if not patterns:
        return DCAAnalysis()

    analysed = {p.symbol for p in patterns}
    return DCAAnalysis(
        is_dca_portfolio=any(p.is_dca for p in patterns),
        total_invested=sum((p.total_invested for p in patterns), Decimal(0)),
        average_purchase_price=sum((p.average_price for p in patterns), Decimal(0)) / len(patterns),
        average_purchase_interval_days=mean([p.average_interval_days for p in patterns]),
        dca_efficiency=mean([p.regularity for p in patterns]) * 100,
        assets=patterns,
        purchases=sorted((p for p in purchases if p.symbol in analysed), key=lambda p: p.timestamp),
    )
