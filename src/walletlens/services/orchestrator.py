"""AnalyticsOrchestrator — the only component that performs I/O.

One cycle: fetch holdings and events, fan out one price-history task per
asset, then run every pure engine over the fetched data. trigger() debounces
input changes and supersedes in-flight cycles through a generation counter.
"""

import asyncio
import logging
import time
from collections.abc import Callable, Sequence
from datetime import datetime, timezone

from walletlens.accounting.tax_engine import TaxEngine
from walletlens.analytics.benchmark import compare
from walletlens.analytics.dca import analyze_dca, purchases_from_events
from walletlens.analytics.indicators import predict_price, technical_indicators
from walletlens.analytics.market_cycle import analyze_market_cycle
from walletlens.analytics.optimizer import recommend
from walletlens.analytics.performance import portfolio_performance
from walletlens.analytics.risk import compute_risk_metrics, ensure_valid_risk_settings, historical_portfolio_values
from walletlens.analytics.timeseries import prices_of, sort_series
from walletlens.domain.enums.period import TimePeriod
from walletlens.domain.models.analytics import AnalyticsRequest, AnalyticsSnapshot
from walletlens.domain.models.indicators import PricePrediction, TechnicalIndicator
from walletlens.domain.models.market import Holding, PricePoint
from walletlens.domain.models.settings import RiskSettings, TaxSettings
from walletlens.domain.models.tax import TaxEvent, TaxIntegrityIssue, TaxReport
from walletlens.exceptions import InsufficientLotBalanceError
from walletlens.services.protocols import HoldingsSource, PriceHistorySource, TransactionSource

logger = logging.getLogger(__name__)


class AnalyticsOrchestrator:
    def __init__(
        self,
        holdings_source: HoldingsSource,
        transaction_source: TransactionSource,
        price_history: PriceHistorySource,
        tax_settings: TaxSettings | None = None,
        risk_settings: RiskSettings | None = None,
        debounce_seconds: float = 5.0,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._holdings_source = holdings_source
        self._transaction_source = transaction_source
        self._price_history = price_history
        self._risk_settings = risk_settings or RiskSettings()
        ensure_valid_risk_settings(self._risk_settings)
        self._tax_engine = TaxEngine(tax_settings)
        self._debounce = debounce_seconds
        self._clock = clock

        self._generation = 0
        self._task: asyncio.Task | None = None
        self._latest: AnalyticsSnapshot | None = None

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def latest(self) -> AnalyticsSnapshot | None:
        """Snapshot of the newest generation that completed."""
        return self._latest

    # ------------------------------------------------------------------
    # Reactive pipeline
    # ------------------------------------------------------------------

    def trigger(self, request: AnalyticsRequest) -> int:
        """Schedule a debounced cycle for `request`, superseding any pending one.

        Must be called from a running event loop. Returns the new generation.
        """
        self._generation += 1
        generation = self._generation
        previous = self._task
        if previous is not None:
            if not previous.done():
                previous.cancel()
            elif not previous.cancelled() and previous.exception() is not None:
                # Already logged by the failed cycle; nobody will await it now
                logger.debug("Dropping failed analytics cycle %d", generation - 1)
        self._task = asyncio.create_task(self._debounced_cycle(request, generation))
        return generation

    async def wait(self) -> AnalyticsSnapshot | None:
        """Wait for the newest triggered cycle and return the latest snapshot."""
        while True:
            task = self._task
            if task is None:
                return self._latest
            try:
                await task
            except asyncio.CancelledError:
                # Superseded while we waited; follow the replacement task
                if task.cancelled() and task is not self._task:
                    continue
                raise
            if task is self._task:
                return self._latest

    async def aclose(self) -> None:
        task, self._task = self._task, None
        if task is not None and not task.done():
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass

    async def _debounced_cycle(self, request: AnalyticsRequest, generation: int) -> None:
        await asyncio.sleep(self._debounce)
        if generation != self._generation:
            return
        try:
            snapshot = await self.run_cycle(request, generation)
        except Exception:
            logger.exception("Analytics cycle %d failed for %s", generation, request.address)
            if generation != self._generation:
                return
            raise

        if generation != self._generation:
            logger.debug("Discarding superseded analytics cycle %d", generation)
            return
        self._latest = snapshot

    # ------------------------------------------------------------------
    # One cycle
    # ------------------------------------------------------------------

    async def run_cycle(self, request: AnalyticsRequest, generation: int = 0) -> AnalyticsSnapshot:
        holdings, events = await asyncio.gather(
            self._holdings_source.get_holdings(request.address, request.network),
            self._load_events(request),
        )

        price_history, failed = await self._fetch_histories(holdings, request.period)
        reference_history = price_history.get(self._risk_settings.reference_asset.upper(), [])

        now = self._clock()
        risk = compute_risk_metrics(holdings, price_history, reference_history, self._risk_settings)
        indicators, predictions = self._indicators(holdings, price_history)
        tax_report, tax_issue = self._tax(events, now)
        portfolio_values = historical_portfolio_values(holdings, price_history)
        benchmark = None
        if reference_history:
            benchmark = compare(
                prices_of(portfolio_values),
                self._risk_settings.reference_asset.upper(),
                reference_history,
                request.period,
                self._risk_settings.risk_free_rate,
            )

        return AnalyticsSnapshot(
            generation=generation,
            request=request,
            computed_at=datetime.fromtimestamp(now, tz=timezone.utc),
            holdings=holdings,
            risk=risk,
            performance=portfolio_performance(holdings, price_history, int(now)),
            indicators=indicators,
            predictions=predictions,
            optimization=recommend(holdings, risk, self._risk_settings.risk_tolerance),
            tax_report=tax_report,
            tax_issue=tax_issue,
            failed_assets=failed,
            dca=analyze_dca(purchases_from_events(events)) if events is not None else None,
            market_cycle=analyze_market_cycle(portfolio_values),
            benchmark=benchmark,
        )

    async def _load_events(self, request: AnalyticsRequest) -> list[TaxEvent] | None:
        try:
            return await self._transaction_source.get_events(request.address, request.network)
        except Exception:
            logger.exception("Transaction history unavailable for %s", request.address)
            return None

    async def _fetch_histories(
        self, holdings: Sequence[Holding], period: TimePeriod
    ) -> tuple[dict[str, list[PricePoint]], list[str]]:
        """Fan out one task per asset plus the reference asset; isolate failures."""
        reference = self._risk_settings.reference_asset.upper()
        symbols = list(dict.fromkeys([h.symbol for h in holdings] + [reference]))
        results = await asyncio.gather(
            *(self._price_history.get_history(symbol, period) for symbol in symbols),
            return_exceptions=True,
        )

        history: dict[str, list[PricePoint]] = {}
        failed: list[str] = []
        for symbol, result in zip(symbols, results):
            if isinstance(result, Exception):
                logger.warning("Price history failed for %s (%s): %s", symbol, period.value, result)
                failed.append(symbol)
                continue
            if isinstance(result, BaseException):
                raise result
            if not result:
                logger.warning("No price history for %s (%s)", symbol, period.value)
                failed.append(symbol)
                continue
            history[symbol] = sort_series(result)

        # The reference asset is only reported when it is also held
        held = {h.symbol for h in holdings}
        return history, [s for s in failed if s in held]

    def _indicators(
        self, holdings: Sequence[Holding], price_history: dict[str, list[PricePoint]]
    ) -> tuple[dict[str, list[TechnicalIndicator]], dict[str, PricePrediction]]:
        indicators: dict[str, list[TechnicalIndicator]] = {}
        predictions: dict[str, PricePrediction] = {}
        for h in holdings:
            prices = prices_of(price_history.get(h.symbol, []))
            readings = technical_indicators(h.price_usd, prices)
            if readings:
                indicators[h.symbol] = readings
            prediction = predict_price(h.symbol, h.price_usd, prices)
            if prediction is not None:
                predictions[h.symbol] = prediction
        return indicators, predictions

    def _tax(
        self, events: list[TaxEvent] | None, now: float
    ) -> tuple[TaxReport | None, TaxIntegrityIssue | None]:
        if events is None:
            return None, None
        as_of = datetime.fromtimestamp(now, tz=timezone.utc)
        try:
            return self._tax_engine.generate_report(events, as_of=as_of), None
        except InsufficientLotBalanceError as exc:
            logger.warning("Tax report not produced: %s", exc)
            return None, TaxIntegrityIssue(
                symbol=exc.symbol,
                event_id=exc.event_id,
                requested=exc.requested,
                available=exc.available,
                message=str(exc),
            )
