"""Analytics API router — thin wrappers over the pure engines plus a one-shot cycle."""

from collections.abc import Callable
from typing import Annotated

from fastapi import APIRouter, Depends

from walletlens.analytics.benchmark import compare_with_benchmarks
from walletlens.analytics.dca import analyze_dca, purchases_from_events
from walletlens.analytics.indicators import macd, predict_price, rsi, technical_indicators
from walletlens.analytics.market_cycle import analyze_market_cycle
from walletlens.analytics.optimizer import recommend
from walletlens.analytics.risk import compute_risk_metrics, historical_portfolio_values
from walletlens.analytics.scenarios import what_if
from walletlens.api.deps import get_orchestrator_factory
from walletlens.api.schemas.analytics import (
    BenchmarkRequest,
    DCARequest,
    IndicatorsRequest,
    IndicatorsResponse,
    MarketCycleRequest,
    RiskRequest,
    SnapshotRequest,
    WhatIfRequest,
)
from walletlens.domain.models.analytics import AnalyticsRequest, AnalyticsSnapshot
from walletlens.domain.models.insights import BenchmarkComparison, DCAAnalysis, MarketCycle, WhatIfScenario
from walletlens.domain.models.optimization import PortfolioOptimization
from walletlens.domain.models.risk import RiskMetrics
from walletlens.services.orchestrator import AnalyticsOrchestrator
from walletlens.services.static_source import StaticWalletSource

router = APIRouter(prefix="/api/analytics", tags=["analytics"])

OrchestratorFactoryDep = Annotated[Callable[..., AnalyticsOrchestrator], Depends(get_orchestrator_factory)]


@router.post("/risk", response_model=RiskMetrics)
async def risk_metrics(body: RiskRequest) -> RiskMetrics:
    return compute_risk_metrics(body.holdings, body.price_history, body.reference_history, body.settings)


@router.post("/optimize", response_model=PortfolioOptimization)
async def optimize(body: RiskRequest) -> PortfolioOptimization:
    """Rule-based rebalancing suggestions for the settings' risk tolerance."""
    metrics = compute_risk_metrics(body.holdings, body.price_history, body.reference_history, body.settings)
    return recommend(body.holdings, metrics, body.settings.risk_tolerance)


@router.post("/indicators", response_model=IndicatorsResponse)
async def indicators(body: IndicatorsRequest) -> IndicatorsResponse:
    return IndicatorsResponse(
        symbol=body.symbol,
        rsi=rsi(body.prices),
        macd=macd(body.prices),
        indicators=technical_indicators(body.current_price, body.prices),
        prediction=predict_price(body.symbol, body.current_price, body.prices),
    )


@router.post("/dca", response_model=DCAAnalysis)
async def dca(body: DCARequest) -> DCAAnalysis:
    """Detect dollar-cost averaging in the buy history."""
    return analyze_dca(purchases_from_events(body.events))


@router.post("/what-if", response_model=list[WhatIfScenario])
async def what_if_scenarios(body: WhatIfRequest) -> list[WhatIfScenario]:
    return what_if(body.holdings, body.scenarios)


@router.post("/benchmarks", response_model=list[BenchmarkComparison])
async def benchmarks(body: BenchmarkRequest) -> list[BenchmarkComparison]:
    return compare_with_benchmarks(
        body.holdings, body.price_history, body.benchmarks, body.period, body.settings.risk_free_rate
    )


@router.post("/market-cycle", response_model=MarketCycle)
async def market_cycle(body: MarketCycleRequest) -> MarketCycle:
    return analyze_market_cycle(historical_portfolio_values(body.holdings, body.price_history))


@router.post("/snapshot", response_model=AnalyticsSnapshot)
async def snapshot(body: SnapshotRequest, orchestrator_factory: OrchestratorFactoryDep) -> AnalyticsSnapshot:
    """Run one analytics cycle, fetching price history through the shared cache."""
    source = StaticWalletSource(body.holdings, body.events)
    overrides: dict = {"tax_settings": body.tax_settings}
    if body.risk_settings is not None:
        overrides["risk_settings"] = body.risk_settings
    orchestrator = orchestrator_factory(holdings_source=source, transaction_source=source, **overrides)
    request = AnalyticsRequest(address=body.address, network=body.network, period=body.period)
    return await orchestrator.run_cycle(request)
