"""Orchestrator request and per-cycle snapshot."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from walletlens.domain.enums.chain import Chain
from walletlens.domain.enums.period import TimePeriod
from walletlens.domain.models.indicators import PricePrediction, TechnicalIndicator
from walletlens.domain.models.insights import BenchmarkComparison, DCAAnalysis, MarketCycle
from walletlens.domain.models.market import Holding
from walletlens.domain.models.optimization import PortfolioOptimization
from walletlens.domain.models.performance import PortfolioPerformance
from walletlens.domain.models.risk import RiskMetrics
from walletlens.domain.models.tax import TaxIntegrityIssue, TaxReport


class AnalyticsRequest(BaseModel):
    """The inputs whose change triggers a new cycle."""

    model_config = ConfigDict(frozen=True)

    address: str
    network: Chain = Chain.ETHEREUM
    period: TimePeriod = TimePeriod.MONTH


class AnalyticsSnapshot(BaseModel):
    """Everything one cycle produced. Replaced wholesale, never merged."""

    model_config = ConfigDict(frozen=True)

    generation: int
    request: AnalyticsRequest
    computed_at: datetime
    holdings: list[Holding] = []
    risk: RiskMetrics = RiskMetrics()
    performance: PortfolioPerformance
    indicators: dict[str, list[TechnicalIndicator]] = {}
    predictions: dict[str, PricePrediction] = {}
    optimization: PortfolioOptimization
    tax_report: TaxReport | None = None
    tax_issue: TaxIntegrityIssue | None = None
    failed_assets: list[str] = []  # Price history failed or came back empty
    dca: DCAAnalysis | None = None  # None when transaction history is unavailable
    market_cycle: MarketCycle = MarketCycle()
    benchmark: BenchmarkComparison | None = None  # Against the reference asset
