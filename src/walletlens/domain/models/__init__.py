from walletlens.domain.models.analytics import AnalyticsRequest, AnalyticsSnapshot
from walletlens.domain.models.defi import PositionReward, ProtocolPosition
from walletlens.domain.models.indicators import MacdResult, PredictionFactor, PricePrediction, TechnicalIndicator
from walletlens.domain.models.insights import (
    BenchmarkComparison,
    DCAAnalysis,
    DCAAssetPattern,
    DCAPurchase,
    MarketCycle,
    ScenarioDefinition,
    WhatIfScenario,
)
from walletlens.domain.models.market import Holding, PricePoint
from walletlens.domain.models.optimization import PortfolioOptimization, Recommendation
from walletlens.domain.models.performance import AssetPerformance, PortfolioPerformance, PriceChange
from walletlens.domain.models.risk import RiskMetrics
from walletlens.domain.models.settings import RiskSettings, TaxSettings
from walletlens.domain.models.tax import (
    AirdropEvent,
    BuyEvent,
    Lot,
    LotConsumption,
    RealizedDisposal,
    RewardEvent,
    SellEvent,
    TaxEvent,
    TaxIntegrityIssue,
    TaxReport,
    TaxReportRow,
    TaxReportSummary,
    TransferInEvent,
    TransferOutEvent,
)

__all__ = [
    "AirdropEvent",
    "AnalyticsRequest",
    "AnalyticsSnapshot",
    "AssetPerformance",
    "BenchmarkComparison",
    "BuyEvent",
    "DCAAnalysis",
    "DCAAssetPattern",
    "DCAPurchase",
    "Holding",
    "Lot",
    "LotConsumption",
    "MacdResult",
    "MarketCycle",
    "PortfolioOptimization",
    "PortfolioPerformance",
    "PositionReward",
    "PredictionFactor",
    "PriceChange",
    "PricePoint",
    "PricePrediction",
    "ProtocolPosition",
    "RealizedDisposal",
    "Recommendation",
    "RewardEvent",
    "RiskMetrics",
    "RiskSettings",
    "ScenarioDefinition",
    "SellEvent",
    "TaxEvent",
    "TaxIntegrityIssue",
    "TaxReport",
    "TaxReportRow",
    "TaxReportSummary",
    "TaxSettings",
    "TechnicalIndicator",
    "TransferInEvent",
    "TransferOutEvent",
    "WhatIfScenario",
]
