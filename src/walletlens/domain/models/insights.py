"""Portfolio insights: purchase patterns, what-if scenarios, benchmarks and market cycle."""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from walletlens.domain.enums.period import TimePeriod
from walletlens.domain.enums.risk import MarketPhase


class DCAPurchase(BaseModel):
    model_config = ConfigDict(frozen=True)

    timestamp: datetime
    symbol: str
    quantity: Decimal
    price_usd: Decimal
    usd_value: Decimal


class DCAAssetPattern(BaseModel):
    """Purchase pattern of one asset bought at least twice."""

    model_config = ConfigDict(frozen=True)

    symbol: str
    purchases: int
    total_invested: Decimal
    average_price: Decimal  # Quantity-weighted
    average_interval_days: float
    regularity: float  # Share of intervals within tolerance of the average, 0..1
    is_dca: bool


class DCAAnalysis(BaseModel):
    model_config = ConfigDict(frozen=True)

    is_dca_portfolio: bool = False
    total_invested: Decimal = Decimal(0)
    average_purchase_price: Decimal = Decimal(0)  # Mean of the per-asset averages
    average_purchase_interval_days: float = 0.0
    dca_efficiency: float = 0.0  # Mean regularity, percent
    assets: list[DCAAssetPattern] = []
    purchases: list[DCAPurchase] = []


class ScenarioDefinition(BaseModel):
    """Scale the listed positions by `multiplier` and compare."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str = ""
    symbols: list[str]
    multiplier: float = Field(ge=0)


class WhatIfScenario(BaseModel):
    model_config = ConfigDict(frozen=True)

    scenario: str
    description: str
    symbols: list[str]
    current_value: float
    alternative_value: float
    difference: float
    percentage_change: float
    date: date


class BenchmarkComparison(BaseModel):
    """Portfolio vs one benchmark asset over the same window. Returns in percent."""

    model_config = ConfigDict(frozen=True)

    benchmark: str
    period: TimePeriod
    portfolio_return: float = 0.0
    benchmark_return: float = 0.0
    outperformance: float = 0.0
    correlation: float = 0.0
    beta: float = 1.0
    portfolio_sharpe_ratio: float = 0.0
    benchmark_sharpe_ratio: float = 0.0


class MarketCycle(BaseModel):
    model_config = ConfigDict(frozen=True)

    phase: MarketPhase = MarketPhase.ACCUMULATION
    confidence: float = 0.5
    indicators: list[str] = []
    duration_days: int = 0
    description: str = ""
