"""Pydantic schemas for analytics API."""

from pydantic import BaseModel, Field

from walletlens.domain.enums.chain import Chain
from walletlens.domain.enums.period import TimePeriod
from walletlens.domain.models.indicators import MacdResult, PricePrediction, TechnicalIndicator
from walletlens.domain.models.insights import ScenarioDefinition
from walletlens.domain.models.market import Holding, PricePoint
from walletlens.domain.models.settings import RiskSettings, TaxSettings
from walletlens.domain.models.tax import TaxEvent


class RiskRequest(BaseModel):
    holdings: list[Holding]
    price_history: dict[str, list[PricePoint]] = {}
    reference_history: list[PricePoint] = []
    settings: RiskSettings = RiskSettings()


class IndicatorsRequest(BaseModel):
    symbol: str
    current_price: float = Field(ge=0)
    prices: list[float]  # Oldest first


class IndicatorsResponse(BaseModel):
    symbol: str
    rsi: float
    macd: MacdResult
    indicators: list[TechnicalIndicator]
    prediction: PricePrediction | None = None


class SnapshotRequest(BaseModel):
    """One-shot analytics cycle over caller-supplied wallet data."""

    address: str
    network: Chain = Chain.ETHEREUM
    period: TimePeriod = TimePeriod.MONTH
    holdings: list[Holding]
    events: list[TaxEvent] = []
    tax_settings: TaxSettings = TaxSettings()
    risk_settings: RiskSettings | None = None  # None = server defaults


class DCARequest(BaseModel):
    events: list[TaxEvent]


class WhatIfRequest(BaseModel):
    holdings: list[Holding]
    scenarios: list[ScenarioDefinition]


class BenchmarkRequest(BaseModel):
    holdings: list[Holding]
    price_history: dict[str, list[PricePoint]] = {}
    benchmarks: dict[str, list[PricePoint]]  # Benchmark name -> its price history
    period: TimePeriod = TimePeriod.MONTH
    settings: RiskSettings = RiskSettings()


class MarketCycleRequest(BaseModel):
    holdings: list[Holding]
    price_history: dict[str, list[PricePoint]] = {}
