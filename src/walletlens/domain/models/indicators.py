"""Technical indicator and price projection outputs."""

from pydantic import BaseModel, ConfigDict

from walletlens.domain.enums.risk import Signal


class MacdResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    value: float = 0.0
    signal_line: float = 0.0
    histogram: float = 0.0
    signal: Signal = Signal.HOLD


class TechnicalIndicator(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    value: float
    signal: Signal
    strength: float  # 0..1-ish, informational
    description: str


class PredictionFactor(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    signal: Signal
    multiplier: float
    description: str


class PricePrediction(BaseModel):
    """Toy heuristic projection. Low-confidence, illustrative output only."""

    model_config = ConfigDict(frozen=True)

    symbol: str
    current_price: float
    predicted_price: float
    confidence: float
    timeframe: str = "7d"
    factors: list[PredictionFactor] = []
