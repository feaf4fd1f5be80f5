from pydantic import BaseModel, ConfigDict

from walletlens.domain.enums.risk import Priority, RiskTolerance, Signal


class Recommendation(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Signal
    symbol: str  # May be a placeholder bucket such as GROWTH_TOKENS
    amount_usd: float
    reason: str
    priority: Priority


class PortfolioOptimization(BaseModel):
    model_config = ConfigDict(frozen=True)

    risk_tolerance: RiskTolerance
    current_allocation: dict[str, float] = {}  # USD per symbol
    suggested_allocation: dict[str, float] = {}
    expected_return: float = 0.0
    expected_risk: float = 0.0
    rebalancing_needed: bool = False
    rebalancing_cost: float = 0.0
    recommendations: list[Recommendation] = []
