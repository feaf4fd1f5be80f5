"""Risk metrics value object."""

from pydantic import BaseModel, ConfigDict

from walletlens.domain.enums.risk import RiskScore


class RiskMetrics(BaseModel):
    """Portfolio risk for one analytics cycle. Rebuilt each cycle, never mutated.

    Percent fields (max_drawdown, concentration_risk, sector_allocation values)
    are on a 0-100 scale; volatility and annualized_return are fractions.
    """

    model_config = ConfigDict(frozen=True)

    volatility: float = 0.0
    annualized_return: float = 0.0
    var: float = 0.0
    var_confidence: float = 0.95
    max_drawdown: float = 0.0
    sharpe_ratio: float = 0.0
    beta: float = 1.0
    correlation_matrix: dict[str, dict[str, float]] = {}
    diversification_score: float = 0.0
    concentration_risk: float = 0.0
    sector_allocation: dict[str, float] = {}
    risk_score: RiskScore = RiskScore.MEDIUM
