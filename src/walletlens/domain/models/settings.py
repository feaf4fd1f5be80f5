"""User-facing engine settings, validated before any computation."""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field

from walletlens.domain.enums.risk import RiskTolerance
from walletlens.domain.enums.tax import LotMethod


def _current_year() -> int:
    return datetime.now(timezone.utc).year


class TaxSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    method: LotMethod = LotMethod.FIFO
    include_gas_fees: bool = True
    include_airdrops: bool = True
    include_staking_rewards: bool = True
    long_term_threshold_days: int = 365
    tax_year: int = Field(default_factory=_current_year)


class RiskSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    risk_tolerance: RiskTolerance = RiskTolerance.MODERATE
    var_confidence: float = 0.95
    risk_free_rate: float = 0.02
    reference_asset: str = "ETH"
