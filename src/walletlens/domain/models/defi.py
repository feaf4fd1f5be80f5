"""Structured DeFi position records, as reported by protocol adapters."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class PositionReward(BaseModel):
    model_config = ConfigDict(frozen=True)

    symbol: str
    quantity: Decimal = Field(ge=0)
    value_usd: Decimal = Field(ge=0)
    is_claimed: bool = False
    claimed_at: datetime | None = None
    claim_tx_hash: str = ""


class ProtocolPosition(BaseModel):
    """One position in a lending pool, liquidity pool or staking contract."""

    model_config = ConfigDict(frozen=True)

    id: str
    protocol: str
    position_type: str  # lending / liquidity / staking / farming
    symbols: list[str]
    value_usd: Decimal = Field(ge=0)
    rewards: list[PositionReward] = []
