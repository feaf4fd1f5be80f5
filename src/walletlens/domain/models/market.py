"""Market data value objects: price points and holdings."""

from pydantic import BaseModel, ConfigDict, computed_field


class PricePoint(BaseModel):
    """One observation of an asset's USD price. Timestamp is Unix seconds."""

    model_config = ConfigDict(frozen=True)

    timestamp: int
    price: float


class Holding(BaseModel):
    """Snapshot of one wallet position for a single analytics cycle."""

    model_config = ConfigDict(frozen=True)

    symbol: str
    quantity: float
    price_usd: float

    @computed_field  # type: ignore[prop-decorator]
    @property
    def usd_value(self) -> float:
        return self.quantity * self.price_usd
