from pydantic import BaseModel, ConfigDict


class PriceChange(BaseModel):
    model_config = ConfigDict(frozen=True)

    period: str
    absolute: float = 0.0
    percentage: float = 0.0


class AssetPerformance(BaseModel):
    model_config = ConfigDict(frozen=True)

    symbol: str
    usd_value: float
    allocation: float  # Percent of portfolio
    changes: dict[str, PriceChange] = {}


class PortfolioPerformance(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_value: float = 0.0
    changes: dict[str, PriceChange] = {}
    number_of_assets: int = 0
    largest_holding_percentage: float = 0.0
    best_performer: str | None = None
    worst_performer: str | None = None
    assets: list[AssetPerformance] = []
