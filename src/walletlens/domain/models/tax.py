"""Domain types for lot-based cost-basis accounting and yearly tax reports."""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from walletlens.domain.enums.tax import LotMethod, TxKind


def as_utc(moment: datetime) -> datetime:
    """Naive datetimes are taken as UTC."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


class _TaxEventBase(BaseModel):
    """Fields shared by every event kind. Quantities are never negative."""

    model_config = ConfigDict(frozen=True)

    id: str
    hash: str = ""
    timestamp: datetime
    symbol: str
    quantity: Decimal = Field(ge=0)  # Zero-quantity events are dropped before replay
    price_usd: Decimal
    value_usd: Decimal  # quantity * price_usd at event time
    gas_cost_usd: Decimal = Decimal(0)

    @field_validator("timestamp")
    @classmethod
    def timestamp_as_utc(cls, value: datetime) -> datetime:
        return as_utc(value)


class BuyEvent(_TaxEventBase):
    kind: Literal["buy"] = "buy"


class TransferInEvent(_TaxEventBase):
    kind: Literal["transfer_in"] = "transfer_in"


class AirdropEvent(_TaxEventBase):
    kind: Literal["airdrop"] = "airdrop"


class RewardEvent(_TaxEventBase):
    kind: Literal["reward"] = "reward"
    protocol: str = ""


class SellEvent(_TaxEventBase):
    kind: Literal["sell"] = "sell"


class TransferOutEvent(_TaxEventBase):
    kind: Literal["transfer_out"] = "transfer_out"


TaxEvent = Annotated[
    Union[BuyEvent, TransferInEvent, AirdropEvent, RewardEvent, SellEvent, TransferOutEvent],
    Field(discriminator="kind"),
]


class Lot(BaseModel):
    """An open (or partially consumed) acquisition."""

    symbol: str
    event_id: str
    acquired_at: datetime
    quantity: Decimal  # Remaining, never negative
    cost_basis_usd: Decimal  # Remaining total cost

    @property
    def unit_cost_usd(self) -> Decimal:
        if self.quantity == 0:
            return Decimal(0)
        return self.cost_basis_usd / self.quantity


class LotConsumption(BaseModel):
    """The slice of one lot used up by a disposal."""

    model_config = ConfigDict(frozen=True)

    event_id: str  # Acquisition event of the lot
    acquired_at: datetime
    quantity: Decimal
    cost_basis_usd: Decimal


class RealizedDisposal(BaseModel):
    """A realized gain/loss from matching an outflow against open lots."""

    model_config = ConfigDict(frozen=True)

    event_id: str
    hash: str = ""
    symbol: str
    disposed_at: datetime
    quantity: Decimal
    proceeds_usd: Decimal
    cost_basis_usd: Decimal
    gain_usd: Decimal  # proceeds - cost_basis
    holding_days: int  # Against the quantity-weighted acquisition time
    is_long_term: bool
    consumed: list[LotConsumption] = []


class TaxReportRow(BaseModel):
    """Flat export row. Field order is the CSV column order."""

    model_config = ConfigDict(frozen=True)

    date: str
    hash: str
    type: TxKind
    asset: str
    amount: Decimal
    price: Decimal
    usd_value: Decimal
    cost_basis: Decimal
    proceeds: Decimal
    gain_loss: Decimal
    gain_loss_pct: Decimal
    holding_period: int
    long_term: bool
    gas_cost: Decimal


class TaxReportSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_transactions: int = 0
    buy_transactions: int = 0
    sell_transactions: int = 0
    average_holding_period: float = 0.0
    best_performing_asset: str | None = None
    worst_performing_asset: str | None = None


class TaxReport(BaseModel):
    """Realized results for one calendar year."""

    model_config = ConfigDict(frozen=True)

    year: int
    method: LotMethod
    total_proceeds_usd: Decimal = Decimal(0)
    total_cost_basis_usd: Decimal = Decimal(0)
    total_gain_usd: Decimal = Decimal(0)
    short_term_gain_usd: Decimal = Decimal(0)
    long_term_gain_usd: Decimal = Decimal(0)
    disposals: list[RealizedDisposal] = []
    rows: list[TaxReportRow] = []
    open_lots: list[Lot] = []
    summary: TaxReportSummary = TaxReportSummary()


class TaxIntegrityIssue(BaseModel):
    """Serializable form of an InsufficientLotBalanceError."""

    model_config = ConfigDict(frozen=True)

    symbol: str
    event_id: str
    requested: Decimal
    available: Decimal
    message: str
