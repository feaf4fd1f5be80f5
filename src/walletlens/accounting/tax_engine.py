"""TaxEngine — replays tax events through the lot inventory and builds yearly reports."""

import logging
from collections import defaultdict
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from decimal import Decimal

from walletlens.accounting.events import classify, prepare_events
from walletlens.accounting.lots import LotInventory
from walletlens.domain.enums.tax import FlowDirection, LotMethod, TxKind
from walletlens.domain.models.tax import (
    AirdropEvent,
    Lot,
    LotConsumption,
    RealizedDisposal,
    RewardEvent,
    TaxEvent,
    TaxReport,
    TaxReportRow,
    TaxReportSummary,
    as_utc,
)
from walletlens.domain.models.settings import TaxSettings
from walletlens.exceptions import InvalidConfigurationError

logger = logging.getLogger(__name__)

MIN_TAX_YEAR = 2010
SECONDS_PER_DAY = 86400


def _year_error(year: int, today: date | None = None) -> str | None:
    today = today or datetime.now(timezone.utc).date()
    if not MIN_TAX_YEAR <= year <= today.year + 1:
        return f"Tax year must be between {MIN_TAX_YEAR} and {today.year + 1}"
    return None


def validate_tax_settings(settings: TaxSettings, today: date | None = None) -> list[str]:
    errors: list[str] = []
    if settings.method not in set(LotMethod):
        errors.append(f"Unknown lot method: {settings.method}")
    if settings.long_term_threshold_days < 0:
        errors.append("Long-term threshold must be zero or more days")
    year_error = _year_error(settings.tax_year, today)
    if year_error:
        errors.append(year_error)
    return errors


def ensure_valid_tax_settings(settings: TaxSettings, today: date | None = None) -> None:
    errors = validate_tax_settings(settings, today)
    if errors:
        raise InvalidConfigurationError(errors)


@dataclass
class LedgerEntry:
    """One replayed event with its row and, for outflows, the realized disposal."""

    event: TaxEvent
    direction: FlowDirection
    row: TaxReportRow
    disposal: RealizedDisposal | None = None


@dataclass
class LedgerResult:
    entries: list[LedgerEntry] = field(default_factory=list)
    open_lots: list[Lot] = field(default_factory=list)

    @property
    def disposals(self) -> list[RealizedDisposal]:
        return [e.disposal for e in self.entries if e.disposal is not None]

    @property
    def rows(self) -> list[TaxReportRow]:
        return [e.row for e in self.entries]


def _weighted_holding_days(consumed: Sequence[LotConsumption], disposed_at: datetime) -> int:
    total_qty = sum((c.quantity for c in consumed), Decimal(0))
    if total_qty == 0:
        return 0
    weighted = sum(
        float(c.quantity) * (disposed_at - c.acquired_at).total_seconds()
        for c in consumed
    )
    return max(0, int(weighted / float(total_qty) // SECONDS_PER_DAY))


def _gain_pct(gain: Decimal, cost_basis: Decimal) -> Decimal:
    if cost_basis == 0:
        return Decimal(0)
    return gain / cost_basis * 100


class TaxEngine:
    """Lot-based capital gains for one wallet's event history."""

    def __init__(self, settings: TaxSettings | None = None) -> None:
        self._settings = settings or TaxSettings()
        ensure_valid_tax_settings(self._settings)

    @property
    def settings(self) -> TaxSettings:
        return self._settings

    def replay(self, events: Sequence[TaxEvent], as_of: datetime | None = None) -> LedgerResult:
        """Rebuild the inventory from scratch and realize every outflow.

        `as_of` bounds the holding period shown on inflow rows (default: now).
        Raises InsufficientLotBalanceError on the first outflow the open lots
        cannot cover.
        """
        as_of = as_utc(as_of) if as_of is not None else datetime.now(timezone.utc)
        inventory = LotInventory()
        result = LedgerResult()

        for event in prepare_events(events):
            direction = classify(event)
            if direction == FlowDirection.INFLOW:
                cost_basis = self._inflow_cost_basis(event)
                inventory.add(Lot(
                    symbol=event.symbol,
                    event_id=event.id,
                    acquired_at=event.timestamp,
                    quantity=event.quantity,
                    cost_basis_usd=cost_basis,
                ))
                held = (as_of - event.timestamp).days
                row = self._row(event, cost_basis, Decimal(0), max(0, held))
                result.entries.append(LedgerEntry(event=event, direction=direction, row=row))
            else:
                disposal = self._dispose(inventory, event)
                row = self._row(event, disposal.cost_basis_usd, disposal.proceeds_usd, disposal.holding_days)
                result.entries.append(
                    LedgerEntry(event=event, direction=direction, row=row, disposal=disposal)
                )

        result.open_lots = inventory.open_lots()
        return result

    def generate_report(
        self,
        events: Sequence[TaxEvent],
        year: int | None = None,
        as_of: datetime | None = None,
    ) -> TaxReport:
        """Realized results for one calendar year.

        Only events up to the end of `year` are replayed, so later data
        problems do not affect an earlier year.
        Raises InvalidConfigurationError for a year outside the supported range.
        """
        year = year if year is not None else self._settings.tax_year
        year_error = _year_error(year)
        if year_error:
            raise InvalidConfigurationError([year_error])

        year_end = datetime(year, 12, 31, 23, 59, 59, tzinfo=timezone.utc)
        horizon = year_end
        if as_of is not None and as_utc(as_of) < year_end:
            horizon = as_utc(as_of)

        ledger = self.replay([e for e in events if e.timestamp.year <= year], as_of=horizon)
        in_year = [e for e in ledger.entries if e.event.timestamp.year == year]
        disposals = [e.disposal for e in in_year if e.disposal is not None]
        rows = [e.row for e in in_year]

        short_term = sum((d.gain_usd for d in disposals if not d.is_long_term), Decimal(0))
        long_term = sum((d.gain_usd for d in disposals if d.is_long_term), Decimal(0))

        logger.info(
            "Tax report %d (%s): %d transactions, %d disposals",
            year, self._settings.method.value, len(rows), len(disposals),
        )

        return TaxReport(
            year=year,
            method=self._settings.method,
            total_proceeds_usd=sum((d.proceeds_usd for d in disposals), Decimal(0)),
            total_cost_basis_usd=sum((d.cost_basis_usd for d in disposals), Decimal(0)),
            total_gain_usd=short_term + long_term,
            short_term_gain_usd=short_term,
            long_term_gain_usd=long_term,
            disposals=disposals,
            rows=rows,
            open_lots=ledger.open_lots,
            summary=self._summary(in_year, disposals),
        )

    # ------------------------------------------------------------------

    def _inflow_cost_basis(self, event: TaxEvent) -> Decimal:
        # Excluded airdrops and rewards still open a lot, at zero cost
        if isinstance(event, AirdropEvent) and not self._settings.include_airdrops:
            return Decimal(0)
        if isinstance(event, RewardEvent) and not self._settings.include_staking_rewards:
            return Decimal(0)
        cost = event.value_usd
        if self._settings.include_gas_fees:
            cost += event.gas_cost_usd
        return cost

    def _proceeds(self, event: TaxEvent) -> Decimal:
        proceeds = event.value_usd
        if self._settings.include_gas_fees:
            proceeds -= event.gas_cost_usd
        return proceeds

    def _dispose(self, inventory: LotInventory, event: TaxEvent) -> RealizedDisposal:
        consumed = inventory.consume(event.symbol, event.quantity, self._settings.method, event.id)
        cost_basis = sum((c.cost_basis_usd for c in consumed), Decimal(0))
        proceeds = self._proceeds(event)
        holding_days = _weighted_holding_days(consumed, event.timestamp)
        return RealizedDisposal(
            event_id=event.id,
            hash=event.hash,
            symbol=event.symbol,
            disposed_at=event.timestamp,
            quantity=event.quantity,
            proceeds_usd=proceeds,
            cost_basis_usd=cost_basis,
            gain_usd=proceeds - cost_basis,
            holding_days=holding_days,
            is_long_term=holding_days >= self._settings.long_term_threshold_days,
            consumed=consumed,
        )

    def _row(self, event: TaxEvent, cost_basis: Decimal, proceeds: Decimal, holding_days: int) -> TaxReportRow:
        gain = proceeds - cost_basis if classify(event) == FlowDirection.OUTFLOW else Decimal(0)
        return TaxReportRow(
            date=event.timestamp.date().isoformat(),
            hash=event.hash,
            type=TxKind(event.kind),
            asset=event.symbol,
            amount=event.quantity,
            price=event.price_usd,
            usd_value=event.value_usd,
            cost_basis=cost_basis,
            proceeds=proceeds,
            gain_loss=gain,
            gain_loss_pct=_gain_pct(gain, cost_basis),
            holding_period=holding_days,
            long_term=holding_days >= self._settings.long_term_threshold_days,
            gas_cost=event.gas_cost_usd,
        )

    @staticmethod
    def _summary(entries: Sequence[LedgerEntry], disposals: Sequence[RealizedDisposal]) -> TaxReportSummary:
        if not entries:
            return TaxReportSummary()

        gains: dict[str, Decimal] = defaultdict(Decimal)
        for d in disposals:
            gains[d.symbol] += d.gain_usd
        ranked = sorted(gains.items(), key=lambda item: item[1], reverse=True)

        return TaxReportSummary(
            total_transactions=len(entries),
            buy_transactions=sum(1 for e in entries if e.direction == FlowDirection.INFLOW),
            sell_transactions=sum(1 for e in entries if e.direction == FlowDirection.OUTFLOW),
            average_holding_period=sum(e.row.holding_period for e in entries) / len(entries),
            best_performing_asset=ranked[0][0] if ranked else None,
            worst_performing_asset=ranked[-1][0] if ranked else None,
        )
