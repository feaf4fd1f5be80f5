"""Flat CSV rendering of a TaxReport, one row per in-year transaction."""

import csv
from decimal import ROUND_HALF_UP, Decimal
from io import StringIO

from walletlens.domain.models.tax import TaxReport, TaxReportRow

TAX_CSV_HEADERS: list[str] = [
    "Date",
    "Transaction Hash",
    "Type",
    "Token Symbol",
    "Amount",
    "Price at Time",
    "USD Value",
    "Cost Basis",
    "Proceeds",
    "Gain/Loss",
    "Gain/Loss %",
    "Holding Period (Days)",
    "Long Term",
    "Gas Cost",
]


def _fixed(value: Decimal, places: int) -> str:
    return str(value.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP))


def _amount(value: Decimal) -> str:
    return format(value.normalize(), "f")


def row_cells(row: TaxReportRow) -> list[str]:
    """Cells in TAX_CSV_HEADERS order."""
    return [
        row.date,
        row.hash,
        row.type.value,
        row.asset,
        _amount(row.amount),
        _fixed(row.price, 6),
        _fixed(row.usd_value, 2),
        _fixed(row.cost_basis, 2),
        _fixed(row.proceeds, 2),
        _fixed(row.gain_loss, 2),
        _fixed(row.gain_loss_pct, 2),
        str(row.holding_period),
        "Yes" if row.long_term else "No",
        _fixed(row.gas_cost, 2),
    ]


def to_csv(report: TaxReport) -> str:
    buf = StringIO()
    writer = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(TAX_CSV_HEADERS)
    for row in report.rows:
        writer.writerow(row_cells(row))
    return buf.getvalue()
