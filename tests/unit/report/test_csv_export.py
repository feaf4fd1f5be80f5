"""Tests for CSV rendering of tax reports."""

import csv
from io import StringIO

import pytest

from tests.factories import day, event
from walletlens.accounting.tax_engine import TaxEngine
from walletlens.domain.models.settings import TaxSettings
from walletlens.domain.models.tax import TaxReport, TaxReportRow
from walletlens.report.csv_export import TAX_CSV_HEADERS, to_csv


@pytest.fixture()
def report() -> TaxReport:
    events = [
        event("buy", "1.5", "2000", day(0), gas="3.456"),
        event("sell", "0.5", "2500", day(400 - 366)),
    ]
    return TaxEngine(TaxSettings(tax_year=2024)).generate_report(events, as_of=day(100))


def _parse(text: str) -> list[list[str]]:
    return list(csv.reader(StringIO(text)))


class TestHeaders:
    def test_header_row(self, report):
        rows = _parse(to_csv(report))
        assert rows[0] == TAX_CSV_HEADERS

    def test_headers_follow_row_field_order(self):
        assert len(TAX_CSV_HEADERS) == len(TaxReportRow.model_fields)

    def test_every_cell_quoted(self, report):
        first_line = to_csv(report).splitlines()[0]
        assert first_line.startswith('"Date","Transaction Hash"')


class TestRows:
    def test_one_row_per_transaction(self, report):
        rows = _parse(to_csv(report))
        assert len(rows) == 1 + len(report.rows)

    def test_formatting(self, report):
        buy, sell = _parse(to_csv(report))[1:]
        assert buy[0] == "2024-01-01"
        assert buy[2] == "buy"
        assert buy[4] == "1.5"
        assert buy[5] == "2000.000000"
        assert buy[7] == "3003.46"  # value + gas
        assert buy[13] == "3.46"
        assert buy[12] == "No"

        assert sell[2] == "sell"
        assert sell[8] == "1250.00"
        assert sell[9] == "248.85"  # 1250 - 3003.456 / 3
        assert sell[11] == "34"

    def test_empty_report(self):
        assert _parse(to_csv(TaxReport(year=2024, method="FIFO"))) == [TAX_CSV_HEADERS]
