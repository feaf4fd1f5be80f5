"""Tests for ExcelWriter — openpyxl workbook generation."""

from io import BytesIO

from openpyxl import load_workbook

from tests.factories import day, event
from walletlens.accounting.tax_engine import TaxEngine
from walletlens.domain.models.settings import TaxSettings
from walletlens.domain.models.tax import TaxReport
from walletlens.report.csv_export import TAX_CSV_HEADERS
from walletlens.report.data_collector import ReportData
from walletlens.report.excel_writer import SHEET_DEFS, ExcelWriter


def _report() -> TaxReport:
    events = [
        event("buy", "2", "100", day(0)),
        event("buy", "1", "50000", day(1), symbol="BTC"),
        event("sell", "1", "150", day(10)),
    ]
    return TaxEngine(TaxSettings(tax_year=2024)).generate_report(events, as_of=day(30))


class TestExcelWriterEmpty:
    def test_produces_valid_xlsx(self):
        buf = ExcelWriter().write_data(ReportData())

        assert isinstance(buf, BytesIO)
        assert buf.tell() == 0  # Rewound to start
        assert len(buf.getvalue()) > 0

    def test_sheet_names(self):
        wb = load_workbook(ExcelWriter().write_data(ReportData()))
        assert wb.sheetnames == [sd[0] for sd in SHEET_DEFS]
        assert wb.sheetnames == ["summary", "transactions", "disposals", "open_lots"]

    def test_each_sheet_has_headers(self):
        wb = load_workbook(ExcelWriter().write_data(ReportData()))
        for sheet_name, headers, _, _ in SHEET_DEFS:
            row1 = [cell.value for cell in wb[sheet_name][1]]
            assert row1[:len(headers)] == headers, f"Sheet '{sheet_name}' headers mismatch"
            assert wb[sheet_name].cell(row=1, column=1).font.bold


class TestExcelWriterWithReport:
    def test_transactions_sheet_matches_csv_columns(self):
        wb = load_workbook(ExcelWriter().write_to_buffer(_report()))
        ws = wb["transactions"]
        assert [c.value for c in ws[1]] == TAX_CSV_HEADERS
        assert ws.max_row == 4

    def test_disposal_values(self):
        wb = load_workbook(ExcelWriter().write_to_buffer(_report()))
        ws = wb["disposals"]
        assert ws.cell(row=2, column=1).value == "ETH"
        assert ws.cell(row=2, column=5).value == 50.0
        assert ws.cell(row=2, column=5).number_format == "$#,##0.00"

    def test_open_lots(self):
        wb = load_workbook(ExcelWriter().write_to_buffer(_report()))
        symbols = [ws_row[0].value for ws_row in wb["open_lots"].iter_rows(min_row=2)]
        assert symbols == ["ETH", "BTC"]
