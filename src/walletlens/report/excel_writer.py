"""ExcelWriter — builds the yearly tax workbook with openpyxl."""

from io import BytesIO
from typing import NamedTuple

from openpyxl import Workbook
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter

from walletlens.domain.models.tax import TaxReport
from walletlens.report.csv_export import TAX_CSV_HEADERS
from walletlens.report.data_collector import ReportData, collect

QTY = "#,##0.000000"
USD = "$#,##0.00"
USD_PRICE = "$#,##0.000000"
PCT = "0.00"


class SheetDef(NamedTuple):
    name: str
    headers: list[str]
    data_attr: str  # ReportData attribute holding the rows
    number_formats: dict[int, str] = {}  # 0-based column → openpyxl format


SHEET_DEFS: list[SheetDef] = [
    SheetDef("summary", ["Metric", "Value"], "summary"),
    SheetDef(
        "transactions",
        TAX_CSV_HEADERS,
        "transactions",
        {4: QTY, 5: USD_PRICE, 6: USD, 7: USD, 8: USD, 9: USD, 10: PCT, 13: USD},
    ),
    SheetDef(
        "disposals",
        ["Symbol", "Quantity", "Cost Basis (USD)", "Proceeds (USD)", "Gain/Loss (USD)", "Holding Days", "Term", "Sell Date"],
        "disposals",
        {1: QTY, 2: USD, 3: USD, 4: USD},
    ),
    SheetDef(
        "open_lots",
        ["Symbol", "Remaining Qty", "Cost Basis/Unit (USD)", "Total Cost (USD)", "Buy Date"],
        "open_lots",
        {1: QTY, 2: USD, 3: USD},
    ),
]

HEADER_FONT = Font(bold=True)
MAX_COLUMN_WIDTH = 50


class ExcelWriter:
    """Writes a TaxReport to an in-memory Excel buffer."""

    def write_to_buffer(self, report: TaxReport) -> BytesIO:
        return self.write_data(collect(report))

    def write_data(self, data: ReportData) -> BytesIO:
        wb = Workbook()
        # Drop the default sheet so SHEET_DEFS alone decides the order
        wb.remove(wb.active)

        for sheet in SHEET_DEFS:
            ws = wb.create_sheet(title=sheet.name)
            ws.append(sheet.headers)
            for cell in ws[1]:
                cell.font = HEADER_FONT
            ws.freeze_panes = "A2"

            for values in getattr(data, sheet.data_attr):
                ws.append(list(values))
                for col, fmt in sheet.number_formats.items():
                    ws.cell(row=ws.max_row, column=col + 1).number_format = fmt

            _auto_fit_columns(ws)

        buf = BytesIO()
        wb.save(buf)
        buf.seek(0)
        return buf


def _auto_fit_columns(ws) -> None:
    """Approximate column widths from the longest rendered value."""
    for col_cells in ws.columns:
        widest = max((len(str(c.value)) for c in col_cells if c.value is not None), default=0)
        ws.column_dimensions[get_column_letter(col_cells[0].column)].width = min(widest + 3, MAX_COLUMN_WIDTH)
