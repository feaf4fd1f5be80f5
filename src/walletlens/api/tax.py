"""Tax API — yearly lot-based reports, a text summary and CSV / xlsx export."""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse, StreamingResponse

from walletlens.accounting.events import rewards_to_events
from walletlens.accounting.tax_engine import TaxEngine
from walletlens.api.schemas.tax import TaxExportRequest, TaxReportRequest
from walletlens.domain.models.tax import TaxReport
from walletlens.report.csv_export import to_csv
from walletlens.report.excel_writer import ExcelWriter
from walletlens.report.summary import tax_summary_text

router = APIRouter(prefix="/api/tax", tags=["tax"])

XLSX_CONTENT_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _build_report(body: TaxReportRequest) -> TaxReport:
    engine = TaxEngine(body.settings)
    events = [*body.events, *rewards_to_events(body.positions)]
    return engine.generate_report(events, year=body.year, as_of=body.as_of)


@router.post("/report", response_model=TaxReport)
async def tax_report(body: TaxReportRequest) -> TaxReport:
    """Replay the events and return realized results for one calendar year."""
    return _build_report(body)


@router.post("/export")
async def export_tax_report(body: TaxExportRequest) -> StreamingResponse:
    """Download the yearly report as CSV or an xlsx workbook."""
    report = _build_report(body)
    filename = f"tax_report_{report.year}_{report.method.value.lower()}"

    if body.format == "xlsx":
        buf = ExcelWriter().write_to_buffer(report)
        return StreamingResponse(
            buf,
            media_type=XLSX_CONTENT_TYPE,
            headers={"Content-Disposition": f'attachment; filename="{filename}.xlsx"'},
        )

    return StreamingResponse(
        iter([to_csv(report)]),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}.csv"'},
    )


@router.post("/summary", response_class=PlainTextResponse)
async def tax_summary(body: TaxReportRequest) -> str:
    """Human-readable digest of the yearly report."""
    return tax_summary_text(_build_report(body))
