"""Tests for ReportData — flattening a TaxReport into sheet rows."""

from tests.factories import day, event
from walletlens.accounting.tax_engine import TaxEngine
from walletlens.domain.models.settings import TaxSettings
from walletlens.report.data_collector import collect


def _report():
    events = [
        event("buy", "2", "100", day(0)),
        event("sell", "1", "150", day(10)),
    ]
    return TaxEngine(TaxSettings(tax_year=2024)).generate_report(events, as_of=day(30))


class TestCollect:
    def test_summary_metrics(self):
        data = collect(_report())
        summary = dict(data.summary)
        assert summary["Tax Year"] == 2024
        assert summary["Lot Method"] == "FIFO"
        assert summary["Total Gain/Loss (USD)"] == 50.0
        assert summary["Best Performing Asset"] == "ETH"

    def test_transactions(self):
        data = collect(_report())
        assert len(data.transactions) == 2
        assert data.transactions[1][2] == "sell"
        assert data.transactions[1][9] == 50.0

    def test_disposals_and_open_lots(self):
        data = collect(_report())
        assert data.disposals == [("ETH", 1.0, 100.0, 150.0, 50.0, 10, "Short", "2024-01-11 00:00")]
        assert data.open_lots == [("ETH", 1.0, 100.0, 100.0, "2024-01-01 00:00")]
