"""Tests for the plain-text tax summary."""

from decimal import Decimal

from walletlens.domain.enums.tax import LotMethod
from walletlens.domain.models.tax import TaxReport, TaxReportSummary
from walletlens.report.summary import tax_summary_text


def test_summary_lines():
    report = TaxReport(
        year=2024,
        method=LotMethod.FIFO,
        total_proceeds_usd=Decimal("2995"),
        total_cost_basis_usd=Decimal("2005"),
        total_gain_usd=Decimal("990"),
        short_term_gain_usd=Decimal("990.005"),
        long_term_gain_usd=Decimal("0"),
        summary=TaxReportSummary(
            total_transactions=2,
            buy_transactions=1,
            sell_transactions=1,
            average_holding_period=152,
            best_performing_asset="ETH",
            worst_performing_asset="ETH",
        ),
    )

    lines = tax_summary_text(report).splitlines()

    assert lines[0] == "Tax Report Summary for 2024 (FIFO)"
    assert "Total Transactions: 2" in lines
    assert "Sell Transactions: 1" in lines
    assert "- Total Proceeds: $2995.00" in lines
    assert "- Total Gain/Loss: $990.00" in lines
    assert "- Short-term Gain/Loss: $990.01" in lines
    assert "- Average Holding Period: 152.0 days" in lines
    assert "- Best Performing Token: ETH" in lines


def test_empty_report():
    text = tax_summary_text(TaxReport(year=2023, method=LotMethod.LIFO))

    assert "Total Transactions: 0" in text
    assert "- Total Gain/Loss: $0.00" in text
    assert "- Best Performing Token: n/a" in text
    assert text.endswith("\n")
