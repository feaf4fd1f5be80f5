"""Plain-text summary of a TaxReport."""

from decimal import ROUND_HALF_UP, Decimal

from walletlens.domain.models.tax import TaxReport


def _usd(value: Decimal) -> str:
    return f"${value.quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)}"


def tax_summary_text(report: TaxReport) -> str:
    s = report.summary
    lines = [
        f"Tax Report Summary for {report.year} ({report.method.value})",
        "",
        f"Total Transactions: {s.total_transactions}",
        f"Buy Transactions: {s.buy_transactions}",
        f"Sell Transactions: {s.sell_transactions}",
        "",
        "Financial Summary:",
        f"- Total Proceeds: {_usd(report.total_proceeds_usd)}",
        f"- Total Cost Basis: {_usd(report.total_cost_basis_usd)}",
        f"- Total Gain/Loss: {_usd(report.total_gain_usd)}",
        f"- Short-term Gain/Loss: {_usd(report.short_term_gain_usd)}",
        f"- Long-term Gain/Loss: {_usd(report.long_term_gain_usd)}",
        "",
        "Portfolio Analysis:",
        f"- Average Holding Period: {s.average_holding_period:.1f} days",
        f"- Best Performing Token: {s.best_performing_asset or 'n/a'}",
        f"- Worst Performing Token: {s.worst_performing_asset or 'n/a'}",
    ]
    return "\n".join(lines) + "\n"
