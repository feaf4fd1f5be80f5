"""ReportData — flattens a TaxReport into per-sheet row tuples for the workbook."""

from dataclasses import dataclass, field

from walletlens.domain.models.tax import TaxReport


@dataclass
class ReportData:
    """Sheet data, each a list of row tuples."""

    summary: list[tuple] = field(default_factory=list)
    transactions: list[tuple] = field(default_factory=list)
    disposals: list[tuple] = field(default_factory=list)
    open_lots: list[tuple] = field(default_factory=list)


def collect(report: TaxReport) -> ReportData:
    data = ReportData()
    s = report.summary

    data.summary = [
        ("Tax Year", report.year),
        ("Lot Method", report.method.value),
        ("Total Proceeds (USD)", float(report.total_proceeds_usd)),
        ("Total Cost Basis (USD)", float(report.total_cost_basis_usd)),
        ("Total Gain/Loss (USD)", float(report.total_gain_usd)),
        ("Short-Term Gain (USD)", float(report.short_term_gain_usd)),
        ("Long-Term Gain (USD)", float(report.long_term_gain_usd)),
        ("Total Transactions", s.total_transactions),
        ("Buy Transactions", s.buy_transactions),
        ("Sell Transactions", s.sell_transactions),
        ("Average Holding Period (Days)", round(s.average_holding_period, 1)),
        ("Best Performing Asset", s.best_performing_asset or ""),
        ("Worst Performing Asset", s.worst_performing_asset or ""),
    ]

    data.transactions = [
        (
            r.date,
            r.hash,
            r.type.value,
            r.asset,
            float(r.amount),
            float(r.price),
            float(r.usd_value),
            float(r.cost_basis),
            float(r.proceeds),
            float(r.gain_loss),
            float(r.gain_loss_pct),
            r.holding_period,
            "Yes" if r.long_term else "No",
            float(r.gas_cost),
        )
        for r in report.rows
    ]

    data.disposals = [
        (
            d.symbol,
            float(d.quantity),
            float(d.cost_basis_usd),
            float(d.proceeds_usd),
            float(d.gain_usd),
            d.holding_days,
            "Long" if d.is_long_term else "Short",
            d.disposed_at.strftime("%Y-%m-%d %H:%M"),
        )
        for d in report.disposals
    ]

    data.open_lots = [
        (
            lot.symbol,
            float(lot.quantity),
            float(lot.unit_cost_usd),
            float(lot.cost_basis_usd),
            lot.acquired_at.strftime("%Y-%m-%d %H:%M"),
        )
        for lot in report.open_lots
    ]

    return data
