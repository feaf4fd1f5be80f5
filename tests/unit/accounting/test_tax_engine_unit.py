"""Tests for TaxEngine — replay, realized gains and yearly reports."""

from datetime import date, datetime, timezone
from decimal import Decimal

import pytest
from pydantic import ValidationError

from tests.factories import day, event
from walletlens.accounting.tax_engine import TaxEngine, validate_tax_settings
from walletlens.domain.enums.tax import LotMethod, TxKind
from walletlens.domain.models.settings import TaxSettings
from walletlens.domain.models.tax import BuyEvent, SellEvent
from walletlens.exceptions import InsufficientLotBalanceError, InvalidConfigurationError


def _engine(**overrides) -> TaxEngine:
    return TaxEngine(TaxSettings(tax_year=2024, **overrides))


def _divergence_events():
    return [
        event("buy", "10", "1", day(0), id="buy-1"),
        event("buy", "10", "3", day(1), id="buy-2"),
        event("sell", "10", "5", day(10), id="sell-1"),
    ]


class TestFifoLifoDivergence:
    def test_fifo_gain(self):
        report = _engine(method=LotMethod.FIFO).generate_report(_divergence_events())
        assert report.total_gain_usd == Decimal("40")
        assert report.total_cost_basis_usd == Decimal("10")
        assert report.total_proceeds_usd == Decimal("50")

    def test_lifo_gain(self):
        report = _engine(method=LotMethod.LIFO).generate_report(_divergence_events())
        assert report.total_gain_usd == Decimal("20")
        assert report.open_lots[0].event_id == "buy-1"


class TestQuantityInvariant:
    EVENTS = [
        event("buy", "5", "100", day(0), id="e1"),
        event("transfer_in", "2", "110", day(1), symbol="BTC", id="e2"),
        event("sell", "1.5", "120", day(2), id="e3"),
        event("airdrop", "3", "0", day(3), id="e4"),
        event("transfer_out", "0.5", "130", day(4), symbol="BTC", id="e5"),
        event("sell", "4", "90", day(5), id="e6"),
        event("reward", "0.25", "95", day(6), id="e7"),
        event("sell", "2.75", "150", day(7), id="e8"),
        event("sell", "1.5", "140", day(8), symbol="BTC", id="e9"),
    ]

    @pytest.mark.parametrize("method", [LotMethod.FIFO, LotMethod.LIFO])
    def test_every_prefix(self, method):
        engine = _engine(method=method)
        for n in range(len(self.EVENTS) + 1):
            prefix = self.EVENTS[:n]
            result = engine.replay(prefix)

            for symbol in ("ETH", "BTC"):
                net = sum(
                    (e.quantity if e.kind in ("buy", "transfer_in", "airdrop", "reward") else -e.quantity)
                    for e in prefix
                    if e.symbol == symbol
                )
                open_qty = sum(lot.quantity for lot in result.open_lots if lot.symbol == symbol)
                assert open_qty == net
            assert all(lot.quantity > 0 for lot in result.open_lots)


class TestIntegrity:
    def test_outflow_beyond_balance_raises(self):
        events = [event("buy", "1", "100", day(0)), event("sell", "2", "100", day(1), id="sell-x")]
        with pytest.raises(InsufficientLotBalanceError) as exc_info:
            _engine().replay(events)
        assert exc_info.value.event_id == "sell-x"
        assert exc_info.value.available == Decimal("1")

    def test_same_timestamp_keeps_input_order(self):
        buy_first = [event("buy", "1", "100", day(3)), event("sell", "1", "120", day(3))]
        assert _engine().replay(buy_first).disposals[0].gain_usd == Decimal("20")

        sell_first = list(reversed(buy_first))
        with pytest.raises(InsufficientLotBalanceError):
            _engine().replay(sell_first)

    def test_zero_quantity_ignored(self):
        events = [event("sell", "0", "100", day(0))]
        result = _engine().replay(events)
        assert result.entries == []

    def test_later_year_problem_does_not_block_earlier_report(self):
        events = [
            event("buy", "1", "100", day(0)),
            event("sell", "5", "100", day(400)),  # 2025
        ]
        report = _engine().generate_report(events, year=2024)
        assert report.summary.total_transactions == 1

        with pytest.raises(InsufficientLotBalanceError):
            _engine().generate_report(events, year=2025)


class TestGasAndInclusion:
    def test_gas_capitalized_and_deducted(self):
        events = [
            event("buy", "1", "1000", day(0), gas="10"),
            event("sell", "0.5", "2000", day(1), gas="5"),
        ]
        disposal = _engine().replay(events).disposals[0]
        assert disposal.cost_basis_usd == Decimal("505")
        assert disposal.proceeds_usd == Decimal("995")
        assert disposal.gain_usd == Decimal("490")

    def test_gas_excluded(self):
        events = [
            event("buy", "1", "1000", day(0), gas="10"),
            event("sell", "0.5", "2000", day(1), gas="5"),
        ]
        disposal = _engine(include_gas_fees=False).replay(events).disposals[0]
        assert disposal.gain_usd == Decimal("500")

    def test_excluded_airdrop_has_zero_basis(self):
        events = [
            event("airdrop", "100", "5", day(0), symbol="UNI"),
            event("sell", "100", "6", day(1), symbol="UNI"),
        ]
        assert _engine(include_airdrops=False).replay(events).disposals[0].gain_usd == Decimal("600")
        assert _engine(include_airdrops=True).replay(events).disposals[0].gain_usd == Decimal("100")

    def test_excluded_rewards_still_open_lots(self):
        events = [event("reward", "3", "10", day(0), symbol="LDO")]
        result = _engine(include_staking_rewards=False).replay(events)
        assert result.open_lots[0].quantity == Decimal("3")
        assert result.open_lots[0].cost_basis_usd == Decimal("0")


class TestHoldingPeriod:
    def test_quantity_weighted(self):
        events = [
            event("buy", "1", "100", day(0)),
            event("buy", "1", "100", day(100)),
            event("sell", "2", "100", day(200)),
        ]
        assert _engine().replay(events).disposals[0].holding_days == 150

    def test_long_term_threshold(self):
        events = [
            event("buy", "1", "100", day(0, year=2023)),
            event("sell", "1", "150", day(160)),
        ]
        report = _engine().generate_report(events)
        assert report.disposals[0].is_long_term is True
        assert report.long_term_gain_usd == Decimal("50")
        assert report.short_term_gain_usd == Decimal("0")

    def test_custom_threshold(self):
        events = [event("buy", "1", "100", day(0)), event("sell", "1", "150", day(40))]
        report = _engine(long_term_threshold_days=30).generate_report(events)
        assert report.disposals[0].is_long_term is True

    def test_inflow_row_measured_to_as_of(self):
        report = _engine().generate_report([event("buy", "1", "100", day(0))], as_of=day(60))
        assert report.rows[0].holding_period == 60

    def test_inflow_row_capped_at_year_end(self):
        engine = TaxEngine(TaxSettings(tax_year=2023))
        report = engine.generate_report([event("buy", "1", "100", day(0, year=2023))])
        assert report.rows[0].holding_period == 364


class TestReport:
    def _events(self):
        return [
            event("buy", "1", "100", day(-10), id="old"),  # 2023
            event("buy", "1", "1000", day(0), symbol="BTC", id="btc-buy"),
            event("sell", "1", "140", day(5), id="eth-sell"),
            event("sell", "0.5", "800", day(6), symbol="BTC", id="btc-sell"),
        ]

    def test_only_in_year_rows(self):
        report = _engine().generate_report(self._events())
        assert report.year == 2024
        assert [r.type for r in report.rows] == [TxKind.BUY, TxKind.SELL, TxKind.SELL]
        assert report.rows[1].date == "2024-01-06"

    def test_summary(self):
        report = _engine().generate_report(self._events())
        s = report.summary
        assert s.total_transactions == 3
        assert s.buy_transactions == 1
        assert s.sell_transactions == 2
        assert s.best_performing_asset == "ETH"
        assert s.worst_performing_asset == "BTC"

    def test_totals_and_rows(self):
        report = _engine().generate_report(self._events())
        assert report.total_gain_usd == Decimal("40") + Decimal("-100")
        sell_row = report.rows[1]
        assert sell_row.gain_loss == Decimal("40")
        assert sell_row.gain_loss_pct == Decimal("40")
        assert report.rows[0].gain_loss == Decimal("0")

    def test_open_lots_at_year_end(self):
        report = _engine().generate_report(self._events())
        assert [(lot.symbol, lot.quantity) for lot in report.open_lots] == [("BTC", Decimal("0.5"))]

    def test_empty_year(self):
        report = _engine().generate_report([])
        assert report.rows == []
        assert report.summary.best_performing_asset is None
        assert report.total_gain_usd == Decimal("0")


class TestSettingsValidation:
    def test_defaults_valid(self):
        assert validate_tax_settings(TaxSettings(tax_year=2024), today=date(2024, 6, 1)) == []

    @pytest.mark.parametrize("year", [2009, 2026])
    def test_year_out_of_range(self, year):
        errors = validate_tax_settings(TaxSettings(tax_year=year), today=date(2024, 6, 1))
        assert len(errors) == 1

    def test_next_year_allowed(self):
        assert validate_tax_settings(TaxSettings(tax_year=2025), today=date(2024, 6, 1)) == []

    def test_negative_threshold(self):
        errors = validate_tax_settings(TaxSettings(tax_year=2024, long_term_threshold_days=-1))
        assert any("threshold" in e for e in errors)

    def test_engine_rejects_invalid_settings(self):
        with pytest.raises(InvalidConfigurationError):
            TaxEngine(TaxSettings(tax_year=1999))


class TestReportYearOverride:
    @pytest.mark.parametrize("year", [1999, 0, -1, 10000])
    def test_out_of_range_year_rejected(self, year):
        with pytest.raises(InvalidConfigurationError) as exc_info:
            _engine().generate_report([event("buy", "1", "100", day(0))], year=year)
        assert "Tax year" in exc_info.value.errors[0]

    def test_explicit_year_used(self):
        report = _engine().generate_report([event("buy", "1", "100", day(0, year=2023))], year=2023)
        assert report.year == 2023
        assert len(report.rows) == 1


class TestEventBoundaries:
    def test_negative_quantity_event_rejected(self):
        with pytest.raises(ValidationError):
            event("sell", "-5", "100", day(1))

    def test_naive_and_aware_timestamps_mix(self):
        events = [
            BuyEvent(id="b", timestamp=datetime(2024, 1, 1), symbol="ETH", quantity=Decimal(2),
                     price_usd=Decimal(100), value_usd=Decimal(200)),
            SellEvent(id="s", timestamp=datetime(2024, 2, 1, tzinfo=timezone.utc), symbol="ETH",
                      quantity=Decimal(1), price_usd=Decimal(150), value_usd=Decimal(150)),
        ]
        report = _engine().generate_report(events, as_of=datetime(2024, 3, 1))

        assert report.total_gain_usd == Decimal("50")
        assert report.disposals[0].holding_days == 31
        assert report.rows[0].holding_period == 60
