"""Tests for the profit calendar grid and its summaries."""

import json
from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

import pytest

from zealous_journal.core.enums import TradeStatus
from zealous_journal.journal.calendar import (
    GRID_DAYS,
    compute_calendar,
    grid_start,
    shift_month,
    summarize_month,
    weekly_rows,
)


@pytest.fixture
def january_trades(make_trade, make_win, make_loss):
    return [
        make_win(100, created_at=datetime(2024, 1, 15, 9)),
        make_loss(40, created_at=datetime(2024, 1, 15, 14)),
        make_trade(status=TradeStatus.PLANNED, created_at=datetime(2024, 1, 15, 16)),
        make_loss(80, created_at=datetime(2024, 1, 20, 10)),
        make_win(10, created_at=datetime(2023, 12, 31, 10)),  # leading cell
        make_win(5, created_at=datetime(2024, 2, 10, 10)),  # trailing cell
        make_win(7, created_at=datetime(2024, 2, 11, 10)),  # past the grid
    ]


class TestGridShape:
    def test_always_42_cells(self):
        for month in range(1, 13):
            assert len(compute_calendar([], date(2024, month, 1))) == GRID_DAYS

    def test_starts_on_sunday_before_first(self):
        days = compute_calendar([], date(2024, 1, 20))
        assert days[0].date == date(2023, 12, 31)
        assert days[0].date.weekday() == 6
        assert days[-1].date == date(2024, 2, 10)

    def test_month_starting_on_sunday(self):
        assert grid_start(date(2024, 9, 18)) == date(2024, 9, 1)

    def test_consecutive_dates(self):
        days = compute_calendar([], date(2024, 2, 1))
        for prev, nxt in zip(days, days[1:]):
            assert (nxt.date - prev.date).days == 1

    def test_in_month_flags(self):
        days = compute_calendar([], date(2024, 2, 1))
        assert sum(d.in_month for d in days) == 29  # leap year


class TestCellStats:
    def test_day_aggregates(self, january_trades):
        days = compute_calendar(january_trades, date(2024, 1, 1))
        jan15 = days[15]
        assert jan15.date == date(2024, 1, 15)
        assert jan15.trade_count == 3
        assert jan15.total_pnl == pytest.approx(60)
        assert jan15.win_rate == pytest.approx(50)
        assert (jan15.wins, jan15.losses) == (1, 1)
        assert [t.status for t in jan15.trades] == [
            TradeStatus.WIN, TradeStatus.LOSS, TradeStatus.PLANNED,
        ]

    def test_out_of_month_cells_carry_stats(self, january_trades):
        days = compute_calendar(january_trades, date(2024, 1, 1))
        assert not days[0].in_month
        assert days[0].total_pnl == pytest.approx(10)
        assert days[-1].total_pnl == pytest.approx(5)

    def test_trades_outside_grid_ignored(self, january_trades):
        days = compute_calendar(january_trades, date(2024, 1, 1))
        assert sum(d.trade_count for d in days) == 6

    def test_open_only_day(self, make_trade):
        days = compute_calendar(
            [make_trade(status=TradeStatus.ACTIVE, created_at=datetime(2024, 1, 3))],
            date(2024, 1, 1),
        )
        jan3 = days[3]
        assert jan3.trade_count == 1
        assert jan3.total_pnl == 0
        assert jan3.win_rate == 0

    def test_timezone_shifts_day(self, make_win):
        trade = make_win(100, created_at=datetime(2024, 1, 31, 23, 30, tzinfo=timezone.utc))
        utc_days = compute_calendar([trade], date(2024, 1, 1))
        tokyo_days = compute_calendar([trade], date(2024, 1, 1), tz=ZoneInfo("Asia/Tokyo"))
        assert next(d for d in utc_days if d.has_trades).date == date(2024, 1, 31)
        assert next(d for d in tokyo_days if d.has_trades).date == date(2024, 2, 1)

    def test_datetime_reference(self, make_win):
        trade = make_win(100.0, created_at=datetime(2024, 1, 20, 9))
        days = compute_calendar([trade], datetime(2024, 1, 20, 12, 0))
        assert days == compute_calendar([trade], date(2024, 1, 20))
        assert next(d for d in days if d.has_trades).date == date(2024, 1, 20)

    def test_aware_datetime_reference_uses_tz(self):
        reference = datetime(2024, 1, 31, 23, 30, tzinfo=timezone.utc)
        days = compute_calendar([], reference, tz=ZoneInfo("Asia/Tokyo"))
        assert days[0].date == grid_start(date(2024, 2, 1))
        assert sum(d.in_month for d in days) == 29

    def test_to_dict_is_json_safe(self, january_trades):
        days = compute_calendar(january_trades, date(2024, 1, 1))
        payload = json.loads(json.dumps([d.to_dict() for d in days], allow_nan=False))
        assert payload[15]["date"] == "2024-01-15"
        assert len(payload[15]["trade_ids"]) == 3


class TestMonthSummary:
    def test_in_month_only(self, january_trades):
        summary = summarize_month(compute_calendar(january_trades, date(2024, 1, 1)))
        assert summary.total_pnl == pytest.approx(-20)
        assert summary.trade_count == 4
        assert summary.trading_days == 2
        assert summary.winning_days == 1
        assert summary.losing_days == 1
        assert summary.best_day.date == date(2024, 1, 15)
        assert summary.worst_day.date == date(2024, 1, 20)
        assert summary.worst_day.pnl == pytest.approx(-80)

    def test_empty_month(self):
        summary = summarize_month(compute_calendar([], date(2024, 1, 1)))
        assert summary.trading_days == 0
        assert summary.best_day is None
        assert summary.to_dict()["worst_day"] is None


class TestWeeklyRows:
    def test_six_rows(self, january_trades):
        weeks = weekly_rows(compute_calendar(january_trades, date(2024, 1, 1)))
        assert len(weeks) == 6
        assert all(w.start.weekday() == 6 for w in weeks)

    def test_week_totals(self, january_trades):
        weeks = weekly_rows(compute_calendar(january_trades, date(2024, 1, 1)))
        third = weeks[2]
        assert third.start == date(2024, 1, 14)
        assert third.total_pnl == pytest.approx(-20)
        assert third.trade_count == 4
        assert third.win_rate == pytest.approx(100 / 3)


class TestShiftMonth:
    @pytest.mark.parametrize("ref,months,expected", [
        (date(2024, 1, 15), -1, date(2023, 12, 1)),
        (date(2024, 1, 15), 1, date(2024, 2, 1)),
        (date(2024, 12, 31), 1, date(2025, 1, 1)),
        (date(2024, 1, 31), 12, date(2025, 1, 1)),
        (date(2024, 1, 1), -13, date(2022, 12, 1)),
        (date(2024, 3, 31), 0, date(2024, 3, 1)),
    ])
    def test_shift(self, ref, months, expected):
        assert shift_month(ref, months) == expected
