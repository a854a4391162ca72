"""Profit calendar: a fixed 6 x 7 grid of daily P&L for one month.

The grid starts on the Sunday on or before the 1st of the reference
month and always holds 42 consecutive days, so leading and trailing
days of the neighbouring months are included.  Those cells carry real
stats as well; ``in_month`` only tells the renderer which ones belong
to the month being shown.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from datetime import date, datetime, timedelta, tzinfo
from typing import Any, Iterable, Sequence

from zealous_journal.core.enums import TradeStatus
from zealous_journal.core.models import TradeRecord
from zealous_journal.core.numeric import finite_sum

from .performance import win_rate_pct

logger = logging.getLogger(__name__)

GRID_DAYS = 42
WEEK_DAYS = 7


@dataclass(frozen=True)
class CalendarDay:
    """One cell of the calendar grid."""

    date: date
    in_month: bool
    trades: tuple[TradeRecord, ...] = ()
    total_pnl: float = 0.0  # signed, closed trades only
    win_rate: float = 0.0  # percent of the day's closed trades
    trade_count: int = 0  # all statuses
    wins: int = 0
    losses: int = 0

    @property
    def has_trades(self) -> bool:
        return self.trade_count > 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "in_month": self.in_month,
            "trade_ids": [t.id for t in self.trades],
            "total_pnl": self.total_pnl,
            "win_rate": self.win_rate,
            "trade_count": self.trade_count,
            "wins": self.wins,
            "losses": self.losses,
        }


@dataclass(frozen=True)
class DayResult:
    date: date
    pnl: float


@dataclass(frozen=True)
class MonthSummary:
    """Totals over the in-month cells of a calendar grid."""

    total_pnl: float = 0.0
    trade_count: int = 0
    trading_days: int = 0
    winning_days: int = 0
    losing_days: int = 0
    best_day: DayResult | None = None
    worst_day: DayResult | None = None

    def to_dict(self) -> dict[str, Any]:
        def _day(d: DayResult | None) -> dict[str, Any] | None:
            return {"date": d.date.isoformat(), "pnl": d.pnl} if d else None

        return {
            "total_pnl": self.total_pnl,
            "trade_count": self.trade_count,
            "trading_days": self.trading_days,
            "winning_days": self.winning_days,
            "losing_days": self.losing_days,
            "best_day": _day(self.best_day),
            "worst_day": _day(self.worst_day),
        }


@dataclass(frozen=True)
class WeekSummary:
    start: date  # Sunday
    total_pnl: float = 0.0
    trade_count: int = 0
    win_rate: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "start": self.start.isoformat(),
            "total_pnl": self.total_pnl,
            "trade_count": self.trade_count,
            "win_rate": self.win_rate,
        }


# ---------------------------------------------------------------------------
# Grid
# ---------------------------------------------------------------------------

def grid_start(reference_date: date) -> date:
    """Sunday on or before the 1st of *reference_date*'s month."""
    first = reference_date.replace(day=1)
    # date.weekday(): Monday=0 .. Sunday=6
    return first - timedelta(days=(first.weekday() + 1) % 7)


def shift_month(reference_date: date, months: int) -> date:
    """First day of the month *months* away from *reference_date*'s month."""
    index = reference_date.year * 12 + (reference_date.month - 1) + months
    return date(index // 12, index % 12 + 1, 1)


def _build_day(day: date, in_month: bool, trades: list[TradeRecord]) -> CalendarDay:
    wins = sum(1 for t in trades if t.status == TradeStatus.WIN)
    losses = sum(1 for t in trades if t.status == TradeStatus.LOSS)
    return CalendarDay(
        date=day,
        in_month=in_month,
        trades=tuple(trades),
        total_pnl=finite_sum(t.signed_pnl for t in trades if t.is_closed),
        win_rate=win_rate_pct(wins, losses),
        trade_count=len(trades),
        wins=wins,
        losses=losses,
    )


def compute_calendar(
    trades: Iterable[TradeRecord],
    reference_date: date,
    *,
    tz: tzinfo | None = None,
) -> tuple[CalendarDay, ...]:
    """Build the 42-cell grid for the month containing *reference_date*.

    Trades are bucketed by ``created_at`` date in a single pass, then
    each cell picks up its bucket.  Within a cell trades keep their
    chronological order.

    Args:
        trades: Trade snapshot in any order.
        reference_date: Any day of the month to show.  A datetime is
            reduced to its date, in *tz* when it is timezone-aware.
        tz: Zone used to date timezone-aware timestamps.

    Returns:
        Exactly 42 :class:`CalendarDay` values, oldest first.
    """
    if isinstance(reference_date, datetime):
        if tz is not None and reference_date.tzinfo is not None:
            reference_date = reference_date.astimezone(tz)
        reference_date = reference_date.date()

    start = grid_start(reference_date)
    end = start + timedelta(days=GRID_DAYS)

    buckets: dict[date, list[TradeRecord]] = defaultdict(list)
    for trade in sorted(trades, key=lambda t: t.chronological_key):
        day = trade.trade_date(tz)
        if start <= day < end:
            buckets[day].append(trade)

    month = (reference_date.year, reference_date.month)
    days = []
    for offset in range(GRID_DAYS):
        day = start + timedelta(days=offset)
        days.append(
            _build_day(day, (day.year, day.month) == month, buckets.get(day, []))
        )

    logger.debug(
        "Calendar %04d-%02d: %d trades on %d days",
        month[0], month[1], sum(len(b) for b in buckets.values()), len(buckets),
    )
    return tuple(days)


# ---------------------------------------------------------------------------
# Summaries
# ---------------------------------------------------------------------------

def summarize_month(days: Sequence[CalendarDay]) -> MonthSummary:
    """Aggregate the in-month cells of a grid.

    A trading day is a cell with at least one trade.  Winning / losing
    days are trading days with positive / negative P&L; best and worst
    day are ``None`` when the month has no trading day.  Ties keep the
    earliest date.
    """
    active = [d for d in days if d.in_month and d.has_trades]
    if not active:
        return MonthSummary()

    best = worst = active[0]
    for day in active[1:]:
        if day.total_pnl > best.total_pnl:
            best = day
        if day.total_pnl < worst.total_pnl:
            worst = day

    return MonthSummary(
        total_pnl=finite_sum(d.total_pnl for d in active),
        trade_count=sum(d.trade_count for d in active),
        trading_days=len(active),
        winning_days=sum(1 for d in active if d.total_pnl > 0),
        losing_days=sum(1 for d in active if d.total_pnl < 0),
        best_day=DayResult(best.date, best.total_pnl),
        worst_day=DayResult(worst.date, worst.total_pnl),
    )


def weekly_rows(days: Sequence[CalendarDay]) -> tuple[WeekSummary, ...]:
    """One summary per 7-day row of the grid (all cells, in or out of month)."""
    rows = []
    for i in range(0, len(days), WEEK_DAYS):
        week = days[i:i + WEEK_DAYS]
        wins = sum(d.wins for d in week)
        losses = sum(d.losses for d in week)
        rows.append(
            WeekSummary(
                start=week[0].date,
                total_pnl=finite_sum(d.total_pnl for d in week),
                trade_count=sum(d.trade_count for d in week),
                win_rate=win_rate_pct(wins, losses),
            )
        )
    return tuple(rows)
