"""Dashboard performance statistics for one account's trade snapshot.

Partitions trades by status and derives P&L totals, win rate, profit
factor, best / worst trade, streaks, trading-day activity and the
monthly / symbol / direction breakdowns shown on the dashboard.

Usage::

    stats = compute_dashboard_stats(source.list_trades(account_id))
    print(stats.win_rate, stats.profit_factor)
    payload = stats.to_dict()  # JSON-safe

Order of the input does not matter; sums use ``finite_sum`` so repeated
calls on the same snapshot give bit-identical results.  A WIN without
``profit_dollars`` or a LOSS without ``loss_dollars`` counts as 0.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import tzinfo
from typing import Any, Iterable

from zealous_journal.core.config import AnalyticsConfig
from zealous_journal.core.enums import StreakType, TradeDirection, TradeStatus
from zealous_journal.core.models import TradeRecord
from zealous_journal.core.numeric import finite_or_zero, finite_sum, safe_div

from .streaks import compute_streaks

logger = logging.getLogger(__name__)

PROFIT_FACTOR_SENTINEL = 999.0

_MONTH_ABBR = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


@dataclass(frozen=True)
class MonthlyPnL:
    """Signed P&L of the closed trades opened in one calendar month."""

    year: int
    month: int
    label: str  # "Jan 2024"
    pnl: float
    trades: int


@dataclass(frozen=True)
class SymbolBreakdown:
    symbol: str
    trades: int  # all statuses
    pnl: float  # closed trades only
    wins: int
    losses: int
    win_rate: float  # percent of the symbol's closed trades


@dataclass(frozen=True)
class DirectionBreakdown:
    long: int = 0
    short: int = 0
    long_pnl: float = 0.0
    short_pnl: float = 0.0
    long_wins: int = 0
    short_wins: int = 0


@dataclass(frozen=True)
class DashboardStats:
    """Aggregate statistics for a trade snapshot.

    ``profit_factor`` is gross profit over gross loss.  When there are
    profits but no losses the ratio is unbounded; it is then reported
    as ``AnalyticsConfig.profit_factor_cap`` (999 by default) so the
    value stays finite and JSON-serialisable.
    """

    total_trades: int = 0
    planned_trades: int = 0
    active_trades: int = 0
    win_trades: int = 0
    loss_trades: int = 0

    total_profit: float = 0.0
    total_loss: float = 0.0
    net_pnl: float = 0.0
    win_rate: float = 0.0  # percent, over closed trades
    profit_factor: float = 0.0
    avg_win: float = 0.0
    avg_loss: float = 0.0
    best_trade: float = 0.0
    worst_trade: float = 0.0  # positive magnitude of the largest loss
    avg_risk_reward: float = 0.0
    total_risk: float = 0.0

    current_streak: int = 0
    streak_type: StreakType = StreakType.NONE
    largest_win_streak: int = 0
    largest_loss_streak: int = 0

    trading_days: int = 0
    avg_trades_per_day: float = 0.0

    monthly_pnl: tuple[MonthlyPnL, ...] = ()
    symbol_breakdown: tuple[SymbolBreakdown, ...] = ()
    direction_breakdown: DirectionBreakdown = field(default_factory=DirectionBreakdown)

    @property
    def closed_trades(self) -> int:
        return self.win_trades + self.loss_trades

    def to_dict(self) -> dict[str, Any]:
        """Plain, JSON-safe rendering (lists and primitive values only)."""
        return {
            "total_trades": self.total_trades,
            "planned_trades": self.planned_trades,
            "active_trades": self.active_trades,
            "win_trades": self.win_trades,
            "loss_trades": self.loss_trades,
            "total_profit": self.total_profit,
            "total_loss": self.total_loss,
            "net_pnl": self.net_pnl,
            "win_rate": self.win_rate,
            "profit_factor": self.profit_factor,
            "avg_win": self.avg_win,
            "avg_loss": self.avg_loss,
            "best_trade": self.best_trade,
            "worst_trade": self.worst_trade,
            "avg_risk_reward": self.avg_risk_reward,
            "total_risk": self.total_risk,
            "current_streak": self.current_streak,
            "streak_type": self.streak_type.value,
            "largest_win_streak": self.largest_win_streak,
            "largest_loss_streak": self.largest_loss_streak,
            "trading_days": self.trading_days,
            "avg_trades_per_day": self.avg_trades_per_day,
            "monthly_pnl": [
                {"year": m.year, "month": m.month, "label": m.label,
                 "pnl": m.pnl, "trades": m.trades}
                for m in self.monthly_pnl
            ],
            "symbol_breakdown": [
                {"symbol": s.symbol, "trades": s.trades, "pnl": s.pnl,
                 "wins": s.wins, "losses": s.losses, "win_rate": s.win_rate}
                for s in self.symbol_breakdown
            ],
            "direction_breakdown": {
                "long": self.direction_breakdown.long,
                "short": self.direction_breakdown.short,
                "long_pnl": self.direction_breakdown.long_pnl,
                "short_pnl": self.direction_breakdown.short_pnl,
                "long_wins": self.direction_breakdown.long_wins,
                "short_wins": self.direction_breakdown.short_wins,
            },
        }


# ---------------------------------------------------------------------------
# Building blocks
# ---------------------------------------------------------------------------

def win_rate_pct(wins: int, losses: int) -> float:
    """Wins over closed trades, in percent; 0 with nothing closed."""
    closed = wins + losses
    return wins / closed * 100 if closed else 0.0


def profit_factor_of(
    total_profit: float,
    total_loss: float,
    cap: float = PROFIT_FACTOR_SENTINEL,
) -> float:
    """Gross profit / gross loss, with *cap* standing in for infinity."""
    if total_loss > 0:
        return safe_div(total_profit, total_loss)
    return cap if total_profit > 0 else 0.0


@dataclass
class _GroupStats:
    """Accumulator for one symbol or one direction."""

    trades: int = 0
    wins: int = 0
    losses: int = 0
    pnl_parts: list[float] = field(default_factory=list)

    def record(self, trade: TradeRecord) -> None:
        self.trades += 1
        if trade.status == TradeStatus.WIN:
            self.wins += 1
        elif trade.status == TradeStatus.LOSS:
            self.losses += 1
        if trade.is_closed:
            self.pnl_parts.append(trade.signed_pnl)

    @property
    def pnl(self) -> float:
        return finite_sum(self.pnl_parts)


def _monthly_pnl(
    closed: list[TradeRecord],
    keep: int,
    tz: tzinfo | None,
) -> tuple[MonthlyPnL, ...]:
    buckets: dict[tuple[int, int], list[float]] = defaultdict(list)
    for trade in closed:
        d = trade.trade_date(tz)
        buckets[(d.year, d.month)].append(trade.signed_pnl)

    months = [
        MonthlyPnL(
            year=year,
            month=month,
            label=f"{_MONTH_ABBR[month - 1]} {year}",
            pnl=finite_sum(parts),
            trades=len(parts),
        )
        for (year, month), parts in sorted(buckets.items())
    ]
    return tuple(months[-keep:])


def _symbol_breakdown(
    trades: list[TradeRecord],
    keep: int,
) -> tuple[SymbolBreakdown, ...]:
    groups: dict[str, _GroupStats] = defaultdict(_GroupStats)
    for trade in trades:
        groups[trade.symbol].record(trade)

    rows = [
        SymbolBreakdown(
            symbol=symbol,
            trades=g.trades,
            pnl=g.pnl,
            wins=g.wins,
            losses=g.losses,
            win_rate=win_rate_pct(g.wins, g.losses),
        )
        for symbol, g in groups.items()
    ]
    rows.sort(key=lambda r: (-r.trades, r.symbol))
    return tuple(rows[:keep])


def _direction_breakdown(trades: list[TradeRecord]) -> DirectionBreakdown:
    sides = {TradeDirection.LONG: _GroupStats(), TradeDirection.SHORT: _GroupStats()}
    for trade in trades:
        sides[trade.trade_direction].record(trade)
    long_, short = sides[TradeDirection.LONG], sides[TradeDirection.SHORT]
    return DirectionBreakdown(
        long=long_.trades,
        short=short.trades,
        long_pnl=long_.pnl,
        short_pnl=short.pnl,
        long_wins=long_.wins,
        short_wins=short.wins,
    )


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def compute_dashboard_stats(
    trades: Iterable[TradeRecord],
    *,
    config: AnalyticsConfig | None = None,
    tz: tzinfo | None = None,
) -> DashboardStats:
    """Compute :class:`DashboardStats` for a trade snapshot.

    Parameters
    ----------
    trades : Iterable[TradeRecord]
        Trades of a single account, in any order.
    config : AnalyticsConfig | None
        Bucket limits and the profit-factor cap.  Defaults apply if None.
    tz : tzinfo | None
        Zone used to turn aware ``created_at`` values into calendar
        dates for trading days and monthly buckets.

    Returns
    -------
    DashboardStats
        An all-zero result for an empty snapshot; never raises.
    """
    cfg = config or AnalyticsConfig()
    snapshot = list(trades)
    if not snapshot:
        return DashboardStats()

    by_status: dict[TradeStatus, list[TradeRecord]] = defaultdict(list)
    for trade in snapshot:
        by_status[trade.status].append(trade)

    wins = by_status[TradeStatus.WIN]
    losses = by_status[TradeStatus.LOSS]
    closed = wins + losses

    profits = [finite_or_zero(t.profit_dollars) for t in wins]
    loss_amounts = [finite_or_zero(t.loss_dollars) for t in losses]
    total_profit = finite_sum(profits)
    total_loss = finite_sum(loss_amounts)

    streaks = compute_streaks(closed)

    total_trades = len(snapshot)
    # Every status counts toward activity, including PLANNED / ACTIVE
    trading_days = len({t.trade_date(tz) for t in snapshot})

    stats = DashboardStats(
        total_trades=total_trades,
        planned_trades=len(by_status[TradeStatus.PLANNED]),
        active_trades=len(by_status[TradeStatus.ACTIVE]),
        win_trades=len(wins),
        loss_trades=len(losses),
        total_profit=total_profit,
        total_loss=total_loss,
        net_pnl=finite_or_zero(total_profit - total_loss),
        win_rate=win_rate_pct(len(wins), len(losses)),
        profit_factor=profit_factor_of(total_profit, total_loss, cfg.profit_factor_cap),
        avg_win=safe_div(total_profit, len(wins)),
        avg_loss=safe_div(total_loss, len(losses)),
        best_trade=max(profits, default=0.0),
        worst_trade=max(loss_amounts, default=0.0),
        avg_risk_reward=safe_div(
            finite_sum(finite_or_zero(t.risk_reward_ratio) for t in snapshot),
            total_trades,
        ),
        total_risk=finite_sum(t.risk_amount for t in snapshot),
        current_streak=streaks.current,
        streak_type=streaks.current_type,
        largest_win_streak=streaks.largest_win,
        largest_loss_streak=streaks.largest_loss,
        trading_days=trading_days,
        avg_trades_per_day=safe_div(total_trades, trading_days),
        monthly_pnl=_monthly_pnl(closed, cfg.monthly_buckets, tz),
        symbol_breakdown=_symbol_breakdown(snapshot, cfg.top_symbols),
        direction_breakdown=_direction_breakdown(snapshot),
    )

    logger.debug(
        "Dashboard stats: %d trades (%d closed), net_pnl=%.2f, win_rate=%.1f",
        stats.total_trades, stats.closed_trades, stats.net_pnl, stats.win_rate,
    )
    return stats
