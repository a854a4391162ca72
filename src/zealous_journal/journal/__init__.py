"""Trade journal analytics: dashboard stats, calendar and derived metrics.

Pure functions over an in-memory snapshot of one account's trades.
Nothing here performs I/O or keeps state between calls.

Key components
--------------
compute_dashboard_stats   Status counts, P&L, win rate, profit factor, breakdowns
compute_streaks           Current / largest win and loss streaks
advance_streak            Incremental streak tracking with explicit state
compute_calendar          42-day profit calendar grid for a month
summarize_month           In-month totals, best / worst day
weekly_rows               Per-week totals of a calendar grid
compute_expectancy        Expected P&L per closed trade
compute_composite_score   0-100 Zealous Score
compute_advanced_metrics  Sharpe, Sortino, drawdown, Calmar, Kelly
cached_dashboard_stats    Stats reuse through an explicit cache entry
"""

from .cache import StatsCacheEntry, cached_dashboard_stats, snapshot_key
from .calendar import (
    CalendarDay,
    MonthSummary,
    WeekSummary,
    compute_calendar,
    shift_month,
    summarize_month,
    weekly_rows,
)
from .metrics import (
    AdvancedMetrics,
    compute_advanced_metrics,
    compute_composite_score,
    compute_expectancy,
)
from .performance import (
    DashboardStats,
    DirectionBreakdown,
    MonthlyPnL,
    SymbolBreakdown,
    compute_dashboard_stats,
)
from .streaks import StreakState, StreakSummary, advance_streak, compute_streaks

__all__ = [
    "AdvancedMetrics",
    "CalendarDay",
    "DashboardStats",
    "DirectionBreakdown",
    "MonthSummary",
    "MonthlyPnL",
    "StatsCacheEntry",
    "StreakState",
    "StreakSummary",
    "SymbolBreakdown",
    "WeekSummary",
    "advance_streak",
    "cached_dashboard_stats",
    "compute_advanced_metrics",
    "compute_calendar",
    "compute_composite_score",
    "compute_dashboard_stats",
    "compute_expectancy",
    "compute_streaks",
    "shift_month",
    "snapshot_key",
    "summarize_month",
    "weekly_rows",
]
