"""Derived trade metrics: expectancy, composite score, risk ratios.

Everything here works on the closed-trade P&L series in chronological
order.  The ratios are descriptive only (no significance testing) and
are computed with numpy the same way for every snapshot size, with
zero standing in wherever a denominator vanishes.
"""

from __future__ import annotations

import logging
import math
from dataclasses import asdict, dataclass
from typing import Any, Iterable

import numpy as np

from zealous_journal.core.config import AnalyticsConfig, ScoreConfig
from zealous_journal.core.enums import TradeStatus
from zealous_journal.core.models import TradeRecord
from zealous_journal.core.numeric import clamp, finite_or_zero, finite_sum, safe_div

from .performance import DashboardStats
from .streaks import sort_closed_trades

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AdvancedMetrics:
    """Risk-adjusted ratios over the closed-trade P&L series (2 d.p.)."""

    sharpe_ratio: float = 0.0
    sortino_ratio: float = 0.0
    max_drawdown: float = 0.0  # percent of the running equity peak
    calmar_ratio: float = 0.0
    volatility: float = 0.0
    recovery_factor: float = 0.0
    expectancy: float = 0.0
    kelly_percentage: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def _win_loss_averages(closed: list[TradeRecord]) -> tuple[float, float, float]:
    """Return (p, avg_win, avg_loss) for a closed-trade list."""
    profits = [finite_or_zero(t.profit_dollars) for t in closed if t.status == TradeStatus.WIN]
    losses = [finite_or_zero(t.loss_dollars) for t in closed if t.status == TradeStatus.LOSS]
    p = safe_div(len(profits), len(closed))
    return p, safe_div(finite_sum(profits), len(profits)), safe_div(finite_sum(losses), len(losses))


def compute_expectancy(trades: Iterable[TradeRecord]) -> float:
    """Expected P&L per closed trade.

    ``p * avg_win - (1 - p) * avg_loss`` with ``p`` the share of closed
    trades that won.  PLANNED / ACTIVE trades are ignored; 0 when
    nothing is closed.
    """
    closed = [t for t in trades if t.is_closed]
    if not closed:
        return 0.0
    p, avg_win, avg_loss = _win_loss_averages(closed)
    return finite_or_zero(p * avg_win - (1 - p) * avg_loss)


def compute_composite_score(
    stats: DashboardStats,
    config: ScoreConfig | None = None,
) -> int:
    """Zealous Score: a 0-100 blend of win rate, profit factor and activity.

    Each component is its value over a target, clamped to [0, 1], then
    weighted (30 / 40 / 30 by default).  With the defaults a 70% win
    rate, a profit factor of 2 and 30 trading days each max out their
    share.  Halves round up.
    """
    cfg = config or ScoreConfig()
    raw = (
        clamp(stats.win_rate / cfg.win_rate_target) * cfg.win_rate_weight
        + clamp(stats.profit_factor / cfg.profit_factor_target) * cfg.profit_factor_weight
        + clamp(stats.trading_days / cfg.trading_days_target) * cfg.consistency_weight
    )
    return int(max(0, min(100, math.floor(raw + 0.5))))


def _max_drawdown_pct(returns: np.ndarray) -> float:
    """Largest drop from a positive equity peak, in percent of that peak.

    Equity starts at 0; until cumulative P&L has been positive there is
    no peak to measure against, so those points are skipped.
    """
    equity = np.cumsum(returns)
    peak = np.maximum.accumulate(np.concatenate(([0.0], equity)))[1:]
    measured = peak > 0
    if not np.any(measured):
        return 0.0
    drawdowns = (peak[measured] - equity[measured]) / peak[measured] * 100
    return float(np.max(drawdowns))


def compute_advanced_metrics(
    trades: Iterable[TradeRecord],
    config: AnalyticsConfig | None = None,
) -> AdvancedMetrics:
    """Sharpe, Sortino, drawdown and friends for a trade snapshot.

    Parameters
    ----------
    trades : Iterable[TradeRecord]
        Trade snapshot; only WIN / LOSS trades are used, oldest first.
    config : AnalyticsConfig | None
        Supplies ``risk_free_rate`` (per trade, Sharpe only) and
        ``periods_per_year`` (Calmar and volatility annualisation).

    Returns
    -------
    AdvancedMetrics
        All fields finite and rounded to 2 decimals; all zero when
        there are no closed trades.
    """
    cfg = config or AnalyticsConfig()
    closed = sort_closed_trades(trades)
    if not closed:
        return AdvancedMetrics()

    returns = np.array([t.signed_pnl for t in closed], dtype=float)
    # Near-limit amounts overflow to inf/nan here; _r() maps those to 0
    with np.errstate(over="ignore", invalid="ignore"):
        mean = float(np.mean(returns))
        std = float(np.std(returns))  # population
        downside = returns[returns < 0]
        downside_dev = float(np.sqrt(np.mean(downside ** 2))) if len(downside) else 0.0
        max_dd = _max_drawdown_pct(returns)

    sharpe = (mean - cfg.risk_free_rate) / std if std > 0 else 0.0
    sortino = mean / downside_dev if downside_dev > 0 else 0.0

    calmar = mean * cfg.periods_per_year / max_dd if max_dd > 0 else 0.0
    recovery = mean / max_dd if max_dd > 0 else 0.0
    volatility = std * math.sqrt(cfg.periods_per_year)

    p, avg_win, avg_loss = _win_loss_averages(closed)
    expectancy = p * avg_win - (1 - p) * avg_loss
    kelly = expectancy / avg_win * 100 if avg_win > 0 and avg_loss > 0 else 0.0

    def _r(value: float) -> float:
        return round(finite_or_zero(value), 2)

    metrics = AdvancedMetrics(
        sharpe_ratio=_r(sharpe),
        sortino_ratio=_r(sortino),
        max_drawdown=_r(max_dd),
        calmar_ratio=_r(calmar),
        volatility=_r(volatility),
        recovery_factor=_r(recovery),
        expectancy=_r(expectancy),
        kelly_percentage=_r(kelly),
    )
    logger.debug("Advanced metrics over %d closed trades: %s", len(closed), metrics)
    return metrics
