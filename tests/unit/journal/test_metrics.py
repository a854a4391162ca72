"""Tests for expectancy, the composite score and the advanced ratios."""

import json
import math

import pytest

from zealous_journal.core.config import AnalyticsConfig, ScoreConfig
from zealous_journal.core.enums import TradeStatus
from zealous_journal.journal.metrics import (
    AdvancedMetrics,
    compute_advanced_metrics,
    compute_composite_score,
    compute_expectancy,
)
from zealous_journal.journal.performance import DashboardStats, compute_dashboard_stats


class TestExpectancy:
    def test_empty(self):
        assert compute_expectancy([]) == 0

    def test_one_win_one_loss(self, make_win, make_loss):
        assert compute_expectancy([make_win(150), make_loss(100)]) == pytest.approx(25)

    def test_ignores_open_trades(self, make_trade, make_win, make_loss):
        trades = [make_win(150), make_loss(100), make_trade(status=TradeStatus.ACTIVE)]
        assert compute_expectancy(trades) == pytest.approx(25)

    def test_only_open_trades(self, make_trade):
        assert compute_expectancy([make_trade(status=TradeStatus.PLANNED)]) == 0

    def test_all_losses(self, make_loss):
        assert compute_expectancy([make_loss(30), make_loss(10)]) == pytest.approx(-20)

    def test_overflowing_amounts(self, make_win, make_loss):
        assert compute_expectancy([make_win(1e308), make_win(1e308)]) == 0
        assert math.isfinite(compute_expectancy([make_win(1.7e308), make_loss(-1.7e308)]))


class TestCompositeScore:
    def test_empty_snapshot_scores_zero(self):
        assert compute_composite_score(compute_dashboard_stats([])) == 0

    def test_blend(self, make_win, make_loss):
        stats = compute_dashboard_stats([make_win(150), make_loss(100)])
        # 50/70*30 + 1.5/2*40 + 1/30*30 = 52.43
        assert compute_composite_score(stats) == 52

    def test_capped_at_100(self):
        stats = DashboardStats(win_rate=100, profit_factor=999, trading_days=45)
        assert compute_composite_score(stats) == 100

    def test_non_finite_inputs_count_as_zero(self):
        stats = DashboardStats(win_rate=math.nan, profit_factor=math.inf, trading_days=30)
        assert compute_composite_score(stats) == 30

    def test_custom_weights(self):
        stats = DashboardStats(win_rate=70, profit_factor=0, trading_days=0)
        cfg = ScoreConfig(win_rate_weight=60, profit_factor_weight=20, consistency_weight=20)
        assert compute_composite_score(stats, cfg) == 60

    def test_returns_int(self):
        assert isinstance(compute_composite_score(DashboardStats(win_rate=33)), int)


class TestAdvancedMetrics:
    def test_empty(self):
        assert compute_advanced_metrics([]) == AdvancedMetrics()

    def test_win_loss_win(self, make_win, make_loss):
        m = compute_advanced_metrics([make_win(100), make_loss(50), make_win(100)])
        assert m.sharpe_ratio == pytest.approx(0.71)
        assert m.sortino_ratio == pytest.approx(1.0)
        assert m.max_drawdown == pytest.approx(50.0)
        assert m.calmar_ratio == pytest.approx(252.0)
        assert m.recovery_factor == pytest.approx(1.0)
        assert m.volatility == pytest.approx(1122.5)
        assert m.expectancy == pytest.approx(50.0)
        assert m.kelly_percentage == pytest.approx(50.0)

    def test_drawdown_waits_for_positive_peak(self, make_win, make_loss):
        m = compute_advanced_metrics([make_loss(50), make_win(100), make_loss(25)])
        assert m.max_drawdown == pytest.approx(50.0)

    def test_never_profitable(self, make_loss):
        m = compute_advanced_metrics([make_loss(10), make_loss(20)])
        assert m.max_drawdown == 0
        assert m.calmar_ratio == 0
        assert m.kelly_percentage == 0

    def test_all_wins(self, make_win):
        m = compute_advanced_metrics([make_win(10), make_win(10)])
        assert m.sharpe_ratio == 0  # zero spread
        assert m.sortino_ratio == 0
        assert m.kelly_percentage == 0

    def test_risk_free_rate_from_config(self, make_win, make_loss):
        trades = [make_win(100), make_loss(50), make_win(100)]
        m = compute_advanced_metrics(trades, AnalyticsConfig(risk_free_rate=0.0))
        assert m.sharpe_ratio == pytest.approx(0.71)
        m = compute_advanced_metrics(trades, AnalyticsConfig(risk_free_rate=50.0))
        assert m.sharpe_ratio == 0

    def test_to_dict_is_json_safe(self, make_win, make_loss):
        m = compute_advanced_metrics([make_loss(5), make_win(1)])
        payload = json.loads(json.dumps(m.to_dict(), allow_nan=False))
        assert set(payload) == {
            "sharpe_ratio", "sortino_ratio", "max_drawdown", "calmar_ratio",
            "volatility", "recovery_factor", "expectancy", "kelly_percentage",
        }

    def test_near_limit_amounts_stay_finite(self, make_win, make_loss):
        trades = [make_win(1.7e308), make_loss(1.7e308), make_win(1.7e308), make_loss(1.7e308)]
        m = compute_advanced_metrics(trades)
        json.dumps(m.to_dict(), allow_nan=False)
        assert all(math.isfinite(v) for v in m.to_dict().values())
