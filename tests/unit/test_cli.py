"""Tests for the zealous-journal CLI."""

import json

import pytest
from click.testing import CliRunner

from zealous_journal.cli import main

DOCS = [
    {
        "_id": "t1", "symbol": "EUR/USD", "status": "WIN", "profitDollars": 150,
        "entryPrice": 1.1, "stopLoss": 1.095, "createdAt": "2024-01-05T09:30:00",
        "accountId": "acc-1",
    },
    {
        "_id": "t2", "symbol": "EUR/USD", "status": "LOSS", "lossDollars": 100,
        "entryPrice": 1.1, "stopLoss": 1.095, "createdAt": "2024-01-05T14:00:00",
        "accountId": "acc-1",
    },
    {
        "_id": "t3", "symbol": "AAPL", "status": "WIN", "profitDollars": 80,
        "entryPrice": 180, "stopLoss": 178, "createdAt": "2024-01-09T10:00:00",
        "accountId": "acc-2",
    },
]


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def trades_file(tmp_path):
    path = tmp_path / "trades.json"
    path.write_text(json.dumps(DOCS))
    return path


def _json(result):
    assert result.exit_code == 0, result.output
    return json.loads(result.stdout)


class TestCalc:
    def test_sizes_position(self, runner):
        result = runner.invoke(main, [
            "calc", "--symbol", "EUR/USD", "--account", "10000", "--risk", "2",
            "--entry", "1.1", "--stop", "1.095", "--exit", "1.11",
        ])
        payload = _json(result)
        assert payload["symbol"] == "EUR/USD"
        assert payload["lot_size"] == pytest.approx(0.4)
        assert payload["risk_reward_ratio"] == pytest.approx(2.0)
        assert payload["position_unit"] == "lots"

    def test_unknown_symbol(self, runner):
        result = runner.invoke(main, [
            "calc", "--symbol", "NOPE", "--account", "10000", "--risk", "2",
            "--entry", "1.1", "--stop", "1.095",
        ])
        assert result.exit_code == 1
        assert "Unknown instrument" in result.output


class TestStats:
    def test_all_accounts(self, runner, trades_file):
        payload = _json(runner.invoke(main, ["stats", str(trades_file)]))
        assert payload["stats"]["total_trades"] == 3
        assert payload["stats"]["net_pnl"] == pytest.approx(130)
        assert isinstance(payload["composite_score"], int)
        assert "sharpe_ratio" in payload["advanced_metrics"]

    def test_single_account(self, runner, trades_file):
        payload = _json(runner.invoke(main, ["stats", str(trades_file), "--account", "acc-1"]))
        assert payload["stats"]["win_rate"] == pytest.approx(50)
        assert payload["stats"]["profit_factor"] == pytest.approx(1.5)
        assert payload["expectancy"] == pytest.approx(25)

    def test_missing_file(self, runner, tmp_path):
        result = runner.invoke(main, ["stats", str(tmp_path / "absent.json")])
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_trades_path_from_config(self, runner, tmp_path, trades_file):
        config = tmp_path / "journal.toml"
        config.write_text(
            f"trades_path = {json.dumps(str(trades_file))}\n"
            "[analytics]\n"
            "profit_factor_cap = 10.0\n"
        )
        payload = _json(runner.invoke(main, ["--config", str(config), "stats", "--account", "acc-2"]))
        assert payload["stats"]["total_trades"] == 1
        assert payload["stats"]["profit_factor"] == 10


class TestCalendar:
    def test_month_grid(self, runner, trades_file):
        payload = _json(runner.invoke(main, ["calendar", str(trades_file), "--month", "2024-01"]))
        assert payload["month"] == "2024-01"
        assert len(payload["days"]) == 42
        assert len(payload["weeks"]) == 6
        assert payload["summary"]["trading_days"] == 2
        assert payload["summary"]["total_pnl"] == pytest.approx(130)

    def test_bad_month(self, runner, trades_file):
        result = runner.invoke(main, ["calendar", str(trades_file), "--month", "January"])
        assert result.exit_code == 2
        assert "YYYY-MM" in result.output


class TestInstruments:
    def test_filter_by_category(self, runner):
        payload = _json(runner.invoke(main, ["instruments", "--category", "crypto"]))
        assert payload
        assert all(row["category"] == "Crypto" for row in payload)
        assert all(row["position_unit"] == "coins" for row in payload)

    def test_search(self, runner):
        payload = _json(runner.invoke(main, ["instruments", "--search", "apple"]))
        assert [row["symbol"] for row in payload] == ["AAPL"]


class TestGlobalOptions:
    def test_missing_config_file(self, runner, tmp_path):
        result = runner.invoke(main, ["--config", str(tmp_path / "nope.toml"), "instruments"])
        assert result.exit_code == 2

    def test_invalid_config(self, runner, tmp_path):
        config = tmp_path / "bad.toml"
        config.write_text("[score]\nwin_rate_weight = 90\n")
        result = runner.invoke(main, ["--config", str(config), "instruments"])
        assert result.exit_code == 1
        assert "sum to 100" in result.output

    def test_log_level_option(self, runner):
        result = runner.invoke(main, ["--log-level", "DEBUG", "instruments", "--search", "apple"])
        assert result.exit_code == 0
