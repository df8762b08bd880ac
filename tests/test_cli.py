"""End-to-end tests for the TradeJournal CLI commands."""

from datetime import date

import pytest
from click.testing import CliRunner

from tradejournal.cli import cli


@pytest.fixture
def runner(tmp_path, monkeypatch):
    monkeypatch.setenv("TRADEJOURNAL_HOME", str(tmp_path))
    return CliRunner()


def invoke(runner: CliRunner, *args: str):
    return runner.invoke(cli, list(args), catch_exceptions=False)


class TestJournalCommands:

    def test_init_creates_config(self, runner, tmp_path):
        result = invoke(runner, "init")

        assert result.exit_code == 0
        assert (tmp_path / "config.toml").exists()
        assert (tmp_path / "tradejournal.db").exists()
        assert "Records:" in result.output
        assert "trades 0" in result.output

    def test_add_list_edit_delete(self, runner):
        result = invoke(runner, "add", "-s", "xauusd", "-t", "Buy", "--pl", "120", "--fees", "4")
        assert result.exit_code == 0
        assert "Trade #1 logged" in result.output

        result = invoke(runner, "trades")
        assert result.exit_code == 0
        assert "XAUUSD" in result.output

        result = invoke(runner, "edit", "1", "--fees", "10")
        assert result.exit_code == 0
        assert "updated" in result.output

        result = invoke(runner, "delete", "1", "-y")
        assert result.exit_code == 0

        result = invoke(runner, "trades")
        assert "No trades found" in result.output

    def test_add_rejects_negative_fees(self, runner):
        result = invoke(runner, "add", "-s", "EURUSD", "-t", "Sell", "--pl", "10", "--fees", "-1")

        assert result.exit_code == 1
        assert "fees" in result.output

    def test_edit_missing_trade(self, runner):
        result = invoke(runner, "edit", "99", "--fees", "1")

        assert result.exit_code == 1
        assert "not found" in result.output

    def test_edit_without_changes(self, runner):
        result = invoke(runner, "edit", "1")

        assert result.exit_code == 1

    @pytest.mark.parametrize("amount", ["nan", "inf"])
    def test_add_rejects_non_finite_pl(self, runner, amount):
        result = invoke(runner, "add", "-s", "EURUSD", "-t", "Buy", "--pl", amount)

        assert result.exit_code == 1
        assert "gross_pl" in result.output
        assert "No trades found" in invoke(runner, "trades").output

    def test_edit_clears_notes_and_account(self, runner):
        from tradejournal.config import get_db_path
        from tradejournal.db import DataStore

        invoke(runner, "add", "-s", "XAUUSD", "-t", "Buy", "--pl", "50",
               "-a", "funded", "-n", "breakout")

        result = invoke(runner, "edit", "1", "--clear-notes", "--clear-account")

        assert result.exit_code == 0
        trade = DataStore(get_db_path()).get_trade(1)
        assert trade.notes is None
        assert trade.account_id is None

    def test_edit_rejects_value_with_clear(self, runner):
        invoke(runner, "add", "-s", "XAUUSD", "-t", "Buy", "--pl", "50")

        result = invoke(runner, "edit", "1", "-n", "new", "--clear-notes")

        assert result.exit_code == 1


class TestAnalyticsCommands:

    def test_summary_alert_fires_once(self, runner):
        invoke(runner, "add", "-s", "XAUUSD", "-t", "Sell", "--pl", "-350")

        first = invoke(runner, "summary")
        second = invoke(runner, "summary")
        fresh = invoke(runner, "summary", "--new-session")

        assert first.exit_code == 0
        assert "Daily loss limit reached" in first.output
        assert "Daily loss limit reached" not in second.output
        assert "Daily loss limit reached" in fresh.output

    def test_summary_without_trades(self, runner):
        result = invoke(runner, "summary")

        assert result.exit_code == 0
        assert "Portfolio Summary" in result.output

    def test_history(self, runner):
        invoke(runner, "add", "-s", "XAUUSD", "-t", "Buy", "--pl", "100", "-d", "2025-01-10")
        invoke(runner, "add", "-s", "EURUSD", "-t", "Sell", "--pl", "-40", "-d", "2025-01-11")

        result = invoke(
            runner, "history", "-t", "yearly", "--from", "2025-01-01", "--to", "2025-12-31"
        )

        assert result.exit_code == 0
        assert "Max drawdown" in result.output
        assert "Top Symbols" in result.output
        assert "EURUSD" in result.output

    def test_history_rejects_inverted_range(self, runner):
        result = invoke(runner, "history", "--from", "2025-02-01", "--to", "2025-01-01")

        assert result.exit_code == 1

    def test_history_rejects_bad_date(self, runner):
        result = runner.invoke(cli, ["history", "--from", "2025-13-01"])

        assert result.exit_code == 2


class TestTargetCommands:

    def test_target_completes(self, runner):
        invoke(runner, "add", "-s", "XAUUSD", "-t", "Buy", "--pl", "120", "--fees", "4")

        result = invoke(runner, "target", "set", "--pnl", "100", "--trades", "1", "--win-rate", "50")

        assert result.exit_code == 0
        assert "Completed" in result.output

        result = invoke(runner, "target", "year", str(date.today().year))
        assert result.exit_code == 0
        assert "Completed: 1/1" in result.output

    def test_show_creates_current_month(self, runner):
        result = invoke(runner, "target", "show")

        assert result.exit_code == 0
        assert "In progress" in result.output

    def test_reset_without_target(self, runner):
        result = invoke(runner, "target", "reset", "--year", "2020", "--month", "1")

        assert result.exit_code == 1

    def test_set_rejects_non_finite_goal(self, runner):
        result = invoke(runner, "target", "set", "--pnl", "inf")

        assert result.exit_code == 1
        assert "pnl_target" in result.output


class TestCalculatorCommands:

    def test_size_with_pair(self, runner):
        result = invoke(runner, "size", "--pair", "XAUUSD", "--sl", "50", "-b", "10000", "-r", "2",
                        "--tp", "100")

        assert result.exit_code == 0
        assert "40.0000 lots" in result.output
        assert "1:2.00" in result.output

    def test_size_requires_pip_value(self, runner):
        result = invoke(runner, "size", "--sl", "50")

        assert result.exit_code == 1
        assert "--pair" in result.output

    def test_size_rejects_zero_stop(self, runner):
        result = invoke(runner, "size", "--pip-value", "0.1", "--sl", "0")

        assert result.exit_code == 1
        assert "stop_loss_distance" in result.output

    def test_profiles(self, runner):
        result = invoke(runner, "profile", "save", "challenge", "-b", "5000", "-r", "1")
        assert result.exit_code == 0
        assert "saved" in result.output

        result = invoke(runner, "profile", "list")
        assert "challenge" in result.output

        result = invoke(runner, "profile", "delete", "challenge")
        assert result.exit_code == 0

        result = invoke(runner, "profile", "show", "challenge")
        assert result.exit_code == 1


def test_invalid_config_exits(runner, tmp_path):
    (tmp_path / "config.toml").write_text("[risk\n")

    result = invoke(runner, "summary")

    assert result.exit_code == 1
    assert "Invalid config file" in result.output
