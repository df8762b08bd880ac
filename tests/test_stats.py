"""Property-based tests for trade summary statistics.

**Feature: trade-analytics**
"""

from datetime import date

from hypothesis import given, settings
from hypothesis import strategies as st

from tradejournal.analytics import calculate_trade_stats
from tradejournal.models import TradeRecord


def make_trade(net_pl: float, fees: float = 0.0, **overrides) -> TradeRecord:
    """Build a trade whose net P&L equals net_pl."""
    fields = {
        "owner_id": "user-1",
        "date": date(2025, 3, 10),
        "symbol": "XAUUSD",
        "direction": "Buy",
        "gross_pl": net_pl + fees,
        "fees": fees,
    }
    fields.update(overrides)
    return TradeRecord(**fields)


def trade_strategy():
    """Generate valid TradeRecord objects for testing."""
    return st.builds(
        TradeRecord,
        owner_id=st.just("user-1"),
        date=st.dates(min_value=date(2020, 1, 1), max_value=date(2026, 12, 31)),
        symbol=st.sampled_from(["XAUUSD", "EURUSD", "GBPJPY", "NAS100"]),
        direction=st.sampled_from(["Buy", "Sell", "Long", "Short"]),
        gross_pl=st.floats(min_value=-5000, max_value=5000, allow_nan=False, allow_infinity=False),
        fees=st.floats(min_value=0, max_value=50, allow_nan=False, allow_infinity=False),
    )


class TestStatsScenarios:
    """Concrete scenarios for calculate_trade_stats()."""

    def test_mixed_trades(self):
        """Two wins and a loss produce the expected totals."""
        trades = [make_trade(100), make_trade(-50), make_trade(200)]

        stats = calculate_trade_stats(trades)

        assert stats.total_trades == 3
        assert stats.total_net_pl == 250
        assert stats.winning_trades == 2
        assert stats.losing_trades == 1
        assert abs(stats.win_rate - 66.6667) < 0.01
        assert stats.best_trade == 200
        assert stats.worst_trade == -50
        assert abs(stats.average_net_pl - 250 / 3) < 1e-9

    def test_empty_trades_returns_zeros(self):
        """Empty trade list should return all zeros."""
        stats = calculate_trade_stats([])

        assert stats.total_trades == 0
        assert stats.total_net_pl == 0
        assert stats.total_fees == 0
        assert stats.winning_trades == 0
        assert stats.losing_trades == 0
        assert stats.win_rate == 0
        assert stats.best_trade == 0
        assert stats.worst_trade == 0
        assert stats.average_net_pl == 0

    def test_break_even_is_neither_win_nor_loss(self):
        """A zero net P&L trade counts toward neither tally but toward the total."""
        trades = [make_trade(0), make_trade(10), make_trade(-10)]

        stats = calculate_trade_stats(trades)

        assert stats.winning_trades == 1
        assert stats.losing_trades == 1
        assert stats.break_even_trades == 1
        assert abs(stats.win_rate - 100 / 3) < 1e-9

    def test_fees_turn_gross_win_into_loss(self):
        """Classification uses net P&L, not gross P&L."""
        trade = make_trade(-2, fees=5)
        assert trade.gross_pl == 3

        stats = calculate_trade_stats([trade])

        assert stats.losing_trades == 1
        assert stats.total_fees == 5

    def test_all_losses_best_trade_is_negative(self):
        """Best trade is the maximum net P&L even when every trade lost."""
        stats = calculate_trade_stats([make_trade(-30), make_trade(-10)])

        assert stats.best_trade == -10
        assert stats.worst_trade == -30

    def test_average_win_and_loss(self):
        stats = calculate_trade_stats([make_trade(30), make_trade(10), make_trade(-20)])

        assert stats.avg_win == 20
        assert stats.avg_loss == 20

    def test_accepts_generator(self):
        stats = calculate_trade_stats(make_trade(pl) for pl in (5, 6))
        assert stats.total_trades == 2


class TestStatsProperties:
    """
    **Feature: trade-analytics, Property: Summary Statistics Consistency**

    *For any* set of trades, win/loss tallies, win rate, and totals obey
    the summary invariants.
    """

    @given(trades=st.lists(trade_strategy(), min_size=0, max_size=40))
    @settings(max_examples=100)
    def test_wins_plus_losses_bounded_by_total(self, trades: list[TradeRecord]):
        """winning + losing never exceeds total; break-even trades fill the gap."""
        stats = calculate_trade_stats(trades)

        assert stats.winning_trades + stats.losing_trades <= stats.total_trades
        break_even = sum(1 for t in trades if t.net_pl == 0)
        assert stats.break_even_trades == break_even

    @given(trades=st.lists(trade_strategy(), min_size=0, max_size=40))
    @settings(max_examples=100)
    def test_win_rate_bounds(self, trades: list[TradeRecord]):
        """Win rate lies in [0, 100] and is 0 for an empty set."""
        stats = calculate_trade_stats(trades)

        assert 0 <= stats.win_rate <= 100
        if stats.total_trades == 0:
            assert stats.win_rate == 0

    @given(trades=st.lists(trade_strategy(), min_size=0, max_size=40))
    @settings(max_examples=100)
    def test_net_equals_gross_minus_fees(self, trades: list[TradeRecord]):
        """Total net P&L equals total gross P&L minus total fees."""
        stats = calculate_trade_stats(trades)

        expected = sum(t.gross_pl for t in trades) - sum(t.fees for t in trades)
        assert abs(stats.total_net_pl - expected) < 1e-6

    @given(trades=st.lists(trade_strategy(), min_size=1, max_size=40))
    @settings(max_examples=100)
    def test_best_and_worst_bracket_average(self, trades: list[TradeRecord]):
        """worst <= average <= best for any non-empty set."""
        stats = calculate_trade_stats(trades)

        assert stats.worst_trade - 1e-9 <= stats.average_net_pl <= stats.best_trade + 1e-9
        assert stats.best_trade == max(t.net_pl for t in trades)
        assert stats.worst_trade == min(t.net_pl for t in trades)
