"""Running-equity drawdown calculations."""

from typing import Iterable

from tradejournal.models import TradeRecord


def sort_chronologically(
    trades: Iterable[TradeRecord], newest_first: bool = False
) -> list[TradeRecord]:
    """Sort trades by date, breaking same-day ties by insertion order.

    Stored trades carry ids assigned in insertion order, so ties are broken
    by id. When any trade has no id the sort is by date alone and stable,
    keeping the input order for ties.

    Args:
        trades: Trades in any order.
        newest_first: Sort descending, latest entry first.

    Returns:
        A new sorted list.
    """
    trades = list(trades)
    if all(t.id is not None for t in trades):
        return sorted(trades, key=lambda t: (t.date, t.id), reverse=newest_first)
    return sorted(trades, key=lambda t: t.date, reverse=newest_first)


def equity_curve(trades: Iterable[TradeRecord]) -> list[float]:
    """Cumulative net P&L after each trade, in the order given."""
    curve = []
    running_total = 0.0
    for trade in trades:
        running_total += trade.net_pl
        curve.append(running_total)
    return curve


def calculate_max_drawdown(trades: Iterable[TradeRecord]) -> float:
    """Calculate the maximum peak-to-trough drawdown of cumulative P&L.

    The peak starts at zero, so a losing first trade is already a drawdown.
    Trades must be in chronological order; see sort_chronologically().

    Args:
        trades: Chronologically ordered trades.

    Returns:
        Largest drawdown observed (>= 0), 0 for empty input.
    """
    peak = 0.0
    max_drawdown = 0.0
    for running_total in equity_curve(trades):
        if running_total > peak:
            peak = running_total
        drawdown = peak - running_total
        if drawdown > max_drawdown:
            max_drawdown = drawdown
    return max_drawdown
