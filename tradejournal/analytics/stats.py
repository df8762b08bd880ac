"""Summary statistics over trade collections."""

from typing import Iterable

from tradejournal.models import StatsSummary, TradeRecord


def calculate_trade_stats(trades: Iterable[TradeRecord]) -> StatsSummary:
    """Calculate summary statistics from a collection of trades.

    Trades with a net P&L of exactly zero are break-even and count toward
    neither winning nor losing trades. Win rate is taken over all trades.

    Args:
        trades: Trades to summarize, in any order.

    Returns:
        StatsSummary with zeros for an empty collection.
    """
    trades = list(trades)
    if not trades:
        return StatsSummary()

    total_net_pl = 0.0
    total_gross_pl = 0.0
    total_fees = 0.0
    winning_trades = 0
    losing_trades = 0
    total_wins = 0.0
    total_losses = 0.0
    best_trade = trades[0].net_pl
    worst_trade = trades[0].net_pl

    for trade in trades:
        net = trade.net_pl
        total_net_pl += net
        total_gross_pl += trade.gross_pl
        total_fees += trade.fees
        if net > 0:
            winning_trades += 1
            total_wins += net
        elif net < 0:
            losing_trades += 1
            total_losses += abs(net)
        best_trade = max(best_trade, net)
        worst_trade = min(worst_trade, net)

    total_trades = len(trades)

    return StatsSummary(
        total_trades=total_trades,
        total_net_pl=total_net_pl,
        total_gross_pl=total_gross_pl,
        total_fees=total_fees,
        winning_trades=winning_trades,
        losing_trades=losing_trades,
        win_rate=winning_trades / total_trades * 100,
        best_trade=best_trade,
        worst_trade=worst_trade,
        average_net_pl=total_net_pl / total_trades,
        avg_win=(total_wins / winning_trades) if winning_trades > 0 else 0.0,
        avg_loss=(total_losses / losing_trades) if losing_trades > 0 else 0.0,
    )
