"""Per-symbol performance ranking."""

from typing import Iterable, Optional

from tradejournal.models import SymbolPerformance, TradeRecord


def rank_symbols(
    trades: Iterable[TradeRecord], limit: Optional[int] = None
) -> list[SymbolPerformance]:
    """Aggregate trades per symbol and rank by net P&L.

    Symbols with equal net P&L keep the order in which they first appear.

    Args:
        trades: Trades to aggregate.
        limit: Keep only the top N symbols. None keeps all.

    Returns:
        Symbol performance list sorted by net P&L, highest first.
    """
    buckets: dict[str, dict] = {}
    for trade in trades:
        bucket = buckets.setdefault(trade.symbol, {"trades": 0, "pnl": 0.0, "wins": 0})
        bucket["trades"] += 1
        bucket["pnl"] += trade.net_pl
        if trade.net_pl > 0:
            bucket["wins"] += 1

    ranked = sorted(
        (
            SymbolPerformance(
                symbol=symbol,
                trade_count=data["trades"],
                net_pl=data["pnl"],
                win_rate=data["wins"] / data["trades"] * 100,
            )
            for symbol, data in buckets.items()
        ),
        key=lambda s: s.net_pl,
        reverse=True,
    )

    if limit is not None:
        return ranked[:limit]
    return ranked
