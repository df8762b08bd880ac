"""Historical analytics over a date range.

Combines summary statistics, trading consistency, drawdown, symbol
ranking, and time bucketing into a single report.
"""

from typing import Iterable, Optional

from tradejournal.analytics.drawdown import calculate_max_drawdown, sort_chronologically
from tradejournal.analytics.grouping import bucket_stats, group_trades, monthly_breakdown
from tradejournal.analytics.ranges import filter_by_account, filter_by_range
from tradejournal.analytics.stats import calculate_trade_stats
from tradejournal.analytics.symbols import rank_symbols
from tradejournal.models import DateRange, HistoricalAnalyticsReport, TradeRecord
from tradejournal.models.reports import Granularity, Timeframe

TIMEFRAMES = ("daily", "weekly", "monthly", "yearly")

TOP_SYMBOLS = 10

# Bucket size used for the period breakdown of each timeframe
TIMEFRAME_GRANULARITY: dict[str, Granularity] = {
    "daily": "day",
    "weekly": "week",
    "monthly": "month",
    "yearly": "month",
}


def calculate_trading_consistency(trades: Iterable[TradeRecord]) -> dict:
    """Calculate trading-day metrics.

    Args:
        trades: Trades to analyze.

    Returns:
        Dictionary with trading_days, average_trades_per_day and
        profitable_days (days whose summed net P&L is positive).
    """
    by_day = group_trades(trades, "day")
    trading_days = len(by_day)
    total_trades = sum(len(day_trades) for day_trades in by_day.values())
    profitable_days = sum(
        1 for day_trades in by_day.values() if sum(t.net_pl for t in day_trades) > 0
    )
    return {
        "trading_days": trading_days,
        "average_trades_per_day": (total_trades / trading_days) if trading_days > 0 else 0.0,
        "profitable_days": profitable_days,
    }


def generate_historical_analytics(
    owner_id: str,
    trades: Iterable[TradeRecord],
    timeframe: Timeframe,
    date_range: DateRange,
    account_id: Optional[str] = None,
) -> HistoricalAnalyticsReport:
    """Generate historical analytics for a date range.

    Args:
        owner_id: User the report is for.
        trades: The user's full trade collection.
        timeframe: daily, weekly, monthly, or yearly.
        date_range: Inclusive range to analyze.
        account_id: Optional sub-account filter.

    Returns:
        HistoricalAnalyticsReport. Yearly reports also carry a 12-month
        breakdown of the calendar year containing the range start.
    """
    if timeframe not in TIMEFRAMES:
        raise ValueError(
            f"Unknown timeframe '{timeframe}' (expected one of {', '.join(TIMEFRAMES)})"
        )

    filtered = filter_by_range(filter_by_account(trades, account_id), date_range)
    chronological = sort_chronologically(filtered)
    consistency = calculate_trading_consistency(filtered)

    breakdown = None
    if timeframe == "yearly":
        breakdown = monthly_breakdown(filtered, date_range.start.year)

    return HistoricalAnalyticsReport(
        owner_id=owner_id,
        timeframe=timeframe,
        date_range=date_range,
        stats=calculate_trade_stats(filtered),
        trading_days=consistency["trading_days"],
        average_trades_per_day=consistency["average_trades_per_day"],
        profitable_days=consistency["profitable_days"],
        max_drawdown=calculate_max_drawdown(chronological),
        top_symbols=rank_symbols(filtered, limit=TOP_SYMBOLS),
        period_breakdown=bucket_stats(chronological, TIMEFRAME_GRANULARITY[timeframe]),
        monthly_breakdown=breakdown,
    )
