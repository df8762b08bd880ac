"""Time bucketing of trades by day, week, month, or year."""

import calendar
from datetime import date, timedelta
from typing import Iterable

from tradejournal.analytics.stats import calculate_trade_stats
from tradejournal.models import DateRange, PeriodStats, TradeRecord
from tradejournal.models.reports import Granularity
from tradejournal.models.target import month_key, month_name

GRANULARITIES = ("day", "week", "month", "year")


def period_key(day: date, granularity: Granularity) -> str:
    """Get the sortable bucket key of a date.

    Keys are YYYY-MM-DD, YYYY-Www (ISO week), YYYY-MM, or YYYY. Sorting the
    keys as strings sorts the buckets chronologically.
    """
    if granularity == "day":
        return day.isoformat()
    if granularity == "week":
        iso_year, iso_week, _ = day.isocalendar()
        return f"{iso_year:04d}-W{iso_week:02d}"
    if granularity == "month":
        return month_key(day.year, day.month)
    if granularity == "year":
        return f"{day.year:04d}"
    raise ValueError(f"Unknown granularity '{granularity}'")


def period_bounds(day: date, granularity: Granularity) -> tuple[date, date]:
    """Get the first and last calendar day of the bucket containing a date."""
    if granularity == "day":
        return day, day
    if granularity == "week":
        start = day - timedelta(days=day.weekday())
        return start, start + timedelta(days=6)
    if granularity == "month":
        last = calendar.monthrange(day.year, day.month)[1]
        return date(day.year, day.month, 1), date(day.year, day.month, last)
    if granularity == "year":
        return date(day.year, 1, 1), date(day.year, 12, 31)
    raise ValueError(f"Unknown granularity '{granularity}'")


def period_label(day: date, granularity: Granularity) -> str:
    """Get a display label for the bucket containing a date."""
    if granularity == "day":
        return day.strftime("%a %d %b %Y")
    if granularity == "week":
        iso_year, iso_week, _ = day.isocalendar()
        return f"Week {iso_week}, {iso_year}"
    if granularity == "month":
        return f"{month_name(day.month)} {day.year}"
    return str(day.year)


def _period(day: date, granularity: Granularity, trades: list[TradeRecord]) -> PeriodStats:
    start, end = period_bounds(day, granularity)
    return PeriodStats(
        key=period_key(day, granularity),
        label=period_label(day, granularity),
        start=start,
        end=end,
        stats=calculate_trade_stats(trades),
    )


def group_trades(
    trades: Iterable[TradeRecord], granularity: Granularity
) -> dict[str, list[TradeRecord]]:
    """Group trades into buckets, omitting periods without trades.

    Args:
        trades: Trades to group.
        granularity: One of day, week, month, year.

    Returns:
        Mapping of bucket key to trades, ordered chronologically by key.
    """
    grouped: dict[str, list[TradeRecord]] = {}
    for trade in trades:
        grouped.setdefault(period_key(trade.date, granularity), []).append(trade)
    return {key: grouped[key] for key in sorted(grouped)}


def bucket_stats(
    trades: Iterable[TradeRecord], granularity: Granularity
) -> list[PeriodStats]:
    """Aggregate each non-empty bucket with calculate_trade_stats()."""
    return [
        _period(bucket[0].date, granularity, bucket)
        for bucket in group_trades(trades, granularity).values()
    ]


def monthly_breakdown(trades: Iterable[TradeRecord], year: int) -> list[PeriodStats]:
    """Build a fixed 12-month breakdown for a calendar year.

    Months without trades are included with zero statistics.
    """
    grouped = group_trades((t for t in trades if t.date.year == year), "month")
    breakdown = []
    for month in range(1, 13):
        first = date(year, month, 1)
        period = _period(first, "month", grouped.get(month_key(year, month), []))
        breakdown.append(period.model_copy(update={"label": month_name(month)}))
    return breakdown


def last_n_months(
    trades: Iterable[TradeRecord], today: date, n: int = 6
) -> list[PeriodStats]:
    """Build a fixed-width series of the last n months, oldest first.

    The current month is the last entry. Empty months get zero statistics.
    """
    if n < 1:
        raise ValueError("n must be at least 1")

    months = []
    year, month = today.year, today.month
    for _ in range(n):
        months.append(date(year, month, 1))
        month -= 1
        if month == 0:
            year, month = year - 1, 12
    months.reverse()

    grouped = group_trades(trades, "month")
    return [
        _period(first, "month", grouped.get(period_key(first, "month"), []))
        for first in months
    ]


def daily_series(trades: Iterable[TradeRecord], date_range: DateRange) -> list[PeriodStats]:
    """Build one entry per calendar day of a range, including empty days."""
    grouped = group_trades(trades, "day")
    series = []
    day = date_range.start
    while day <= date_range.end:
        series.append(_period(day, "day", grouped.get(day.isoformat(), [])))
        day += timedelta(days=1)
    return series
