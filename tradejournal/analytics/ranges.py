"""Date range presets and trade filters."""

import calendar
from datetime import date, timedelta
from typing import Iterable, Optional

from tradejournal.models import DateRange, TradeRecord

PRESETS = ("today", "week", "month", "quarter", "year", "all")

# Start of the "all" preset
EARLIEST_DATE = date(2020, 1, 1)


def _months_back(day: date, months: int) -> date:
    """Same day-of-month `months` calendar months earlier, clamped to month end."""
    total = day.year * 12 + (day.month - 1) - months
    year, month = divmod(total, 12)
    month += 1
    last = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last))


def preset_date_range(preset: str, today: date) -> DateRange:
    """Resolve a named preset to a date range ending today.

    Args:
        preset: One of today, week, month, quarter, year, all.
        today: Current date.

    Returns:
        The matching DateRange.

    Raises:
        ValueError: If the preset is unknown.
    """
    if preset == "today":
        start = today
    elif preset == "week":
        start = today - timedelta(days=7)
    elif preset == "month":
        start = _months_back(today, 1)
    elif preset == "quarter":
        start = _months_back(today, 3)
    elif preset == "year":
        start = date(today.year, 1, 1)
    elif preset == "all":
        start = EARLIEST_DATE
    else:
        raise ValueError(
            f"Unknown date range preset '{preset}' (expected one of {', '.join(PRESETS)})"
        )
    return DateRange(start=start, end=today, preset=preset)


def month_range(year: int, month: int) -> DateRange:
    """Date range covering one calendar month."""
    last = calendar.monthrange(year, month)[1]
    return DateRange(start=date(year, month, 1), end=date(year, month, last))


def filter_by_range(
    trades: Iterable[TradeRecord], date_range: DateRange
) -> list[TradeRecord]:
    """Keep trades whose date lies within the inclusive range."""
    return [t for t in trades if date_range.contains(t.date)]


def filter_by_account(
    trades: Iterable[TradeRecord], account_id: Optional[str]
) -> list[TradeRecord]:
    """Keep trades of one sub-account. None keeps every trade."""
    if account_id is None:
        return list(trades)
    return [t for t in trades if t.account_id == account_id]
