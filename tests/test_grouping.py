"""Tests for time bucketing of trades.

**Feature: trade-analytics**
"""

from datetime import date

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from tradejournal.analytics import (
    bucket_stats,
    daily_series,
    group_trades,
    last_n_months,
    monthly_breakdown,
    period_key,
)
from tradejournal.analytics.grouping import period_bounds
from tradejournal.models import DateRange, TradeRecord


def make_trade(day: date, net_pl: float = 10.0, symbol: str = "EURUSD") -> TradeRecord:
    return TradeRecord(
        owner_id="user-1",
        date=day,
        symbol=symbol,
        direction="Sell",
        gross_pl=net_pl,
    )


class TestPeriodKeys:
    """Bucket keys and bounds for each granularity."""

    def test_keys(self):
        day = date(2025, 1, 1)  # a Wednesday in ISO week 1 of 2025

        assert period_key(day, "day") == "2025-01-01"
        assert period_key(day, "week") == "2025-W01"
        assert period_key(day, "month") == "2025-01"
        assert period_key(day, "year") == "2025"

    def test_iso_week_crosses_year_boundary(self):
        """29 Dec 2024 is a Sunday in ISO week 52 of 2024; 30 Dec 2024 starts 2025-W01."""
        assert period_key(date(2024, 12, 29), "week") == "2024-W52"
        assert period_key(date(2024, 12, 30), "week") == "2025-W01"

    def test_bounds(self):
        day = date(2024, 2, 14)

        assert period_bounds(day, "week") == (date(2024, 2, 12), date(2024, 2, 18))
        assert period_bounds(day, "month") == (date(2024, 2, 1), date(2024, 2, 29))
        assert period_bounds(day, "year") == (date(2024, 1, 1), date(2024, 12, 31))

    def test_unknown_granularity(self):
        with pytest.raises(ValueError):
            period_key(date(2025, 1, 1), "quarter")


class TestAdHocGrouping:
    """Ad hoc grouping only returns periods with trades."""

    def test_omits_empty_buckets_and_orders_chronologically(self):
        trades = [
            make_trade(date(2025, 3, 5)),
            make_trade(date(2025, 1, 20)),
            make_trade(date(2025, 3, 28)),
        ]

        grouped = group_trades(trades, "month")

        assert list(grouped) == ["2025-01", "2025-03"]
        assert len(grouped["2025-03"]) == 2

    def test_bucket_stats_aggregates_each_bucket(self):
        trades = [
            make_trade(date(2025, 3, 5), 50),
            make_trade(date(2025, 3, 6), -20),
            make_trade(date(2025, 4, 1), 15),
        ]

        buckets = bucket_stats(trades, "month")

        assert [b.key for b in buckets] == ["2025-03", "2025-04"]
        assert buckets[0].pnl == 30
        assert buckets[0].trades == 2
        assert buckets[0].win_rate == 50
        assert buckets[0].label == "March 2025"

    def test_empty_input(self):
        assert group_trades([], "day") == {}
        assert bucket_stats([], "week") == []

    @given(
        days=st.lists(
            st.dates(min_value=date(2020, 1, 1), max_value=date(2026, 12, 31)),
            min_size=0,
            max_size=30,
        ),
        granularity=st.sampled_from(["day", "week", "month", "year"]),
    )
    @settings(max_examples=50)
    def test_grouping_partitions_all_trades(self, days: list[date], granularity: str):
        """
        *For any* trades and granularity, every trade lands in exactly one
        bucket whose bounds contain its date.
        """
        trades = [make_trade(day) for day in days]

        grouped = group_trades(trades, granularity)

        assert sum(len(bucket) for bucket in grouped.values()) == len(trades)
        for key, bucket in grouped.items():
            for trade in bucket:
                start, end = period_bounds(trade.date, granularity)
                assert start <= trade.date <= end
                assert period_key(trade.date, granularity) == key


class TestFixedWidthReports:
    """Fixed-width reports include empty periods with zero statistics."""

    def test_monthly_breakdown_has_twelve_months(self):
        trades = [
            make_trade(date(2025, 2, 3), 40),
            make_trade(date(2025, 11, 30), -15),
            make_trade(date(2024, 2, 3), 999),  # other year is ignored
        ]

        breakdown = monthly_breakdown(trades, 2025)

        assert len(breakdown) == 12
        assert [b.label for b in breakdown][:3] == ["January", "February", "March"]
        assert breakdown[0].trades == 0
        assert breakdown[0].pnl == 0
        assert breakdown[1].pnl == 40
        assert breakdown[10].pnl == -15
        assert sum(b.trades for b in breakdown) == 2

    def test_monthly_breakdown_empty_year(self):
        breakdown = monthly_breakdown([], 2025)

        assert len(breakdown) == 12
        assert all(b.stats.total_trades == 0 for b in breakdown)

    def test_last_n_months_crosses_year(self):
        trades = [make_trade(date(2024, 11, 15), 25)]

        months = last_n_months(trades, date(2025, 2, 10), n=6)

        assert [m.key for m in months] == [
            "2024-09", "2024-10", "2024-11", "2024-12", "2025-01", "2025-02",
        ]
        assert months[2].pnl == 25
        assert sum(m.trades for m in months) == 1

    def test_last_n_months_rejects_zero(self):
        with pytest.raises(ValueError):
            last_n_months([], date(2025, 1, 1), n=0)

    def test_daily_series_includes_every_day(self):
        trades = [make_trade(date(2025, 5, 2), 12)]
        date_range = DateRange(start=date(2025, 5, 1), end=date(2025, 5, 3))

        series = daily_series(trades, date_range)

        assert [d.start for d in series] == [date(2025, 5, 1), date(2025, 5, 2), date(2025, 5, 3)]
        assert [d.trades for d in series] == [0, 1, 0]
