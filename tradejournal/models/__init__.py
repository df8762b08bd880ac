"""Data models for TradeJournal."""

from tradejournal.models.trade import Direction, TradeRecord, parse_direction
from tradejournal.models.target import MonthlyTarget
from tradejournal.models.risk_profile import RiskProfile
from tradejournal.models.reports import (
    AlertState,
    DailySnapshot,
    DateRange,
    HistoricalAnalyticsReport,
    PeriodStats,
    PositionSizeResult,
    RiskAlert,
    RiskLimits,
    RiskProjection,
    StatsSummary,
    SymbolPerformance,
    YearTargetsSummary,
)

__all__ = [
    "Direction",
    "TradeRecord",
    "parse_direction",
    "MonthlyTarget",
    "RiskProfile",
    "AlertState",
    "DailySnapshot",
    "DateRange",
    "HistoricalAnalyticsReport",
    "PeriodStats",
    "PositionSizeResult",
    "RiskAlert",
    "RiskLimits",
    "RiskProjection",
    "StatsSummary",
    "SymbolPerformance",
    "YearTargetsSummary",
]
