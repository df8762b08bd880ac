"""Trade analytics for TradeJournal.

Every function here is a pure computation over already-loaded trades.
"""

from tradejournal.analytics.drawdown import (
    calculate_max_drawdown,
    equity_curve,
    sort_chronologically,
)
from tradejournal.analytics.grouping import (
    bucket_stats,
    daily_series,
    group_trades,
    last_n_months,
    monthly_breakdown,
    period_key,
)
from tradejournal.analytics.historical import (
    calculate_trading_consistency,
    generate_historical_analytics,
)
from tradejournal.analytics.position_size import (
    PIP_VALUES,
    calculate_position_size,
    pip_value_for,
    project_risk_profile,
)
from tradejournal.analytics.ranges import (
    filter_by_account,
    filter_by_range,
    month_range,
    preset_date_range,
)
from tradejournal.analytics.risk_monitor import (
    calculate_daily_snapshot,
    calculate_win_streak,
    evaluate_risk_alerts,
)
from tradejournal.analytics.stats import calculate_trade_stats
from tradejournal.analytics.symbols import rank_symbols
from tradejournal.analytics.targets import (
    MonthlyTargetTracker,
    TargetStatus,
    goals_met,
    recompute_progress,
    reset_completion,
    summarize_year_targets,
    target_status,
)

__all__ = [
    "calculate_max_drawdown",
    "equity_curve",
    "sort_chronologically",
    "bucket_stats",
    "daily_series",
    "group_trades",
    "last_n_months",
    "monthly_breakdown",
    "period_key",
    "calculate_trading_consistency",
    "generate_historical_analytics",
    "PIP_VALUES",
    "calculate_position_size",
    "pip_value_for",
    "project_risk_profile",
    "filter_by_account",
    "filter_by_range",
    "month_range",
    "preset_date_range",
    "calculate_daily_snapshot",
    "calculate_win_streak",
    "evaluate_risk_alerts",
    "calculate_trade_stats",
    "rank_symbols",
    "MonthlyTargetTracker",
    "TargetStatus",
    "goals_met",
    "recompute_progress",
    "reset_completion",
    "summarize_year_targets",
    "target_status",
]
