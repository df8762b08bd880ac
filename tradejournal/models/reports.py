"""Computed report models.

These are views derived from trade collections on every request and are
never persisted.
"""

from datetime import date as date_type
from typing import Literal, Optional

from pydantic import BaseModel, Field

Timeframe = Literal["daily", "weekly", "monthly", "yearly"]
Granularity = Literal["day", "week", "month", "year"]


class DateRange(BaseModel):
    """Inclusive calendar date range."""

    start: date_type = Field(..., description="First day (inclusive)")
    end: date_type = Field(..., description="Last day (inclusive)")
    preset: Optional[str] = Field(default=None, description="Preset name, if any")

    model_config = {"frozen": True}

    def contains(self, day: date_type) -> bool:
        return self.start <= day <= self.end


class StatsSummary(BaseModel):
    """Summary statistics over a set of trades."""

    total_trades: int = Field(default=0, ge=0)
    total_net_pl: float = Field(default=0.0)
    total_gross_pl: float = Field(default=0.0)
    total_fees: float = Field(default=0.0, ge=0)
    winning_trades: int = Field(default=0, ge=0)
    losing_trades: int = Field(default=0, ge=0)
    win_rate: float = Field(default=0.0, ge=0, le=100)
    best_trade: float = Field(default=0.0)
    worst_trade: float = Field(default=0.0)
    average_net_pl: float = Field(default=0.0)
    avg_win: float = Field(default=0.0, ge=0)
    avg_loss: float = Field(default=0.0, ge=0)

    model_config = {"frozen": True}

    @property
    def break_even_trades(self) -> int:
        return self.total_trades - self.winning_trades - self.losing_trades


class PeriodStats(BaseModel):
    """Statistics for one time bucket."""

    key: str = Field(..., description="Sortable bucket key")
    label: str = Field(..., description="Display label")
    start: date_type = Field(..., description="First day of the bucket")
    end: date_type = Field(..., description="Last day of the bucket")
    stats: StatsSummary = Field(default_factory=StatsSummary)

    model_config = {"frozen": True}

    @property
    def trades(self) -> int:
        return self.stats.total_trades

    @property
    def pnl(self) -> float:
        return self.stats.total_net_pl

    @property
    def win_rate(self) -> float:
        return self.stats.win_rate


class SymbolPerformance(BaseModel):
    """Aggregated performance of one symbol."""

    symbol: str
    trade_count: int = Field(..., ge=0)
    net_pl: float
    win_rate: float = Field(..., ge=0, le=100)

    model_config = {"frozen": True}


class HistoricalAnalyticsReport(BaseModel):
    """Historical analytics for a date range and timeframe."""

    owner_id: str
    timeframe: Timeframe
    date_range: DateRange
    stats: StatsSummary
    trading_days: int = Field(default=0, ge=0)
    average_trades_per_day: float = Field(default=0.0, ge=0)
    profitable_days: int = Field(default=0, ge=0)
    max_drawdown: float = Field(default=0.0, ge=0)
    top_symbols: list[SymbolPerformance] = Field(default_factory=list)
    period_breakdown: list[PeriodStats] = Field(default_factory=list)
    monthly_breakdown: Optional[list[PeriodStats]] = Field(default=None)

    model_config = {"frozen": True}


class PositionSizeResult(BaseModel):
    """Output of the position size calculator."""

    risk_amount: float = Field(..., ge=0)
    position_size: float = Field(..., ge=0)
    pip_value: float = Field(..., gt=0)
    stop_loss_distance: float = Field(..., gt=0)
    take_profit_distance: Optional[float] = Field(default=None)
    potential_profit: Optional[float] = Field(default=None)
    risk_reward_ratio: Optional[float] = Field(default=None)

    model_config = {"frozen": True}


class RiskProjection(BaseModel):
    """Per-trade and monthly projection for a risk profile."""

    risk_amount: float
    reward_amount: float
    daily_loss_limit: float
    monthly_projection: float

    model_config = {"frozen": True}


class DailySnapshot(BaseModel):
    """Same-day aggregates for the daily risk monitor."""

    date: date_type
    current_day_pnl: float = Field(default=0.0)
    current_day_trades: int = Field(default=0, ge=0)
    win_streak: int = Field(default=0, ge=0)

    model_config = {"frozen": True}


class RiskLimits(BaseModel):
    """Alert thresholds, expressed as negative P&L amounts."""

    daily_loss_limit: float = Field(default=-300.0, lt=0)
    account_drawdown_limit: float = Field(default=-500.0, lt=0)

    model_config = {"frozen": True}


class AlertState(BaseModel):
    """Alert suppression state carried by the caller between evaluations."""

    daily_loss_alert_date: Optional[date_type] = Field(default=None)
    drawdown_alert_shown: bool = Field(default=False)

    model_config = {"frozen": True}

    @classmethod
    def new_session(cls) -> "AlertState":
        return cls()


class RiskAlert(BaseModel):
    """A fired risk threshold alert."""

    kind: Literal["daily_loss_limit", "account_drawdown_limit"]
    message: str
    value: float
    threshold: float

    model_config = {"frozen": True}


class YearTargetsSummary(BaseModel):
    """Roll-up of all monthly targets in a year."""

    year: int
    total_targets: int = 0
    completed_targets: int = 0
    completion_rate: float = 0.0
    total_target_pnl: float = 0.0
    total_current_pnl: float = 0.0
    total_target_trades: int = 0
    total_current_trades: int = 0
    average_win_rate_target: float = 0.0
    average_current_win_rate: float = 0.0
    pnl_progress: float = 0.0
    trades_progress: float = 0.0

    model_config = {"frozen": True}
