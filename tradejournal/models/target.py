"""MonthlyTarget data model."""

import calendar
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


def month_name(month: int) -> str:
    """Get the English name of a month (1-12)."""
    if 1 <= month <= 12:
        return calendar.month_name[month]
    return "Unknown"


def month_key(year: int, month: int) -> str:
    """Get the sortable YYYY-MM key of a month."""
    return f"{year:04d}-{month:02d}"


class MonthlyTarget(BaseModel):
    """Represents a user goal for one calendar month.

    Progress fields are snapshots recomputed from trades on demand.
    """

    id: Optional[int] = Field(default=None, description="Database ID")
    owner_id: str = Field(..., min_length=1, description="Owning user")
    year: int = Field(..., ge=1900, le=9999, description="Target year")
    month: int = Field(..., ge=1, le=12, description="Target month (1-12)")

    pnl_target: float = Field(..., description="Net P&L goal")
    trades_target: int = Field(..., ge=0, description="Trade count goal")
    win_rate_target: float = Field(..., ge=0, le=100, description="Win rate goal (%)")

    current_pnl: float = Field(default=0.0, description="Net P&L so far")
    current_trades: int = Field(default=0, ge=0, description="Trades so far")
    current_win_rate: float = Field(
        default=0.0, ge=0, le=100, description="Win rate so far (%)"
    )

    is_completed: bool = Field(default=False, description="All goals met")
    completed_at: Optional[datetime] = Field(
        default=None, description="First time all goals were met"
    )

    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    model_config = {"frozen": True, "allow_inf_nan": False}

    @property
    def month_name(self) -> str:
        return f"{month_name(self.month)} {self.year}"

    @property
    def month_key(self) -> str:
        return month_key(self.year, self.month)
