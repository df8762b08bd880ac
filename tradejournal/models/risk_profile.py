"""RiskProfile data model."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class RiskProfile(BaseModel):
    """A saved position-sizing configuration."""

    id: Optional[int] = Field(default=None, description="Database ID")
    owner_id: str = Field(..., min_length=1, description="Owning user")
    name: str = Field(..., min_length=1, description="Profile name")
    account_balance: float = Field(..., gt=0, description="Account balance")
    risk_percent: float = Field(..., gt=0, le=100, description="Risk per trade (%)")
    reward_ratio: float = Field(default=2.0, gt=0, description="Reward multiple of risk")
    trades_per_day: int = Field(default=3, ge=1, description="Planned trades per day")
    created_at: datetime = Field(default_factory=datetime.now)

    model_config = {"frozen": True, "allow_inf_nan": False}
