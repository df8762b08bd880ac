"""TradeRecord data model."""

from datetime import date as date_type
from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, Field, computed_field, field_validator


class Direction(str, Enum):
    """Entry direction of a trade."""

    LONG = "Long"
    SHORT = "Short"


# Data-entry vocabularies mapped onto the single analytics polarity
_DIRECTION_ALIASES = {
    "buy": Direction.LONG,
    "long": Direction.LONG,
    "sell": Direction.SHORT,
    "short": Direction.SHORT,
}


def parse_direction(value: Union[str, Direction]) -> Direction:
    """Map a Buy/Sell or Long/Short label onto a Direction.

    Args:
        value: Direction label (case-insensitive) or a Direction.

    Returns:
        The matching Direction.

    Raises:
        ValueError: If the label is not recognised.
    """
    if isinstance(value, Direction):
        return value
    key = str(value).strip().lower()
    if key not in _DIRECTION_ALIASES:
        raise ValueError(
            f"Unknown trade direction '{value}' (expected Buy, Sell, Long or Short)"
        )
    return _DIRECTION_ALIASES[key]


class TradeRecord(BaseModel):
    """Represents one logged trade.

    Gross P&L is entered directly by the user; entry and exit prices are
    informational and never reconciled against it. Net P&L is always
    derived from gross P&L and fees.
    """

    id: Optional[int] = Field(default=None, description="Database ID")
    owner_id: str = Field(..., min_length=1, description="Owning user")
    account_id: Optional[str] = Field(default=None, description="Sub-account")
    date: date_type = Field(..., description="Trading date")
    symbol: str = Field(..., min_length=1, description="Instrument symbol")
    direction: Direction = Field(..., description="Entry direction")
    gross_pl: float = Field(..., description="P&L before fees")
    fees: float = Field(default=0.0, ge=0, description="Trading fees")
    entry_price: float = Field(default=0.0, ge=0, description="Entry price")
    exit_price: float = Field(default=0.0, ge=0, description="Exit price")
    notes: Optional[str] = Field(default=None, description="User notes")

    model_config = {"frozen": True, "allow_inf_nan": False}

    @field_validator("symbol")
    @classmethod
    def _normalize_symbol(cls, value: str) -> str:
        symbol = value.strip().upper()
        if not symbol:
            raise ValueError("symbol must not be blank")
        return symbol

    @field_validator("direction", mode="before")
    @classmethod
    def _adapt_direction(cls, value):
        return parse_direction(value)

    @computed_field
    @property
    def net_pl(self) -> float:
        """P&L after fees."""
        return self.gross_pl - self.fees

    @property
    def is_win(self) -> bool:
        return self.net_pl > 0

    @property
    def is_loss(self) -> bool:
        return self.net_pl < 0
