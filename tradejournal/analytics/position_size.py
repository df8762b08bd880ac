"""Position size and risk calculator."""

import math
from typing import Optional

from tradejournal.errors import InvalidInputError
from tradejournal.models import PositionSizeResult, RiskProfile, RiskProjection

# Currency value per pip for 0.01 lot, by instrument
PIP_VALUES = {
    "XAUUSD": 0.1,
    "EURUSD": 0.1,
    "GBPUSD": 0.1,
    "USDJPY": 0.091,
    "USDCHF": 0.1,
    "AUDUSD": 0.1,
    "USDCAD": 0.075,
    "NZDUSD": 0.1,
    "EURJPY": 0.091,
    "GBPJPY": 0.091,
}

# Trading days per month used for projections
TRADING_DAYS_PER_MONTH = 22
# Assumed win rate for monthly projections
PROJECTION_WIN_RATE = 0.5
# Daily loss limit as a multiple of per-trade risk
DAILY_LOSS_RISK_MULTIPLE = 3


def pip_value_for(symbol: str) -> float:
    """Look up the pip value of a known instrument.

    Raises:
        InvalidInputError: If the symbol is not in PIP_VALUES.
    """
    key = symbol.strip().upper()
    if key not in PIP_VALUES:
        raise InvalidInputError(
            [f"Unknown instrument '{symbol}' (known: {', '.join(sorted(PIP_VALUES))})"]
        )
    return PIP_VALUES[key]


def _check_positive(name: str, value: Optional[float], problems: list[str]) -> None:
    if value is None:
        problems.append(f"{name} is required")
    elif not math.isfinite(value):
        problems.append(f"{name} must be a finite number")
    elif value <= 0:
        problems.append(f"{name} must be greater than 0")


def calculate_position_size(
    account_balance: Optional[float],
    risk_percent: Optional[float],
    stop_loss_distance: Optional[float],
    pip_value: Optional[float],
    take_profit_distance: Optional[float] = None,
) -> PositionSizeResult:
    """Calculate the position size that risks a fixed share of the account.

    risk_amount = balance * risk% / 100, and
    position_size = risk_amount / (stop_loss_distance * pip_value).
    Money is rounded to 2 decimals and size to 4, only on output.

    Args:
        account_balance: Account balance.
        risk_percent: Share of the balance to risk, in (0, 100].
        stop_loss_distance: Stop distance in instrument units (e.g. pips).
        pip_value: Currency value per unit distance per lot.
        take_profit_distance: Optional target distance in the same units.

    Returns:
        PositionSizeResult.

    Raises:
        InvalidInputError: If any input is missing, zero, negative, or
            out of range. No partial result is produced.
    """
    problems: list[str] = []
    _check_positive("account_balance", account_balance, problems)
    _check_positive("risk_percent", risk_percent, problems)
    _check_positive("stop_loss_distance", stop_loss_distance, problems)
    _check_positive("pip_value", pip_value, problems)
    if take_profit_distance is not None:
        _check_positive("take_profit_distance", take_profit_distance, problems)
    if risk_percent is not None and math.isfinite(risk_percent) and risk_percent > 100:
        problems.append("risk_percent must not exceed 100")
    if problems:
        raise InvalidInputError(problems)

    risk_amount = account_balance * risk_percent / 100
    position_size = risk_amount / (stop_loss_distance * pip_value)

    potential_profit = None
    risk_reward_ratio = None
    if take_profit_distance is not None:
        potential_profit = take_profit_distance * pip_value * position_size
        risk_reward_ratio = potential_profit / risk_amount

    return PositionSizeResult(
        risk_amount=round(risk_amount, 2),
        position_size=round(position_size, 4),
        pip_value=pip_value,
        stop_loss_distance=stop_loss_distance,
        take_profit_distance=take_profit_distance,
        potential_profit=round(potential_profit, 2) if potential_profit is not None else None,
        risk_reward_ratio=round(risk_reward_ratio, 2) if risk_reward_ratio is not None else None,
    )


def project_risk_profile(profile: RiskProfile) -> RiskProjection:
    """Project per-trade risk, reward, and a monthly result for a profile.

    The monthly projection assumes half of all planned trades win.
    """
    risk = profile.account_balance * profile.risk_percent / 100
    reward = risk * profile.reward_ratio
    trades_per_side = profile.trades_per_day * TRADING_DAYS_PER_MONTH * PROJECTION_WIN_RATE
    monthly = reward * trades_per_side - risk * trades_per_side

    return RiskProjection(
        risk_amount=round(risk, 2),
        reward_amount=round(reward, 2),
        daily_loss_limit=round(risk * DAILY_LOSS_RISK_MULTIPLE, 2),
        monthly_projection=round(monthly, 2),
    )
