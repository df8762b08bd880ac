"""Daily risk monitoring and threshold alerts."""

import logging
from datetime import date
from typing import Iterable

from tradejournal.analytics.drawdown import sort_chronologically
from tradejournal.analytics.stats import calculate_trade_stats
from tradejournal.models import (
    AlertState,
    DailySnapshot,
    RiskAlert,
    RiskLimits,
    TradeRecord,
)

logger = logging.getLogger(__name__)


def calculate_win_streak(trades: Iterable[TradeRecord]) -> int:
    """Count consecutive winning trades, most recent first.

    A streak needs strictly positive net P&L: a break-even trade ends it.
    Same-day trades are ordered by id, latest entry first.
    """
    streak = 0
    for trade in sort_chronologically(trades, newest_first=True):
        if trade.net_pl > 0:
            streak += 1
        else:
            break
    return streak


def calculate_daily_snapshot(trades: Iterable[TradeRecord], today: date) -> DailySnapshot:
    """Calculate today's P&L, today's trade count, and the current win streak."""
    trades = list(trades)
    todays_trades = [t for t in trades if t.date == today]
    return DailySnapshot(
        date=today,
        current_day_pnl=sum(t.net_pl for t in todays_trades),
        current_day_trades=len(todays_trades),
        win_streak=calculate_win_streak(trades),
    )


def evaluate_risk_alerts(
    trades: Iterable[TradeRecord],
    today: date,
    state: AlertState,
    limits: RiskLimits,
) -> tuple[list[RiskAlert], AlertState]:
    """Evaluate the daily loss and account drawdown thresholds.

    Alerts are edge-triggered. The daily loss alert fires at most once per
    calendar day, the drawdown alert at most once per session. The caller
    keeps the returned state and passes it to the next evaluation.

    Args:
        trades: The user's full trade collection.
        today: Current date.
        state: Suppression state from the previous evaluation.
        limits: Negative P&L thresholds.

    Returns:
        Tuple of (alerts fired now, updated state).
    """
    trades = list(trades)
    alerts: list[RiskAlert] = []
    snapshot = calculate_daily_snapshot(trades, today)
    total_net_pl = calculate_trade_stats(trades).total_net_pl

    daily_alert_date = state.daily_loss_alert_date
    drawdown_shown = state.drawdown_alert_shown

    if snapshot.current_day_pnl <= limits.daily_loss_limit and daily_alert_date != today:
        alerts.append(RiskAlert(
            kind="daily_loss_limit",
            message=(
                f"Daily loss limit reached ({limits.daily_loss_limit:.2f}). "
                "Consider stopping for the day and reviewing your plan."
            ),
            value=snapshot.current_day_pnl,
            threshold=limits.daily_loss_limit,
        ))
        daily_alert_date = today

    if total_net_pl <= limits.account_drawdown_limit and not drawdown_shown:
        alerts.append(RiskAlert(
            kind="account_drawdown_limit",
            message=(
                f"Account drawdown limit reached ({limits.account_drawdown_limit:.2f}). "
                "Reduce risk and take a break."
            ),
            value=total_net_pl,
            threshold=limits.account_drawdown_limit,
        ))
        drawdown_shown = True

    for alert in alerts:
        logger.warning("Risk alert %s: %.2f <= %.2f", alert.kind, alert.value, alert.threshold)

    new_state = AlertState(
        daily_loss_alert_date=daily_alert_date,
        drawdown_alert_shown=drawdown_shown,
    )
    return alerts, new_state
