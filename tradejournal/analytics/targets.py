"""Monthly target progress tracking."""

import logging
from datetime import date, datetime
from enum import Enum
from typing import Iterable, Optional

from tradejournal.analytics.ranges import filter_by_range, month_range
from tradejournal.analytics.stats import calculate_trade_stats
from tradejournal.db.repository import BaseTargetRepository
from tradejournal.models import MonthlyTarget, TradeRecord, YearTargetsSummary

logger = logging.getLogger(__name__)

DEFAULT_TARGETS = {
    "pnl_target": 1000.0,
    "trades_target": 20,
    "win_rate_target": 60.0,
}


class TargetStatus(str, Enum):
    """Lifecycle of a monthly target."""

    NO_TARGET = "no_target"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


def target_status(target: Optional[MonthlyTarget]) -> TargetStatus:
    """Get the status of a target, or NO_TARGET when there is none."""
    if target is None:
        return TargetStatus.NO_TARGET
    if target.is_completed:
        return TargetStatus.COMPLETED
    return TargetStatus.IN_PROGRESS


def goals_met(target: MonthlyTarget) -> bool:
    """True when all three progress fields meet their goals at once."""
    return (
        target.current_pnl >= target.pnl_target
        and target.current_trades >= target.trades_target
        and target.current_win_rate >= target.win_rate_target
    )


def recompute_progress(
    target: MonthlyTarget, trades: Iterable[TradeRecord], now: datetime
) -> MonthlyTarget:
    """Re-derive progress of a target from the month's trades.

    Stored progress values are ignored. completed_at is set the first time
    all goals are met and is never cleared here, even when a later
    recomputation finds the goals no longer met.

    Args:
        target: Target to recompute.
        trades: Trades of the owner; other months are filtered out.
        now: Current time, used for updated_at and completed_at.

    Returns:
        A new MonthlyTarget with fresh progress.
    """
    period = month_range(target.year, target.month)
    owned = (t for t in trades if t.owner_id == target.owner_id)
    stats = calculate_trade_stats(filter_by_range(owned, period))

    progress = target.model_copy(update={
        "current_pnl": stats.total_net_pl,
        "current_trades": stats.total_trades,
        "current_win_rate": stats.win_rate,
        "updated_at": now,
    })
    is_completed = goals_met(progress)

    completed_at = target.completed_at
    if is_completed and completed_at is None:
        completed_at = now

    return progress.model_copy(update={
        "is_completed": is_completed,
        "completed_at": completed_at,
    })


def reset_completion(target: MonthlyTarget, now: datetime) -> MonthlyTarget:
    """Clear the completion flag and timestamp of a target."""
    return target.model_copy(update={
        "is_completed": False,
        "completed_at": None,
        "updated_at": now,
    })


def summarize_year_targets(
    targets: Iterable[MonthlyTarget], year: int
) -> YearTargetsSummary:
    """Roll up all targets of a year into totals and progress percentages."""
    targets = [t for t in targets if t.year == year]
    count = len(targets)
    if count == 0:
        return YearTargetsSummary(year=year)

    total_target_pnl = sum(t.pnl_target for t in targets)
    total_current_pnl = sum(t.current_pnl for t in targets)
    total_target_trades = sum(t.trades_target for t in targets)
    total_current_trades = sum(t.current_trades for t in targets)
    completed = sum(1 for t in targets if t.is_completed)

    return YearTargetsSummary(
        year=year,
        total_targets=count,
        completed_targets=completed,
        completion_rate=completed / count * 100,
        total_target_pnl=total_target_pnl,
        total_current_pnl=total_current_pnl,
        total_target_trades=total_target_trades,
        total_current_trades=total_current_trades,
        average_win_rate_target=sum(t.win_rate_target for t in targets) / count,
        average_current_win_rate=sum(t.current_win_rate for t in targets) / count,
        pnl_progress=(
            total_current_pnl / total_target_pnl * 100 if total_target_pnl > 0 else 0.0
        ),
        trades_progress=(
            total_current_trades / total_target_trades * 100
            if total_target_trades > 0
            else 0.0
        ),
    )


class MonthlyTargetTracker:
    """Keeps stored monthly targets in step with the trade collection."""

    def __init__(self, repository: BaseTargetRepository, defaults: Optional[dict] = None):
        """Initialize the tracker.

        Args:
            repository: Target storage.
            defaults: Goals used when creating a missing current-month
                target. Falls back to DEFAULT_TARGETS.
        """
        self.repository = repository
        self.defaults = {**DEFAULT_TARGETS, **(defaults or {})}

    def get_or_create_current(self, owner_id: str, today: date) -> MonthlyTarget:
        """Get the target of the current month, creating it with defaults."""
        target = self.repository.get_target(owner_id, today.year, today.month)
        if target is not None:
            return target

        now = datetime.combine(today, datetime.min.time())
        new_target = MonthlyTarget(
            owner_id=owner_id,
            year=today.year,
            month=today.month,
            pnl_target=self.defaults["pnl_target"],
            trades_target=self.defaults["trades_target"],
            win_rate_target=self.defaults["win_rate_target"],
            created_at=now,
            updated_at=now,
        )
        target_id = self.repository.create_target(new_target)
        logger.info("Created default target for %s %s", owner_id, new_target.month_key)
        return new_target.model_copy(update={"id": target_id})

    def refresh(
        self,
        owner_id: str,
        year: int,
        month: int,
        trades: Iterable[TradeRecord],
        now: datetime,
    ) -> Optional[MonthlyTarget]:
        """Recompute and store progress of one month's target.

        Returns:
            The updated target, or None if the month has no target.
        """
        target = self.repository.get_target(owner_id, year, month)
        if target is None:
            return None

        updated = recompute_progress(target, trades, now)
        if updated.is_completed and not target.is_completed:
            logger.info("Target %s completed for %s", updated.month_key, owner_id)
        elif target.is_completed and not updated.is_completed:
            logger.info("Target %s no longer met for %s", updated.month_key, owner_id)

        return self.repository.update_target(
            target.id,
            current_pnl=updated.current_pnl,
            current_trades=updated.current_trades,
            current_win_rate=updated.current_win_rate,
            is_completed=updated.is_completed,
            completed_at=updated.completed_at,
            updated_at=updated.updated_at,
        )
