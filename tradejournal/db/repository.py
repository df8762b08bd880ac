"""Repository interfaces consumed by the analytics core."""

from abc import ABC, abstractmethod
from typing import Optional

from tradejournal.models import MonthlyTarget, TradeRecord


class BaseTradeRepository(ABC):
    """Abstract trade storage.

    All implementations must provide trade CRUD scoped by owner.
    """

    @abstractmethod
    def list_trades(self, owner_id: str) -> list[TradeRecord]:
        """Get all trades of an owner, most recent date first."""
        pass

    @abstractmethod
    def get_trade(self, trade_id: int) -> Optional[TradeRecord]:
        """Get a trade by ID, or None if it does not exist."""
        pass

    @abstractmethod
    def create_trade(self, trade: TradeRecord) -> int:
        """Store a new trade and return its assigned ID."""
        pass

    @abstractmethod
    def update_trade(self, trade_id: int, **fields) -> TradeRecord:
        """Replace editable fields of a trade and return the updated record.

        Raises:
            RecordNotFoundError: If the trade does not exist.
        """
        pass

    @abstractmethod
    def delete_trade(self, trade_id: int) -> None:
        """Delete a trade.

        Raises:
            RecordNotFoundError: If the trade does not exist.
        """
        pass


class BaseTargetRepository(ABC):
    """Abstract monthly target storage."""

    @abstractmethod
    def get_target(self, owner_id: str, year: int, month: int) -> Optional[MonthlyTarget]:
        """Get the target of one month, or None if none is set."""
        pass

    @abstractmethod
    def create_target(self, target: MonthlyTarget) -> int:
        """Store a new target and return its assigned ID.

        Raises:
            DuplicateTargetError: If the month already has a target.
        """
        pass

    @abstractmethod
    def update_target(self, target_id: int, **fields) -> MonthlyTarget:
        """Replace fields of a target and return the updated record.

        Raises:
            RecordNotFoundError: If the target does not exist.
        """
        pass

    @abstractmethod
    def list_targets(self, owner_id: str, year: Optional[int] = None) -> list[MonthlyTarget]:
        """Get targets of an owner, optionally limited to one year."""
        pass
