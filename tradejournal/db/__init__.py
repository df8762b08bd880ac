"""Persistence layer for TradeJournal."""

from tradejournal.db.repository import BaseTargetRepository, BaseTradeRepository
from tradejournal.db.store import DataStore

__all__ = ["BaseTargetRepository", "BaseTradeRepository", "DataStore"]
