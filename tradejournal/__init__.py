"""TradeJournal - trading journal analytics and risk tooling."""

__version__ = "0.1.0"
