"""CLI commands for TradeJournal.

This package provides the command-line interface for TradeJournal,
including trade logging, analytics, monthly targets, and risk tools.
"""

from tradejournal.cli.main import cli, main

__all__ = ["cli", "main"]
