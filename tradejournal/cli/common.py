"""Shared helpers for TradeJournal CLI commands."""

import click
from rich.console import Console
from rich.panel import Panel

console = Console()


def get_config() -> dict:
    """Load configuration, exiting with an error panel if it is invalid."""
    from tradejournal.config import load_config
    from tradejournal.errors import ConfigError

    try:
        return load_config()
    except ConfigError as e:
        print_error(str(e))
        raise SystemExit(1)


def get_data_store():
    """Get the data store instance."""
    from tradejournal.config import get_db_path
    from tradejournal.db.store import DataStore

    return DataStore(get_db_path())


def get_owner_id(config: dict) -> str:
    return str(config["journal"]["owner_id"])


def print_error(message: str) -> None:
    """Render an error panel."""
    console.print(Panel(
        f"[red]{message}[/red]",
        title="[bold red]Error[/bold red]",
        border_style="red",
    ))


def format_money(amount: float, currency: str = "$", signed: bool = True) -> str:
    """Format an amount with sign and color markup."""
    color = "green" if amount > 0 else "red" if amount < 0 else "white"
    sign = "+" if signed and amount > 0 else ""
    if amount < 0:
        return f"[{color}]-{currency}{abs(amount):,.2f}[/{color}]"
    return f"[{color}]{sign}{currency}{amount:,.2f}[/{color}]"


class DateParam(click.ParamType):
    """Click parameter accepting YYYY-MM-DD dates."""

    name = "date"

    def convert(self, value, param, ctx):
        from datetime import date

        if isinstance(value, date):
            return value
        try:
            return date.fromisoformat(value)
        except ValueError:
            self.fail(f"'{value}' is not a valid YYYY-MM-DD date", param, ctx)


DATE = DateParam()
