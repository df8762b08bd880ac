"""Trade journal commands for TradeJournal CLI.

Handles setup, logging trades, listing, editing, and deleting them.
"""

from datetime import date
from typing import Optional

import click
from pydantic import ValidationError
from rich.panel import Panel
from rich.table import Table

from tradejournal.cli.common import (
    DATE,
    console,
    format_money,
    get_config,
    get_data_store,
    get_owner_id,
    print_error,
)

DIRECTION_CHOICES = click.Choice(["Buy", "Sell", "Long", "Short"], case_sensitive=False)


def _validation_message(error: ValidationError) -> str:
    return "\n".join(
        f"{'.'.join(str(p) for p in err['loc']) or 'trade'}: {err['msg']}"
        for err in error.errors()
    )


@click.command()
def init() -> None:
    """Create the config file and database.

    \b
    Examples:
      tradejournal init
    """
    from tradejournal.config import create_template_config, get_db_path

    config_path = create_template_config()
    store = get_data_store()
    counts = store.get_stats()

    console.print(Panel(
        f"Config:   [cyan]{config_path}[/cyan]\n"
        f"Database: [cyan]{get_db_path()}[/cyan]\n"
        f"Tables:   {', '.join(store.get_tables())}\n"
        f"Records:  {', '.join(f'{table} {count}' for table, count in counts.items())}",
        title="[bold green]TradeJournal ready[/bold green]",
        border_style="green",
    ))


@click.command()
@click.option("-s", "--symbol", required=True, help="Instrument symbol (e.g. XAUUSD).")
@click.option("-t", "--type", "direction", required=True, type=DIRECTION_CHOICES,
              help="Trade direction: Buy/Sell or Long/Short.")
@click.option("--pl", "gross_pl", required=True, type=float, help="Gross P&L before fees.")
@click.option("--fees", default=0.0, type=float, show_default=True, help="Trading fees.")
@click.option("--entry", "entry_price", default=0.0, type=float, help="Entry price (informational).")
@click.option("--exit", "exit_price", default=0.0, type=float, help="Exit price (informational).")
@click.option("-d", "--date", "trade_date", type=DATE, default=None,
              help="Trade date (YYYY-MM-DD). Defaults to today.")
@click.option("-a", "--account", "account_id", default=None, help="Sub-account name.")
@click.option("-n", "--notes", default=None, help="Free-text notes.")
def add(
    symbol: str,
    direction: str,
    gross_pl: float,
    fees: float,
    entry_price: float,
    exit_price: float,
    trade_date: Optional[date],
    account_id: Optional[str],
    notes: Optional[str],
) -> None:
    """Log a trade.

    P&L is entered directly; entry and exit prices are kept for
    reference only. Net P&L is P&L minus fees.

    \b
    Examples:
      tradejournal add -s XAUUSD -t Buy --pl 120 --fees 4
      tradejournal add -s EURUSD -t Sell --pl -35 -d 2025-03-14 -a funded
    """
    from tradejournal.models import TradeRecord

    config = get_config()
    owner_id = get_owner_id(config)
    currency = config["journal"]["currency"]

    try:
        trade = TradeRecord(
            owner_id=owner_id,
            account_id=account_id,
            date=trade_date or date.today(),
            symbol=symbol,
            direction=direction,
            gross_pl=gross_pl,
            fees=fees,
            entry_price=entry_price,
            exit_price=exit_price,
            notes=notes,
        )
    except ValidationError as e:
        print_error(_validation_message(e))
        raise SystemExit(1)

    store = get_data_store()
    trade_id = store.create_trade(trade)

    console.print(
        f"[green]✓[/green] Trade [bold]#{trade_id}[/bold] logged: "
        f"{trade.symbol} {trade.direction.value} on {trade.date.isoformat()}, "
        f"net {format_money(trade.net_pl, currency)}"
    )


@click.command()
@click.option("--from", "from_date", type=DATE, default=None, help="First date (YYYY-MM-DD).")
@click.option("--to", "to_date", type=DATE, default=None, help="Last date (YYYY-MM-DD).")
@click.option("-s", "--symbol", default=None, help="Only this symbol.")
@click.option("-a", "--account", "account_id", default=None, help="Only this sub-account.")
@click.option("--limit", default=50, type=int, show_default=True, help="Maximum rows to show.")
def trades(
    from_date: Optional[date],
    to_date: Optional[date],
    symbol: Optional[str],
    account_id: Optional[str],
    limit: int,
) -> None:
    """List logged trades, newest first.

    \b
    Examples:
      tradejournal trades
      tradejournal trades --from 2025-01-01 --symbol xauusd
    """
    from tradejournal.analytics import calculate_trade_stats, filter_by_account

    config = get_config()
    currency = config["journal"]["currency"]
    store = get_data_store()

    rows = filter_by_account(store.list_trades(get_owner_id(config)), account_id)
    if from_date:
        rows = [t for t in rows if t.date >= from_date]
    if to_date:
        rows = [t for t in rows if t.date <= to_date]
    if symbol:
        rows = [t for t in rows if t.symbol == symbol.strip().upper()]

    if not rows:
        console.print(Panel(
            "[dim]No trades found[/dim]",
            title="[bold]Trades[/bold]",
            border_style="dim",
        ))
        return

    table = Table(title="Trades", show_header=True, header_style="bold cyan")
    table.add_column("ID", justify="right", style="dim")
    table.add_column("Date", style="bold")
    table.add_column("Symbol")
    table.add_column("Type")
    table.add_column("P&L", justify="right")
    table.add_column("Fees", justify="right")
    table.add_column("Net", justify="right")
    table.add_column("Account")
    table.add_column("Notes", max_width=30)

    for trade in rows[:limit]:
        table.add_row(
            str(trade.id),
            trade.date.isoformat(),
            trade.symbol,
            trade.direction.value,
            f"{trade.gross_pl:,.2f}",
            f"{trade.fees:,.2f}",
            format_money(trade.net_pl, currency),
            trade.account_id or "-",
            (trade.notes[:27] + "...") if trade.notes and len(trade.notes) > 30 else (trade.notes or "-"),
        )

    console.print(table)

    stats = calculate_trade_stats(rows)
    console.print(
        f"\n[dim]{stats.total_trades} trades | "
        f"Net {currency}{stats.total_net_pl:,.2f} | "
        f"Win rate {stats.win_rate:.1f}%[/dim]"
    )
    if len(rows) > limit:
        console.print(f"[dim]Showing {limit} of {len(rows)} trades[/dim]")


@click.command()
@click.argument("trade_id", type=int)
@click.option("-s", "--symbol", default=None, help="New symbol.")
@click.option("-t", "--type", "direction", type=DIRECTION_CHOICES, default=None, help="New direction.")
@click.option("--pl", "gross_pl", type=float, default=None, help="New gross P&L.")
@click.option("--fees", type=float, default=None, help="New fees.")
@click.option("--entry", "entry_price", type=float, default=None, help="New entry price.")
@click.option("--exit", "exit_price", type=float, default=None, help="New exit price.")
@click.option("-d", "--date", "trade_date", type=DATE, default=None, help="New date.")
@click.option("-a", "--account", "account_id", default=None, help="New sub-account.")
@click.option("-n", "--notes", default=None, help="New notes.")
@click.option("--clear-notes", is_flag=True, default=False, help="Remove the notes.")
@click.option("--clear-account", is_flag=True, default=False,
              help="Remove the sub-account.")
def edit(trade_id: int, clear_notes: bool, clear_account: bool, **options) -> None:
    """Edit fields of a logged trade.

    \b
    Examples:
      tradejournal edit 12 --pl 140 --fees 5
      tradejournal edit 12 --clear-account
    """
    from tradejournal.errors import RecordNotFoundError

    if (clear_notes and options["notes"] is not None) or (
        clear_account and options["account_id"] is not None
    ):
        print_error("Pass either a new value or the matching --clear option, not both.")
        raise SystemExit(1)

    renames = {"trade_date": "date"}
    fields = {
        renames.get(name, name): value
        for name, value in options.items()
        if value is not None
    }
    if clear_notes:
        fields["notes"] = None
    if clear_account:
        fields["account_id"] = None
    if not fields:
        print_error("Nothing to change. Pass at least one option.")
        raise SystemExit(1)

    config = get_config()
    store = get_data_store()

    existing = store.get_trade(trade_id)
    if existing is None or existing.owner_id != get_owner_id(config):
        print_error(f"Trade {trade_id} not found")
        raise SystemExit(1)

    try:
        updated = store.update_trade(trade_id, **fields)
    except ValidationError as e:
        print_error(_validation_message(e))
        raise SystemExit(1)
    except RecordNotFoundError as e:
        print_error(str(e))
        raise SystemExit(1)

    console.print(
        f"[green]✓[/green] Trade [bold]#{trade_id}[/bold] updated: net "
        f"{format_money(updated.net_pl, config['journal']['currency'])}"
    )


@click.command()
@click.argument("trade_id", type=int)
@click.option("-y", "--yes", is_flag=True, default=False, help="Skip confirmation.")
def delete(trade_id: int, yes: bool) -> None:
    """Delete a logged trade.

    \b
    Examples:
      tradejournal delete 12
    """
    config = get_config()
    store = get_data_store()

    trade = store.get_trade(trade_id)
    if trade is None or trade.owner_id != get_owner_id(config):
        print_error(f"Trade {trade_id} not found")
        raise SystemExit(1)

    if not yes:
        click.confirm(
            f"Delete trade #{trade_id} ({trade.symbol} on {trade.date.isoformat()})?",
            abort=True,
        )

    store.delete_trade(trade_id)
    console.print(f"[green]✓[/green] Trade [bold]#{trade_id}[/bold] deleted")
