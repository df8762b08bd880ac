"""Monthly target commands for TradeJournal CLI.

Handles showing, setting, and resetting monthly goals and the yearly
roll-up of all targets.
"""

from datetime import date, datetime
from typing import Optional

import click
from pydantic import ValidationError
from rich.panel import Panel
from rich.table import Table

from tradejournal.cli.common import (
    console,
    format_money,
    get_config,
    get_data_store,
    get_owner_id,
    print_error,
)
from tradejournal.models import MonthlyTarget


def _progress_bar(current: float, target: float, width: int = 20) -> str:
    if target <= 0:
        ratio = 1.0 if current >= target else 0.0
    else:
        ratio = max(0.0, min(current / target, 1.0))
    filled = int(round(ratio * width))
    color = "green" if ratio >= 1 else "yellow" if ratio >= 0.5 else "red"
    return f"[{color}]{'█' * filled}[/{color}][dim]{'░' * (width - filled)}[/dim]"


def _render_target(target: MonthlyTarget, currency: str) -> None:
    from tradejournal.analytics import target_status

    status = target_status(target)
    status_text = {
        "completed": "[bold green]Completed[/bold green]",
        "in_progress": "[yellow]In progress[/yellow]",
    }.get(status.value, status.value)

    body = (
        f"Status:    {status_text}\n\n"
        f"P&L:       {_progress_bar(target.current_pnl, target.pnl_target)} "
        f"{format_money(target.current_pnl, currency)} / {currency}{target.pnl_target:,.2f}\n"
        f"Trades:    {_progress_bar(target.current_trades, target.trades_target)} "
        f"{target.current_trades} / {target.trades_target}\n"
        f"Win Rate:  {_progress_bar(target.current_win_rate, target.win_rate_target)} "
        f"{target.current_win_rate:.1f}% / {target.win_rate_target:.1f}%"
    )
    if target.completed_at:
        body += f"\n\n[dim]First completed {target.completed_at:%Y-%m-%d %H:%M}[/dim]"
        if not target.is_completed:
            body += "\n[dim]Goals are no longer met after later changes.[/dim]"

    console.print(Panel(
        body,
        title=f"[bold cyan]Target: {target.month_name}[/bold cyan]",
        border_style="cyan",
    ))


@click.group()
def target() -> None:
    """Track monthly P&L, trade count, and win rate goals.

    \b
    Examples:
      tradejournal target show
      tradejournal target set --pnl 1500 --trades 25 --win-rate 55
      tradejournal target year 2025
    """


@target.command("show")
@click.option("--year", type=int, default=None, help="Target year. Defaults to this year.")
@click.option("--month", type=click.IntRange(1, 12), default=None,
              help="Target month. Defaults to this month.")
def show(year: Optional[int], month: Optional[int]) -> None:
    """Show progress toward a monthly target.

    The current month's target is created with the configured defaults
    when it does not exist yet.
    """
    from tradejournal.analytics import MonthlyTargetTracker

    config = get_config()
    owner_id = get_owner_id(config)
    currency = config["journal"]["currency"]
    today = date.today()
    year = year or today.year
    month = month or today.month

    store = get_data_store()
    tracker = MonthlyTargetTracker(store, defaults=config["targets"])

    if (year, month) == (today.year, today.month):
        tracker.get_or_create_current(owner_id, today)

    updated = tracker.refresh(owner_id, year, month, store.list_trades(owner_id), datetime.now())
    if updated is None:
        console.print(Panel(
            f"[dim]No target set for {year}-{month:02d}[/dim]\n\n"
            f"Run [cyan]tradejournal target set --year {year} --month {month}[/cyan] to add one.",
            title="[bold]Monthly Target[/bold]",
            border_style="dim",
        ))
        return

    _render_target(updated, currency)


@target.command("set")
@click.option("--year", type=int, default=None, help="Target year. Defaults to this year.")
@click.option("--month", type=click.IntRange(1, 12), default=None,
              help="Target month. Defaults to this month.")
@click.option("--pnl", "pnl_target", type=float, default=None, help="Net P&L goal.")
@click.option("--trades", "trades_target", type=click.IntRange(min=0), default=None,
              help="Trade count goal.")
@click.option("--win-rate", "win_rate_target", type=click.FloatRange(0, 100), default=None,
              help="Win rate goal (%).")
def set_target(
    year: Optional[int],
    month: Optional[int],
    pnl_target: Optional[float],
    trades_target: Optional[int],
    win_rate_target: Optional[float],
) -> None:
    """Create or change a monthly target.

    Unspecified goals keep their current value, or the configured
    default for a new target.
    """
    from tradejournal.analytics import MonthlyTargetTracker

    config = get_config()
    owner_id = get_owner_id(config)
    defaults = config["targets"]
    today = date.today()
    now = datetime.now()
    year = year or today.year
    month = month or today.month

    goals = {
        key: value
        for key, value in (
            ("pnl_target", pnl_target),
            ("trades_target", trades_target),
            ("win_rate_target", win_rate_target),
        )
        if value is not None
    }

    store = get_data_store()
    existing = store.get_target(owner_id, year, month)
    try:
        if existing is None:
            store.create_target(MonthlyTarget(
                owner_id=owner_id,
                year=year,
                month=month,
                pnl_target=goals.get("pnl_target", defaults["pnl_target"]),
                trades_target=goals.get("trades_target", defaults["trades_target"]),
                win_rate_target=goals.get("win_rate_target", defaults["win_rate_target"]),
                created_at=now,
                updated_at=now,
            ))
        elif goals:
            store.update_target(existing.id, updated_at=now, **goals)
    except ValidationError as e:
        print_error("\n".join(f"{err['loc'][0]}: {err['msg']}" for err in e.errors()))
        raise SystemExit(1)

    tracker = MonthlyTargetTracker(store, defaults=defaults)
    updated = tracker.refresh(owner_id, year, month, store.list_trades(owner_id), now)
    _render_target(updated, config["journal"]["currency"])


@target.command("reset")
@click.option("--year", type=int, default=None, help="Target year. Defaults to this year.")
@click.option("--month", type=click.IntRange(1, 12), default=None,
              help="Target month. Defaults to this month.")
def reset(year: Optional[int], month: Optional[int]) -> None:
    """Clear the recorded completion of a monthly target."""
    from tradejournal.analytics import reset_completion

    config = get_config()
    owner_id = get_owner_id(config)
    today = date.today()
    year = year or today.year
    month = month or today.month

    store = get_data_store()
    existing = store.get_target(owner_id, year, month)
    if existing is None:
        print_error(f"No target set for {year}-{month:02d}")
        raise SystemExit(1)

    cleared = reset_completion(existing, datetime.now())
    store.update_target(
        existing.id,
        is_completed=cleared.is_completed,
        completed_at=cleared.completed_at,
        updated_at=cleared.updated_at,
    )
    console.print(f"[green]✓[/green] Completion cleared for {existing.month_name}")


@target.command("year")
@click.argument("year", type=int, required=False)
def year_summary(year: Optional[int]) -> None:
    """Show all monthly targets of a year with totals."""
    from tradejournal.analytics import MonthlyTargetTracker, summarize_year_targets

    config = get_config()
    owner_id = get_owner_id(config)
    currency = config["journal"]["currency"]
    year = year or date.today().year
    now = datetime.now()

    store = get_data_store()
    tracker = MonthlyTargetTracker(store, defaults=config["targets"])
    trades = store.list_trades(owner_id)
    targets = [
        tracker.refresh(owner_id, t.year, t.month, trades, now)
        for t in sorted(store.list_targets(owner_id, year), key=lambda t: t.month)
    ]

    if not targets:
        console.print(Panel(
            f"[dim]No targets set for {year}[/dim]",
            title="[bold]Yearly Targets[/bold]",
            border_style="dim",
        ))
        return

    table = Table(title=f"Targets {year}", show_header=True, header_style="bold cyan")
    table.add_column("Month", style="bold")
    table.add_column("P&L", justify="right")
    table.add_column("Trades", justify="right")
    table.add_column("Win Rate", justify="right")
    table.add_column("Done", justify="center")

    for t in targets:
        table.add_row(
            t.month_name,
            f"{format_money(t.current_pnl, currency)} / {currency}{t.pnl_target:,.0f}",
            f"{t.current_trades} / {t.trades_target}",
            f"{t.current_win_rate:.1f}% / {t.win_rate_target:.0f}%",
            "[green]✓[/green]" if t.is_completed else "[dim]-[/dim]",
        )
    console.print(table)

    totals = summarize_year_targets(targets, year)
    console.print(
        f"\n[bold]Completed:[/bold] {totals.completed_targets}/{totals.total_targets} "
        f"({totals.completion_rate:.0f}%)  "
        f"[bold]P&L progress:[/bold] {totals.pnl_progress:.1f}%  "
        f"[bold]Trades progress:[/bold] {totals.trades_progress:.1f}%"
    )
