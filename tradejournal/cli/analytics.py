"""Analytics commands for TradeJournal CLI.

Handles the portfolio summary with daily risk alerts and the
historical analytics report.
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
from tradejournal.models import PeriodStats, StatsSummary


def _stats_text(stats: StatsSummary, currency: str) -> str:
    return (
        f"Trades:        {stats.total_trades}"
        f"  [dim](W {stats.winning_trades} / L {stats.losing_trades} / "
        f"BE {stats.break_even_trades})[/dim]\n"
        f"Net P&L:       {format_money(stats.total_net_pl, currency)}\n"
        f"Fees:          {currency}{stats.total_fees:,.2f}\n"
        f"Win Rate:      {stats.win_rate:.1f}%\n"
        f"Average:       {format_money(stats.average_net_pl, currency)}\n"
        f"Best / Worst:  {format_money(stats.best_trade, currency)} / "
        f"{format_money(stats.worst_trade, currency)}"
    )


def _periods_table(title: str, periods: list[PeriodStats], currency: str) -> Table:
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Period", style="bold")
    table.add_column("Trades", justify="right")
    table.add_column("P&L", justify="right")
    table.add_column("Win Rate", justify="right")

    for period in periods:
        table.add_row(
            period.label,
            str(period.trades),
            format_money(period.pnl, currency),
            f"{period.win_rate:.1f}%" if period.trades else "[dim]-[/dim]",
        )
    return table


@click.command()
@click.option("--new-session", is_flag=True, default=False,
              help="Reset alert suppression so alerts can fire again.")
@click.option("--months", default=6, type=click.IntRange(1, 36), show_default=True,
              help="Number of recent months to show.")
def summary(new_session: bool, months: int) -> None:
    """Show portfolio statistics, today's activity, and risk alerts.

    Alerts fire once when a limit is crossed: the daily loss alert once
    per day, the account drawdown alert once per session.

    \b
    Examples:
      tradejournal summary
      tradejournal summary --new-session
    """
    from tradejournal.analytics import (
        calculate_daily_snapshot,
        calculate_trade_stats,
        evaluate_risk_alerts,
        last_n_months,
    )
    from tradejournal.models import AlertState, RiskLimits

    config = get_config()
    owner_id = get_owner_id(config)
    currency = config["journal"]["currency"]
    today = date.today()

    try:
        limits = RiskLimits(**config["risk"])
    except ValidationError:
        print_error("Risk limits in config must be negative numbers.")
        raise SystemExit(1)

    store = get_data_store()
    all_trades = store.list_trades(owner_id)
    stats = calculate_trade_stats(all_trades)
    snapshot = calculate_daily_snapshot(all_trades, today)

    console.print(Panel(
        _stats_text(stats, currency),
        title="[bold cyan]Portfolio Summary[/bold cyan]",
        border_style="cyan",
    ))

    streak_style = "green" if snapshot.win_streak > 0 else "dim"
    console.print(Panel(
        f"Today's P&L:   {format_money(snapshot.current_day_pnl, currency)}\n"
        f"Trades today:  {snapshot.current_day_trades}\n"
        f"Win streak:    [{streak_style}]{snapshot.win_streak}[/{streak_style}]",
        title=f"[bold]Today ({today.isoformat()})[/bold]",
        border_style="blue",
    ))

    if all_trades:
        console.print(_periods_table(
            f"Last {months} Months", last_n_months(all_trades, today, months), currency
        ))

    state = AlertState.new_session() if new_session else store.get_alert_state(owner_id)
    alerts, new_state = evaluate_risk_alerts(all_trades, today, state, limits)
    store.save_alert_state(owner_id, new_state)

    for alert in alerts:
        console.print(Panel(
            f"[bold red]{alert.message}[/bold red]\n\n"
            f"[dim]Current: {currency}{alert.value:,.2f} | "
            f"Limit: {currency}{alert.threshold:,.2f}[/dim]",
            title="[bold red]Risk Alert[/bold red]",
            border_style="red",
        ))


@click.command()
@click.option("-t", "--timeframe", type=click.Choice(["daily", "weekly", "monthly", "yearly"]),
              default="monthly", show_default=True, help="Report granularity.")
@click.option("-p", "--preset",
              type=click.Choice(["today", "week", "month", "quarter", "year", "all"]),
              default=None, help="Named date range ending today.")
@click.option("--from", "from_date", type=DATE, default=None, help="First date (YYYY-MM-DD).")
@click.option("--to", "to_date", type=DATE, default=None, help="Last date (YYYY-MM-DD).")
@click.option("-a", "--account", "account_id", default=None, help="Only this sub-account.")
def history(
    timeframe: str,
    preset: Optional[str],
    from_date: Optional[date],
    to_date: Optional[date],
    account_id: Optional[str],
) -> None:
    """Show historical analytics for a date range.

    Without --from/--to the range comes from --preset (default: month).
    Yearly reports add a 12-month breakdown of the starting year.

    \b
    Examples:
      tradejournal history --preset quarter
      tradejournal history -t yearly --from 2025-01-01 --to 2025-12-31
      tradejournal history -t weekly --preset month -a funded
    """
    from tradejournal.analytics import generate_historical_analytics, preset_date_range
    from tradejournal.models import DateRange

    config = get_config()
    owner_id = get_owner_id(config)
    currency = config["journal"]["currency"]
    today = date.today()

    if from_date or to_date:
        date_range = DateRange(start=from_date or today, end=to_date or today, preset="custom")
    else:
        date_range = preset_date_range(preset or "month", today)

    if date_range.start > date_range.end:
        print_error("--from must not be after --to")
        raise SystemExit(1)

    store = get_data_store()
    report = generate_historical_analytics(
        owner_id, store.list_trades(owner_id), timeframe, date_range, account_id=account_id
    )

    console.print(Panel(
        _stats_text(report.stats, currency)
        + f"\n\nTrading days:  {report.trading_days}"
        f"  [dim]({report.profitable_days} profitable)[/dim]\n"
        f"Trades / day:  {report.average_trades_per_day:.2f}\n"
        f"Max drawdown:  [red]{currency}{report.max_drawdown:,.2f}[/red]",
        title=(
            f"[bold cyan]History {date_range.start.isoformat()} → "
            f"{date_range.end.isoformat()} ({timeframe})[/bold cyan]"
        ),
        border_style="cyan",
    ))

    if report.period_breakdown:
        console.print(_periods_table("Breakdown", report.period_breakdown, currency))

    if report.monthly_breakdown is not None:
        console.print(_periods_table(
            f"Months of {date_range.start.year}", report.monthly_breakdown, currency
        ))

    if report.top_symbols:
        table = Table(title="Top Symbols", show_header=True, header_style="bold cyan")
        table.add_column("#", justify="right", style="dim")
        table.add_column("Symbol", style="bold")
        table.add_column("Trades", justify="right")
        table.add_column("Net P&L", justify="right")
        table.add_column("Win Rate", justify="right")
        for rank, perf in enumerate(report.top_symbols, start=1):
            table.add_row(
                str(rank),
                perf.symbol,
                str(perf.trade_count),
                format_money(perf.net_pl, currency),
                f"{perf.win_rate:.1f}%",
            )
        console.print(table)
