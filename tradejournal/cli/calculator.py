"""Position sizing commands for TradeJournal CLI.

Handles the position size calculator and saved risk profiles.
"""

from typing import Optional

import click
from pydantic import ValidationError
from rich.panel import Panel
from rich.table import Table

from tradejournal.cli.common import (
    console,
    get_config,
    get_data_store,
    get_owner_id,
    print_error,
)
from tradejournal.errors import InvalidInputError, RecordNotFoundError


@click.command()
@click.option("-b", "--balance", "account_balance", type=float, default=None,
              help="Account balance. Defaults to the configured balance.")
@click.option("-r", "--risk", "risk_percent", type=float, default=None,
              help="Risk per trade in percent. Defaults to the configured value.")
@click.option("--sl", "stop_loss", type=float, required=True, help="Stop loss distance (pips).")
@click.option("--tp", "take_profit", type=float, default=None, help="Take profit distance (pips).")
@click.option("--pair", default=None, help="Instrument to look up the pip value for (e.g. XAUUSD).")
@click.option("--pip-value", type=float, default=None, help="Pip value per lot, overrides --pair.")
def size(
    account_balance: Optional[float],
    risk_percent: Optional[float],
    stop_loss: float,
    take_profit: Optional[float],
    pair: Optional[str],
    pip_value: Optional[float],
) -> None:
    """Calculate the position size for a fixed-risk trade.

    Lot size = risk amount / (stop loss distance x pip value).

    \b
    Examples:
      tradejournal size --pair XAUUSD --sl 50
      tradejournal size -b 10000 -r 2 --sl 50 --pip-value 0.1 --tp 100
    """
    from tradejournal.analytics import calculate_position_size, pip_value_for

    config = get_config()
    calculator = config["calculator"]
    currency = config["journal"]["currency"]

    if account_balance is None:
        account_balance = calculator["account_balance"]
    if risk_percent is None:
        risk_percent = calculator["risk_percent"]

    try:
        if pip_value is None:
            if pair is None:
                raise InvalidInputError(["Pass --pair or --pip-value"])
            pip_value = pip_value_for(pair)
        result = calculate_position_size(
            account_balance, risk_percent, stop_loss, pip_value, take_profit
        )
    except InvalidInputError as e:
        print_error("\n".join(e.problems))
        raise SystemExit(1)

    body = (
        f"[bold]Position size:  [cyan]{result.position_size:.4f} lots[/cyan][/bold]\n\n"
        f"Risk amount:    [red]{currency}{result.risk_amount:,.2f}[/red]"
        f"  [dim]({risk_percent}% of {currency}{account_balance:,.2f})[/dim]\n"
        f"Pip value:      {currency}{result.pip_value} per pip\n"
        f"Stop loss:      {result.stop_loss_distance:g} pips"
    )
    if result.potential_profit is not None:
        body += (
            f"\nTake profit:    {result.take_profit_distance:g} pips\n"
            f"Potential gain: [green]{currency}{result.potential_profit:,.2f}[/green]\n"
            f"Risk:Reward:    1:{result.risk_reward_ratio:.2f}"
        )

    console.print(Panel(
        body,
        title=f"[bold cyan]Position Size{f' ({pair.upper()})' if pair else ''}[/bold cyan]",
        border_style="cyan",
    ))


@click.group()
def profile() -> None:
    """Manage saved risk profiles.

    \b
    Examples:
      tradejournal profile save challenge -b 5000 -r 1 --reward 2 --trades 3
      tradejournal profile list
      tradejournal profile show challenge
    """


@profile.command("save")
@click.argument("name")
@click.option("-b", "--balance", "account_balance", type=float, default=None, help="Account balance.")
@click.option("-r", "--risk", "risk_percent", type=float, default=None, help="Risk per trade (%).")
@click.option("--reward", "reward_ratio", type=float, default=None, help="Reward multiple of risk.")
@click.option("--trades", "trades_per_day", type=int, default=None, help="Trades per day.")
def save_profile(
    name: str,
    account_balance: Optional[float],
    risk_percent: Optional[float],
    reward_ratio: Optional[float],
    trades_per_day: Optional[int],
) -> None:
    """Save a risk profile. Missing values come from the config."""
    from tradejournal.models import RiskProfile

    config = get_config()
    calculator = config["calculator"]

    try:
        risk_profile = RiskProfile(
            owner_id=get_owner_id(config),
            name=name,
            account_balance=account_balance if account_balance is not None else calculator["account_balance"],
            risk_percent=risk_percent if risk_percent is not None else calculator["risk_percent"],
            reward_ratio=reward_ratio if reward_ratio is not None else calculator["reward_ratio"],
            trades_per_day=trades_per_day if trades_per_day is not None else calculator["trades_per_day"],
        )
    except ValidationError as e:
        print_error("\n".join(f"{err['loc'][0]}: {err['msg']}" for err in e.errors()))
        raise SystemExit(1)

    get_data_store().save_risk_profile(risk_profile)
    console.print(f"[green]✓[/green] Profile [bold]{name}[/bold] saved")
    _render_projection(risk_profile, config["journal"]["currency"])


def _render_projection(risk_profile, currency: str) -> None:
    from tradejournal.analytics import project_risk_profile

    projection = project_risk_profile(risk_profile)
    console.print(Panel(
        f"Balance:           {currency}{risk_profile.account_balance:,.2f}\n"
        f"Risk per trade:    [red]{currency}{projection.risk_amount:,.2f}[/red]"
        f"  [dim]({risk_profile.risk_percent}%)[/dim]\n"
        f"Reward per trade:  [green]{currency}{projection.reward_amount:,.2f}[/green]"
        f"  [dim](1:{risk_profile.reward_ratio:g})[/dim]\n"
        f"Daily loss limit:  [red]{currency}{projection.daily_loss_limit:,.2f}[/red]\n"
        f"Monthly projection: {currency}{projection.monthly_projection:,.2f}"
        f"  [dim]({risk_profile.trades_per_day} trades/day, 50% wins)[/dim]",
        title=f"[bold cyan]Risk Profile: {risk_profile.name}[/bold cyan]",
        border_style="cyan",
    ))


@profile.command("list")
def list_profiles() -> None:
    """List saved risk profiles."""
    config = get_config()
    currency = config["journal"]["currency"]
    profiles = get_data_store().list_risk_profiles(get_owner_id(config))

    if not profiles:
        console.print(Panel(
            "[dim]No saved profiles[/dim]",
            title="[bold]Risk Profiles[/bold]",
            border_style="dim",
        ))
        return

    table = Table(title="Risk Profiles", show_header=True, header_style="bold cyan")
    table.add_column("Name", style="bold")
    table.add_column("Balance", justify="right")
    table.add_column("Risk %", justify="right")
    table.add_column("R:R", justify="right")
    table.add_column("Trades/Day", justify="right")

    for p in profiles:
        table.add_row(
            p.name,
            f"{currency}{p.account_balance:,.2f}",
            f"{p.risk_percent:g}%",
            f"1:{p.reward_ratio:g}",
            str(p.trades_per_day),
        )
    console.print(table)


@profile.command("show")
@click.argument("name")
def show_profile(name: str) -> None:
    """Show the projection of a saved risk profile."""
    config = get_config()
    risk_profile = get_data_store().get_risk_profile(get_owner_id(config), name)
    if risk_profile is None:
        print_error(f"Risk profile '{name}' not found")
        raise SystemExit(1)
    _render_projection(risk_profile, config["journal"]["currency"])


@profile.command("delete")
@click.argument("name")
def delete_profile(name: str) -> None:
    """Delete a saved risk profile."""
    config = get_config()
    try:
        get_data_store().delete_risk_profile(get_owner_id(config), name)
    except RecordNotFoundError as e:
        print_error(str(e))
        raise SystemExit(1)
    console.print(f"[green]✓[/green] Profile [bold]{name}[/bold] deleted")
