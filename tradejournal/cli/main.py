"""Main CLI entry point for TradeJournal.

This module provides the main click group and lazy loading
of command modules to keep startup fast.
"""

import logging

import click


class LazyGroup(click.Group):
    """A click Group that lazily loads commands.

    Command modules are only imported when they are invoked.
    """

    def __init__(self, *args, lazy_subcommands: dict[str, str] | None = None, **kwargs):
        """Initialize the lazy group.

        Args:
            lazy_subcommands: Mapping of command names to module paths.
        """
        super().__init__(*args, **kwargs)
        self._lazy_subcommands = lazy_subcommands or {}

    def list_commands(self, ctx: click.Context) -> list[str]:
        """List all available commands."""
        base = super().list_commands(ctx)
        lazy = list(self._lazy_subcommands.keys())
        return sorted(set(base + lazy))

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        """Get a command by name, lazily loading if needed."""
        if cmd_name in self.commands:
            return self.commands[cmd_name]

        if cmd_name in self._lazy_subcommands:
            return self._lazy_load(cmd_name)

        return None

    def _lazy_load(self, cmd_name: str) -> click.Command:
        """Lazily load a command from its module path."""
        import importlib

        module_path = self._lazy_subcommands[cmd_name]
        module = importlib.import_module(module_path)

        cmd = None
        for attr_name in dir(module):
            attr = getattr(module, attr_name)
            if isinstance(attr, click.Command) and attr.name == cmd_name:
                cmd = attr
                break

        if cmd is None:
            raise click.ClickException(f"Could not find command '{cmd_name}' in {module_path}")

        self.add_command(cmd)
        return cmd


# Define lazy subcommands mapping
LAZY_SUBCOMMANDS = {
    "init": "tradejournal.cli.journal",
    "add": "tradejournal.cli.journal",
    "trades": "tradejournal.cli.journal",
    "edit": "tradejournal.cli.journal",
    "delete": "tradejournal.cli.journal",
    "summary": "tradejournal.cli.analytics",
    "history": "tradejournal.cli.analytics",
    "target": "tradejournal.cli.targets",
    "size": "tradejournal.cli.calculator",
    "profile": "tradejournal.cli.calculator",
}


CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


@click.group(cls=LazyGroup, lazy_subcommands=LAZY_SUBCOMMANDS, context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="tradejournal")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable debug logging.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """TradeJournal - trading journal analytics from the command line.

    Log your trades, then review performance, track monthly goals,
    size positions, and watch your daily risk limits.

    \b
    Quick Start:
      tradejournal init                                  # Create config and database
      tradejournal add -s XAUUSD -t Buy --pl 120 --fees 4
      tradejournal summary                               # Portfolio and today's risk
      tradejournal history --preset month                # Historical analytics
    """
    from tradejournal.cli.common import get_config

    ctx.ensure_object(dict)

    if verbose:
        level = logging.DEBUG
    else:
        config = get_config()
        level = getattr(logging, str(config["logging"]["level"]).upper(), logging.WARNING)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
