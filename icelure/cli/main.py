"""Main CLI entry point for Ice Lure Notes.

This module provides the main click group. Command modules are only
imported when one of their commands is invoked.
"""

from pathlib import Path
from typing import Optional

import click


class LazyGroup(click.Group):
    """A click Group that lazily loads commands."""

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


LAZY_SUBCOMMANDS = {
    # Journal
    "add": "icelure.cli.journal",
    "list": "icelure.cli.journal",
    "show": "icelure.cli.journal",
    "delete": "icelure.cli.journal",
    # Statistics
    "baits": "icelure.cli.baits",
    "bait": "icelure.cli.baits",
    "results": "icelure.cli.baits",
    # Settings
    "export": "icelure.cli.settings",
    "info": "icelure.cli.settings",
    "reset": "icelure.cli.settings",
}


CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


@click.group(cls=LazyGroup, lazy_subcommands=LAZY_SUBCOMMANDS, context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="icelure")
@click.option(
    "--config", "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Path to config.toml (default: ~/.config/icelure/config.toml).",
)
@click.option(
    "--db", "db_path",
    type=click.Path(path_type=Path, dir_okay=False),
    envvar="ICELURE_DB",
    default=None,
    help="Path to the journal database (overrides the config file).",
)
@click.option("-v", "--verbose", is_flag=True, help="Show debug logging.")
@click.pass_context
def cli(
    ctx: click.Context,
    config_path: Optional[Path],
    db_path: Optional[Path],
    verbose: bool,
) -> None:
    """Ice Lure Notes - track which ice-fishing baits actually work.

    Log each trip with the bait, color, depth and result, then see your
    baits ranked by average result.

    \b
    Quick Start:
      icelure add -t Jig -c Red -d 2.5 -r good   # Log a trip
      icelure list                               # Show the journal
      icelure baits                              # Rank your baits
      icelure export                             # Write a CSV file
    """
    from icelure.cli.common import get_config, setup_logging

    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    ctx.obj["db_path"] = db_path.expanduser() if db_path else None

    config = get_config(ctx)
    setup_logging("DEBUG" if verbose else config.logging.level)


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
