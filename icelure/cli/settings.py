"""Settings commands for Ice Lure Notes CLI.

Handles CSV export, journal info and resetting all data.
"""

from pathlib import Path
from typing import Optional

import click
from rich.panel import Panel

from icelure.cli.common import (
    console,
    fail,
    get_config,
    get_db_path,
    get_entry_store,
    warn_persistence_errors,
)
from icelure.journal.export import default_export_name, export_csv


@click.command()
@click.option(
    "--output", "-o",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Output file (default: IceLure_<date>.csv in the export directory).",
)
@click.pass_context
def export(ctx: click.Context, output: Optional[Path]) -> None:
    """Export the journal and bait statistics to CSV.

    \b
    Examples:
      icelure export
      icelure export -o ~/trips.csv
    """
    config = get_config(ctx)
    store = get_entry_store(ctx)
    path = output.expanduser() if output else config.export.directory / default_export_name()

    entries = store.list_entries()
    try:
        export_csv(path, entries, store.list_bait_stats(), config.export.date_format)
    except OSError as e:
        fail(f"Failed to write {path}:\n\n{e}", title="Export Failed")

    console.print(f"[green]✓ Exported {len(entries)} entries to {path}[/green]")


@click.command()
@click.pass_context
def info(ctx: click.Context) -> None:
    """Show journal totals and where data is stored."""
    store = get_entry_store(ctx)

    console.print(Panel(
        f"Total Entries: {len(store.list_entries())}\n"
        f"Baits:         {len(store.list_bait_stats())}\n\n"
        f"[dim]Database: {get_db_path(ctx)}[/dim]",
        title="[bold cyan]Ice Lure Notes[/bold cyan]",
        border_style="cyan",
    ))


@click.command()
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation.")
@click.pass_context
def reset(ctx: click.Context, yes: bool) -> None:
    """Permanently delete all entries and statistics."""
    if not yes:
        click.confirm(
            "This will permanently delete all your fishing entries and statistics. Continue?",
            abort=True,
        )

    store = get_entry_store(ctx)
    store.reset_all()
    console.print("[green]✓ All data deleted[/green]")
    warn_persistence_errors(store)
