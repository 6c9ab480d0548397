"""Journal commands for Ice Lure Notes CLI.

Handles logging new trips and listing, showing and deleting entries.
"""

from datetime import datetime
from typing import Optional

import click
from rich.panel import Panel
from rich.table import Table

from icelure.cli.common import (
    RESULT_STYLES,
    console,
    fail,
    get_entry_store,
    warn_persistence_errors,
)
from icelure.errors import EntryValidationError
from icelure.journal.validation import build_entry
from icelure.models import Entry


def _format_date(value: datetime) -> str:
    return value.strftime("%Y-%m-%d %H:%M")


def _result_text(entry: Entry) -> str:
    style = RESULT_STYLES[entry.result]
    return f"[{style}]{entry.result.value}[/{style}]"


def find_entry(entries: list[Entry], entry_id: str) -> Entry:
    """Find an entry by its id or a unique id prefix.

    Args:
        entries: Entries to search.
        entry_id: Full id or prefix.

    Returns:
        The matching entry.

    Raises:
        click.BadParameter: If nothing or more than one entry matches.
    """
    prefix = entry_id.strip().lower()
    matches = [e for e in entries if str(e.id).startswith(prefix)] if prefix else []
    if not matches:
        raise click.BadParameter(f"No entry with id '{entry_id}'", param_hint="ENTRY_ID")
    if len(matches) > 1:
        raise click.BadParameter(
            f"'{entry_id}' matches {len(matches)} entries; use more characters",
            param_hint="ENTRY_ID",
        )
    return matches[0]


@click.command()
@click.option("--bait-type", "-t", help="Bait type (e.g., Jig).")
@click.option("--bait-color", "-c", help="Bait color (e.g., Red/White).")
@click.option("--target-fish", "-f", default="", help="Target fish (e.g., Perch).")
@click.option("--depth", "-d", help="Depth in meters (e.g., 2.5).")
@click.option(
    "--result", "-r",
    type=click.Choice(["low", "medium", "good"], case_sensitive=False),
    default="medium",
    show_default=True,
    help="How well the bait worked.",
)
@click.option("--notes", "-n", default="", help="Free-text notes.")
@click.option(
    "--date", "trip_date",
    type=click.DateTime(formats=["%Y-%m-%d", "%Y-%m-%d %H:%M"]),
    default=None,
    help="Trip date for backfilling (default: now).",
)
@click.pass_context
def add(
    ctx: click.Context,
    bait_type: Optional[str],
    bait_color: Optional[str],
    target_fish: str,
    depth: Optional[str],
    result: str,
    notes: str,
    trip_date: Optional[datetime],
) -> None:
    """Log a fishing trip.

    \b
    Examples:
      icelure add -t Jig -c Red -d 2.5 -r good
      icelure add -t Spoon -c Silver -f Perch -d 1,5 -n "Slow lift"
    """
    try:
        entry = build_entry(
            bait_type=bait_type,
            bait_color=bait_color,
            target_fish=target_fish,
            depth=depth,
            result=result,
            notes=notes,
            date=trip_date,
        )
    except EntryValidationError as e:
        fail(f"Invalid {e.field.replace('_', ' ')}: {e.message}", title="Invalid Entry")

    store = get_entry_store(ctx)
    store.add_entry(entry)
    console.print(
        f"[green]✓ Logged {entry.bait_type} {entry.bait_color} "
        f"at {entry.depth:.1f} m ({entry.result.value})[/green] [dim]{str(entry.id)[:8]}[/dim]"
    )
    warn_persistence_errors(store)


@click.command("list")
@click.option(
    "--limit", type=click.IntRange(min=1), default=None, help="Show only the newest N entries."
)
@click.pass_context
def list_entries(ctx: click.Context, limit: Optional[int]) -> None:
    """Show the journal, newest first."""
    store = get_entry_store(ctx)
    entries = sorted(store.list_entries(), key=lambda e: e.date, reverse=True)

    if not entries:
        console.print(Panel(
            "[dim]No entries yet[/dim]\n\n"
            "[dim]Run 'icelure add' to log your first fishing trip[/dim]",
            title="[bold]Journal[/bold]",
            border_style="dim",
        ))
        return

    if limit is not None:
        entries = entries[:limit]

    table = Table(title="Journal", show_header=True, header_style="bold cyan")
    table.add_column("ID", style="dim")
    table.add_column("Date")
    table.add_column("Bait", style="bold")
    table.add_column("Color")
    table.add_column("Fish")
    table.add_column("Depth", justify="right")
    table.add_column("Result")

    for entry in entries:
        table.add_row(
            str(entry.id)[:8],
            _format_date(entry.date),
            entry.bait_type,
            entry.bait_color,
            entry.target_fish,
            f"{entry.depth:.1f} m",
            _result_text(entry),
        )

    console.print(table)


@click.command()
@click.argument("entry_id")
@click.pass_context
def show(ctx: click.Context, entry_id: str) -> None:
    """Show the details of one entry.

    ENTRY_ID is the entry id, or the first characters of it.
    """
    store = get_entry_store(ctx)
    entry = find_entry(store.list_entries(), entry_id)

    lines = [
        f"[bold]{entry.bait_type}[/bold] {entry.bait_color}   {_result_text(entry)}\n",
        f"Target Fish: {entry.target_fish or '-'}",
        f"Depth:       {entry.depth:.1f} m",
        f"Date:        {_format_date(entry.date)}",
    ]
    if entry.notes.strip():
        lines.append(f"\n[bold]Notes[/bold]\n{entry.notes}")

    console.print(Panel(
        "\n".join(lines),
        title="[bold cyan]Entry Details[/bold cyan]",
        subtitle=f"[dim]{entry.id}[/dim]",
        border_style="cyan",
    ))


@click.command()
@click.argument("entry_id")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation.")
@click.pass_context
def delete(ctx: click.Context, entry_id: str, yes: bool) -> None:
    """Delete an entry.

    ENTRY_ID is the entry id, or the first characters of it.
    """
    store = get_entry_store(ctx)
    entry = find_entry(store.list_entries(), entry_id)

    if not yes:
        click.confirm(
            f"Delete {entry.bait_type} {entry.bait_color} from {_format_date(entry.date)}?",
            abort=True,
        )

    store.delete_entry(entry)
    console.print(f"[green]✓ Deleted entry {str(entry.id)[:8]}[/green]")
    warn_persistence_errors(store)
