"""Bait statistics commands for Ice Lure Notes CLI.

Handles the ranked bait list, per-bait details and the results summary.
"""

import click
from rich.panel import Panel
from rich.table import Table

from icelure.cli.common import RESULT_STYLES, console, fail, get_entry_store
from icelure.journal.stats import entries_for_stat, summarize_results


@click.command()
@click.option(
    "--cached",
    is_flag=True,
    help="Show the statistics saved by the previous run instead of recomputing.",
)
@click.pass_context
def baits(ctx: click.Context, cached: bool) -> None:
    """Rank baits by average result.

    Results are scored Low=1, Medium=2, Good=3 and averaged per bait
    type and color.
    """
    store = get_entry_store(ctx)
    stats = store.cached_bait_stats() if cached else store.list_bait_stats()

    if not stats:
        console.print(Panel(
            "[dim]No Baits Yet[/dim]\n\n"
            "[dim]Add fishing trips to see which baits work best[/dim]",
            title="[bold]Baits[/bold]",
            border_style="dim",
        ))
        return

    table = Table(title="Baits", show_header=True, header_style="bold cyan")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Bait", style="bold")
    table.add_column("Uses", justify="right")
    table.add_column("Avg Result", justify="right")

    for rank, stat in enumerate(stats, start=1):
        table.add_row(
            str(rank),
            stat.bait_name,
            str(stat.usage_count),
            f"{stat.average_result:.1f}",
        )

    console.print(table)


@click.command()
@click.argument("name")
@click.pass_context
def bait(ctx: click.Context, name: str) -> None:
    """Show one bait and every trip it was used on.

    NAME is the bait name as listed by 'icelure baits' (type and color,
    e.g. "Jig Red").
    """
    store = get_entry_store(ctx)
    stat = next((s for s in store.list_bait_stats() if s.bait_name == name), None)
    if stat is None:
        fail(f"No bait named '{name}'. Run 'icelure baits' to see all baits.", title="Not Found")

    header = (
        f"[bold]{stat.bait_name}[/bold]\n"
        f"{stat.usage_count} uses • {stat.average_result:.1f}/3.0"
    )
    console.print(Panel(header, title="[bold cyan]Bait Details[/bold cyan]", border_style="cyan"))

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Date")
    table.add_column("Fish")
    table.add_column("Result")
    table.add_column("Depth", justify="right")
    table.add_column("Notes")

    for entry in entries_for_stat(store.list_entries(), stat):
        style = RESULT_STYLES[entry.result]
        table.add_row(
            entry.date.strftime("%Y-%m-%d"),
            entry.target_fish,
            f"[{style}]{entry.result.value}[/{style}]",
            f"{entry.depth:.1f} m",
            entry.notes,
        )

    console.print(table)


@click.command()
@click.pass_context
def results(ctx: click.Context) -> None:
    """Show the most effective baits and patterns."""
    store = get_entry_store(ctx)
    summary = summarize_results(store.list_entries(), store.list_bait_stats())

    if summary.best_bait:
        best = summary.best_bait
        best_bait = (
            f"[bold]{best.bait_name}[/bold]\n"
            f"  [dim]{best.usage_count} uses • {best.average_result:.1f}/3.0[/dim]"
        )
    else:
        best_bait = "[dim]No data[/dim]"

    output_lines = [
        f"[bold]Best Bait:[/bold]  {best_bait}\n",
        f"[bold]Best Depth:[/bold] {summary.best_depth:.1f} m",
        f"  [dim]{summary.good_catches} good catches[/dim]\n",
        f"[bold]Top Fish:[/bold]   {summary.top_fish or '-'}",
        f"  [dim]{summary.top_fish_count} total catches[/dim]\n",
        f"[bold]Avg Result:[/bold] {summary.average_result:.1f}/3.0",
        f"  [dim]{summary.total_trips} total trips[/dim]",
    ]

    console.print(Panel(
        "\n".join(output_lines),
        title="[bold cyan]Results[/bold cyan]",
        subtitle="[dim]Most effective baits and patterns[/dim]",
        border_style="cyan",
    ))
