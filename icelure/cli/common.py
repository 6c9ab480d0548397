"""Shared helpers for Ice Lure Notes CLI commands."""

import logging
import sqlite3
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel

from icelure.config import AppConfig, load_config
from icelure.errors import ConfigError
from icelure.models import ResultLevel

console = Console()
err_console = Console(stderr=True)

RESULT_STYLES = {
    ResultLevel.LOW: "red",
    ResultLevel.MEDIUM: "dark_orange",
    ResultLevel.GOOD: "green",
}


def print_error(message: str, title: str = "Error") -> None:
    """Print an error panel."""
    console.print(Panel(
        f"[red]{message}[/red]",
        title=f"[bold red]{title}[/bold red]",
        border_style="red",
    ))


def fail(message: str, title: str = "Error") -> None:
    """Print an error panel and exit with status 1."""
    print_error(message, title)
    raise SystemExit(1)


def setup_logging(level: str) -> None:
    """Send log records through rich to stderr."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def get_config(ctx: click.Context) -> AppConfig:
    """Get the application config, loading it on first use."""
    obj = ctx.ensure_object(dict)
    if "config" not in obj:
        try:
            obj["config"] = load_config(obj.get("config_path"))
        except ConfigError as e:
            fail(str(e), title="Configuration Error")
    return obj["config"]


def get_db_path(ctx: click.Context) -> Path:
    """Get the database path, honouring the --db override."""
    obj = ctx.ensure_object(dict)
    return obj.get("db_path") or get_config(ctx).storage.db_path


def get_entry_store(ctx: click.Context):
    """Get the entry store instance."""
    from icelure.db.store import KeyValueStore
    from icelure.journal.store import EntryStore

    obj = ctx.ensure_object(dict)
    if "store" not in obj:
        db_path = get_db_path(ctx)
        try:
            obj["store"] = EntryStore(KeyValueStore(db_path))
        except (OSError, sqlite3.Error) as e:
            fail(f"Cannot open {db_path}: {e}", title="Storage Error")
    return obj["store"]


def warn_persistence_errors(store) -> None:
    """Tell the user when changes could not be saved."""
    if store.errors:
        console.print(
            f"[yellow]Warning: {len(store.errors)} storage error(s); "
            f"changes may not survive a restart.[/yellow]"
        )
        for error in store.errors:
            console.print(f"[dim]  {error}[/dim]")
