"""CLI commands for Ice Lure Notes.

This package provides the command-line interface for logging fishing
trips, reviewing bait statistics and exporting the journal.
"""

from icelure.cli.main import cli, main

__all__ = ["cli", "main"]
