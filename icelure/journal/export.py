"""CSV export of the journal and its bait statistics."""

import csv
import io
from datetime import date
from pathlib import Path
from typing import Optional

from icelure.models import BaitStat, Entry

ENTRY_HEADER = "Date,Bait Type,Bait Color,Target Fish,Depth,Result,Notes"
STATS_MARKER = "--- STATISTICS ---"
STATS_HEADER = "Bait,Uses,Avg Result"

DEFAULT_DATE_FORMAT = "%Y-%m-%d"


def generate_csv(
    entries: list[Entry],
    bait_stats: list[BaitStat],
    date_format: str = DEFAULT_DATE_FORMAT,
) -> str:
    """Render entries and statistics as CSV text.

    Entry rows are sorted newest first with every field quoted. The
    statistics section follows a blank line and a marker, in ranked order,
    with only the bait name quoted.

    Args:
        entries: Journal entries.
        bait_stats: Ranked bait statistics.
        date_format: strftime format for the Date column.

    Returns:
        The CSV document.
    """
    out = io.StringIO()
    out.write(ENTRY_HEADER + "\n")

    rows = csv.writer(out, quoting=csv.QUOTE_ALL, lineterminator="\n")
    for entry in sorted(entries, key=lambda e: e.date, reverse=True):
        rows.writerow([
            entry.date.strftime(date_format),
            entry.bait_type,
            entry.bait_color,
            entry.target_fish,
            f"{entry.depth:.1f}",
            entry.result.value,
            entry.notes,
        ])

    out.write(f"\n{STATS_MARKER}\n")
    out.write(STATS_HEADER + "\n")

    # Numbers stay unquoted; the average is rounded to one decimal
    stat_rows = csv.writer(out, quoting=csv.QUOTE_NONNUMERIC, lineterminator="\n")
    for stat in bait_stats:
        stat_rows.writerow([
            stat.bait_name,
            stat.usage_count,
            float(f"{stat.average_result:.1f}"),
        ])

    return out.getvalue()


def default_export_name(today: Optional[date] = None) -> str:
    """Get the default file name for an export, e.g. IceLure_2026-01-15.csv."""
    today = today or date.today()
    return f"IceLure_{today.isoformat()}.csv"


def export_csv(
    path: Path,
    entries: list[Entry],
    bait_stats: list[BaitStat],
    date_format: str = DEFAULT_DATE_FORMAT,
) -> Path:
    """Write the CSV export to a file.

    Args:
        path: Destination file. Parent directories are created.
        entries: Journal entries.
        bait_stats: Ranked bait statistics.
        date_format: strftime format for the Date column.

    Returns:
        The path written.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(generate_csv(entries, bait_stats, date_format), encoding="utf-8")
    return path
