"""Input validation for new journal entries.

The entry store accepts any well-formed Entry. This module is the boundary
where raw user input (strings from the command line) is trimmed, parsed
and checked before an Entry is created.
"""

import math
from datetime import datetime
from typing import Optional, Union

from icelure.errors import EntryValidationError
from icelure.models import Entry, ResultLevel

# Spaces and tabs only; line breaks inside notes are kept
BLANKS = " \t"


def _require_text(value: Optional[str], field: str) -> str:
    """Trim a required text field, rejecting empty values."""
    text = (value or "").strip(BLANKS)
    if not text:
        raise EntryValidationError(field, "must not be empty")
    return text


def parse_depth(value: Optional[str]) -> float:
    """Parse a depth in meters from user input.

    Accepts a comma as decimal separator ("2,5").

    Args:
        value: Raw depth text.

    Returns:
        Depth as a non-negative float.

    Raises:
        EntryValidationError: If the text is empty, not a number,
            not finite, or negative.
    """
    text = _require_text(value, "depth").replace(",", ".")
    try:
        depth = float(text)
    except ValueError:
        raise EntryValidationError("depth", f"'{value}' is not a number")

    if not math.isfinite(depth):
        raise EntryValidationError("depth", "must be a finite number")
    if depth < 0:
        raise EntryValidationError("depth", "must not be negative")
    return depth


def parse_result(value: Union[str, ResultLevel, None]) -> ResultLevel:
    """Parse a result level, case-insensitively. Defaults to medium."""
    if isinstance(value, ResultLevel):
        return value
    if value is None or not value.strip():
        return ResultLevel.MEDIUM

    for level in ResultLevel:
        if level.value.lower() == value.strip().lower():
            return level
    choices = ", ".join(level.value.lower() for level in ResultLevel)
    raise EntryValidationError("result", f"'{value}' is not one of: {choices}")


def build_entry(
    bait_type: Optional[str],
    bait_color: Optional[str],
    target_fish: Optional[str],
    depth: Optional[str],
    result: Union[str, ResultLevel, None] = None,
    notes: Optional[str] = None,
    *,
    date: Optional[datetime] = None,
) -> Entry:
    """Create an Entry from raw user input.

    Text fields are trimmed of spaces and tabs. Bait type, bait color and depth are required.

    Args:
        bait_type: Bait type (e.g., "Jig").
        bait_color: Bait color (e.g., "Red/White").
        target_fish: Optional target fish.
        depth: Depth in meters, as entered.
        result: Result level name or ResultLevel. Defaults to medium.
        notes: Optional notes.
        date: Trip timestamp. Defaults to now.

    Returns:
        A new Entry with a fresh id.

    Raises:
        EntryValidationError: If any field is invalid.
    """
    fields = {
        "bait_type": _require_text(bait_type, "bait_type"),
        "bait_color": _require_text(bait_color, "bait_color"),
        "target_fish": (target_fish or "").strip(BLANKS),
        "depth": parse_depth(depth),
        "result": parse_result(result),
        "notes": (notes or "").strip(BLANKS),
    }
    if date is not None:
        fields["date"] = date
    return Entry(**fields)
