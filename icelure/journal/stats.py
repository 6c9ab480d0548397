"""Bait statistics aggregation.

Turns a list of journal entries into ranked per-bait statistics and the
headline figures shown by the results view. Everything here is a pure
function of its inputs.
"""

from collections import Counter, defaultdict
from typing import Iterable

from icelure.models import BaitStat, Entry, ResultLevel, ResultsSummary


RESULT_VALUES = {
    ResultLevel.LOW: 1.0,
    ResultLevel.MEDIUM: 2.0,
    ResultLevel.GOOD: 3.0,
}


def result_value(result: ResultLevel) -> float:
    """Map a result level to its numeric value (1.0, 2.0 or 3.0)."""
    return RESULT_VALUES[ResultLevel(result)]


def bait_name(bait_type: str, bait_color: str) -> str:
    """Build the grouping key for a bait type and color."""
    return f"{bait_type} {bait_color}"


def split_bait_name(name: str) -> tuple[str, str]:
    """Split a bait name back into (bait_type, bait_color).

    Splits on the first space, so a bait type that itself contains a
    space cannot be recovered: "Tube Jig Red" becomes ("Tube", "Jig Red").

    Args:
        name: A bait name produced by bait_name().

    Returns:
        Tuple of bait type and bait color. The color is empty when the
        name has no space.
    """
    bait_type, _, bait_color = name.partition(" ")
    return bait_type, bait_color


def compute_bait_stats(entries: Iterable[Entry]) -> list[BaitStat]:
    """Aggregate entries into bait statistics ranked by average result.

    Groups keep the order in which their first entry appears. The sort is
    stable, so groups with equal averages stay in that order.

    Args:
        entries: Journal entries.

    Returns:
        One BaitStat per bait type/color combination, best first. Every
        call generates fresh ids.
    """
    grouped: dict[str, list[Entry]] = defaultdict(list)
    for entry in entries:
        grouped[bait_name(entry.bait_type, entry.bait_color)].append(entry)

    stats = []
    for name, group in grouped.items():
        count = len(group)
        total = sum(result_value(e.result) for e in group)
        stats.append(
            BaitStat(bait_name=name, usage_count=count, average_result=total / count)
        )

    return sorted(stats, key=lambda s: s.average_result, reverse=True)


def entries_for_stat(entries: Iterable[Entry], stat: BaitStat) -> list[Entry]:
    """Get the entries that belong to a bait statistic.

    Uses split_bait_name(), so it inherits the first-space ambiguity.

    Args:
        entries: Journal entries.
        stat: Statistic to match.

    Returns:
        Matching entries, newest first.
    """
    bait_type, bait_color = split_bait_name(stat.bait_name)
    matching = [
        e for e in entries
        if e.bait_type == bait_type and e.bait_color == bait_color
    ]
    return sorted(matching, key=lambda e: e.date, reverse=True)


def summarize_results(entries: list[Entry], bait_stats: list[BaitStat]) -> ResultsSummary:
    """Calculate the headline figures for the results view.

    Args:
        entries: Journal entries.
        bait_stats: Ranked statistics for the same entries.

    Returns:
        ResultsSummary with best bait, best depth, top fish and the
        overall average result.
    """
    good_entries = [e for e in entries if e.result == ResultLevel.GOOD]
    best_depth = (
        sum(e.depth for e in good_entries) / len(good_entries) if good_entries else 0.0
    )

    # Blank target fish are not counted; ties keep first-seen order
    fish_counts = Counter(e.target_fish for e in entries if e.target_fish)
    if fish_counts:
        top_fish, top_fish_count = fish_counts.most_common(1)[0]
    else:
        top_fish = "None"
        top_fish_count = 0

    average_result = (
        sum(result_value(e.result) for e in entries) / len(entries) if entries else 0.0
    )

    return ResultsSummary(
        best_bait=bait_stats[0] if bait_stats else None,
        best_depth=best_depth,
        good_catches=len(good_entries),
        top_fish=top_fish,
        top_fish_count=top_fish_count,
        average_result=average_result,
        total_trips=len(entries),
    )
