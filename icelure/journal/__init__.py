"""Journal core: entry store, statistics, validation and export."""

from icelure.journal.stats import (
    bait_name,
    compute_bait_stats,
    entries_for_stat,
    result_value,
    split_bait_name,
    summarize_results,
)
from icelure.journal.store import EntryStore, StoreSnapshot
from icelure.journal.validation import build_entry

__all__ = [
    "EntryStore",
    "StoreSnapshot",
    "bait_name",
    "build_entry",
    "compute_bait_stats",
    "entries_for_stat",
    "result_value",
    "split_bait_name",
    "summarize_results",
]
