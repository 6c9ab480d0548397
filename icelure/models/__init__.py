"""Data models for Ice Lure Notes."""

from icelure.models.entry import Entry, ResultLevel
from icelure.models.bait_stat import BaitStat
from icelure.models.summary import ResultsSummary

__all__ = [
    "Entry",
    "ResultLevel",
    "BaitStat",
    "ResultsSummary",
]
