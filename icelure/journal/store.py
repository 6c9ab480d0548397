"""Observable entry store for Ice Lure Notes.

Holds the authoritative in-memory list of entries, persists it to a
KeyValueStore, keeps the bait statistics in step with it and publishes a
snapshot of both lists to subscribers after every mutation.
"""

import logging
import sqlite3
from typing import Callable

from pydantic import BaseModel, TypeAdapter

from icelure.db.store import KeyValueStore
from icelure.errors import PersistenceError
from icelure.journal.stats import compute_bait_stats
from icelure.models import BaitStat, Entry

logger = logging.getLogger(__name__)

ENTRIES_KEY = "fishingEntries"
STATS_KEY = "baitStats"

_ENTRY_LIST = TypeAdapter(list[Entry])
_STAT_LIST = TypeAdapter(list[BaitStat])


class StoreSnapshot(BaseModel):
    """Entries and statistics as published after a mutation."""

    entries: list[Entry]
    bait_stats: list[BaitStat]

    model_config = {"frozen": True}


SnapshotCallback = Callable[[StoreSnapshot], None]
ErrorCallback = Callable[[PersistenceError], None]


class EntryStore:
    """Journal entries with derived bait statistics.

    All operations are synchronous: when a mutation returns, the entries
    have been persisted, statistics recomputed and persisted, and every
    subscriber has received the new snapshot.

    Storage failures never raise. They are logged, appended to ``errors``
    and passed to error subscribers, while the in-memory state stays
    authoritative for the running process.
    """

    def __init__(self, kv_store: KeyValueStore):
        """Initialize the entry store and load persisted entries.

        Args:
            kv_store: KeyValueStore used for persistence.
        """
        self._kv = kv_store
        self._entries: list[Entry] = []
        self._bait_stats: list[BaitStat] = []
        self._subscribers: list[SnapshotCallback] = []
        self._error_subscribers: list[ErrorCallback] = []
        self.errors: list[PersistenceError] = []

        self._load_entries()
        self._cached_stats = self._load_cached_stats()
        self._update_stats()

    # ==================== Subscriptions ====================

    def subscribe(self, callback: SnapshotCallback) -> Callable[[], None]:
        """Register a snapshot observer.

        Args:
            callback: Called with a StoreSnapshot after every mutation.

        Returns:
            A function that removes the subscription.
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def subscribe_errors(self, callback: ErrorCallback) -> Callable[[], None]:
        """Register an observer for persistence failures.

        Args:
            callback: Called with each PersistenceError as it happens.

        Returns:
            A function that removes the subscription.
        """
        self._error_subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._error_subscribers:
                self._error_subscribers.remove(callback)

        return unsubscribe

    def snapshot(self) -> StoreSnapshot:
        """Get a copy of the current entries and statistics."""
        return StoreSnapshot(
            entries=list(self._entries),
            bait_stats=list(self._bait_stats),
        )

    def _publish(self) -> None:
        snapshot = self.snapshot()
        for callback in list(self._subscribers):
            callback(snapshot)

    def _report(self, error: PersistenceError) -> None:
        logger.warning("%s", error)
        self.errors.append(error)
        for callback in list(self._error_subscribers):
            callback(error)

    # ==================== Entries ====================

    def add_entry(self, entry: Entry) -> None:
        """Append an entry, persist and recompute statistics.

        Args:
            entry: Entry to add. It is not validated here.
        """
        self._entries.append(entry)
        logger.debug("Added entry %s (%s %s)", entry.id, entry.bait_type, entry.bait_color)
        self._save_entries()
        self._update_stats()
        self._publish()

    def delete_entry(self, entry: Entry) -> None:
        """Remove every entry with the same id, persist and recompute.

        A no-op on the entry list if the id is unknown.

        Args:
            entry: Entry to delete.
        """
        before = len(self._entries)
        self._entries = [e for e in self._entries if e.id != entry.id]
        logger.debug("Deleted %d entries with id %s", before - len(self._entries), entry.id)
        self._save_entries()
        self._update_stats()
        self._publish()

    def list_entries(self) -> list[Entry]:
        """Get all entries in insertion order."""
        return list(self._entries)

    def list_bait_stats(self) -> list[BaitStat]:
        """Get the current bait statistics, best first."""
        return list(self._bait_stats)

    @property
    def entries(self) -> list[Entry]:
        return self.list_entries()

    @property
    def bait_stats(self) -> list[BaitStat]:
        return self.list_bait_stats()

    def reset_all(self) -> None:
        """Clear all entries and statistics, in memory and in storage.

        Both persisted keys are removed in one transaction, and
        subscribers receive a single snapshot with both lists empty.
        """
        self._entries = []
        self._bait_stats = []
        self._cached_stats = []
        try:
            self._kv.remove(ENTRIES_KEY, STATS_KEY)
        except sqlite3.Error as e:
            self._report(PersistenceError("reset", None, str(e)))
        logger.debug("Reset all entries and statistics")
        self._publish()

    # ==================== Statistics ====================

    def cached_bait_stats(self) -> list[BaitStat]:
        """Get the statistics as they were saved when the store was opened.

        Returns:
            The previously saved statistics, or an empty list if none were
            saved or they cannot be decoded.
        """
        return list(self._cached_stats)

    def _load_cached_stats(self) -> list[BaitStat]:
        try:
            data = self._kv.get(STATS_KEY)
            if data is None:
                return []
            return _STAT_LIST.validate_json(data)
        except (sqlite3.Error, ValueError) as e:
            self._report(PersistenceError("load", STATS_KEY, str(e)))
            return []

    def _update_stats(self) -> None:
        self._bait_stats = compute_bait_stats(self._entries)
        try:
            data = _STAT_LIST.dump_json(self._bait_stats, by_alias=True)
            self._kv.set(STATS_KEY, data.decode("utf-8"))
        except (sqlite3.Error, ValueError) as e:
            self._report(PersistenceError("save", STATS_KEY, str(e)))

    # ==================== Persistence ====================

    def _save_entries(self) -> None:
        try:
            data = _ENTRY_LIST.dump_json(self._entries, by_alias=True)
            self._kv.set(ENTRIES_KEY, data.decode("utf-8"))
        except (sqlite3.Error, ValueError) as e:
            self._report(PersistenceError("save", ENTRIES_KEY, str(e)))

    def _load_entries(self) -> None:
        try:
            data = self._kv.get(ENTRIES_KEY)
            if data is None:
                return
            self._entries = _ENTRY_LIST.validate_json(data)
        except (sqlite3.Error, ValueError) as e:
            self._entries = []
            self._report(PersistenceError("load", ENTRIES_KEY, str(e)))
        logger.debug("Loaded %d entries", len(self._entries))
