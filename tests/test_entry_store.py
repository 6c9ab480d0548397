"""Tests for the observable entry store."""

import json
import sqlite3
import tempfile
from datetime import datetime
from pathlib import Path

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from icelure.db.store import KeyValueStore
from icelure.errors import PersistenceError
from icelure.journal.store import ENTRIES_KEY, STATS_KEY, EntryStore, StoreSnapshot
from icelure.models import Entry, ResultLevel


def entry_strategy():
    """Generate valid Entry objects for testing."""
    return st.builds(
        Entry,
        date=st.datetimes(min_value=datetime(2020, 1, 1), max_value=datetime(2030, 12, 31)),
        bait_type=st.sampled_from(["Jig", "Spoon", "Tube", "Blade"]),
        bait_color=st.sampled_from(["Red", "Silver", "Gold", "Chartreuse"]),
        target_fish=st.sampled_from(["Perch", "Pike", "Walleye", ""]),
        depth=st.floats(min_value=0, max_value=30, allow_nan=False, allow_infinity=False),
        result=st.sampled_from(list(ResultLevel)),
        notes=st.text(max_size=40),
    )


def make_entry(bait_type="Jig", bait_color="Red", result=ResultLevel.GOOD, depth=2.0):
    return Entry(bait_type=bait_type, bait_color=bait_color, depth=depth, result=result)


class FailingKeyValueStore(KeyValueStore):
    """Key-value store whose writes always fail."""

    def set(self, key: str, value: str) -> None:
        raise sqlite3.OperationalError("disk I/O error")

    def remove(self, *keys: str) -> None:
        raise sqlite3.OperationalError("disk I/O error")


@pytest.fixture
def db_path():
    """Path to a temporary database file."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir) / "test.db"


@pytest.fixture
def store(db_path: Path) -> EntryStore:
    return EntryStore(KeyValueStore(db_path))


class TestAddDelete:
    """Adding and deleting entries updates the list and statistics at once."""

    def test_starts_empty(self, store: EntryStore):
        assert store.list_entries() == []
        assert store.list_bait_stats() == []
        assert store.errors == []

    def test_add_is_visible_immediately(self, store: EntryStore):
        entry = make_entry()
        store.add_entry(entry)

        assert store.list_entries() == [entry]
        assert [(s.bait_name, s.usage_count) for s in store.bait_stats] == [("Jig Red", 1)]

    def test_list_preserves_insertion_order(self, store: EntryStore):
        entries = [make_entry(bait_type=t) for t in ["Spoon", "Jig", "Tube"]]
        for entry in entries:
            store.add_entry(entry)

        assert store.list_entries() == entries

    def test_list_returns_copy(self, store: EntryStore):
        store.add_entry(make_entry())
        store.list_entries().clear()

        assert len(store.list_entries()) == 1

    def test_delete_removes_every_entry_with_id(self, store: EntryStore):
        entry = make_entry()
        other = make_entry(bait_type="Spoon")
        store.add_entry(entry)
        store.add_entry(other)
        store.add_entry(entry)

        store.delete_entry(entry)

        assert store.list_entries() == [other]
        assert [s.bait_name for s in store.bait_stats] == ["Spoon Red"]

    def test_delete_unknown_id_is_noop(self, store: EntryStore):
        entry = make_entry()
        store.add_entry(entry)

        store.delete_entry(make_entry())

        assert store.list_entries() == [entry]

    def test_trip_scenario(self, store: EntryStore):
        store.add_entry(make_entry("Jig", "Red", ResultLevel.GOOD, 2.0))
        store.add_entry(make_entry("Jig", "Red", ResultLevel.LOW, 3.0))
        store.add_entry(make_entry("Spoon", "Silver", ResultLevel.MEDIUM, 1.5))

        values = {(s.bait_name, s.usage_count, s.average_result) for s in store.bait_stats}
        assert values == {("Jig Red", 2, 2.0), ("Spoon Silver", 1, 2.0)}

    @given(
        entries=st.lists(entry_strategy(), max_size=15),
        delete_mask=st.lists(st.booleans(), min_size=15, max_size=15),
    )
    @settings(max_examples=30, deadline=None)
    def test_count_is_adds_minus_deletes(self, entries: list[Entry], delete_mask: list[bool]):
        """
        *For any* sequence of adds followed by deletes, the entry count
        equals adds minus successful deletes.
        """
        with tempfile.TemporaryDirectory() as tmpdir:
            store = EntryStore(KeyValueStore(Path(tmpdir) / "test.db"))
            for entry in entries:
                store.add_entry(entry)

            deleted = 0
            for entry, delete in zip(entries, delete_mask):
                if delete:
                    store.delete_entry(entry)
                    deleted += 1

            assert len(store.list_entries()) == len(entries) - deleted
            assert sum(s.usage_count for s in store.bait_stats) == len(entries) - deleted


class TestSubscriptions:
    """Every mutation publishes one snapshot of both lists."""

    def test_add_publishes_snapshot(self, store: EntryStore):
        snapshots: list[StoreSnapshot] = []
        store.subscribe(snapshots.append)

        entry = make_entry()
        store.add_entry(entry)

        assert len(snapshots) == 1
        assert snapshots[0].entries == [entry]
        assert [s.bait_name for s in snapshots[0].bait_stats] == ["Jig Red"]

    def test_multiple_subscribers(self, store: EntryStore):
        first: list[StoreSnapshot] = []
        second: list[StoreSnapshot] = []
        store.subscribe(first.append)
        store.subscribe(second.append)

        store.add_entry(make_entry())

        assert len(first) == len(second) == 1

    def test_unsubscribe(self, store: EntryStore):
        snapshots: list[StoreSnapshot] = []
        unsubscribe = store.subscribe(snapshots.append)

        store.add_entry(make_entry())
        unsubscribe()
        store.add_entry(make_entry())

        assert len(snapshots) == 1

    def test_reset_publishes_single_empty_snapshot(self, store: EntryStore):
        store.add_entry(make_entry())
        snapshots: list[StoreSnapshot] = []
        store.subscribe(snapshots.append)

        store.reset_all()

        assert len(snapshots) == 1
        assert snapshots[0].entries == []
        assert snapshots[0].bait_stats == []

    def test_subscriber_sees_state_consistent_with_store(self, store: EntryStore):
        seen = []
        store.subscribe(lambda snap: seen.append(
            (len(snap.entries), len(store.list_entries()), len(store.list_bait_stats()))
        ))

        store.add_entry(make_entry())
        store.reset_all()

        assert seen == [(1, 1, 1), (0, 0, 0)]


class TestPersistence:
    """Entries and statistics survive a restart on the same database."""

    @given(entries=st.lists(entry_strategy(), max_size=10))
    @settings(max_examples=30, deadline=None)
    def test_round_trip(self, entries: list[Entry]):
        """
        *For any* list of entries, a new store on the same database should
        load the same entries and compute the same statistics.
        """
        with tempfile.TemporaryDirectory() as tmpdir:
            db_path = Path(tmpdir) / "test.db"
            store = EntryStore(KeyValueStore(db_path))
            for entry in entries:
                store.add_entry(entry)

            reloaded = EntryStore(KeyValueStore(db_path))

            assert reloaded.list_entries() == entries
            assert [(s.bait_name, s.usage_count, s.average_result) for s in reloaded.bait_stats] == [
                (s.bait_name, s.usage_count, s.average_result) for s in store.bait_stats
            ]
            assert reloaded.errors == []

    def test_persisted_layout(self, db_path: Path):
        kv = KeyValueStore(db_path)
        store = EntryStore(kv)
        entry = Entry(
            date=datetime(2026, 1, 10, 8, 30),
            bait_type="Jig",
            bait_color="Red",
            target_fish="Perch",
            depth=2.5,
            result=ResultLevel.GOOD,
            notes="Slow lift",
        )
        store.add_entry(entry)

        entries = json.loads(kv.get(ENTRIES_KEY))
        assert entries == [{
            "id": str(entry.id),
            "date": "2026-01-10T08:30:00",
            "baitType": "Jig",
            "baitColor": "Red",
            "targetFish": "Perch",
            "depth": 2.5,
            "result": "Good",
            "notes": "Slow lift",
        }]

        stats = json.loads(kv.get(STATS_KEY))
        assert len(stats) == 1
        assert stats[0]["baitName"] == "Jig Red"
        assert stats[0]["usageCount"] == 1
        assert stats[0]["averageResult"] == 3.0
        assert set(stats[0]) == {"id", "baitName", "usageCount", "averageResult"}

    def test_cached_bait_stats_come_from_previous_run(self, db_path: Path):
        kv = KeyValueStore(db_path)
        first = EntryStore(kv)
        first.add_entry(make_entry(result=ResultLevel.LOW))
        first.add_entry(make_entry(bait_type="Spoon"))

        reopened = EntryStore(kv)

        assert reopened.cached_bait_stats() == first.list_bait_stats()

    def test_cached_bait_stats_read_before_recompute(self, db_path: Path):
        kv = KeyValueStore(db_path)
        EntryStore(kv).add_entry(make_entry())
        saved = [{
            "id": "9b2f6a4e-0d6c-4a53-8f43-0c1f3d3e2a10",
            "baitName": "Spoon Gold",
            "usageCount": 4,
            "averageResult": 1.5,
        }]
        kv.set(STATS_KEY, json.dumps(saved))

        store = EntryStore(kv)

        assert [s.bait_name for s in store.cached_bait_stats()] == ["Spoon Gold"]
        assert [s.bait_name for s in store.list_bait_stats()] == ["Jig Red"]
        assert json.loads(kv.get(STATS_KEY))[0]["baitName"] == "Jig Red"

    def test_cached_bait_stats_ignore_later_changes(self, store: EntryStore):
        store.add_entry(make_entry())

        assert store.cached_bait_stats() == []

    def test_reset_clears_persisted_state(self, db_path: Path):
        kv = KeyValueStore(db_path)
        store = EntryStore(kv)
        store.add_entry(make_entry())

        store.reset_all()

        assert store.list_entries() == []
        assert store.list_bait_stats() == []
        assert kv.get(ENTRIES_KEY) is None
        assert kv.get(STATS_KEY) is None
        assert EntryStore(KeyValueStore(db_path)).list_entries() == []

    def test_reset_on_empty_store(self, store: EntryStore):
        store.reset_all()

        assert store.list_entries() == []
        assert store.cached_bait_stats() == []

    def test_recomputes_stats_on_load(self, db_path: Path):
        kv = KeyValueStore(db_path)
        EntryStore(kv).add_entry(make_entry())
        kv.set(STATS_KEY, "[]")

        store = EntryStore(kv)

        assert [s.bait_name for s in store.bait_stats] == ["Jig Red"]


class TestErrorChannel:
    """Storage failures are reported, never raised."""

    def test_corrupt_entries_load_as_empty(self, db_path: Path):
        kv = KeyValueStore(db_path)
        kv.set(ENTRIES_KEY, "{not json")

        store = EntryStore(kv)

        assert store.list_entries() == []
        assert len(store.errors) == 1
        assert store.errors[0].operation == "load"
        assert store.errors[0].key == ENTRIES_KEY

    def test_wrong_shape_loads_as_empty(self, db_path: Path):
        kv = KeyValueStore(db_path)
        kv.set(ENTRIES_KEY, json.dumps([{"baitType": "Jig"}]))

        store = EntryStore(kv)

        assert store.list_entries() == []
        assert [e.operation for e in store.errors] == ["load"]

    def test_corrupt_cached_stats_read_as_empty(self, db_path: Path):
        kv = KeyValueStore(db_path)
        kv.set(STATS_KEY, "oops")

        store = EntryStore(kv)

        assert store.cached_bait_stats() == []
        assert store.errors[-1].key == STATS_KEY

    def test_save_failure_keeps_memory_state(self, db_path: Path):
        store = EntryStore(FailingKeyValueStore(db_path))
        reported: list[PersistenceError] = []
        store.subscribe_errors(reported.append)
        store.errors.clear()

        entry = make_entry()
        store.add_entry(entry)

        assert store.list_entries() == [entry]
        assert [s.bait_name for s in store.bait_stats] == ["Jig Red"]
        assert [(e.operation, e.key) for e in reported] == [
            ("save", ENTRIES_KEY),
            ("save", STATS_KEY),
        ]
        assert store.errors == reported

    def test_reset_failure_still_clears_memory(self, db_path: Path):
        store = EntryStore(FailingKeyValueStore(db_path))
        store.add_entry(make_entry())
        store.errors.clear()

        store.reset_all()

        assert store.list_entries() == []
        assert store.list_bait_stats() == []
        assert [e.operation for e in store.errors] == ["reset"]

    def test_failures_are_logged(self, db_path: Path, caplog):
        with caplog.at_level("WARNING", logger="icelure.journal.store"):
            EntryStore(FailingKeyValueStore(db_path)).add_entry(make_entry())

        assert "fishingEntries" in caplog.text
