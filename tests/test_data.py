"""Tests for countdown.data.EventStore — persistence and ordering.

Run with:  python -m pytest tests/test_data.py -v
"""
import json
from datetime import datetime
from unittest.mock import patch

import pytest

from countdown.data import ANNIVERSARY_NAME, Event, EventStore, StoreError, next_anniversary


@pytest.fixture
def events_file(tmp_path):
    return tmp_path / "countdown" / "events.json"


@pytest.fixture
def store(events_file):
    """A store with three events at t=100, 200, 300 (seed replaced)."""
    events_file.parent.mkdir(parents=True)
    events_file.write_text(json.dumps([
        {"name": "A", "ts": 100},
        {"name": "B", "ts": 200},
        {"name": "C", "ts": 300},
    ], indent=2), encoding="utf-8")
    return EventStore(events_file)


def _names(store):
    return [e.name for e in store.events]


def _times(store):
    return [e.time for e in store.events]


# ═══════════════════════════════════════════════════════════
# LOAD / SEED
# ═══════════════════════════════════════════════════════════

class TestFirstRun:
    def test_seeds_one_event(self, events_file):
        store = EventStore(events_file)
        assert len(store) == 1
        assert store.events[0].name == ANNIVERSARY_NAME
        assert events_file.exists()

    def test_seed_is_written_to_disk(self, events_file):
        store = EventStore(events_file)
        raw = json.loads(events_file.read_text(encoding="utf-8"))
        assert raw == [{"name": ANNIVERSARY_NAME, "ts": store.events[0].time}]

    def test_seed_is_next_november_tenth(self, events_file):
        store = EventStore(events_file)
        seeded = datetime.fromtimestamp(store.events[0].time)
        assert (seeded.month, seeded.day, seeded.hour, seeded.minute) == (11, 10, 0, 0)
        assert seeded > datetime.now()
        assert seeded.year in (datetime.now().year, datetime.now().year + 1)


class TestNextAnniversary:
    def test_before_date_uses_this_year(self):
        ev = next_anniversary(datetime(2025, 6, 1, 12, 0))
        assert ev.time == int(datetime(2025, 11, 10).timestamp())

    def test_on_the_day_uses_next_year(self):
        ev = next_anniversary(datetime(2025, 11, 10, 0, 0, 0))
        assert ev.time == int(datetime(2026, 11, 10).timestamp())

    def test_after_date_uses_next_year(self):
        ev = next_anniversary(datetime(2025, 12, 24, 8, 0))
        assert ev.time == int(datetime(2026, 11, 10).timestamp())
        assert ev.name == ANNIVERSARY_NAME


class TestLoad:
    def test_loads_existing_events(self, store):
        assert _names(store) == ["A", "B", "C"]

    def test_unsorted_file_is_sorted_on_load(self, events_file):
        events_file.parent.mkdir(parents=True)
        events_file.write_text(json.dumps([
            {"name": "late", "ts": 900},
            {"name": "early", "ts": 10},
        ]), encoding="utf-8")
        assert _names(EventStore(events_file)) == ["early", "late"]

    def test_empty_array_is_valid(self, events_file):
        events_file.parent.mkdir(parents=True)
        events_file.write_text("[]", encoding="utf-8")
        store = EventStore(events_file)
        assert len(store) == 0
        assert not store

    def test_malformed_json_is_fatal(self, events_file):
        events_file.parent.mkdir(parents=True)
        events_file.write_text("{not json", encoding="utf-8")
        with pytest.raises(StoreError):
            EventStore(events_file)

    def test_non_array_is_fatal(self, events_file):
        events_file.parent.mkdir(parents=True)
        events_file.write_text('{"name": "x", "ts": 1}', encoding="utf-8")
        with pytest.raises(StoreError):
            EventStore(events_file)

    def test_bad_entry_is_fatal(self, events_file):
        events_file.parent.mkdir(parents=True)
        events_file.write_text('[{"name": "x", "ts": "soon"}]', encoding="utf-8")
        with pytest.raises(StoreError):
            EventStore(events_file)

    def test_unresolvable_config_dir_is_fatal(self):
        with patch("countdown.data.get_events_path", side_effect=RuntimeError("no home")):
            with pytest.raises(StoreError):
                EventStore()

    def test_default_path_follows_config_dir_override(self, tmp_path, monkeypatch):
        monkeypatch.setenv("COUNTDOWN_CONFIG_DIR", str(tmp_path / "cfg"))
        store = EventStore()
        assert store.path == tmp_path / "cfg" / "events.json"
        assert store.path.exists()


class TestRoundTrip:
    def test_load_then_save_is_byte_equivalent(self, events_file):
        content = (
            '[\n'
            '  {\n    "name": "Launch",\n    "ts": 1767225600\n  },\n'
            '  {\n    "name": "Déjà vu",\n    "ts": 1767312000\n  }\n'
            ']'
        )
        events_file.parent.mkdir(parents=True)
        events_file.write_bytes(content.encode("utf-8"))
        store = EventStore(events_file)
        store.save()
        assert events_file.read_bytes() == content.encode("utf-8")

    def test_empty_collection_saves_as_empty_array(self, store, events_file):
        for _ in range(3):
            store.remove(0)
        assert events_file.read_text(encoding="utf-8") == "[]"


# ═══════════════════════════════════════════════════════════
# MUTATIONS
# ═══════════════════════════════════════════════════════════

class TestAdd:
    def test_add_keeps_order(self, store):
        store.add(Event("between", 150))
        assert _times(store) == [100, 150, 200, 300]

    def test_add_returns_index(self, store):
        assert store.add(Event("first", 1)) == 0
        assert store.add(Event("last", 10_000)) == 4

    def test_equal_time_goes_after_existing(self, store):
        index = store.add(Event("B2", 200))
        assert index == 2
        assert _names(store) == ["A", "B", "B2", "C"]
        store.add(Event("B3", 200))
        assert _names(store) == ["A", "B", "B2", "B3", "C"]

    def test_add_persists(self, store, events_file):
        store.add(Event("new", 250))
        raw = json.loads(events_file.read_text(encoding="utf-8"))
        assert {"name": "new", "ts": 250} in raw
        assert [r["ts"] for r in raw] == [100, 200, 250, 300]


class TestRemove:
    def test_remove_by_index(self, store):
        removed = store.remove(1)
        assert removed == Event("B", 200)
        assert _names(store) == ["A", "C"]

    def test_remove_out_of_range_is_noop(self, store, events_file):
        before = events_file.read_text(encoding="utf-8")
        assert store.remove(7) is None
        assert store.remove(-1) is None
        assert len(store) == 3
        assert events_file.read_text(encoding="utf-8") == before

    def test_remove_persists(self, store, events_file):
        store.remove(0)
        raw = json.loads(events_file.read_text(encoding="utf-8"))
        assert [r["name"] for r in raw] == ["B", "C"]


class TestReplace:
    def test_replace_moves_event_earlier(self, store):
        index = store.replace(2, Event("C moved", 50))
        assert index == 0
        assert _names(store) == ["C moved", "A", "B"]

    def test_replace_moves_event_later(self, store):
        index = store.replace(0, Event("A moved", 1000))
        assert index == 2
        assert _names(store) == ["B", "C", "A moved"]

    def test_replace_same_time_goes_after_equals(self, store):
        store.add(Event("B2", 200))
        store.replace(0, Event("A at 200", 200))
        assert _names(store) == ["B", "B2", "A at 200", "C"]

    def test_stays_sorted_after_mixed_operations(self, store):
        store.add(Event("x", 250))
        store.replace(0, Event("y", 275))
        store.remove(1)
        store.add(Event("z", 5))
        store.replace(3, Event("w", 120))
        times = _times(store)
        assert times == sorted(times)


class TestQueries:
    def test_get_tolerates_stale_index(self, store):
        assert store.get(1) == Event("B", 200)
        assert store.get(3) is None
        assert store.get(-1) is None

    def test_events_is_a_copy(self, store):
        store.events.clear()
        assert len(store) == 3
