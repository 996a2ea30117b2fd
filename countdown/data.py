"""Event store for Countdown — a sorted list of events kept in events.json."""
from __future__ import annotations

import bisect
import json
import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from countdown.config import get_events_path

log = logging.getLogger(__name__)

ANNIVERSARY_NAME = "Golang's Birthday"
ANNIVERSARY_MONTH = 11
ANNIVERSARY_DAY = 10


class StoreError(Exception):
    """The event file cannot be resolved, read, parsed or written."""


@dataclass(frozen=True)
class Event:
    name: str
    time: int  # epoch seconds

    def to_dict(self) -> dict:
        return {"name": self.name, "ts": self.time}

    @classmethod
    def from_dict(cls, raw) -> "Event":
        if not isinstance(raw, dict):
            raise StoreError(f"event entry is not an object: {raw!r}")
        name = raw.get("name")
        ts = raw.get("ts")
        if not isinstance(name, str) or not name:
            raise StoreError(f"event entry has no name: {raw!r}")
        if not isinstance(ts, int) or isinstance(ts, bool):
            raise StoreError(f"event entry has no integer ts: {raw!r}")
        return cls(name=name, time=ts)


def next_anniversary(now: datetime | None = None) -> Event:
    """Seed event: the next local midnight of 10 November."""
    now = now or datetime.now()
    this_year = datetime(now.year, ANNIVERSARY_MONTH, ANNIVERSARY_DAY)
    if now < this_year:
        target = this_year
    else:
        target = datetime(now.year + 1, ANNIVERSARY_MONTH, ANNIVERSARY_DAY)
    return Event(ANNIVERSARY_NAME, int(target.timestamp()))


class EventStore:
    """Ordered event collection, persisted after every mutation.

    Events are always sorted ascending by time. Identity is positional:
    `remove` and `replace` take an index into `events`.
    """

    def __init__(self, path: Path | None = None):
        self.path = Path(path) if path is not None else self._resolve_path()
        self._events: list[Event] = self._load()

    @staticmethod
    def _resolve_path() -> Path:
        try:
            return get_events_path()
        except (OSError, RuntimeError, KeyError) as exc:
            raise StoreError(f"failed to get user config directory: {exc}") from exc

    # ── Persistence ──────────────────────────────────────

    def _ensure_dir(self):
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StoreError(f"failed to create config directory: {exc}") from exc

    def _load(self) -> list[Event]:
        self._ensure_dir()
        if not self.path.exists():
            seed = next_anniversary()
            log.info("no event file at %s, seeding %r", self.path, seed.name)
            self._events = [seed]
            self._save()
            return self._events
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            raise StoreError(f"failed to read {self.path}: {exc}") from exc
        if not isinstance(raw, list):
            raise StoreError(f"{self.path} does not hold a JSON array")
        events = [Event.from_dict(item) for item in raw]
        events.sort(key=lambda e: e.time)
        log.debug("loaded %d events from %s", len(events), self.path)
        return events

    def dumps(self) -> str:
        return json.dumps([e.to_dict() for e in self._events], indent=2, ensure_ascii=False)

    def _save(self):
        try:
            with open(self.path, "w", encoding="utf-8") as f:
                f.write(self.dumps())
        except OSError as exc:
            raise StoreError(f"failed to write {self.path}: {exc}") from exc
        log.debug("saved %d events to %s", len(self._events), self.path)

    def save(self):
        self._save()

    # ── Collection ───────────────────────────────────────

    @property
    def events(self) -> list[Event]:
        return list(self._events)

    def __len__(self) -> int:
        return len(self._events)

    def __bool__(self) -> bool:
        return bool(self._events)

    def get(self, index: int) -> Event | None:
        if 0 <= index < len(self._events):
            return self._events[index]
        return None

    def insert_index(self, event: Event) -> int:
        """Position after every event whose time is <= event.time."""
        return bisect.bisect_right([e.time for e in self._events], event.time)

    def add(self, event: Event) -> int:
        index = self.insert_index(event)
        self._events.insert(index, event)
        self._save()
        log.info("added %r at index %d", event.name, index)
        return index

    def remove(self, index: int) -> Event | None:
        if not 0 <= index < len(self._events):
            return None
        event = self._events.pop(index)
        self._save()
        log.info("removed %r from index %d", event.name, index)
        return event

    def replace(self, index: int, event: Event) -> int:
        """Drop the event at `index` and insert `event` in sorted position."""
        if 0 <= index < len(self._events):
            self._events.pop(index)
        new_index = self.insert_index(event)
        self._events.insert(new_index, event)
        self._save()
        log.info("updated %r, index %d -> %d", event.name, index, new_index)
        return new_index
