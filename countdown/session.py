"""Interaction state machine for browsing, adding and editing events.

The session holds everything the form needs (pending texts, focus, error,
date preview, edit target) and performs the transitions. It never touches
Textual directly: widgets are written through the small `TextField` and
`Focusable` protocols in `apply()`.
"""
from __future__ import annotations

import logging
import time
from enum import Enum, IntEnum
from typing import Callable, Protocol, Sequence

from countdown.data import Event, EventStore
from countdown.timemath import date_preview, format_input_value, parse_date_input, to_timestamp

log = logging.getLogger(__name__)


class Mode(Enum):
    BROWSE = "browse"
    ADD = "add"
    EDIT = "edit"
    EMPTY = "empty"


class Focus(IntEnum):
    NAME = 0
    DATE = 1
    CANCEL = 2
    SUBMIT = 3


FOCUS_TARGETS = len(Focus)


class Focusable(Protocol):
    def focus(self, scroll_visible: bool = True): ...

    def blur(self): ...


class TextField(Focusable, Protocol):
    value: str


class ValidationError(ValueError):
    def __init__(self, field: Focus, message: str):
        super().__init__(message)
        self.field = field
        self.message = message


class Session:
    def __init__(self, store: EventStore, clock: Callable[[], float] = time.time):
        self.store = store
        self._clock = clock
        self.mode = Mode.BROWSE if store else Mode.EMPTY
        self.focus = Focus.NAME
        self.name = ""
        self.date = ""
        self.error = ""
        self.preview = ""
        self.preview_valid = False
        self.edit_index = -1

    # ── State queries ────────────────────────────────────

    @property
    def in_form(self) -> bool:
        return self.mode in (Mode.ADD, Mode.EDIT)

    @property
    def can_quit(self) -> bool:
        return self.mode in (Mode.BROWSE, Mode.EMPTY)

    def _resting_mode(self) -> Mode:
        return Mode.BROWSE if self.store else Mode.EMPTY

    def reset(self):
        self.name = ""
        self.date = ""
        self.focus = Focus.NAME
        self.error = ""
        self.preview = ""
        self.preview_valid = False
        self.edit_index = -1

    # ── Browse / Empty transitions ───────────────────────

    def start_add(self) -> bool:
        if self.mode not in (Mode.BROWSE, Mode.EMPTY):
            return False
        self.reset()
        self.mode = Mode.ADD
        return True

    def start_edit(self, index: int) -> bool:
        if self.mode is not Mode.BROWSE:
            return False
        event = self.store.get(index)
        if event is None:
            return False
        self.reset()
        self.edit_index = index
        self.name = event.name
        self.set_date(format_input_value(event.time))
        self.mode = Mode.EDIT
        return True

    def remove(self, index: int) -> Event | None:
        if self.mode is not Mode.BROWSE:
            return None
        removed = self.store.remove(index)
        if removed is not None and not self.store:
            self.mode = Mode.EMPTY
        return removed

    # ── Form transitions ─────────────────────────────────

    def back(self) -> bool:
        if not self.in_form:
            return False
        self.reset()
        self.mode = self._resting_mode()
        return True

    def focus_next(self):
        self.focus = Focus((self.focus + 1) % FOCUS_TARGETS)

    def focus_prev(self):
        self.focus = Focus((self.focus - 1) % FOCUS_TARGETS)

    def set_name(self, text: str):
        self.name = text

    def set_date(self, text: str):
        self.date = text
        self.preview, self.preview_valid = date_preview(text, self._clock())

    def confirm(self) -> int | None:
        """Enter key. Returns the collection index of a saved event."""
        if not self.in_form:
            return None
        if self.focus in (Focus.NAME, Focus.DATE):
            self.focus_next()
            return None
        if self.focus is Focus.CANCEL:
            self.back()
            return None
        return self.submit()

    def validate(self) -> Event:
        if not self.name:
            raise ValidationError(Focus.NAME, "event name is required")
        if not self.date:
            raise ValidationError(Focus.DATE, "date/time is required")
        try:
            parsed = parse_date_input(self.date)
        except ValueError:
            raise ValidationError(Focus.DATE, "invalid date format") from None
        return Event(self.name, to_timestamp(parsed))

    def submit(self) -> int | None:
        try:
            event = self.validate()
        except ValidationError as exc:
            log.info("rejected %s submission: %s", self.mode.value, exc.message)
            self.name = ""
            self.date = ""
            self.focus = Focus.NAME
            self.preview = ""
            self.preview_valid = False
            self.error = f"Error: {exc.message}"
            return None
        if self.mode is Mode.EDIT:
            index = self.store.replace(self.edit_index, event)
        else:
            index = self.store.add(event)
        self.reset()
        self.mode = Mode.BROWSE
        return index

    # ── Widgets ──────────────────────────────────────────

    def apply(self, fields: Sequence[TextField], targets: Sequence[Focusable]):
        """Push pending texts into the two fields and move widget focus.

        `targets` are the four focus targets in `Focus` order.
        """
        name_field, date_field = fields
        if name_field.value != self.name:
            name_field.value = self.name
        if date_field.value != self.date:
            date_field.value = self.date
        for position, target in enumerate(targets):
            if position == self.focus:
                target.focus()
            else:
                target.blur()
