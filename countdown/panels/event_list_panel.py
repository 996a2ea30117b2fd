"""Event list widget — every event with its live countdown."""
from __future__ import annotations

import time

from rich.markup import escape
from textual.containers import VerticalScroll
from textual.reactive import reactive
from textual.widgets import Static

from countdown.data import Event, EventStore
from countdown.theme import DEFAULT_THEME, Theme
from countdown.timemath import countdown_text
from countdown.urgency import urgency_color


def render_item(event: Event, now: int, selected: bool, width: int, theme: Theme = DEFAULT_THEME) -> str:
    """Two-line list entry: name, then the colored compact countdown."""
    name = event.name
    limit = max(8, width - 3)
    if len(name) > limit:
        name = name[: limit - 3] + "..."
    color = urgency_color(event.time, now, theme)
    countdown = countdown_text(event.time, now)
    if selected:
        return (
            f"[{theme.item_title}]│ {escape(name)}[/]\n"
            f"[{theme.item_title}]│[/] [{color}]{countdown}[/]"
        )
    return f"  [{theme.text_bright}]{escape(name)}[/]\n  [{color}]{countdown}[/]"


class EventListPanel(VerticalScroll):
    """Selectable list of events, kept in store order (ascending time)."""

    can_focus = False

    selected_index: reactive[int] = reactive(0)

    def __init__(self, store: EventStore, theme: Theme = DEFAULT_THEME, **kwargs):
        super().__init__(**kwargs)
        self.store = store
        self.theme_colors = theme
        self.border_title = "Events"

    def compose(self):
        yield from self._build_items()

    def _build_items(self):
        events = self.store.events
        if not events:
            yield Static("  No events yet. Press [+] to add.", classes="empty-message", markup=False)
            return
        now = int(time.time())
        width = self.size.width or 20
        for i, event in enumerate(events):
            classes = "list-item"
            if i == self.selected_index:
                classes += " list-item-selected"
            yield Static(
                render_item(event, now, i == self.selected_index, width, self.theme_colors),
                classes=classes,
                markup=True,
            )

    def refresh_list(self):
        count = len(self.store)
        if count > 0:
            self.selected_index = min(self.selected_index, count - 1)
        else:
            self.selected_index = 0
        self.remove_children()
        self.mount(*list(self._build_items()))

    def get_selected(self) -> Event | None:
        return self.store.get(self.selected_index)

    def move_up(self):
        if self.selected_index > 0:
            self.selected_index -= 1
            self.refresh_list()

    def move_down(self):
        if self.selected_index < len(self.store) - 1:
            self.selected_index += 1
            self.refresh_list()

    def get_counter_text(self) -> str:
        total = len(self.store)
        if total == 0:
            return "0 of 0"
        return f"{self.selected_index + 1} of {total}"
