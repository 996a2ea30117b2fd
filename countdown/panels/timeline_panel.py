"""Timeline widget — proportional bars for the upcoming events."""
from __future__ import annotations

import time

from rich.markup import escape
from textual.containers import VerticalScroll
from textual.widgets import Static

from countdown.data import EventStore
from countdown.layout import TimelineLayout, layout_timeline, row_budget
from countdown.theme import DEFAULT_THEME, Theme


def render_timeline(layout: TimelineLayout, theme: Theme = DEFAULT_THEME) -> str:
    if layout.is_empty:
        return f"[{theme.hint}]No upcoming events[/]"

    lines = []
    for row in layout.rows:
        if row.selected:
            marker = f"[bold {theme.timeline_selected}]{theme.marker_selected}[/]"
            name = f"[bold {theme.timeline_selected}]{escape(row.name):<{layout.name_width}}[/]"
            bar_color = theme.timeline_selected
        else:
            color = row.band.color(theme)
            marker = f"[{color}]{theme.marker}[/]"
            name = f"[{theme.text_bright}]{escape(row.name):<{layout.name_width}}[/]"
            bar_color = color
        bar = (
            f"[{bar_color}]{theme.bar_full * row.fill}[/]"
            f"[{theme.timeline_track}]{theme.bar_blank * (row.bar_width - row.fill)}[/]"
        )
        lines.append(f"{marker} {name} {bar} [{theme.text_normal}]{row.label}[/]")

    if layout.overflow:
        lines.append(f"  [{theme.hint}]{layout.overflow_text}[/]")
    return "\n".join(lines)


class TimelinePanel(VerticalScroll):
    """Upcoming events laid out by distance; the selection is highlighted."""

    can_focus = False

    def __init__(self, store: EventStore, theme: Theme = DEFAULT_THEME, **kwargs):
        super().__init__(**kwargs)
        self.store = store
        self.theme_colors = theme
        self.border_title = "Timeline"

    def compose(self):
        yield Static("", id="timeline-body", markup=True)

    def build_layout(self, selected_index: int, now: int | None = None) -> TimelineLayout:
        now = int(time.time()) if now is None else now
        return layout_timeline(
            self.store.events,
            selected_index,
            now,
            self.size.width or 50,
            row_budget(self.size.height or 14),
        )

    def show(self, selected_index: int, now: int | None = None):
        layout = self.build_layout(selected_index, now)
        self.query_one("#timeline-body", Static).update(render_timeline(layout, self.theme_colors))
