"""Detail widget — countdown blocks, day progress and totals for one event."""
from __future__ import annotations

from rich.markup import escape
from textual.containers import VerticalScroll
from textual.widgets import Static

from countdown.data import Event
from countdown.theme import DEFAULT_THEME, Theme
from countdown.timemath import (
    day_progress,
    decompose,
    format_clock,
    format_compact,
    format_long_date,
    progress_fill,
    statistics,
    verbose_rows,
)
from countdown.urgency import urgency_color


def _heading(text: str, bg: str, theme: Theme) -> str:
    return f"[bold {theme.title_fg} on {bg}] {text} [/]"


def render_blocks(event: Event, now: int, width: int, theme: Theme = DEFAULT_THEME) -> str:
    d = decompose(event.time, now)
    color = urgency_color(event.time, now, theme)
    lines = []
    for row in verbose_rows(d, width):
        filled = theme.block_full * row.fill
        empty = theme.block_blank * (row.bar_width - row.fill)
        lines.append(
            f"[{theme.text_normal}]{row.label:<10}[/]"
            f"[{theme.text_bright}]{row.value:>4}[/] "
            f"\\[[{color}]{filled}[/][{theme.block_empty}]{empty}[/]]"
        )
    return "\n".join(lines)


def render_progress_bar(value: float, maximum: float, width: int, color: str, theme: Theme = DEFAULT_THEME) -> str:
    filled = progress_fill(value, maximum, width)
    return (
        f"[{color}]{theme.bar_full * filled}[/]"
        f"[{theme.bar_empty}]{theme.bar_blank * (width - filled)}[/]"
    )


def render_detail(event: Event, now: int, width: int, theme: Theme = DEFAULT_THEME) -> str:
    d = decompose(event.time, now)
    color = urgency_color(event.time, now, theme)

    parts = [
        _heading(escape(event.name), color, theme),
        "",
        f"[{theme.text_normal}]📅[/] [{theme.text_bright}]{format_long_date(event.time)}[/]",
        f"[{theme.text_normal}]🕐[/] [{theme.text_bright}]{format_clock(event.time)}[/]",
        "",
        _heading("⏪ Time Since" if d.is_past else "⏳ Time Until", color, theme),
        "",
        render_blocks(event, now, width, theme),
        "",
        f"[bold {color}]{format_compact(d)}[/]",
        "",
    ]

    progress_width = max(10, min(30, width - 30))
    progress = day_progress(d)
    parts.append(
        f"[{theme.text_normal}]Day progress:[/] "
        f"{render_progress_bar(progress, 1.0, progress_width, color, theme)} {progress * 100:.1f}%"
    )
    parts.append("")

    parts.append(_heading("📊 Statistics", theme.title_bg, theme))
    parts.append("")
    for label, value in statistics(event.time, now).rows():
        parts.append(f"[{theme.text_normal}]{label:<16}[/][{theme.text_bright}]{value}[/]")

    return "\n".join(parts)


class DetailPanel(VerticalScroll):
    """Shows the selected event; redrawn on every tick."""

    can_focus = False

    def __init__(self, theme: Theme = DEFAULT_THEME, **kwargs):
        super().__init__(**kwargs)
        self.theme_colors = theme
        self.border_title = "Details"

    def compose(self):
        yield Static("", id="detail-body", markup=True)

    def show(self, event: Event | None, now: int):
        body = self.query_one("#detail-body", Static)
        if event is None:
            body.update(f"[{self.theme_colors.hint}]No event selected[/]")
            return
        body.update(render_detail(event, now, self.size.width or 35, self.theme_colors))
