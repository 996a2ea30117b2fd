"""On-this-day widget — historical facts for today's date."""
from __future__ import annotations

from datetime import date

from rich.markup import escape
from textual.containers import VerticalScroll
from textual.widgets import Static

from countdown.onthisday import OnThisDayResult, max_facts, wrap_fact, years_ago
from countdown.theme import DEFAULT_THEME, Theme


def render_history(
    result: OnThisDayResult | None,
    height: int,
    width: int,
    today: date | None = None,
    theme: Theme = DEFAULT_THEME,
) -> str:
    """Markup for the panel; `result` is None while the fetch is running."""
    today = today or date.today()
    if result is None:
        return f"  [{theme.hint}]Loading historical events...[/]"
    if result.error is not None:
        return (
            f"  [{theme.error}]Failed to load events[/]\n"
            f"  [{theme.hint}]{escape(result.error)}[/]"
        )
    if not result.facts:
        return f"  [{theme.hint}]No historical events found[/]"

    limit = max_facts(height)
    text_width = max(20, width - 12)
    parts = []
    for i, fact in enumerate(result.facts):
        if i >= limit:
            parts.append(f"  [{theme.hint}]... and {len(result.facts) - limit} more events[/]")
            break
        parts.append(f"  [bold {theme.timeline_selected}]{fact.year} ({years_ago(fact, today)} yrs ago)[/]")
        for line in wrap_fact(fact.text, text_width):
            parts.append(f"  [{theme.text_normal}]{escape(line)}[/]")
        if i < limit - 1 and i < len(result.facts) - 1:
            parts.append(f"  [{theme.timeline_track}]─────────[/]")
    parts.append("")
    parts.append(f"  [{theme.hint}]Source: Wikipedia[/]")
    return "\n".join(parts)


class HistoryPanel(VerticalScroll):
    """Filled once by the background fetch; shows loading until then."""

    can_focus = False

    def __init__(self, theme: Theme = DEFAULT_THEME, **kwargs):
        super().__init__(**kwargs)
        self.theme_colors = theme
        self.result: OnThisDayResult | None = None
        self.border_title = f"📜 On This Day - {date.today():%B} {date.today().day}"

    def compose(self):
        yield Static(render_history(None, 0, 0, theme=self.theme_colors), id="history-body", markup=True)

    def set_result(self, result: OnThisDayResult):
        self.result = result
        self.refresh_body()

    def refresh_body(self):
        self.query_one("#history-body", Static).update(
            render_history(self.result, self.size.height or 20, self.size.width or 50, theme=self.theme_colors)
        )
