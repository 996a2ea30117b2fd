"""Markup produced by the list, detail and timeline panels."""
import pytest
from textual.content import Content

from countdown.data import Event
from countdown.onthisday import HistoricalFact, OnThisDayResult
from countdown.layout import layout_timeline
from countdown.panels.detail_panel import render_blocks, render_detail, render_progress_bar
from countdown.panels.event_list_panel import render_item
from countdown.panels.history_panel import render_history
from countdown.panels.timeline_panel import render_timeline
from countdown.theme import DEFAULT_THEME

NOW = 1_750_000_000
DAY = 86400


class TestRenderItem:
    def test_future_event(self):
        text = render_item(Event("Launch", NOW + 4 * DAY + 5), NOW, False, 30)
        assert "Launch" in text
        assert "4d 0h 0m 5s" in text
        assert DEFAULT_THEME.urgency_4 in text

    def test_past_event(self):
        text = render_item(Event("Gone", NOW - 90), NOW, False, 30)
        assert "1m 30s ago" in text
        assert DEFAULT_THEME.past in text

    def test_selected_has_bar(self):
        assert "│" in render_item(Event("Launch", NOW + DAY), NOW, True, 30)

    def test_markup_in_name_escaped(self):
        assert "\\[b]" in render_item(Event("[b]bold", NOW + DAY), NOW, False, 30)


class TestRenderDetail:
    def test_future_sections(self):
        text = render_detail(Event("Launch", NOW + 3 * DAY), NOW, 60)
        assert "⏳ Time Until" in text
        assert "📊 Statistics" in text
        assert "Day progress:" in text

    def test_past_sections(self):
        text = render_detail(Event("Gone", NOW - 3 * DAY), NOW, 60)
        assert "⏪ Time Since" in text
        assert "ago" in text

    def test_progress_bar_widths(self):
        bar = render_progress_bar(0.5, 1.0, 10, "#fff")
        assert bar.count(DEFAULT_THEME.bar_full) == 5
        assert bar.count(DEFAULT_THEME.bar_blank) == 5


class TestRenderTimeline:
    def test_empty(self):
        layout = layout_timeline([Event("old", NOW - DAY)], 0, NOW, 60, 5)
        assert "No upcoming events" in render_timeline(layout)

    def test_selected_marker_and_overflow(self):
        events = [Event(f"e{i}", NOW + (i + 1) * DAY) for i in range(10)]
        text = render_timeline(layout_timeline(events, 0, NOW, 60, 5))
        assert text.count(DEFAULT_THEME.marker_selected) == 1
        assert text.count(DEFAULT_THEME.marker) == 4
        assert "+5 more events" in text


class TestMarkupParses:
    """Everything the panels emit must be valid Textual markup."""

    def test_blocks_keep_literal_brackets(self):
        plain = Content.from_markup(render_blocks(Event("x", NOW + 3 * DAY + 5), NOW, 40)).plain
        for line in plain.splitlines():
            assert "[" in line
            assert line.endswith("]")
        assert DEFAULT_THEME.block_full in plain

    @pytest.mark.parametrize("offset", [-400 * DAY, -5, 5, DAY, 3 * DAY + 5, 800 * DAY])
    def test_detail(self, offset):
        plain = Content.from_markup(render_detail(Event("[odd] name", NOW + offset), NOW, 60)).plain
        assert "[odd] name" in plain
        assert "Total seconds:" in plain

    def test_list_item(self):
        for selected in (False, True):
            plain = Content.from_markup(render_item(Event("[b]x", NOW + DAY), NOW, selected, 30)).plain
            assert "[b]x" in plain

    def test_timeline(self):
        events = [Event(f"[e{i}]", NOW + (i + 1) * DAY) for i in range(10)]
        plain = Content.from_markup(render_timeline(layout_timeline(events, 0, NOW, 60, 5))).plain
        assert "[e0]" in plain
        assert "+5 more events" in plain

    def test_history(self):
        results = [
            None,
            OnThisDayResult(error="404 [not found]"),
            OnThisDayResult(facts=[HistoricalFact("A [bracketed] fact", 1900)]),
        ]
        for result in results:
            Content.from_markup(render_history(result, 20, 50))
