"""Countdown — main application: event list, details, timeline and history."""
from __future__ import annotations

import logging
import time

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal, Vertical
from textual.message import Message
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label, Static

from countdown.config import Config, load_config
from countdown.data import EventStore
from countdown.onthisday import OnThisDayResult, fetch_on_this_day
from countdown.panels.detail_panel import DetailPanel
from countdown.panels.event_list_panel import EventListPanel
from countdown.panels.history_panel import HistoryPanel
from countdown.panels.timeline_panel import TimelinePanel
from countdown.session import Focus, Mode, Session
from countdown.theme import DEFAULT_THEME, Theme

log = logging.getLogger(__name__)


class HistoryLoaded(Message):
    """Posted once by the background 'on this day' fetch."""

    def __init__(self, result: OnThisDayResult) -> None:
        super().__init__()
        self.result = result


# ── Add / edit form ──────────────────────────────────────

class EventFormScreen(ModalScreen[int | None]):
    """Name + date form. Every key is routed through the session.

    Dismisses with the collection index of the saved event, or None when
    the form was cancelled.
    """

    BINDINGS = [
        Binding("escape", "back", "Back"),
        Binding("tab", "next_field", "Next", show=False, priority=True),
        Binding("shift+tab", "prev_field", "Previous", show=False, priority=True),
        Binding("enter", "confirm", "Confirm", show=False, priority=True),
    ]

    CSS = """
    EventFormScreen {
        align: center middle;
        background: rgba(0, 0, 0, 0.85);
    }
    #form-box {
        width: 64;
        height: auto;
        background: #282a36;
        border: round #D32389;
        padding: 1 2;
    }
    #form-title {
        width: 100%;
        content-align: center middle;
        background: #D32389;
        color: #000000;
        text-style: bold;
        margin-bottom: 1;
    }
    .form-label {
        text-style: bold;
        color: #DDDDDD;
        margin-top: 1;
    }
    .form-input {
        background: #44475a;
        border: round #6272a4;
        height: 3;
    }
    .form-input:focus {
        border: round #D32389;
    }
    .form-hint {
        color: #7F8C8D;
    }
    #date-preview {
        height: 1;
        margin-left: 2;
    }
    #form-buttons {
        height: auto;
        margin-top: 1;
    }
    #form-buttons Button {
        margin-right: 2;
    }
    #form-buttons Button:focus {
        color: #D32389;
        text-style: bold;
    }
    #form-error {
        color: #CF002E;
        height: auto;
    }
    """

    def __init__(self, session: Session, theme: Theme = DEFAULT_THEME, **kwargs):
        super().__init__(**kwargs)
        self.session = session
        self.theme_colors = theme

    def compose(self) -> ComposeResult:
        editing = self.session.mode is Mode.EDIT
        with Container(id="form-box"):
            yield Static("✏️  Edit Event" if editing else "✨ New Event", id="form-title")
            yield Label("📝 Event Name", classes="form-label")
            yield Input(
                value=self.session.name,
                placeholder="e.g., Birthday Party",
                max_length=50,
                id="name-input",
                classes="form-input",
            )
            yield Label("📅 Date & Time", classes="form-label")
            yield Input(
                value=self.session.date,
                placeholder="2025-12-31 or 2025-12-31 18:00:00",
                max_length=19,
                id="date-input",
                classes="form-input",
            )
            yield Static(
                "   Format: YYYY-MM-DD or YYYY-MM-DD HH:MM:SS\n"
                "   Example: 2025-12-31 or 2025-12-31 18:30:00",
                classes="form-hint",
                markup=False,
            )
            yield Static("", id="date-preview", markup=True)
            with Horizontal(id="form-buttons"):
                yield Button("✗ Cancel", id="cancel-button")
                yield Button("✓ Update" if editing else "✓ Create", id="submit-button")
            yield Static("", id="form-error", markup=False)
            yield Static(
                "Tab: next field • Shift+Tab: previous • Enter: select • Esc: cancel",
                classes="form-hint",
                markup=False,
            )

    def on_mount(self) -> None:
        self._sync()

    def _fields(self) -> list[Input]:
        return [self.query_one("#name-input", Input), self.query_one("#date-input", Input)]

    def _sync(self) -> None:
        """Mirror the session into the widgets."""
        fields = self._fields()
        buttons = [self.query_one("#cancel-button", Button), self.query_one("#submit-button", Button)]
        self.session.apply(fields, fields + buttons)
        self._update_preview()
        self.query_one("#form-error", Static).update(self.session.error)

    def _update_preview(self) -> None:
        theme = self.theme_colors
        preview = self.query_one("#date-preview", Static)
        if not self.session.preview:
            preview.update("")
        elif self.session.preview_valid:
            preview.update(f"[italic {theme.hint}]→ {self.session.preview}[/]")
        else:
            preview.update(f"[{theme.error}]✗ {self.session.preview}[/]")

    def on_input_changed(self, event: Input.Changed) -> None:
        if not self.session.in_form:
            return
        if event.input.id == "name-input":
            self.session.set_name(event.value)
        elif event.input.id == "date-input":
            self.session.set_date(event.value)
            self._update_preview()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.session.focus = Focus.CANCEL if event.button.id == "cancel-button" else Focus.SUBMIT
        self._confirm()

    def _confirm(self) -> None:
        index = self.session.confirm()
        if self.session.in_form:
            self._sync()
        else:
            self.dismiss(index)

    def action_next_field(self) -> None:
        self.session.focus_next()
        self._sync()

    def action_prev_field(self) -> None:
        self.session.focus_prev()
        self._sync()

    def action_confirm(self) -> None:
        self._confirm()

    def action_back(self) -> None:
        self.session.back()
        self.dismiss(None)


# ── Main application ─────────────────────────────────────

class CountdownApp(App):
    """Live countdowns for a handful of named events."""

    TITLE = "Countdown"
    CSS_PATH = "app.tcss"
    AUTO_FOCUS = None

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("plus", "add_event", "Add"),
        Binding("minus", "remove_event", "Remove"),
        Binding("e", "edit_event", "Edit"),
        Binding("k", "move_up", "Up", show=False),
        Binding("j", "move_down", "Down", show=False),
        Binding("up", "move_up", "Up", show=False),
        Binding("down", "move_down", "Down", show=False),
    ]

    def __init__(self, config: Config | None = None, store: EventStore | None = None, theme: Theme = DEFAULT_THEME):
        super().__init__()
        self.config = config or load_config()
        self.dm = store if store is not None else EventStore(self.config.events_path)
        self.session = Session(self.dm)
        self.theme_colors = theme
        self._mounted = False

    def compose(self) -> ComposeResult:
        yield Static("  [bold #8be9fd]Countdown[/]", id="title-bar", markup=True)

        with Horizontal(id="main-container"):
            yield EventListPanel(self.dm, self.theme_colors, id="panel-events", classes="panel")
            yield DetailPanel(self.theme_colors, id="panel-detail", classes="panel")
            with Vertical(id="right-panels"):
                yield TimelinePanel(self.dm, self.theme_colors, id="panel-timeline", classes="panel")
                yield HistoryPanel(self.theme_colors, id="panel-history", classes="panel")

        yield Static(
            "No events, add one with '+'\n\nPress 'q' to quit",
            id="empty-message",
            markup=False,
        )
        yield Static("", id="status-bar", markup=True)

    def on_mount(self) -> None:
        self._mounted = True
        log.info("starting with %d events from %s", len(self.dm), self.dm.path)
        self.screen.set_focus(None)
        self.set_interval(self.config.tick_interval, self._tick)
        history = self.query_one("#panel-history", HistoryPanel)
        if self.config.fetch_history:
            self.fetch_history()
        else:
            history.display = False
        self._update_view()

    # ── Background work ──────────────────────────────────

    @work(thread=True, exclusive=True, group="history")
    def fetch_history(self) -> None:
        result = fetch_on_this_day(timeout=self.config.fetch_timeout)
        self.post_message(HistoryLoaded(result))

    def on_history_loaded(self, message: HistoryLoaded) -> None:
        self.query_one("#panel-history", HistoryPanel).set_result(message.result)

    def _tick(self) -> None:
        if self.session.mode is Mode.BROWSE:
            self._refresh_live()

    def on_resize(self) -> None:
        if self._mounted:
            self._update_view()

    # ── Rendering ────────────────────────────────────────

    def _list(self) -> EventListPanel:
        return self.query_one("#panel-events", EventListPanel)

    def _refresh_live(self) -> None:
        """Redraw everything that depends on the clock."""
        now = int(time.time())
        panel = self._list()
        panel.refresh_list()
        self.query_one("#panel-detail", DetailPanel).show(panel.get_selected(), now)
        self.query_one("#panel-timeline", TimelinePanel).show(panel.selected_index, now)
        history = self.query_one("#panel-history", HistoryPanel)
        if history.result is not None:
            history.refresh_body()
        panel.border_subtitle = panel.get_counter_text()

    def _update_view(self) -> None:
        empty = self.session.mode is Mode.EMPTY
        self.query_one("#main-container").display = not empty
        self.query_one("#empty-message").display = empty
        if not empty:
            self._refresh_live()
        self._update_status_bar()

    def _update_status_bar(self) -> None:
        key = "bold #f1fa8c"
        if self.session.mode is Mode.EMPTY:
            actions = f"[{key}]+[/]:add"
        else:
            actions = (
                f"[{key}]+[/]:add [{key}]-[/]:remove [{key}]e[/]:edit "
                f"[{key}]↑/↓[/]:select"
            )
        self.query_one("#status-bar", Static).update(f" {actions}  [dim]│[/]  [{key}]q[/]:quit")

    # ── Key gating ───────────────────────────────────────

    def check_action(self, action: str, parameters: tuple[object, ...]) -> bool | None:
        mode = self.session.mode
        if action == "quit":
            return self.session.can_quit
        if action == "add_event":
            return mode in (Mode.BROWSE, Mode.EMPTY)
        if action in ("remove_event", "edit_event", "move_up", "move_down"):
            return mode is Mode.BROWSE
        return True

    # ── Actions ──────────────────────────────────────────

    def action_move_up(self) -> None:
        self._list().move_up()
        self._refresh_live()

    def action_move_down(self) -> None:
        self._list().move_down()
        self._refresh_live()

    def action_add_event(self) -> None:
        if self.session.start_add():
            self.push_screen(EventFormScreen(self.session, self.theme_colors), callback=self._on_form_closed)

    def action_edit_event(self) -> None:
        if self.session.start_edit(self._list().selected_index):
            self.push_screen(EventFormScreen(self.session, self.theme_colors), callback=self._on_form_closed)

    def action_remove_event(self) -> None:
        if self.session.remove(self._list().selected_index) is not None:
            self._update_view()

    def _on_form_closed(self, index: int | None) -> None:
        if index is not None:
            self._list().selected_index = index
        self._update_view()
