"""
Masikip Notes TUI.

Sidebar on the left, editor on the right, status bar at the bottom. The app
owns a NotesState and redraws both panes whenever it reports a change.

Usage:
    masikip --service tui
    masikip --service tui --debug   (DEBUG records in logs/system.jsonl)
"""

from __future__ import annotations

from textual import events, on, work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.widgets import Button, Collapsible, Footer, Header, Input, ListView, TextArea

from masikip.core.logging import get_logger, log_with_source
from masikip.models.note import Priority
from masikip.state.notes import NotesState
from masikip.tui.widgets import NoteEditor, NoteListItem, NoteSidebar, StatusBar, TagButton
from masikip.views.editor import Bounds, OptionsMenu, TagInput, build_editor
from masikip.views.sidebar import SidebarModel

logger = get_logger(__name__)

PRIORITY_BUTTONS = {
    "priority-high": Priority.HIGH,
    "priority-medium": Priority.MEDIUM,
    "priority-low": Priority.LOW,
}


def _section_key(collapsible: Collapsible) -> str:
    return (collapsible.id or "").removeprefix("section-")


class NotesApp(App):
    """Terminal client for Masikip Notes."""

    TITLE = "Masikip Notes"
    SUB_TITLE = "Notes"

    CSS = """
    Screen {
        layout: vertical;
    }

    #main {
        height: 1fr;
    }

    NoteSidebar {
        width: 40;
        border-right: solid $primary;
    }

    #sidebar-header {
        height: auto;
        padding: 0 1;
    }

    #sidebar-title {
        width: 1fr;
        text-style: bold;
        padding: 1 0;
    }

    #sidebar-content {
        height: 1fr;
    }

    ListView {
        height: auto;
    }

    .note-item {
        padding: 0 1;
    }

    .note-item.-selected {
        background: $accent 30%;
    }

    .note-title {
        text-style: bold;
    }

    .note-meta, .note-preview, .no-notes {
        color: $text-muted;
    }

    NoteEditor {
        width: 1fr;
        padding: 0 1;
    }

    #welcome {
        content-align: center middle;
        height: 1fr;
        text-align: center;
    }

    #note-header {
        height: auto;
    }

    #note-date {
        width: 1fr;
        padding: 1 0;
        color: $text-muted;
    }

    #menu-container {
        width: 22;
        height: auto;
    }

    #options-menu {
        height: auto;
        border: solid $primary;
    }

    .menu-item {
        width: 100%;
    }

    #banner {
        background: $error 20%;
        padding: 0 1;
    }

    #content {
        height: 1fr;
    }

    #tags {
        height: auto;
    }

    .tag {
        min-width: 6;
    }

    StatusBar {
        dock: bottom;
        height: 1;
        background: $surface;
        color: $text;
        padding: 0 1;
    }
    """

    BINDINGS = [
        Binding("ctrl+n", "new_note", "New Note", priority=True),
        Binding("f2", "toggle_pin", "Pin", priority=True),
        Binding("f3", "delete_note", "Delete", priority=True),
        Binding("f4", "restore_note", "Restore", priority=True),
        Binding("f5", "reload", "Reload", priority=True),
        Binding("escape", "close_menu", "Close Menu", show=False),
        Binding("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, state: NotesState | None = None, backend: str = "") -> None:
        super().__init__()
        self.state = state or NotesState()
        self.sidebar_model = SidebarModel()
        self.options_menu = OptionsMenu()
        self.tag_input = TagInput()
        self._backend = backend
        self._unsubscribe = self.state.subscribe(self._schedule_render)

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="main"):
            yield NoteSidebar()
            yield NoteEditor()
        yield StatusBar()
        yield Footer()

    def on_mount(self) -> None:
        self.query_one(StatusBar).backend = self._backend
        log_with_source(logger, "tui", "info", "TUI started", backend=self._backend)
        self._load_notes()

    async def on_unmount(self) -> None:
        self._unsubscribe()
        await self.state.close()

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def _schedule_render(self) -> None:
        self.run_worker(self._render(), group="render", exclusive=True)

    async def _render(self) -> None:
        notes = self.state.notes
        await self.query_one(NoteSidebar).show(
            self.sidebar_model.sections(notes), loading=self.state.loading,
        )
        await self.query_one(NoteEditor).show(build_editor(self.state.selected_note))
        self.query_one(NoteEditor).set_menu_open(self.options_menu.is_open)

        status = self.query_one(StatusBar)
        status.total = sum(1 for note in notes if not note.is_deleted)
        status.pinned = sum(1 for note in notes if note.is_pinned and not note.is_deleted)
        status.trashed = sum(1 for note in notes if note.is_deleted)
        status.loading = self.state.loading

    # ------------------------------------------------------------------
    # Backend-bound intents
    # ------------------------------------------------------------------

    @work(group="sync")
    async def _load_notes(self) -> None:
        await self.state.load()

    @work(group="sync")
    async def _create_note(self) -> None:
        await self.state.create()
        self.query_one("#content", TextArea).focus()

    @work(group="sync")
    async def _update_note(self, note_id: str, content: str) -> None:
        await self.state.update(note_id, content)

    @work(group="sync")
    async def _toggle_pin(self, note_id: str) -> None:
        await self.state.toggle_pin(note_id)

    @work(group="sync")
    async def _set_priority(self, note_id: str, priority: Priority) -> None:
        await self.state.set_priority(note_id, priority)

    @work(group="sync")
    async def _delete_note(self, note_id: str) -> None:
        await self.state.delete(note_id)

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def action_new_note(self) -> None:
        self._create_note()

    def action_reload(self) -> None:
        self._load_notes()

    def action_toggle_pin(self) -> None:
        note = self.state.selected_note
        if note is not None:
            self._toggle_pin(note.id)
        self._close_menu()

    def action_delete_note(self) -> None:
        note = self.state.selected_note
        if note is not None:
            self._delete_note(note.id)
        self._close_menu()

    def action_restore_note(self) -> None:
        note = self.state.selected_note
        if note is not None:
            self.state.restore(note.id)

    def action_close_menu(self) -> None:
        self._close_menu()

    def _close_menu(self) -> None:
        if self.options_menu.is_open:
            self.options_menu.close()
            self.query_one(NoteEditor).set_menu_open(False)

    # ------------------------------------------------------------------
    # Widget events
    # ------------------------------------------------------------------

    def on_mouse_down(self, event: events.MouseDown) -> None:
        if not self.options_menu.is_open:
            return
        region = self.query_one("#menu-container").region
        self.options_menu.bounds = Bounds(region.x, region.y, region.width, region.height)
        if self.options_menu.on_pointer_down(event.screen_x, event.screen_y):
            self.query_one(NoteEditor).set_menu_open(False)

    @on(Input.Changed, "#search")
    def on_search_changed(self, event: Input.Changed) -> None:
        self.sidebar_model.search_term = event.value
        self._schedule_render()

    @on(Collapsible.Collapsed)
    def on_section_collapsed(self, event: Collapsible.Collapsed) -> None:
        self.sidebar_model.set_expanded(_section_key(event.collapsible), False)

    @on(Collapsible.Expanded)
    def on_section_expanded(self, event: Collapsible.Expanded) -> None:
        self.sidebar_model.set_expanded(_section_key(event.collapsible), True)

    @on(ListView.Selected)
    def on_note_selected(self, event: ListView.Selected) -> None:
        if isinstance(event.item, NoteListItem):
            self._close_menu()
            self.state.select(event.item.note_id)

    @on(TextArea.Changed, "#content")
    def on_content_changed(self, event: TextArea.Changed) -> None:
        note = self.state.selected_note
        text = event.text_area.text
        if note is None or note.is_deleted or text == note.content:
            return
        self._update_note(note.id, text)

    @on(Input.Changed, "#tag-input")
    def on_tag_input_changed(self, event: Input.Changed) -> None:
        self.tag_input.value = event.value

    @on(Input.Submitted, "#tag-input")
    def on_tag_submitted(self, event: Input.Submitted) -> None:
        note = self.state.selected_note
        self.tag_input.value = event.value
        tag = self.tag_input.submit()
        if note is None or tag is None:
            return
        event.input.value = self.tag_input.value
        self.state.add_tag(note.id, tag)

    @on(Button.Pressed)
    def on_button_pressed(self, event: Button.Pressed) -> None:
        button = event.button
        note = self.state.selected_note

        if isinstance(button, TagButton):
            if note is not None:
                self.state.remove_tag(note.id, button.tag_value)
            return

        if button.id == "new-note":
            self.action_new_note()
        elif button.id == "options":
            self.options_menu.toggle()
            self.query_one(NoteEditor).set_menu_open(self.options_menu.is_open)
        elif button.id == "menu-pin":
            self.action_toggle_pin()
        elif button.id == "delete":
            self.action_delete_note()
        elif button.id == "restore":
            self.action_restore_note()
        elif button.id in PRIORITY_BUTTONS and note is not None:
            self._set_priority(note.id, PRIORITY_BUTTONS[button.id])
            self._close_menu()
