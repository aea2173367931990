"""
TUI Widgets.

The sidebar, the editor pane and the status bar. Widgets only draw the
view-models they are given and post intents back to the app.
"""

from __future__ import annotations

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.reactive import reactive
from textual.widgets import Button, Collapsible, Input, Label, ListItem, ListView, Static, TextArea

from masikip.views.editor import PLACEHOLDER, WELCOME_TEXT, WELCOME_TITLE, EditorModel
from masikip.views.sidebar import LOADING_MESSAGE, SECTION_ORDER, SECTION_TITLES, NoteRow, SidebarSection


class StatusBar(Static):
    """Persistent status bar showing collection counts and backend."""

    total: reactive[int] = reactive(0)
    pinned: reactive[int] = reactive(0)
    trashed: reactive[int] = reactive(0)
    loading: reactive[bool] = reactive(False)
    backend: reactive[str] = reactive("")

    def render(self) -> Text:
        state = "[yellow]loading[/]" if self.loading else "[green]ready[/]"
        return Text.from_markup(
            f" Notes: [bold]{self.total}[/] | "
            f"Pinned: [bold]{self.pinned}[/] | "
            f"Trash: [bold]{self.trashed}[/] | "
            f"{state} | [dim]{self.backend}[/]"
        )


class NoteListItem(ListItem):
    """One note row in a sidebar group."""

    def __init__(self, row: NoteRow) -> None:
        super().__init__(
            Label(Text(row.title), classes="note-title"),
            Label(Text(row.meta), classes="note-meta"),
            Label(Text(row.preview), classes="note-preview"),
            classes="note-item -selected" if row.selected else "note-item",
        )
        self.note_id = row.note_id
        if row.hint:
            self.tooltip = row.hint


class EmptyListItem(ListItem):
    """Placeholder row for an empty group."""

    def __init__(self, message: str) -> None:
        super().__init__(Label(Text(message)), classes="no-notes")


class NoteSidebar(Vertical):
    """Search box, new-note button and the Pinned / Notes / Trash groups."""

    def compose(self) -> ComposeResult:
        with Horizontal(id="sidebar-header"):
            yield Label("Masikip Notes", id="sidebar-title")
            yield Button("📝 New", id="new-note")
        yield Input(placeholder="Search all notes", id="search")
        with VerticalScroll(id="sidebar-content"):
            yield Static(LOADING_MESSAGE, id="sidebar-loading", classes="no-notes")
            for key in SECTION_ORDER:
                with Collapsible(title=SECTION_TITLES[key], id=f"section-{key}"):
                    yield ListView(id=f"list-{key}")

    async def show(self, sections: list[SidebarSection], loading: bool) -> None:
        # While loading, the placeholder stands in for all three groups.
        self.query_one("#sidebar-loading").display = loading
        for section in sections:
            collapsible = self.query_one(f"#section-{section.key}", Collapsible)
            collapsible.display = not loading
            collapsible.collapsed = not section.expanded

            list_view = self.query_one(f"#list-{section.key}", ListView)
            await list_view.clear()
            if section.rows:
                await list_view.extend(NoteListItem(row) for row in section.rows)
            else:
                await list_view.append(EmptyListItem(section.empty_message or ""))


class TagButton(Button):
    """A tag chip; pressing it removes the tag."""

    def __init__(self, tag: str, disabled: bool = False) -> None:
        super().__init__(f"#{tag} ✕", classes="tag", disabled=disabled)
        self.tag_value = tag


class NoteEditor(Vertical):
    """Detail pane for the selected note."""

    def compose(self) -> ComposeResult:
        yield Static(
            f"[bold]{WELCOME_TITLE}[/]\n{WELCOME_TEXT}",
            id="welcome",
        )
        with Vertical(id="editor-body"):
            with Horizontal(id="note-header"):
                yield Static(id="note-date")
                yield Button("🗑️", id="delete")
                yield Button("Restore", id="restore")
                with Vertical(id="menu-container"):
                    yield Button("⋯", id="options")
                    with Vertical(id="options-menu"):
                        yield Button("📌 Pin to top", id="menu-pin", classes="menu-item")
                        yield Button("🔴 High", id="priority-high", classes="menu-item")
                        yield Button("🟡 Medium", id="priority-medium", classes="menu-item")
                        yield Button("🟢 Low", id="priority-low", classes="menu-item")
            yield Static(id="banner")
            yield TextArea(id="content")
            yield Horizontal(id="tags")
            yield Input(placeholder="Add a tag and press Enter", id="tag-input")

    def on_mount(self) -> None:
        self.query_one("#content", TextArea).placeholder = PLACEHOLDER
        self.query_one("#options-menu").display = False
        self.query_one("#editor-body").display = False

    def set_menu_open(self, is_open: bool) -> None:
        self.query_one("#options-menu").display = is_open

    async def show(self, model: EditorModel | None) -> None:
        welcome = self.query_one("#welcome")
        body = self.query_one("#editor-body")
        if model is None:
            welcome.display = True
            body.display = False
            return
        welcome.display = False
        body.display = True

        self.query_one("#note-date", Static).update(model.header)
        self.query_one("#menu-pin", Button).label = f"📌 {model.pin_label}"
        for button_id in ("#menu-pin", "#priority-high", "#priority-medium", "#priority-low"):
            self.query_one(button_id, Button).disabled = not model.can_pin
        self.query_one("#delete", Button).disabled = not model.can_delete
        restore = self.query_one("#restore", Button)
        restore.display = model.can_restore

        banner = self.query_one("#banner", Static)
        banner.display = model.banner is not None
        banner.update(Text(model.banner or ""))

        text_area = self.query_one("#content", TextArea)
        text_area.read_only = model.read_only
        if text_area.text != model.content:
            text_area.load_text(model.content)

        self.query_one("#tag-input", Input).disabled = model.read_only
        tags = self.query_one("#tags", Horizontal)
        await tags.remove_children()
        await tags.mount_all([TagButton(tag, disabled=model.read_only) for tag in model.tags])
