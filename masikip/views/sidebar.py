"""
Sidebar View-Model.

Filters the collection by the search box, splits it into the Pinned, Notes
and Trash groups, and formats one row per note. Collapsing a group hides its
rows but never changes what the filter matched.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field

from masikip.core.utils import format_timestamp
from masikip.models.note import Note, Priority

PINNED = "pinned"
NOTES = "notes"
TRASH = "trash"

SECTION_ORDER = (PINNED, NOTES, TRASH)

SECTION_TITLES = {
    PINNED: "Pinned",
    NOTES: "Notes",
    TRASH: "Trash",
}

EMPTY_MESSAGES = {
    PINNED: "No pinned notes",
    NOTES: "No notes found",
    TRASH: "Trash is empty",
}

LOADING_MESSAGE = "Loading notes..."

PRIORITY_ICONS = {
    Priority.HIGH: "🔴",
    Priority.MEDIUM: "🟡",
    Priority.LOW: "🟢",
}


def priority_icon(priority: Priority) -> str:
    return PRIORITY_ICONS.get(priority, PRIORITY_ICONS[Priority.MEDIUM])


def matches_search(note: Note, term: str) -> bool:
    """Case-insensitive substring match on title or content."""
    needle = term.lower()
    return needle in note.title.lower() or needle in note.content.lower()


def filter_notes(notes: Iterable[Note], term: str) -> list[Note]:
    return [note for note in notes if matches_search(note, term)]


def section_for(note: Note) -> str:
    """The one group a note belongs to."""
    if note.is_deleted:
        return TRASH
    if note.priority is Priority.HIGH:
        return PINNED
    return NOTES


def group_notes(notes: Iterable[Note]) -> dict[str, list[Note]]:
    """Split notes into Pinned, Notes and Trash, keeping collection order."""
    groups: dict[str, list[Note]] = {key: [] for key in SECTION_ORDER}
    for note in notes:
        groups[section_for(note)].append(note)
    return groups


@dataclass(frozen=True)
class NoteRow:
    note_id: str
    title: str
    meta: str
    preview: str
    selected: bool
    hint: str | None = None


def build_row(note: Note, section: str) -> NoteRow:
    icon = priority_icon(note.priority)
    if section == PINNED:
        title = f"📌 {icon} {note.title}"
        status = "📄 Notes"
    elif section == TRASH:
        title = f"🗑️ {icon} {note.title}"
        status = "Deleted"
    else:
        title = f"{icon} {note.title}"
        status = "📄 Notes"

    hint = None
    if section == TRASH:
        hint = f"Deleted {format_timestamp(note.deleted_at)}" if note.deleted_at else "Deleted note"

    return NoteRow(
        note_id=note.id,
        title=title,
        meta=f"{note.time_label}  {status}  Priority: {note.priority.value}",
        preview=note.preview,
        selected=note.is_selected,
        hint=hint,
    )


@dataclass(frozen=True)
class SidebarSection:
    key: str
    title: str
    rows: tuple[NoteRow, ...]
    expanded: bool

    @property
    def empty_message(self) -> str | None:
        return None if self.rows else EMPTY_MESSAGES[self.key]


@dataclass
class SidebarModel:
    """Ephemeral sidebar state: the search text and which groups are collapsed."""

    search_term: str = ""
    collapsed: set[str] = field(default_factory=set)

    def toggle_section(self, key: str) -> None:
        if key in self.collapsed:
            self.collapsed.discard(key)
        else:
            self.collapsed.add(key)

    def set_expanded(self, key: str, expanded: bool) -> None:
        if expanded:
            self.collapsed.discard(key)
        else:
            self.collapsed.add(key)

    def is_expanded(self, key: str) -> bool:
        return key not in self.collapsed

    def sections(self, notes: Iterable[Note]) -> list[SidebarSection]:
        groups = group_notes(filter_notes(notes, self.search_term))
        return [
            SidebarSection(
                key=key,
                title=SECTION_TITLES[key],
                rows=tuple(build_row(note, key) for note in groups[key]),
                expanded=self.is_expanded(key),
            )
            for key in SECTION_ORDER
        ]
