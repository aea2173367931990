"""
Editor View-Model.

Describes what the detail pane shows for the selected note, plus the two
pieces of ephemeral editor state: the options menu and the tag input.
"""

from dataclasses import dataclass

from masikip.core.utils import format_timestamp
from masikip.models.note import Note

WELCOME_TITLE = "Welcome to Masikip Notes"
WELCOME_TEXT = "Select a note to view it here, or create a new note."
PLACEHOLDER = "Start typing your note..."


def pin_label(note: Note) -> str:
    return "Unpin from top" if note.is_pinned else "Pin to top"


def deleted_banner(note: Note) -> str | None:
    if not note.is_deleted:
        return None
    if note.deleted_at is None:
        return "This note is in the trash."
    return f"This note was deleted on {format_timestamp(note.deleted_at)}. Restore it to edit."


@dataclass(frozen=True)
class EditorModel:
    note_id: str
    content: str
    header: str
    read_only: bool
    banner: str | None
    pin_label: str
    can_pin: bool
    can_delete: bool
    can_restore: bool
    tags: tuple[str, ...]


def build_editor(note: Note | None) -> EditorModel | None:
    """Editor description for the selected note; None shows the welcome screen."""
    if note is None:
        return None
    return EditorModel(
        note_id=note.id,
        content=note.content,
        header=note.date_label,
        read_only=note.is_deleted,
        banner=deleted_banner(note),
        pin_label=pin_label(note),
        can_pin=not note.is_deleted,
        can_delete=not note.is_deleted,
        can_restore=note.is_deleted,
        tags=tuple(note.tags),
    )


@dataclass(frozen=True)
class Bounds:
    """Screen rectangle of a widget, in cells."""

    x: int
    y: int
    width: int
    height: int

    def contains(self, x: int, y: int) -> bool:
        return self.x <= x < self.x + self.width and self.y <= y < self.y + self.height


class OptionsMenu:
    """
    Open/closed state of the transient options menu.

    A pointer-down anywhere outside the menu's bounds closes it.
    """

    def __init__(self) -> None:
        self.is_open = False
        self.bounds: Bounds | None = None

    def toggle(self) -> None:
        self.is_open = not self.is_open

    def close(self) -> None:
        self.is_open = False

    def on_pointer_down(self, x: int, y: int) -> bool:
        """Handle a pointer-down at screen position (x, y). Returns True if it closed the menu."""
        if not self.is_open:
            return False
        if self.bounds is not None and self.bounds.contains(x, y):
            return False
        self.close()
        return True


class TagInput:
    """Text typed into the tag box, committed with Enter."""

    def __init__(self) -> None:
        self.value = ""

    def submit(self) -> str | None:
        """Return the trimmed tag to add and clear the box, or None if blank."""
        tag = self.value.strip()
        if not tag:
            return None
        self.value = ""
        return tag
