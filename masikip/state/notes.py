"""
Notes State.

The single owner of the note collection and the selection cursor. Views read
from it and call its intent handlers; nothing else mutates notes.

Backend policy:
    load, create:       on failure fall back to local state (empty list, local note)
    update, pin, delete: local change first, backend failure is logged and kept
    restore, tags:      local only

Usage:
    state = NotesState(NoteService())
    state.subscribe(refresh_views)
    await state.load()
    note = await state.create()
    await state.update(note.id, "Hello\\nWorld")
"""

import uuid
from collections.abc import Awaitable, Callable
from typing import Any

from masikip.core.exceptions import ApplicationError, NoteTransformError
from masikip.core.logging import get_logger, log_with_source
from masikip.core.utils import utc_now
from masikip.models.note import DEFAULT_TITLE, LOCAL_ID_PREFIX, Note, Priority
from masikip.services.note import NoteService
from masikip.services.transform import (
    derive_title,
    generate_preview,
    pinned_to_priority,
    transform_note,
)

logger = get_logger(__name__)

Listener = Callable[[], None]


def new_local_id() -> str:
    """Identifier for a note that exists only on this client."""
    return f"{LOCAL_ID_PREFIX}{uuid.uuid4().hex}"


class NotesState:
    """
    In-memory note collection with optimistic backend sync.

    At most one note is selected at a time. Deleted notes stay in the
    collection and refuse edits, pinning and tagging until restored.
    """

    def __init__(self, service: NoteService | None = None, sync_deletes: bool = False) -> None:
        self._service = service or NoteService()
        self._sync_deletes = sync_deletes
        self._notes: list[Note] = []
        self._selected_id: str | None = None
        self._listeners: list[Listener] = []
        self.loading = False

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def notes(self) -> tuple[Note, ...]:
        return tuple(self._notes)

    @property
    def selected_id(self) -> str | None:
        return self._selected_id

    @property
    def selected_note(self) -> Note | None:
        if self._selected_id is None:
            return None
        return self.get(self._selected_id)

    def get(self, note_id: str) -> Note | None:
        for note in self._notes:
            if note.id == note_id:
                return note
        return None

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a callback run after every mutation. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener()

    def _editable(self, note_id: str) -> Note | None:
        note = self.get(note_id)
        if note is None or note.is_deleted:
            return None
        return note

    async def _push(self, operation: str, note_id: str, call: Callable[[], Awaitable[Any]]) -> None:
        """Send an already-applied change to the backend; failures are logged only."""
        try:
            await call()
        except ApplicationError as e:
            log_with_source(
                logger,
                "state",
                "warning",
                "Backend sync failed, keeping local change",
                operation=operation,
                note_id=note_id,
                error=e.message,
                code=e.code,
            )

    async def close(self) -> None:
        """Release the backend connection."""
        await self._service.close()

    # ------------------------------------------------------------------
    # Intents
    # ------------------------------------------------------------------

    async def load(self) -> None:
        """Replace the collection with the backend's notes, or empty it on failure."""
        self.loading = True
        self._notify()
        try:
            raw_notes = await self._service.list_notes()
            if not isinstance(raw_notes, list):
                raise NoteTransformError("Expected a list of notes")
            notes = [transform_note(raw) for raw in raw_notes]
        except ApplicationError as e:
            log_with_source(
                logger, "state", "error", "Failed to load notes", error=e.message, code=e.code,
            )
            notes = []
        finally:
            self.loading = False

        self._notes = notes
        self._selected_id = None
        log_with_source(logger, "state", "info", "Notes loaded", count=len(notes))
        self._notify()

    async def create(self) -> Note:
        """Create a note on the backend, or locally if that fails, and select it."""
        try:
            raw = await self._service.create_note(DEFAULT_TITLE, "")
            note = transform_note(raw)
        except ApplicationError as e:
            log_with_source(
                logger,
                "state",
                "warning",
                "Backend create failed, using local note",
                error=e.message,
                code=e.code,
            )
            note = Note(id=new_local_id(), title=DEFAULT_TITLE)

        for existing in self._notes:
            existing.is_selected = False
        note.is_selected = True
        self._notes.insert(0, note)
        self._selected_id = note.id
        log_with_source(logger, "state", "info", "Note created", note_id=note.id, local=note.is_local)
        self._notify()
        return note

    def select(self, note_id: str | None) -> None:
        """Move the selection cursor; an unknown id clears the selection."""
        target = self.get(note_id) if note_id is not None else None
        self._selected_id = target.id if target is not None else None
        for note in self._notes:
            note.is_selected = note is target
        self._notify()

    async def update(self, note_id: str, content: str) -> None:
        """Apply new content locally, then sync it unless the note is local-only."""
        note = self._editable(note_id)
        if note is None:
            return

        note.content = content
        note.title = derive_title(content)
        note.preview = generate_preview(content)
        note.last_modified = utc_now()
        self._notify()

        if not note.is_local:
            await self._push("update", note.id, lambda: self._service.update_note(note.id, content))

    async def toggle_pin(self, note_id: str) -> None:
        """Flip between High (pinned) and Medium."""
        note = self._editable(note_id)
        if note is None:
            return
        await self._apply_priority(note, pinned_to_priority(not note.is_pinned))

    async def set_priority(self, note_id: str, level: Priority | str) -> None:
        """Set an explicit priority level."""
        priority = Priority(level)
        note = self._editable(note_id)
        if note is None:
            return
        await self._apply_priority(note, priority)

    async def _apply_priority(self, note: Note, priority: Priority) -> None:
        note.priority = priority
        note.last_modified = utc_now()
        self._notify()

        if note.is_local:
            return
        if priority is Priority.LOW:
            await self._push(
                "set_priority", note.id, lambda: self._service.update_priority_direct(note.id, priority),
            )
        else:
            await self._push(
                "set_priority", note.id, lambda: self._service.update_priority(note.id, note.is_pinned),
            )

    async def delete(self, note_id: str) -> None:
        """Soft delete: the note moves to Trash and becomes read-only."""
        note = self._editable(note_id)
        if note is None:
            return

        now = utc_now()
        note.is_deleted = True
        note.deleted_at = now
        note.last_modified = now
        log_with_source(logger, "state", "info", "Note moved to trash", note_id=note.id)
        self._notify()

        if self._sync_deletes and not note.is_local:
            await self._push("delete", note.id, lambda: self._service.delete_note(note.id))

    def restore(self, note_id: str) -> None:
        """Bring a note back from Trash."""
        note = self.get(note_id)
        if note is None or not note.is_deleted:
            return
        note.is_deleted = False
        note.deleted_at = None
        note.last_modified = utc_now()
        log_with_source(logger, "state", "info", "Note restored", note_id=note.id)
        self._notify()

    def add_tag(self, note_id: str, tag: str) -> None:
        note = self._editable(note_id)
        tag = tag.strip()
        if note is None or not tag or tag in note.tags:
            return
        note.tags.append(tag)
        note.last_modified = utc_now()
        self._notify()

    def remove_tag(self, note_id: str, tag: str) -> None:
        note = self._editable(note_id)
        if note is None or tag not in note.tags:
            return
        note.tags.remove(tag)
        note.last_modified = utc_now()
        self._notify()
