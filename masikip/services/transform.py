"""
Note Transforms.

Pure mapping between the backend note shape and the UI note shape, plus the
title and preview derivations the state owner reapplies on every edit.
"""

from typing import Any

from pydantic import ValidationError as PydanticValidationError

from masikip.core.exceptions import NoteTransformError
from masikip.core.logging import get_logger
from masikip.core.utils import utc_now
from masikip.models.note import DEFAULT_TITLE, Note, Priority
from masikip.schemas.note import BackendNote

logger = get_logger(__name__)

PREVIEW_LENGTH = 100
ELLIPSIS = "..."
UNTITLED = "Untitled"


def generate_preview(content: str | None) -> str:
    """
    Build the list preview for a note body.

    The first line is the title and is dropped; the rest is trimmed and cut
    to PREVIEW_LENGTH characters, with an ellipsis when something was cut.
    """
    if not content:
        return ""
    body = "\n".join(content.split("\n")[1:]).strip()
    if len(body) > PREVIEW_LENGTH:
        return body[:PREVIEW_LENGTH] + ELLIPSIS
    return body


def derive_title(content: str | None) -> str:
    """First line of the content, upper-cased, or the default title."""
    first_line = (content or "").split("\n")[0]
    return (first_line or DEFAULT_TITLE).upper()


def priority_to_pinned(priority: Priority | str | None) -> bool:
    return priority == Priority.HIGH


def pinned_to_priority(is_pinned: bool) -> Priority:
    return Priority.HIGH if is_pinned else Priority.MEDIUM


def transform_note(backend_note: dict[str, Any] | BackendNote | None) -> Note:
    """
    Convert a backend note payload into a UI note.

    Args:
        backend_note: Raw JSON object or an already validated BackendNote

    Returns:
        Note with derived preview and deletion state

    Raises:
        NoteTransformError: If the payload is missing, malformed, or has no id
    """
    if backend_note is None:
        raise NoteTransformError("Backend note is null or undefined")

    if isinstance(backend_note, BackendNote):
        parsed = backend_note
    else:
        try:
            parsed = BackendNote.model_validate(backend_note)
        except PydanticValidationError as e:
            raise NoteTransformError(f"Malformed backend note: {e}") from e

    note_id = parsed.identifier
    if note_id is None:
        logger.error("Backend note missing noteId", payload=parsed.model_dump(by_alias=True))
        raise NoteTransformError("Backend note missing noteId")

    now = utc_now()
    created_at = parsed.created_at or now
    last_modified = parsed.updated_at or now
    # Only an explicit false marks a note as deleted.
    is_deleted = parsed.active_flag is False
    content = parsed.content or ""

    note = Note(
        id=note_id,
        content=content,
        title=(parsed.title or UNTITLED).upper(),
        preview=generate_preview(content),
        priority=Priority.parse(parsed.priority),
        is_deleted=is_deleted,
        created_at=created_at,
        last_modified=last_modified,
        deleted_at=(parsed.updated_at or now) if is_deleted else None,
        tags=list(dict.fromkeys(parsed.tags or [])),
    )
    logger.debug("Transformed backend note", note_id=note.id, is_deleted=is_deleted)
    return note
