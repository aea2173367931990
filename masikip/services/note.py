"""
Note Service.

Thin wrappers over the notes REST API. Each wrapper performs exactly one
request and returns the parsed JSON body, or None for 204 No Content.
Non-2xx answers raise BackendStatusError and transport failures raise
BackendUnavailableError; callers decide whether to fall back or swallow.

Endpoints:
    GET    /notes                       - list all notes
    POST   /notes                       - create a note
    PUT    /notes/{id}                  - update content
    PATCH  /notes/{id}/priority         - pin / unpin
    PATCH  /notes/{id}/priority-direct  - set an explicit priority level
    DELETE /notes/{id}                  - delete a note (204)
"""

from typing import Any

import httpx

from masikip.api.client import APIClient, get_api_client
from masikip.core.exceptions import (
    BackendStatusError,
    BackendUnavailableError,
    ExternalServiceError,
    ValidationError,
)
from masikip.core.logging import get_logger, log_with_source
from masikip.models.note import Priority
from masikip.schemas.note import (
    NoteCreateRequest,
    NotePriorityDirectRequest,
    NotePriorityRequest,
    NoteUpdateRequest,
)

logger = get_logger(__name__)


class NoteService:
    """
    Backend calls for notes.

    Usage:
        service = NoteService()
        raw_notes = await service.list_notes()
        raw_note = await service.create_note("New Note")
    """

    def __init__(self, client: APIClient | None = None) -> None:
        self._client = client

    @property
    def client(self) -> APIClient:
        if self._client is None:
            self._client = get_api_client()
        return self._client

    async def close(self) -> None:
        """Close the underlying HTTP client, if one was created."""
        if self._client is not None:
            await self._client.close()

    async def _request_json(self, method: str, path: str, body: dict[str, Any] | None = None) -> Any:
        """
        Issue one request and decode the answer.

        Raises:
            BackendUnavailableError: On network or transport failure
            BackendStatusError: On a non-2xx status
        """
        kwargs: dict[str, Any] = {}
        if body is not None:
            kwargs["json"] = body
        try:
            response = await self.client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            raise BackendUnavailableError(f"{method} {path} failed: {e}") from e

        if not response.is_success:
            raise BackendStatusError(response.status_code)

        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise ExternalServiceError(f"{method} {path} returned malformed JSON") from e

    @staticmethod
    def _require_id(note_id: str | None, operation: str) -> str:
        if not note_id or note_id == "undefined":
            raise ValidationError(
                f"Invalid noteId for {operation}: {note_id}",
                details={"note_id": note_id},
            )
        return note_id

    async def list_notes(self) -> list[dict[str, Any]]:
        """Fetch every note the backend knows about."""
        data = await self._request_json("GET", "/notes")
        return data or []

    async def create_note(self, title: str, content: str = "") -> dict[str, Any] | None:
        """Create a note and return the backend representation."""
        request = NoteCreateRequest(title=title, content=content)
        log_with_source(logger, "service", "info", "Note transaction", action="CREATE_NOTE", title=title)
        return await self._request_json("POST", "/notes", request.model_dump())

    async def update_note(self, note_id: str, content: str) -> dict[str, Any] | None:
        """Replace the content of a note."""
        note_id = self._require_id(note_id, "update")
        request = NoteUpdateRequest(content=content)
        log_with_source(logger, "service", "info", "Note transaction", action="UPDATE_NOTE", note_id=note_id)
        return await self._request_json("PUT", f"/notes/{note_id}", request.model_dump())

    async def update_priority(self, note_id: str, is_pinned: bool) -> dict[str, Any] | None:
        """Pin or unpin a note; the backend maps this to High or Medium."""
        note_id = self._require_id(note_id, "priority update")
        request = NotePriorityRequest(is_pinned=is_pinned)
        log_with_source(
            logger,
            "service",
            "info",
            "Note transaction",
            action="SET_PRIORITY",
            note_id=note_id,
            is_pinned=is_pinned,
            priority=(Priority.HIGH if is_pinned else Priority.MEDIUM).value,
        )
        return await self._request_json(
            "PATCH", f"/notes/{note_id}/priority", request.model_dump(by_alias=True)
        )

    async def update_priority_direct(self, note_id: str, priority: Priority) -> dict[str, Any] | None:
        """Set an explicit priority level, including Low."""
        note_id = self._require_id(note_id, "priority update")
        request = NotePriorityDirectRequest(priority=priority.value)
        log_with_source(
            logger,
            "service",
            "info",
            "Note transaction",
            action="SET_PRIORITY",
            note_id=note_id,
            priority=priority.value,
        )
        return await self._request_json("PATCH", f"/notes/{note_id}/priority-direct", request.model_dump())

    async def delete_note(self, note_id: str) -> None:
        """Delete a note. The backend answers 204 with no body."""
        note_id = self._require_id(note_id, "delete")
        log_with_source(logger, "service", "info", "Note transaction", action="DELETE_NOTE", note_id=note_id)
        await self._request_json("DELETE", f"/notes/{note_id}")
