"""
Integration Test Fixtures.

Fixtures for integration tests: the real NotesState, NoteService and
APIClient stack, talking to an in-memory notes backend over an httpx
MockTransport.
"""

import json
import re
from collections.abc import AsyncGenerator
from typing import Any

import httpx
import pytest

from masikip.api.client import APIClient
from masikip.services.note import NoteService
from masikip.state.notes import NotesState

BASE_URL = "http://backend.test/api"

_NOTE_PATH = re.compile(r"^/api/notes/(?P<note_id>[^/]+)(?P<suffix>/priority|/priority-direct)?$")


class FakeNotesBackend:
    """
    Stateful stand-in for the notes REST API.

    Set `offline` to make every request fail at the transport level, or
    `fail_status` to answer every request with that status.
    """

    def __init__(self) -> None:
        self.notes: dict[str, dict[str, Any]] = {}
        self.requests: list[httpx.Request] = []
        self.offline = False
        self.fail_status: int | None = None
        self._next_id = 1

    def seed(self, title: str, content: str, priority: str = "Medium", active: bool = True) -> str:
        note_id = str(self._next_id)
        self._next_id += 1
        self.notes[note_id] = {
            "noteId": int(note_id),
            "title": title,
            "content": content,
            "priority": priority,
            "isActive": active,
            "createdAt": "2024-05-01T09:30:00",
            "updatedAt": "2024-05-01T09:30:00",
            "tags": [],
        }
        return note_id

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.offline:
            raise httpx.ConnectError("backend offline", request=request)
        if self.fail_status is not None:
            return httpx.Response(self.fail_status)

        path = request.url.path
        if path == "/api/notes":
            if request.method == "GET":
                return httpx.Response(200, json=list(self.notes.values()))
            if request.method == "POST":
                body = json.loads(request.content)
                note_id = self.seed(body["title"], body["content"])
                return httpx.Response(201, json=self.notes[note_id])

        match = _NOTE_PATH.match(path)
        if match is None or match["note_id"] not in self.notes:
            return httpx.Response(404)

        note = self.notes[match["note_id"]]
        suffix = match["suffix"]
        if request.method == "DELETE" and suffix is None:
            del self.notes[match["note_id"]]
            return httpx.Response(204)

        body = json.loads(request.content)
        if request.method == "PUT" and suffix is None:
            note["content"] = body["content"]
        elif request.method == "PATCH" and suffix == "/priority":
            note["priority"] = "High" if body["isPinned"] else "Medium"
        elif request.method == "PATCH" and suffix == "/priority-direct":
            note["priority"] = body["priority"]
        else:
            return httpx.Response(405)
        return httpx.Response(200, json=note)


@pytest.fixture
def backend() -> FakeNotesBackend:
    return FakeNotesBackend()


@pytest.fixture
async def state(backend: FakeNotesBackend) -> AsyncGenerator[NotesState, None]:
    """NotesState over the real service and HTTP client."""
    client = APIClient(base_url=BASE_URL, frontend_id="tui", transport=httpx.MockTransport(backend))
    notes_state = NotesState(NoteService(client))
    yield notes_state
    await notes_state.close()


@pytest.fixture
async def make_state(backend: FakeNotesBackend) -> AsyncGenerator:
    """Factory for NotesState with non-default options; closes what it builds."""
    built: list[NotesState] = []

    def _make(**options: Any) -> NotesState:
        client = APIClient(base_url=BASE_URL, transport=httpx.MockTransport(backend))
        notes_state = NotesState(NoteService(client), **options)
        built.append(notes_state)
        return notes_state

    yield _make
    for notes_state in built:
        await notes_state.close()
