"""
Unit Test Fixtures.

Fixtures for unit tests - the backend is always mocked.
Unit tests should be fast and isolated, never touching the network.
"""

from unittest.mock import AsyncMock

import pytest

from masikip.services.note import NoteService
from masikip.state.notes import NotesState


@pytest.fixture
def mock_service(backend_note) -> AsyncMock:
    """
    NoteService double whose calls succeed.

    create_note answers with note 101 and every other call with a
    plausible payload; override return_value or side_effect per test.
    """
    service = AsyncMock(spec=NoteService)
    service.list_notes.return_value = []
    service.create_note.return_value = backend_note(noteId=101, title="New Note", content="")
    service.update_note.return_value = backend_note(noteId=101)
    service.update_priority.return_value = backend_note(noteId=101, priority="High")
    service.update_priority_direct.return_value = backend_note(noteId=101, priority="Low")
    service.delete_note.return_value = None
    return service


@pytest.fixture
def state(mock_service: AsyncMock) -> NotesState:
    """NotesState wired to the mocked service."""
    return NotesState(mock_service)


@pytest.fixture
async def seeded_state(state: NotesState, mock_service: AsyncMock, backend_note) -> NotesState:
    """State loaded with one regular, one pinned and one trashed note."""
    mock_service.list_notes.return_value = [
        backend_note(noteId=1, title="Groceries", content="Groceries\nEggs, milk and bread"),
        backend_note(noteId=2, title="Roadmap", content="Roadmap\nShip v2", priority="High"),
        backend_note(noteId=3, title="Old idea", content="Old idea\nNever mind", isActive=False),
    ]
    await state.load()
    return state
