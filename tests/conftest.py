"""
Root Pytest Fixtures.

Shared fixtures available to all test types: factories for backend note
payloads as the notes REST API returns them.
"""

from collections.abc import Callable
from typing import Any

import pytest


@pytest.fixture
def backend_note() -> Callable[..., dict[str, Any]]:
    """
    Factory for backend note payloads.

    Usage:
        def test_transform(backend_note):
            raw = backend_note(noteId=7, priority="High")
    """

    def _make(**overrides: Any) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "noteId": 1,
            "title": "Groceries",
            "content": "Groceries\nEggs, milk and bread",
            "priority": "Medium",
            "isActive": True,
            "createdAt": "2024-05-01T09:30:00",
            "updatedAt": "2024-05-02T10:15:00",
            "tags": [],
        }
        payload.update(overrides)
        return payload

    return _make
