"""
Note Schemas.

Pydantic schemas for the backend note payloads and request bodies.
The backend has shipped more than one field naming over time (noteId vs id,
isActive vs active), so the response schema accepts both.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class BackendNote(BaseModel):
    """Note as returned by the backend."""

    note_id: str | int | None = Field(default=None, alias="noteId")
    id: str | int | None = Field(default=None)
    title: str | None = Field(default=None, description="Note title")
    content: str | None = Field(default=None, description="Note content")
    priority: str | None = Field(default=None, description="High, Medium or Low")
    is_active: bool | None = Field(default=None, alias="isActive")
    active: bool | None = Field(default=None)
    created_at: datetime | None = Field(default=None, alias="createdAt")
    updated_at: datetime | None = Field(default=None, alias="updatedAt")
    tags: list[str] | None = Field(default=None)

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @property
    def identifier(self) -> str | None:
        """noteId if present, otherwise id, as a string."""
        for value in (self.note_id, self.id):
            if value is not None and value != "":
                return str(value)
        return None

    @property
    def active_flag(self) -> bool | None:
        """isActive if the backend sent it, otherwise active."""
        return self.is_active if self.is_active is not None else self.active


class NoteCreateRequest(BaseModel):
    """Body of POST /notes."""

    title: str
    content: str = ""


class NoteUpdateRequest(BaseModel):
    """Body of PUT /notes/{id}."""

    content: str


class NotePriorityRequest(BaseModel):
    """Body of PATCH /notes/{id}/priority."""

    is_pinned: bool = Field(serialization_alias="isPinned")


class NotePriorityDirectRequest(BaseModel):
    """Body of PATCH /notes/{id}/priority-direct."""

    priority: str
