"""
Note Model.

The UI shape of a note. Priority is the stored field and pinning is derived
from it, so the two can never disagree.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from masikip.core.utils import format_date, format_time, utc_now

DEFAULT_TITLE = "New Note"
LOCAL_ID_PREFIX = "local-"


class Priority(str, Enum):
    """Note priority. High is the same thing as pinned."""

    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"

    @classmethod
    def parse(cls, value: str | None) -> "Priority":
        """Map a backend priority string, falling back to Medium."""
        for member in cls:
            if member.value == value:
                return member
        return cls.MEDIUM


@dataclass
class Note:
    """A note as held by the state owner and rendered by the views."""

    id: str
    content: str = ""
    title: str = DEFAULT_TITLE
    preview: str = ""
    priority: Priority = Priority.MEDIUM
    is_deleted: bool = False
    created_at: datetime = field(default_factory=utc_now)
    last_modified: datetime = field(default_factory=utc_now)
    deleted_at: datetime | None = None
    tags: list[str] = field(default_factory=list)
    is_selected: bool = False

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "id" and "id" in self.__dict__:
            raise AttributeError("Note id is immutable once assigned")
        super().__setattr__(name, value)

    @property
    def is_pinned(self) -> bool:
        return self.priority is Priority.HIGH

    @property
    def is_local(self) -> bool:
        """True for notes synthesized on the client when the backend was unreachable."""
        return self.id.startswith(LOCAL_ID_PREFIX)

    @property
    def date_label(self) -> str:
        return format_date(self.last_modified)

    @property
    def time_label(self) -> str:
        return format_time(self.last_modified)
