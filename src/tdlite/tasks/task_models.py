# src/tdlite/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, StrictStr


class TaskStatus(StrEnum):
    WIP = "wip"
    DONE = "done"

    @classmethod
    def from_db(cls, raw: str | None) -> TaskStatus:
        # NULL (nullable column) and values written by other tools read as wip.
        if not raw:
            return cls.WIP
        try:
            return cls(raw)
        except ValueError:
            return cls.WIP


@dataclass(frozen=True, slots=True)
class Task:
    id: int
    custom_id: str
    category: str
    name: str | None
    description: str | None
    status: TaskStatus
    comment: str | None
    created_at: int
    updated_at: int

    def to_dict(self) -> dict[str, Any]:
        """JSON-friendly view using the public field names."""
        return {
            "id": self.id,
            "customId": self.custom_id,
            "category": self.category,
            "name": self.name,
            "description": self.description,
            "status": self.status.value,
            "comment": self.comment,
            "createdAt": _iso(self.created_at),
            "updatedAt": _iso(self.updated_at),
        }


@dataclass(frozen=True, slots=True)
class CategorySummary:
    category: str
    wip_count: int
    done_count: int


class TaskInput(BaseModel):
    """One element of an `add` batch, as supplied by the user."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    custom_id: StrictStr = Field(alias="customId", min_length=1)
    name: StrictStr | None = None
    description: StrictStr | None = None
    status: Literal["wip", "done"] | None = None
    comment: StrictStr | None = None

    @property
    def effective_status(self) -> TaskStatus:
        return TaskStatus(self.status) if self.status else TaskStatus.WIP

    @property
    def effective_comment(self) -> str | None:
        return self.comment or None


def _iso(ts: int) -> str:
    return datetime.fromtimestamp(ts, tz=UTC).isoformat().replace("+00:00", "Z")
