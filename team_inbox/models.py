"""Shared data structures for inbox tasks, drafts, exports and preferences."""
from __future__ import annotations

import time
import uuid
from typing import Annotated, Any, Dict, Iterable, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from team_inbox.core.utils.constants import (
    ASSIGNEE_ALL,
    DEFAULT_FACTOR,
    MAX_FACTOR,
    MIN_FACTOR,
)

Score = Annotated[int, Field(ge=MIN_FACTOR, le=MAX_FACTOR)]


def now_ms() -> int:
    """Current time as epoch milliseconds."""
    return int(time.time() * 1000)


def new_task_id() -> str:
    return uuid.uuid4().hex


def duplicate_task_ids(tasks: Iterable[Any]) -> List[str]:
    """Ids that occur more than once, in first-seen order."""
    seen: set = set()
    repeated: Dict[str, None] = {}
    for task in tasks:
        if task.id in seen:
            repeated[task.id] = None
        seen.add(task.id)
    return list(repeated)


def _clean_assignee(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


class TaskDraft(BaseModel):
    """Fields of a task before it is stored."""

    title: str
    notes: str = ""
    impact: Score = DEFAULT_FACTOR
    confidence: Score = DEFAULT_FACTOR
    ease: Score = Field(default=DEFAULT_FACTOR, description="Higher means less effort.")
    assignee: Optional[str] = None
    done: bool = False

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("title must not be blank")
        return value

    @field_validator("assignee")
    @classmethod
    def _strip_assignee(cls, value: Optional[str]) -> Optional[str]:
        return _clean_assignee(value)


class Task(TaskDraft):
    """A stored inbox task."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default_factory=new_task_id)
    created_at: int = Field(default_factory=now_ms, alias="createdAt", description="Epoch milliseconds.")

    def to_record(self) -> Dict[str, Any]:
        """JSON-ready dict using the camelCase ``createdAt`` key."""
        record = self.model_dump(by_alias=True)
        if record.get("assignee") is None:
            record.pop("assignee", None)
        return record


class TaskPatch(BaseModel):
    """Partial task update; only explicitly set fields are applied."""

    model_config = ConfigDict(extra="forbid")

    title: Optional[str] = None
    notes: Optional[str] = None
    impact: Optional[Score] = None
    confidence: Optional[Score] = None
    ease: Optional[Score] = None
    assignee: Optional[str] = None
    done: Optional[bool] = None

    @field_validator("assignee")
    @classmethod
    def _strip_assignee(cls, value: Optional[str]) -> Optional[str]:
        return _clean_assignee(value)

    def changes(self) -> Dict[str, Any]:
        return self.model_dump(exclude_unset=True)


class ExportData(BaseModel):
    """Payload exchanged by import and export."""

    tasks: List[Task] = Field(default_factory=list)
    people: List[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def _unique_task_ids(self) -> "ExportData":
        duplicates = duplicate_task_ids(self.tasks)
        if duplicates:
            raise ValueError(f"duplicate task id(s): {', '.join(duplicates)}")
        return self

    def to_record(self) -> Dict[str, Any]:
        return {
            "tasks": [task.to_record() for task in self.tasks],
            "people": list(self.people),
        }


class Preferences(BaseModel):
    """Persisted view filter settings."""

    show_done: bool = True
    search: str = ""
    assignee_filter: str = ASSIGNEE_ALL


__all__ = [
    "ExportData",
    "Preferences",
    "Score",
    "Task",
    "TaskDraft",
    "TaskPatch",
    "duplicate_task_ids",
    "new_task_id",
    "now_ms",
]
