"""Task, roster and preference storage for the inbox.

``InMemoryTaskStore`` keeps everything in process memory; ``TaskStore`` writes
the same state to a JSON file after every mutation.
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence

from pydantic import ValidationError

from team_inbox.core.utils.constants import DEFAULT_PEOPLE, STORE_FORMAT_VERSION
from team_inbox.core.utils.logger import get_logger, log_fields
from team_inbox.models import Preferences, Task, TaskDraft, TaskPatch, duplicate_task_ids, now_ms
from team_inbox.ranking import score as ice_score

LOGGER = get_logger(__name__)


class StoreError(RuntimeError):
    """Raised when the store cannot complete an operation."""


class TaskNotFoundError(StoreError):
    """Raised when no task matches the requested id."""

    def __init__(self, task_id: str) -> None:
        super().__init__(f"Task '{task_id}' not found")
        self.task_id = task_id


class AmbiguousTaskIdError(StoreError):
    """Raised when an id prefix matches more than one task."""

    def __init__(self, prefix: str, matches: Sequence[str]) -> None:
        super().__init__(f"Task id prefix '{prefix}' is ambiguous ({len(matches)} matches)")
        self.prefix = prefix
        self.matches = tuple(matches)


def _unique_names(names: Iterable[str]) -> List[str]:
    cleaned = (str(name).strip() for name in names)
    return list(dict.fromkeys(name for name in cleaned if name))


@dataclass
class InMemoryTaskStore:
    """Process-local store that deliberately avoids persistence."""

    store_file: Optional[Path] = None
    default_people: Sequence[str] = DEFAULT_PEOPLE
    _tasks: List[Task] = field(default_factory=list, init=False, repr=False)
    _people: List[str] = field(default_factory=list, init=False, repr=False)
    _preferences: Preferences = field(default_factory=Preferences, init=False, repr=False)
    _loaded: bool = field(default=False, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.store_file is not None and type(self) is InMemoryTaskStore:
            LOGGER.debug(
                "Configured store file %s will be ignored by InMemoryTaskStore.",
                self.store_file,
            )

    # -------------------- state --------------------
    def load(self) -> None:
        """Load state once, falling back to defaults."""
        if self._loaded:
            return
        self._apply_state(self._read_state())
        self._loaded = True

    def _read_state(self) -> Dict[str, Any]:
        return self._create_default_state()

    def _create_default_state(self) -> Dict[str, Any]:
        return {
            "version": STORE_FORMAT_VERSION,
            "tasks": [],
            "people": list(self.default_people),
            "preferences": Preferences().model_dump(),
        }

    def _apply_state(self, data: Dict[str, Any]) -> None:
        self._tasks = [Task.model_validate(item) for item in (data.get("tasks") or [])]
        self._people = _unique_names(data.get("people") or [])
        self._preferences = Preferences.model_validate(data.get("preferences") or {})

    def to_dict(self) -> Dict[str, Any]:
        self.load()
        return {
            "version": STORE_FORMAT_VERSION,
            "tasks": [task.to_record() for task in self._tasks],
            "people": list(self._people),
            "preferences": self._preferences.model_dump(),
        }

    def _persist(self) -> None:
        LOGGER.debug("Store kept in memory (not persisted)")

    # -------------------- tasks --------------------
    def list_tasks(self) -> List[Task]:
        """Return every task, newest first."""
        self.load()
        return sorted(self._tasks, key=lambda task: task.created_at, reverse=True)

    def get_task(self, task_id: str) -> Task:
        self.load()
        for task in self._tasks:
            if task.id == task_id:
                return task
        raise TaskNotFoundError(task_id)

    def resolve_id(self, prefix: str) -> Task:
        """Find a task by exact id or by a unique id prefix."""
        self.load()
        prefix = prefix.strip()
        matches = [task for task in self._tasks if task.id.startswith(prefix)] if prefix else []
        for task in matches:
            if task.id == prefix:
                return task
        if not matches:
            raise TaskNotFoundError(prefix)
        if len(matches) > 1:
            raise AmbiguousTaskIdError(prefix, [task.id for task in matches])
        return matches[0]

    def add_task(self, draft: TaskDraft, *, now: Optional[int] = None) -> Task:
        """Store a new task built from ``draft`` and return it."""
        self.load()
        data = draft.model_dump()
        data["title"] = data["title"].strip()
        data["notes"] = (data.get("notes") or "").strip()
        if not data["title"]:
            raise ValueError("title must not be blank")
        task = Task(**data, created_at=now if now is not None else now_ms())
        self._tasks.insert(0, task)
        self._persist()
        LOGGER.info(
            "Added task %s (%s)",
            task.id,
            task.title,
            extra=log_fields("task.added", task_id=task.id, score=ice_score(task)),
        )
        return task

    def update_task(self, task_id: str, patch: TaskPatch) -> Task:
        """Apply the explicitly set fields of ``patch`` to a task."""
        current = self.get_task(task_id)
        changes = patch.changes()
        if not changes:
            LOGGER.debug("Empty patch for task %s", task_id)
            return current
        for key in ("title", "notes"):
            if isinstance(changes.get(key), str):
                changes[key] = changes[key].strip()
        if "notes" in changes and changes["notes"] is None:
            changes["notes"] = ""
        data = current.model_dump()
        data.update(changes)
        updated = Task.model_validate(data)
        index = self._tasks.index(current)
        self._tasks[index] = updated
        self._persist()
        LOGGER.info(
            "Updated task %s: %s",
            task_id,
            ", ".join(sorted(changes)),
            extra=log_fields("task.updated", task_id=task_id, fields=sorted(changes)),
        )
        return updated

    def delete_task(self, task_id: str) -> None:
        task = self.get_task(task_id)
        self._tasks.remove(task)
        self._persist()
        LOGGER.info("Deleted task %s", task_id, extra=log_fields("task.deleted", task_id=task_id))

    def clear_completed(self) -> int:
        """Remove every completed task and return how many were removed."""
        self.load()
        remaining = [task for task in self._tasks if not task.done]
        removed = len(self._tasks) - len(remaining)
        if removed:
            self._tasks = remaining
            self._persist()
        LOGGER.info("Cleared %d completed task(s)", removed, extra=log_fields("tasks.cleared", count=removed))
        return removed

    def replace_all(self, tasks: Iterable[Task], people: Iterable[str]) -> None:
        """Swap the whole collection and roster, as an import does."""
        self.load()
        tasks = list(tasks)
        duplicates = duplicate_task_ids(tasks)
        if duplicates:
            raise StoreError(f"Duplicate task id(s): {', '.join(duplicates)}")
        self._tasks = tasks
        self._people = _unique_names(people)
        self._persist()
        LOGGER.info(
            "Replaced store contents: %d task(s), %d people",
            len(self._tasks),
            len(self._people),
            extra=log_fields("store.replaced", tasks=len(self._tasks), people=len(self._people)),
        )

    # -------------------- people --------------------
    def list_people(self) -> List[str]:
        self.load()
        return list(self._people)

    def add_person(self, name: str) -> bool:
        """Add ``name`` to the roster; returns False when already present."""
        self.load()
        name = name.strip()
        if not name:
            raise ValueError("name must not be blank")
        if name in self._people:
            LOGGER.debug("Team member already exists: %s", name)
            return False
        self._people.append(name)
        self._persist()
        LOGGER.info("Added team member: %s", name)
        return True

    def remove_person(self, name: str) -> int:
        """Remove every roster entry equal to ``name``; task assignees are untouched."""
        self.load()
        name = name.strip()
        before = len(self._people)
        self._people = [person for person in self._people if person != name]
        removed = before - len(self._people)
        if removed:
            self._persist()
            LOGGER.info("Removed team member: %s", name)
        return removed

    # -------------------- preferences --------------------
    @property
    def preferences(self) -> Preferences:
        self.load()
        return self._preferences

    def save_preferences(self, prefs: Preferences) -> None:
        self.load()
        self._preferences = prefs
        self._persist()
        LOGGER.debug("Saved preferences: %s", prefs.model_dump())


class TaskStore(InMemoryTaskStore):
    """Store that persists to disk when a store file path is provided."""

    def __post_init__(self) -> None:
        if self.store_file is not None:
            self.store_file = Path(self.store_file)
        super().__post_init__()

    def _read_state(self) -> Dict[str, Any]:
        if self.store_file is None or not self.store_file.exists():
            return self._create_default_state()
        try:
            with self.store_file.open("r", encoding="utf-8") as handle:
                data = json.load(handle)
            if not isinstance(data, dict):
                raise ValueError("store root must be an object")
            for key in ("tasks", "people"):
                if data.get(key) is not None and not isinstance(data[key], list):
                    raise ValueError(f"store '{key}' must be a list")
            if any(not isinstance(name, str) for name in data.get("people") or []):
                raise ValueError("store 'people' must hold names")
            # validate eagerly so a bad record falls back to defaults here
            Preferences.model_validate(data.get("preferences") or {})
            tasks = [Task.model_validate(item) for item in (data.get("tasks") or [])]
            duplicates = duplicate_task_ids(tasks)
            if duplicates:
                raise ValueError(f"duplicate task id(s): {', '.join(duplicates)}")
            return data
        except (OSError, TypeError, ValueError, ValidationError) as exc:
            LOGGER.warning(
                "Failed to load store from %s: %s; using defaults.",
                self.store_file,
                exc,
            )
            return self._create_default_state()

    def _persist(self) -> None:
        if self.store_file is None:
            super()._persist()
            return
        try:
            self.store_file.parent.mkdir(parents=True, exist_ok=True)
            with self.store_file.open("w", encoding="utf-8") as handle:
                json.dump(self.to_dict(), handle, indent=2)
            LOGGER.debug("Store written to %s", self.store_file)
        except OSError as exc:
            raise StoreError(f"Failed to write store file {self.store_file}: {exc}") from exc


__all__ = [
    "AmbiguousTaskIdError",
    "InMemoryTaskStore",
    "StoreError",
    "TaskNotFoundError",
    "TaskStore",
]
