"""Caller-side view filtering applied before ranking."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List

from team_inbox.core.utils.constants import ASSIGNEE_ALL, ASSIGNEE_UNASSIGNED
from team_inbox.models import Preferences, Task


@dataclass(frozen=True)
class TaskFilter:
    """Search text, assignee and completion visibility for a task view.

    ``assignee`` is either ``"all"``, ``"unassigned"`` or an exact person name.
    """

    search: str = ""
    assignee: str = ASSIGNEE_ALL
    show_done: bool = True

    @classmethod
    def from_preferences(cls, prefs: Preferences) -> "TaskFilter":
        return cls(search=prefs.search, assignee=prefs.assignee_filter, show_done=prefs.show_done)

    def to_preferences(self) -> Preferences:
        return Preferences(show_done=self.show_done, search=self.search, assignee_filter=self.assignee)

    def matches(self, task: Task) -> bool:
        query = self.search.strip().lower()
        if query and query not in task.title.lower() and query not in (task.notes or "").lower():
            return False
        if self.assignee == ASSIGNEE_UNASSIGNED:
            if task.assignee:
                return False
        elif self.assignee != ASSIGNEE_ALL and task.assignee != self.assignee:
            return False
        if not self.show_done and task.done:
            return False
        return True


def filter_tasks(tasks: Iterable[Task], task_filter: TaskFilter) -> List[Task]:
    """Return the tasks matching ``task_filter`` in their original order."""
    return [task for task in tasks if task_filter.matches(task)]


__all__ = ["TaskFilter", "filter_tasks"]
