"""Public package interface for the team inbox."""
from __future__ import annotations

from importlib import metadata as _metadata

try:
    __version__ = _metadata.version("team-inbox")
except _metadata.PackageNotFoundError:  # pragma: no cover - fallback when not installed
    __version__ = "0.1.0"

from . import core, ranking
from .core import Settings, configure_logging, get_logger, load_settings
from .filters import TaskFilter, filter_tasks
from .models import ExportData, Preferences, Task, TaskDraft, TaskPatch
from .ranking import DONE_SCORE, rank, score, sort_key
from .store import InMemoryTaskStore, StoreError, TaskNotFoundError, TaskStore
from .transfer import ImportFormatError, read_import, write_export

__all__ = [
    "DONE_SCORE",
    "ExportData",
    "ImportFormatError",
    "InMemoryTaskStore",
    "Preferences",
    "Settings",
    "StoreError",
    "Task",
    "TaskDraft",
    "TaskFilter",
    "TaskNotFoundError",
    "TaskPatch",
    "TaskStore",
    "__version__",
    "configure_logging",
    "core",
    "filter_tasks",
    "get_logger",
    "load_settings",
    "rank",
    "ranking",
    "read_import",
    "score",
    "sort_key",
    "write_export",
]
