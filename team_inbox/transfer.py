"""JSON import and export of the task collection and roster."""
from __future__ import annotations

import json
from datetime import date
from pathlib import Path
from typing import Iterable, Optional

from pydantic import ValidationError

from team_inbox.core.utils.constants import EXPORT_FILENAME_PREFIX
from team_inbox.core.utils.logger import get_logger, log_fields
from team_inbox.models import ExportData, Task

LOGGER = get_logger(__name__)


class ImportFormatError(ValueError):
    """Raised when an import file is not a valid inbox export."""


def export_data(tasks: Iterable[Task], people: Iterable[str]) -> ExportData:
    return ExportData(tasks=list(tasks), people=list(people))


def default_export_filename(today: Optional[date] = None) -> str:
    """``team-inbox-YYYY-MM-DD.json`` for ``today`` (defaults to the local date)."""
    day = today or date.today()
    return f"{EXPORT_FILENAME_PREFIX}-{day.isoformat()}.json"


def write_export(data: ExportData, path: Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data.to_record(), indent=2) + "\n", encoding="utf-8")
    LOGGER.info(
        "Exported %d task(s) and %d people to %s",
        len(data.tasks),
        len(data.people),
        path,
        extra=log_fields("export.written", path=str(path), tasks=len(data.tasks)),
    )
    return path


def read_import(path: Path) -> ExportData:
    """Parse an export file, rejecting anything that is not ``{tasks: [], people: []}``."""
    path = Path(path)
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ImportFormatError(f"Invalid JSON file: {exc}") from exc
    if not isinstance(raw, dict) or not isinstance(raw.get("tasks"), list) or not isinstance(raw.get("people"), list):
        raise ImportFormatError("Invalid JSON file format: expected 'tasks' and 'people' lists")
    try:
        data = ExportData.model_validate(raw)
    except ValidationError as exc:
        raise ImportFormatError(f"Invalid task record: {exc.errors()[0]['msg']}") from exc
    LOGGER.info(
        "Read %d task(s) and %d people from %s",
        len(data.tasks),
        len(data.people),
        path,
        extra=log_fields("import.read", path=str(path), tasks=len(data.tasks)),
    )
    return data


__all__ = [
    "ImportFormatError",
    "default_export_filename",
    "export_data",
    "read_import",
    "write_export",
]
