"""Logging setup for the inbox: correlation ids plus optional JSON lines.

Store and import code attaches structured context to a record through
``extra=log_fields(...)``; the JSON formatter lifts those fields to the top
level of each line so a task's history can be grepped by ``task_id``.
"""
from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import contextvars

_CORRELATION_ID = contextvars.ContextVar("team_inbox_correlation_id", default="-")

PLAIN_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | cid=%(correlation_id)s | %(message)s"
FIELDS_ATTR = "inbox_fields"


def log_fields(event: str, **fields: Any) -> Dict[str, Dict[str, Any]]:
    """Build the ``extra`` mapping for a store or transfer event.

    ``None`` values are dropped so an unassigned task does not log
    ``"assignee": null``.
    """
    payload: Dict[str, Any] = {"event": event}
    payload.update({key: value for key, value in fields.items() if value is not None})
    return {FIELDS_ATTR: payload}


class CorrelationIdFilter(logging.Filter):
    """Stamp each record with the id of the CLI invocation that produced it."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = _CORRELATION_ID.get()
        return True


class StructuredFormatter(logging.Formatter):
    """One JSON object per record, with event fields merged in."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "correlation_id": getattr(record, "correlation_id", "-"),
        }
        fields = getattr(record, FIELDS_ATTR, None)
        if isinstance(fields, dict):
            for key, value in fields.items():
                payload.setdefault(key, value)
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True, default=str)


def configure_logging(level: str = "WARNING", *, structured: bool = False) -> None:
    """Install a single stderr handler on the root logger."""
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.WARNING))
    root.handlers.clear()

    handler = logging.StreamHandler()
    handler.addFilter(CorrelationIdFilter())
    handler.setFormatter(StructuredFormatter() if structured else logging.Formatter(PLAIN_FORMAT))
    root.addHandler(handler)


def set_correlation_id(value: Optional[str]) -> None:
    _CORRELATION_ID.set(value or "-")


def get_correlation_id() -> str:
    return _CORRELATION_ID.get()


def get_logger(name: Optional[str] = None) -> logging.Logger:
    return logging.getLogger(name if name else "team_inbox")


__all__ = [
    "CorrelationIdFilter",
    "StructuredFormatter",
    "configure_logging",
    "get_correlation_id",
    "get_logger",
    "log_fields",
    "set_correlation_id",
]
