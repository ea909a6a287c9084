"""ICE scoring and ordering for inbox tasks.

A task's ICE score is ``impact * confidence * ease``. Completed tasks score
``DONE_SCORE`` so they always sink below open work. ``rank`` orders a
collection by (not done, score desc, impact desc, ease desc, confidence desc,
created_at asc) and is stable, so fully tied tasks keep their input order.

Any object exposing the fields as attributes is accepted, as is a mapping
(``createdAt`` is honoured as an alias of ``created_at`` for raw JSON records).
Field ranges are not validated here.
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Iterable, List, Tuple, TypeVar

T = TypeVar("T")

DONE_SCORE = float("-inf")

_ALIASES = {"created_at": ("created_at", "createdAt")}


def _field(task: Any, name: str) -> Any:
    if isinstance(task, Mapping):
        for key in _ALIASES.get(name, (name,)):
            if key in task:
                return task[key]
        raise KeyError(name)
    return getattr(task, name)


def score(task: Any) -> float:
    """Return the ICE score of ``task`` or ``DONE_SCORE`` when it is done."""
    if _field(task, "done"):
        return DONE_SCORE
    return _field(task, "impact") * _field(task, "confidence") * _field(task, "ease")


def sort_key(task: Any) -> Tuple[bool, float, int, int, int, Any]:
    """Composite ascending key used by :func:`rank`."""
    return (
        bool(_field(task, "done")),
        -score(task),
        -_field(task, "impact"),
        -_field(task, "ease"),
        -_field(task, "confidence"),
        _field(task, "created_at"),
    )


def rank(tasks: Iterable[T]) -> List[T]:
    """Return a new list of ``tasks`` in priority order; the input is left untouched."""
    return sorted(tasks, key=sort_key)


__all__ = ["DONE_SCORE", "rank", "score", "sort_key"]
