"""Formatting utilities for ranked task output."""
from __future__ import annotations

import math
from typing import Any, Dict, List, Sequence

import click

from team_inbox.models import Task
from team_inbox.ranking import score

ID_DISPLAY_CHARS = 8
TITLE_WIDTH = 48


def format_score(value: float) -> str:
    """Render an ICE score; the completed-task sentinel shows as ``-inf``."""
    if math.isinf(value):
        return "-inf"
    return str(int(value))


def _truncate(text: str, width: int) -> str:
    if len(text) <= width:
        return text
    return text[: width - 3] + "..."


def format_task_line(position: int, task: Task) -> str:
    mark = "[x]" if task.done else "[ ]"
    ice = format_score(score(task))
    title = _truncate(task.title, TITLE_WIDTH)
    line = (
        f"{position:>3}. {mark} {ice:>4}  "
        f"I{task.impact} C{task.confidence} E{task.ease}  "
        f"{title:<{TITLE_WIDTH}}  {task.id[:ID_DISPLAY_CHARS]}"
    )
    if task.assignee:
        line += f"  @{task.assignee}"
    return line


def echo_ranked(tasks: Sequence[Task]) -> None:
    if not tasks:
        click.echo("No tasks match.")
        return
    for position, task in enumerate(tasks, start=1):
        line = format_task_line(position, task)
        click.echo(click.style(line, dim=True) if task.done else line)


def task_payload(tasks: Sequence[Task]) -> List[Dict[str, Any]]:
    """JSON-ready records with an extra ``score`` (``None`` for completed tasks)."""
    payload: List[Dict[str, Any]] = []
    for task in tasks:
        record = task.to_record()
        value = score(task)
        record["score"] = None if math.isinf(value) else int(value)
        payload.append(record)
    return payload


def format_task_detail(task: Task) -> str:
    lines = [
        f"{task.title}",
        f"  id:         {task.id}",
        f"  score:      {format_score(score(task))}",
        f"  impact:     {task.impact}",
        f"  confidence: {task.confidence}",
        f"  ease:       {task.ease}",
        f"  assignee:   {task.assignee or '-'}",
        f"  done:       {'yes' if task.done else 'no'}",
    ]
    if task.notes:
        lines.append(f"  notes:      {task.notes}")
    return "\n".join(lines)


__all__ = ["echo_ranked", "format_score", "format_task_detail", "format_task_line", "task_payload"]
