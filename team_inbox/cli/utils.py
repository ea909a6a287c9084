"""Helper utilities shared across CLI commands."""
from __future__ import annotations

import uuid
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, Optional

import click
from pydantic import ValidationError

from team_inbox.core.utils.config import Settings
from team_inbox.core.utils.logger import get_logger, set_correlation_id
from team_inbox.core.utils.team_config import TeamConfig, load_team_yaml
from team_inbox.store import StoreError, TaskStore
from team_inbox.transfer import ImportFormatError

LOGGER = get_logger(__name__)


def _build_context(settings: Settings) -> Dict[str, Any]:
    set_correlation_id(uuid.uuid4().hex[:12])
    team_config = load_team_yaml(settings.team_config_path) or TeamConfig()
    people = team_config.people or settings.default_people
    store = TaskStore(settings.store_path, default_people=people)
    LOGGER.debug("Using store %s", settings.store_path)
    return {"settings": settings, "store": store, "team_config": team_config}


def _first_error(exc: ValidationError) -> str:
    error = exc.errors()[0]
    location = ".".join(str(part) for part in error.get("loc", ()))
    return f"{location}: {error['msg']}" if location else str(error["msg"])


@contextmanager
def translate_errors() -> Iterator[None]:
    """Re-raise domain errors as ``click.ClickException``."""
    try:
        yield
    except ValidationError as exc:
        raise click.ClickException(f"Invalid task: {_first_error(exc)}") from exc
    except (StoreError, ImportFormatError, ValueError) as exc:
        raise click.ClickException(str(exc)) from exc


def get_store(ctx: click.Context) -> TaskStore:
    return ctx.obj["store"]


def default_factor(ctx: click.Context, name: str, value: Optional[int]) -> Optional[int]:
    """Use the team YAML default for an ICE factor when none was given."""
    if value is not None:
        return value
    team_config: TeamConfig = ctx.obj["team_config"]
    return team_config.defaults.get(name)


def check_assignee(store: TaskStore, assignee: Optional[str]) -> None:
    if assignee is None:
        return
    if assignee.strip() not in store.list_people():
        raise click.ClickException(
            f"Unknown person '{assignee}'. Add them with `team-inbox people add`."
        )


def resolve_path(value: Optional[Path], default_name: str) -> Path:
    if value is None:
        return Path.cwd() / default_name
    return Path(value).expanduser()


__all__ = [
    "check_assignee",
    "default_factor",
    "get_store",
    "resolve_path",
    "translate_errors",
]
