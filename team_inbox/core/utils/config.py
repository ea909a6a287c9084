"""Configuration loading utilities for the team inbox."""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

try:
    import tomllib  # Python 3.11+
except ModuleNotFoundError:  # pragma: no cover - fallback for <3.11
    import tomli as tomllib  # type: ignore

from .constants import DEFAULT_PEOPLE


CONFIG_FILENAMES: tuple[str, ...] = (".team-inbox.toml", "team-inbox.toml")
DEFAULT_CONFIG_PATHS = (
    Path.home() / ".config" / "team-inbox" / "config.toml",
    Path.home() / ".team-inbox.toml",
)
ENV_PREFIX = "TEAM_INBOX_"


def find_config_in_parents(
    start_path: Path, config_name: str | Sequence[str] = ".team-inbox.toml"
) -> Optional[Path]:
    """Search parent directories starting from ``start_path`` for configuration files."""

    if isinstance(config_name, str):
        candidate_names: tuple[str, ...] = (config_name,)
    else:
        candidate_names = tuple(config_name)

    current = start_path.resolve()
    if current.is_file():
        current = current.parent

    while True:
        for name in candidate_names:
            candidate = current / name
            if candidate.is_file():
                return candidate.resolve()
        if current.parent == current:
            break
        current = current.parent
    return None


@dataclass
class Settings:
    """Runtime configuration for the team-inbox CLI."""

    store_path: Path = Path(".team-inbox/inbox.json")
    log_level: str = "WARNING"
    structured_logging: bool = False
    default_people: tuple[str, ...] = DEFAULT_PEOPLE
    team_config_path: Path = Path("team-inbox.yaml")


def _cast_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.lower() in {"1", "true", "on", "yes", "y"}
    return bool(value)


def _split_names(value: str) -> tuple[str, ...]:
    return tuple(filter(None, (item.strip() for item in value.split(","))))


def _load_from_file(path: Path) -> Dict[str, Any]:
    if not path.is_file():
        return {}
    with path.open("rb") as handle:
        data = tomllib.load(handle)
    return {k.replace("-", "_"): v for k, v in data.items()}


def _load_from_env(prefix: str = ENV_PREFIX) -> Dict[str, Any]:
    env: Dict[str, Any] = {}
    for key, value in os.environ.items():
        if not key.startswith(prefix):
            continue
        field = key[len(prefix) :].lower()
        if field == "structured_logging":
            env[field] = _cast_bool(value)
        elif field in {"store_path", "team_config_path"}:
            env[field] = Path(value)
        elif field == "default_people":
            env[field] = _split_names(value)
        else:
            env[field] = value
    return env


def load_settings(explicit_path: Optional[Path] = None) -> Settings:
    """Load configuration, merging file and environment sources."""

    file_data: Dict[str, Any] = {}
    if explicit_path:
        file_data.update(_load_from_file(explicit_path))
    else:
        search_paths = []
        cwd = Path.cwd()
        project_config = find_config_in_parents(cwd, CONFIG_FILENAMES)
        if project_config:
            search_paths.append(project_config)
        search_paths.extend(DEFAULT_CONFIG_PATHS)
        for candidate in dict.fromkeys(search_paths):
            file_data = _load_from_file(candidate)
            if file_data:
                break

    env_data = _load_from_env()
    merged: Dict[str, Any] = {**file_data, **env_data}

    for key in ("store_path", "team_config_path"):
        if key in merged and isinstance(merged[key], str):
            merged[key] = Path(merged[key]).expanduser()
    people = merged.get("default_people")
    if people is not None and not isinstance(people, tuple):
        if isinstance(people, str):
            merged["default_people"] = _split_names(people)
        else:
            merged["default_people"] = tuple(str(name) for name in people)
    if "structured_logging" in merged:
        merged["structured_logging"] = _cast_bool(merged["structured_logging"])

    known_fields = set(Settings.__dataclass_fields__)
    init_kwargs = {key: value for key, value in merged.items() if key in known_fields}
    return Settings(**init_kwargs)


__all__ = ["Settings", "load_settings", "find_config_in_parents", "CONFIG_FILENAMES"]
