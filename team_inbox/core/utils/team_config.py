"""Reader for team-inbox.yaml (roster seed and new-task defaults).

Only a small schema is understood::

    people: [Alice, Bob]
    defaults:
      impact: 3
      confidence: 3
      ease: 3

If the YAML file is missing, callers should fall back to Settings.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .constants import MAX_FACTOR, MIN_FACTOR
from .logger import get_logger

LOGGER = get_logger(__name__)

FACTOR_NAMES = ("impact", "confidence", "ease")


@dataclass
class TeamConfig:
    people: tuple[str, ...] = ()
    defaults: Dict[str, int] = field(default_factory=dict)


def load_team_yaml(path: Path | None = None) -> Optional[TeamConfig]:
    """Load team-inbox.yaml into a TeamConfig or return None if unavailable."""
    candidate = path or (Path.cwd() / "team-inbox.yaml")
    if not candidate.is_file():
        return None
    try:
        data = yaml.safe_load(candidate.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        LOGGER.warning("Ignoring unreadable team config %s: %s", candidate, exc)
        return None
    if not isinstance(data, dict):
        return None

    cfg = TeamConfig()
    people = data.get("people") or []
    if isinstance(people, list):
        cfg.people = tuple(str(name).strip() for name in people if str(name).strip())

    defaults = data.get("defaults") or {}
    if isinstance(defaults, dict):
        for name in FACTOR_NAMES:
            value = _as_factor(defaults.get(name))
            if value is not None:
                cfg.defaults[name] = value
    return cfg


def _as_factor(v: Any) -> Optional[int]:
    try:
        value = int(v) if v is not None else None
    except (TypeError, ValueError):
        return None
    if value is None or not MIN_FACTOR <= value <= MAX_FACTOR:
        return None
    return value


__all__ = ["TeamConfig", "load_team_yaml"]
