"""Core configuration and logging helpers."""
from __future__ import annotations

from .utils import (
    Settings,
    TeamConfig,
    configure_logging,
    get_logger,
    load_settings,
    load_team_yaml,
)

__all__ = [
    "Settings",
    "TeamConfig",
    "configure_logging",
    "get_logger",
    "load_settings",
    "load_team_yaml",
]
