"""Convenience exports for common utility helpers."""
from __future__ import annotations

from .config import Settings, find_config_in_parents, load_settings
from .logger import (
    configure_logging,
    get_correlation_id,
    get_logger,
    log_fields,
    set_correlation_id,
)
from .team_config import TeamConfig, load_team_yaml

__all__ = [
    "Settings",
    "TeamConfig",
    "configure_logging",
    "find_config_in_parents",
    "get_correlation_id",
    "get_logger",
    "load_settings",
    "load_team_yaml",
    "log_fields",
    "set_correlation_id",
]
