import logging
import os

import pytest


@pytest.fixture(autouse=True)
def _restore_root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture(autouse=True)
def _isolated_environment(tmp_path, monkeypatch):
    """Keep user config and TEAM_INBOX_* variables out of every test."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    for key in list(os.environ):
        if key.startswith("TEAM_INBOX_"):
            monkeypatch.delenv(key)
    monkeypatch.setattr("team_inbox.core.utils.config.DEFAULT_CONFIG_PATHS", ())
