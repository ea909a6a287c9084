from pathlib import Path

from team_inbox.core.utils.config import Settings, load_settings
from team_inbox.core.utils.team_config import load_team_yaml


def test_defaults_without_any_config(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    settings = load_settings()
    assert settings == Settings()
    assert settings.store_path == Path(".team-inbox/inbox.json")
    assert settings.default_people == ("Alice", "Bob", "Charlie")


def test_env_overrides(tmp_path, monkeypatch):
    config_path = tmp_path / "config.toml"
    config_path.write_text("store_path = 'from-file.json'\nlog_level = 'INFO'\n")
    monkeypatch.setenv("TEAM_INBOX_STORE_PATH", "from-env.json")
    monkeypatch.setenv("TEAM_INBOX_STRUCTURED_LOGGING", "true")
    monkeypatch.setenv("TEAM_INBOX_DEFAULT_PEOPLE", "Ann, Ben,,")
    settings = load_settings(config_path)
    assert settings.store_path == Path("from-env.json")
    assert settings.log_level == "INFO"
    assert settings.structured_logging is True
    assert settings.default_people == ("Ann", "Ben")


def test_file_values_are_normalized(tmp_path):
    config_path = tmp_path / "config.toml"
    config_path.write_text(
        "store-path = 'inbox.json'\n"
        "default_people = ['Kim', 'Lee']\n"
        "structured_logging = 'yes'\n"
        "unknown_option = 1\n"
    )
    settings = load_settings(config_path)
    assert settings.store_path == Path("inbox.json")
    assert settings.default_people == ("Kim", "Lee")
    assert settings.structured_logging is True
    assert not hasattr(settings, "unknown_option")


def test_project_config_discovered_in_parent_directory(tmp_path, monkeypatch):
    project_root = tmp_path / "repo"
    nested_dir = project_root / "src" / "module"
    nested_dir.mkdir(parents=True)
    (project_root / ".team-inbox.toml").write_text("log_level = 'DEBUG'\n")

    monkeypatch.chdir(nested_dir)

    assert load_settings().log_level == "DEBUG"


def test_project_config_without_dot_discovered_in_parent_directory(tmp_path, monkeypatch):
    project_root = tmp_path / "repo"
    nested_dir = project_root / "pkg"
    nested_dir.mkdir(parents=True)
    (project_root / "team-inbox.toml").write_text("log_level = 'ERROR'\n")

    monkeypatch.chdir(nested_dir)

    assert load_settings().log_level == "ERROR"


def test_team_yaml_people_and_defaults(tmp_path):
    path = tmp_path / "team-inbox.yaml"
    path.write_text(
        "people:\n  - Alice\n  - ' '\n  - Dana\n"
        "defaults:\n  impact: 4\n  confidence: 9\n  ease: nope\n",
        encoding="utf-8",
    )
    cfg = load_team_yaml(path)
    assert cfg is not None
    assert cfg.people == ("Alice", "Dana")
    assert cfg.defaults == {"impact": 4}


def test_team_yaml_missing_or_malformed(tmp_path):
    assert load_team_yaml(tmp_path / "absent.yaml") is None
    bad = tmp_path / "bad.yaml"
    bad.write_text("people: [unclosed\n", encoding="utf-8")
    assert load_team_yaml(bad) is None
    scalar = tmp_path / "scalar.yaml"
    scalar.write_text("just text\n", encoding="utf-8")
    assert load_team_yaml(scalar) is None
