import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from team_inbox.cli import cli


@pytest.fixture
def inbox(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    runner = CliRunner()
    store = tmp_path / "inbox.json"

    def run(*args):
        return runner.invoke(cli, ["--store", str(store), *args], catch_exceptions=False)

    return run


def _listed(run, *args):
    result = run("list", "--json", *args)
    assert result.exit_code == 0, result.output
    return json.loads(result.stdout)


def _id_of(run, title):
    for record in _listed(run, "--show-done"):
        if record["title"] == title:
            return record["id"]
    raise AssertionError(f"{title} not listed")


def test_add_and_list_in_ice_order(inbox):
    assert inbox("add", "Low", "value", "--impact", "1", "--confidence", "1", "--ease", "1").exit_code == 0
    assert inbox("add", "Big", "win", "--impact", "5", "--confidence", "4", "--ease", "3").exit_code == 0
    assert inbox("add", "Middle", "--assignee", "Alice").exit_code == 0

    records = _listed(inbox)
    assert [record["title"] for record in records] == ["Big win", "Middle", "Low value"]
    assert [record["score"] for record in records] == [60, 27, 1]

    table = inbox("list")
    assert table.exit_code == 0
    assert table.output.index("Big win") < table.output.index("Low value")
    assert "@Alice" in table.output


def test_done_tasks_sink_and_can_be_hidden(inbox):
    inbox("add", "Important", "--impact", "5", "--confidence", "5", "--ease", "5")
    inbox("add", "Minor", "--impact", "1", "--confidence", "1", "--ease", "2")
    task_id = _id_of(inbox, "Important")

    result = inbox("done", task_id[:6])
    assert result.exit_code == 0
    assert "done" in result.output

    records = _listed(inbox)
    assert [record["title"] for record in records] == ["Minor", "Important"]
    assert records[1]["score"] is None
    assert inbox("score", task_id).output.strip() == "-inf"

    assert [record["title"] for record in _listed(inbox, "--hide-done")] == ["Minor"]

    assert inbox("undo", task_id).exit_code == 0
    assert inbox("score", task_id).output.strip() == "125"


def test_saved_preferences_apply_to_later_listings(inbox):
    inbox("add", "Fix bug", "--assignee", "Bob", "--impact", "4")
    inbox("add", "Write docs")
    assert inbox("list", "--assignee", "unassigned", "--save").exit_code == 0

    assert [record["title"] for record in _listed(inbox)] == ["Write docs"]
    assert [record["title"] for record in _listed(inbox, "--assignee", "all")] == ["Fix bug", "Write docs"]


def test_search_filter(inbox):
    inbox("add", "Refactor parser", "--notes", "tokenizer cleanup")
    inbox("add", "Update website")
    assert [record["title"] for record in _listed(inbox, "--search", "TOKENIZER")] == ["Refactor parser"]


def test_edit_updates_fields(inbox):
    inbox("add", "Draft", "--assignee", "Alice")
    task_id = _id_of(inbox, "Draft")

    result = inbox("edit", task_id, "--title", "Final", "--ease", "5", "--unassign")

    assert result.exit_code == 0
    assert "Final" in result.output
    record = _listed(inbox)[0]
    assert record["ease"] == 5
    assert "assignee" not in record


def test_edit_requires_changes(inbox):
    inbox("add", "Draft")
    result = inbox("edit", _id_of(inbox, "Draft"))
    assert result.exit_code == 2
    assert "Nothing to change" in result.output


def test_unknown_assignee_is_rejected(inbox):
    result = inbox("add", "Task", "--assignee", "Mallory")
    assert result.exit_code == 1
    assert "Unknown person 'Mallory'" in result.output


def test_out_of_range_factor_is_a_usage_error(inbox):
    result = inbox("add", "Task", "--impact", "6")
    assert result.exit_code == 2


def test_unknown_task_id(inbox):
    result = inbox("done", "deadbeef")
    assert result.exit_code == 1
    assert "not found" in result.output


def test_rm_and_clear_done(inbox):
    inbox("add", "One")
    inbox("add", "Two")
    inbox("add", "Three")
    inbox("done", _id_of(inbox, "Two"))
    inbox("done", _id_of(inbox, "Three"))

    assert inbox("rm", _id_of(inbox, "One")).exit_code == 0
    result = inbox("clear-done")
    assert "Removed 2 completed task(s)." in result.output
    assert _listed(inbox) == []


def test_people_commands(inbox):
    assert inbox("people", "list").output.split() == ["Alice", "Bob", "Charlie"]
    assert "Added Dana." in inbox("people", "add", "Dana").output
    assert "already on the team" in inbox("people", "add", "Dana").output
    assert inbox("people", "rm", "Bob").exit_code == 0
    assert inbox("people", "rm", "Bob").exit_code == 1
    assert inbox("people", "list").output.split() == ["Alice", "Charlie", "Dana"]


def test_team_yaml_seeds_roster_and_defaults(inbox, tmp_path):
    (tmp_path / "team-inbox.yaml").write_text(
        "people: [Pat, Sam]\ndefaults:\n  impact: 5\n  ease: 1\n", encoding="utf-8"
    )
    inbox("add", "Seeded", "--assignee", "Pat")
    record = _listed(inbox)[0]
    assert (record["impact"], record["confidence"], record["ease"]) == (5, 3, 1)
    assert inbox("people", "list").output.split() == ["Pat", "Sam"]


def test_export_and_import(inbox, tmp_path):
    inbox("add", "Keep me", "--impact", "4")
    export_path = tmp_path / "exports" / "backup.json"
    assert inbox("export", str(export_path)).exit_code == 0
    exported = json.loads(export_path.read_text(encoding="utf-8"))
    assert [task["title"] for task in exported["tasks"]] == ["Keep me"]

    inbox("rm", exported["tasks"][0]["id"])
    assert _listed(inbox) == []

    result = inbox("import", str(export_path))
    assert "Imported 1 task(s) and 3 people." in result.output
    assert [record["title"] for record in _listed(inbox)] == ["Keep me"]


def test_export_default_filename(inbox, tmp_path):
    result = inbox("export")
    assert result.exit_code == 0
    assert list(Path(tmp_path).glob("team-inbox-*.json"))


def test_import_rejects_bad_file(inbox, tmp_path):
    bad = tmp_path / "bad.json"
    bad.write_text(json.dumps({"tasks": []}), encoding="utf-8")
    result = inbox("import", str(bad))
    assert result.exit_code == 1
    assert "Invalid JSON file format" in result.output
