"""Command line interface for the team inbox."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import click

from team_inbox.core.utils.config import Settings, load_settings
from team_inbox.core.utils.logger import configure_logging, get_logger
from team_inbox.filters import TaskFilter, filter_tasks
from team_inbox.models import TaskDraft, TaskPatch
from team_inbox.ranking import rank, score as ice_score
from team_inbox.transfer import default_export_filename, export_data, read_import, write_export

from .formatting import echo_ranked, format_score, format_task_detail, task_payload
from .utils import (
    _build_context,
    check_assignee,
    default_factor,
    get_store,
    resolve_path,
    translate_errors,
)

LOGGER = get_logger(__name__)

FACTOR = click.IntRange(1, 5)


@click.group()
@click.option("--config", "config_path", type=click.Path(path_type=Path), help="Path to config file.")
@click.option("--store", "store_path", type=click.Path(path_type=Path), help="Path to the inbox JSON store.")
@click.option("--verbose", is_flag=True, help="Enable verbose logging output.")
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[Path], store_path: Optional[Path], verbose: bool) -> None:
    """Team task inbox ranked by ICE score (Impact x Confidence x Ease)."""
    settings: Settings = load_settings(config_path)
    if store_path is not None:
        settings.store_path = store_path
    if verbose:
        settings.log_level = "DEBUG"
    configure_logging(settings.log_level, structured=settings.structured_logging)
    ctx.obj = _build_context(settings)


@cli.command(name="add")
@click.argument("title", nargs=-1, required=True)
@click.option("--notes", default="", help="Free-form notes.")
@click.option("--impact", type=FACTOR, help="Impact 1-5 (higher is more valuable).")
@click.option("--confidence", type=FACTOR, help="Confidence 1-5 (higher is more certain).")
@click.option("--ease", type=FACTOR, help="Ease 1-5 (higher is less effort).")
@click.option("--assignee", help="Team member responsible for the task.")
@click.pass_context
def add(
    ctx: click.Context,
    title: Tuple[str, ...],
    notes: str,
    impact: Optional[int],
    confidence: Optional[int],
    ease: Optional[int],
    assignee: Optional[str],
) -> None:
    """Create a task."""
    store = get_store(ctx)
    check_assignee(store, assignee)
    fields: Dict[str, Any] = {"title": " ".join(title), "notes": notes, "assignee": assignee}
    for name, value in (("impact", impact), ("confidence", confidence), ("ease", ease)):
        resolved = default_factor(ctx, name, value)
        if resolved is not None:
            fields[name] = resolved
    with translate_errors():
        task = store.add_task(TaskDraft(**fields))
    click.echo(f"Added {task.id[:8]}  score {format_score(ice_score(task))}  {task.title}")


@cli.command(name="list")
@click.option("--search", help="Only tasks whose title or notes contain this text.")
@click.option("--assignee", help="'all', 'unassigned' or a team member name.")
@click.option("--show-done/--hide-done", "show_done", default=None, help="Include completed tasks.")
@click.option("--save", is_flag=True, help="Remember these filters as the default view.")
@click.option("--json", "as_json", is_flag=True, help="Emit JSON instead of a table.")
@click.pass_context
def list_tasks(
    ctx: click.Context,
    search: Optional[str],
    assignee: Optional[str],
    show_done: Optional[bool],
    save: bool,
    as_json: bool,
) -> None:
    """Show tasks in priority order."""
    store = get_store(ctx)
    saved = TaskFilter.from_preferences(store.preferences)
    task_filter = TaskFilter(
        search=saved.search if search is None else search,
        assignee=saved.assignee if assignee is None else assignee,
        show_done=saved.show_done if show_done is None else show_done,
    )
    if save:
        with translate_errors():
            store.save_preferences(task_filter.to_preferences())
    ordered = rank(filter_tasks(store.list_tasks(), task_filter))
    LOGGER.debug("Listing %d task(s) with %s", len(ordered), task_filter)
    if as_json:
        click.echo(json.dumps(task_payload(ordered), indent=2))
    else:
        echo_ranked(ordered)


@cli.command(name="show")
@click.argument("task_id")
@click.pass_context
def show(ctx: click.Context, task_id: str) -> None:
    """Show one task in full."""
    with translate_errors():
        task = get_store(ctx).resolve_id(task_id)
    click.echo(format_task_detail(task))


@cli.command(name="score")
@click.argument("task_id")
@click.pass_context
def score_command(ctx: click.Context, task_id: str) -> None:
    """Print a task's ICE score (-inf once completed)."""
    with translate_errors():
        task = get_store(ctx).resolve_id(task_id)
    click.echo(format_score(ice_score(task)))


def _set_done(ctx: click.Context, task_id: str, done: bool) -> None:
    store = get_store(ctx)
    with translate_errors():
        task = store.resolve_id(task_id)
        store.update_task(task.id, TaskPatch(done=done))
    state = "done" if done else "open"
    click.echo(f"Marked {task.id[:8]} {state}: {task.title}")


@cli.command(name="done")
@click.argument("task_id")
@click.pass_context
def done(ctx: click.Context, task_id: str) -> None:
    """Mark a task completed."""
    _set_done(ctx, task_id, True)


@cli.command(name="undo")
@click.argument("task_id")
@click.pass_context
def undo(ctx: click.Context, task_id: str) -> None:
    """Reopen a completed task."""
    _set_done(ctx, task_id, False)


@cli.command(name="edit")
@click.argument("task_id")
@click.option("--title", help="New title.")
@click.option("--notes", help="Replace the notes.")
@click.option("--impact", type=FACTOR)
@click.option("--confidence", type=FACTOR)
@click.option("--ease", type=FACTOR)
@click.option("--assignee", help="Assign to a team member.")
@click.option("--unassign", is_flag=True, help="Clear the assignee.")
@click.pass_context
def edit(
    ctx: click.Context,
    task_id: str,
    title: Optional[str],
    notes: Optional[str],
    impact: Optional[int],
    confidence: Optional[int],
    ease: Optional[int],
    assignee: Optional[str],
    unassign: bool,
) -> None:
    """Change fields of a task."""
    if assignee is not None and unassign:
        raise click.UsageError("--assignee and --unassign are mutually exclusive.")
    store = get_store(ctx)
    check_assignee(store, assignee)
    changes: Dict[str, Any] = {
        key: value
        for key, value in (
            ("title", title),
            ("notes", notes),
            ("impact", impact),
            ("confidence", confidence),
            ("ease", ease),
            ("assignee", assignee),
        )
        if value is not None
    }
    if unassign:
        changes["assignee"] = None
    if not changes:
        raise click.UsageError("Nothing to change.")
    with translate_errors():
        task = store.resolve_id(task_id)
        updated = store.update_task(task.id, TaskPatch(**changes))
    click.echo(format_task_detail(updated))


@cli.command(name="rm")
@click.argument("task_id")
@click.pass_context
def remove(ctx: click.Context, task_id: str) -> None:
    """Delete a task."""
    store = get_store(ctx)
    with translate_errors():
        task = store.resolve_id(task_id)
        store.delete_task(task.id)
    click.echo(f"Deleted {task.id[:8]}: {task.title}")


@cli.command(name="clear-done")
@click.pass_context
def clear_done(ctx: click.Context) -> None:
    """Delete every completed task."""
    with translate_errors():
        removed = get_store(ctx).clear_completed()
    click.echo(f"Removed {removed} completed task(s).")


@cli.group(name="people")
def people() -> None:
    """Manage the team roster."""


@people.command(name="list")
@click.pass_context
def people_list(ctx: click.Context) -> None:
    """List team members."""
    names = get_store(ctx).list_people()
    if not names:
        click.echo("No team members.")
        return
    for name in names:
        click.echo(name)


@people.command(name="add")
@click.argument("name")
@click.pass_context
def people_add(ctx: click.Context, name: str) -> None:
    """Add a team member."""
    with translate_errors():
        added = get_store(ctx).add_person(name)
    click.echo(f"Added {name.strip()}." if added else f"{name.strip()} is already on the team.")


@people.command(name="rm")
@click.argument("name")
@click.pass_context
def people_rm(ctx: click.Context, name: str) -> None:
    """Remove a team member (their tasks keep the assignee)."""
    with translate_errors():
        removed = get_store(ctx).remove_person(name)
    if not removed:
        raise click.ClickException(f"No team member named '{name}'.")
    click.echo(f"Removed {name.strip()}.")


@cli.command(name="export")
@click.argument("path", required=False, type=click.Path(path_type=Path))
@click.pass_context
def export_command(ctx: click.Context, path: Optional[Path]) -> None:
    """Write tasks and roster to a JSON file."""
    store = get_store(ctx)
    target = resolve_path(path, default_export_filename())
    try:
        write_export(export_data(store.list_tasks(), store.list_people()), target)
    except OSError as exc:
        raise click.ClickException(f"Failed to write '{target}': {exc}") from exc
    click.echo(f"Exported to {target}")


@cli.command(name="import")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_context
def import_command(ctx: click.Context, path: Path) -> None:
    """Replace tasks and roster with the contents of an export file."""
    store = get_store(ctx)
    with translate_errors():
        data = read_import(path)
        store.replace_all(data.tasks, data.people)
    click.echo(f"Imported {len(data.tasks)} task(s) and {len(data.people)} people.")


def main() -> None:
    cli(prog_name="team-inbox")


if __name__ == "__main__":  # pragma: no cover
    main()
