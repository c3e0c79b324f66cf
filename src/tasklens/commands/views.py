"""View bucket commands: view, list, subtasks, overdue-count."""

from datetime import datetime
from pathlib import Path
from typing import Optional

import typer

from tasklens.config import get_config_manager
from tasklens.errors import TaskLensError
from tasklens.utils.exit_codes import ERROR_INVALID_ARGS, ERROR_NOT_FOUND
from tasklens.utils.ui.console import get_console
from tasklens.utils.ui.formatters import format_output
from tasklens.utils.views import (
    VIEW_NAMES,
    get_next_n_days_tasks,
    get_overdue_count,
    get_subtasks,
    get_tasks_by_list,
    get_view,
)

from .decorators import command_wrapper
from .utils import FILE_HELP, NOW_HELP, OUTPUT_HELP, load_snapshot, resolve_now, resolve_output

console = get_console()

VIEW_TITLES = {
    "today": "Today",
    "upcoming": "Upcoming",
    "next7days": "Next 7 Days",
    "overdue": "Overdue",
    "all": "All Tasks",
}


@command_wrapper
def view_command(
    name: str = typer.Argument(..., help=f"View name: {', '.join(VIEW_NAMES)}"),
    file: Optional[Path] = typer.Option(None, "--file", "-f", help=FILE_HELP),
    now: Optional[datetime] = typer.Option(None, "--now", help=NOW_HELP),
    output: Optional[str] = typer.Option(None, "--output", "-o", help=OUTPUT_HELP),
    json_opt: bool = typer.Option(
        False, "--json", help="Output as JSON (alias for --output json)"
    ),
    compact: bool = typer.Option(False, "--compact", help="Compact output"),
) -> None:
    """Show a view bucket (today, upcoming, next7days, overdue, all)."""
    name = name.lower()
    if name not in VIEW_NAMES:
        raise TaskLensError(
            f"Unknown view '{name}'. Choose from: {', '.join(VIEW_NAMES)}",
            exit_code=ERROR_INVALID_ARGS,
        )

    tasks = load_snapshot(file)
    reference = resolve_now(now)
    config = get_config_manager().config

    upcoming_days = config.views.upcoming_days
    if name == "next7days" and upcoming_days != 7:
        visible = get_next_n_days_tasks(tasks, reference, upcoming_days)
    else:
        visible = get_view(name, tasks, reference)

    format_output(
        visible,
        resolve_output(output, json_opt),
        now=reference,
        title=VIEW_TITLES[name],
        compact=compact,
        date_format=config.output.date_format,
    )


@command_wrapper
def list_command(
    list_id: str = typer.Argument(..., help="List ID"),
    file: Optional[Path] = typer.Option(None, "--file", "-f", help=FILE_HELP),
    output: Optional[str] = typer.Option(None, "--output", "-o", help=OUTPUT_HELP),
    json_opt: bool = typer.Option(
        False, "--json", help="Output as JSON (alias for --output json)"
    ),
    compact: bool = typer.Option(False, "--compact", help="Compact output"),
) -> None:
    """Show the top-level tasks of a list."""
    tasks = load_snapshot(file)
    format_output(
        get_tasks_by_list(tasks, list_id),
        resolve_output(output, json_opt),
        title=f"List {list_id}",
        compact=compact,
        date_format=get_config_manager().config.output.date_format,
    )


@command_wrapper
def subtasks_command(
    parent_id: str = typer.Argument(..., help="Parent task ID"),
    file: Optional[Path] = typer.Option(None, "--file", "-f", help=FILE_HELP),
    output: Optional[str] = typer.Option(None, "--output", "-o", help=OUTPUT_HELP),
    json_opt: bool = typer.Option(
        False, "--json", help="Output as JSON (alias for --output json)"
    ),
) -> None:
    """Show the subtasks of a task, in position order."""
    tasks = load_snapshot(file)
    parent = next((task for task in tasks if task.id == parent_id), None)
    if parent is None:
        raise TaskLensError(f"Task '{parent_id}' not found", exit_code=ERROR_NOT_FOUND)

    format_output(
        get_subtasks(tasks, parent_id),
        resolve_output(output, json_opt),
        title=f"Subtasks of {parent.name}",
        compact=True,
    )


@command_wrapper
def overdue_count_command(
    file: Optional[Path] = typer.Option(None, "--file", "-f", help=FILE_HELP),
    now: Optional[datetime] = typer.Option(None, "--now", help=NOW_HELP),
) -> None:
    """Print the number of overdue tasks."""
    tasks = load_snapshot(file)
    console.print(get_overdue_count(tasks, resolve_now(now)))
