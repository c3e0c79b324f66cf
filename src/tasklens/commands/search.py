"""Fuzzy search command."""

from pathlib import Path
from typing import Optional

import typer

from tasklens.config import get_config_manager
from tasklens.utils.search import search_tasks
from tasklens.utils.ui.formatters import format_output

from .decorators import command_wrapper
from .utils import FILE_HELP, OUTPUT_HELP, load_snapshot, resolve_output


@command_wrapper
def search_command(
    query: str = typer.Argument(..., help="Search text (at least search.min_query_length characters)"),
    file: Optional[Path] = typer.Option(None, "--file", "-f", help=FILE_HELP),
    limit: Optional[int] = typer.Option(
        None, "--limit", "-n", min=1, help="Maximum results (default from config)"
    ),
    include_subtasks: bool = typer.Option(
        True, "--subtasks/--no-subtasks", help="Also search subtasks"
    ),
    output: Optional[str] = typer.Option(None, "--output", "-o", help=OUTPUT_HELP),
    json_opt: bool = typer.Option(
        False, "--json", help="Output as JSON (alias for --output json)"
    ),
) -> None:
    """Search task names and descriptions, tolerating typos."""
    settings = get_config_manager().config.search
    tasks = load_snapshot(file)
    if not include_subtasks:
        tasks = [task for task in tasks if not task.is_subtask]

    results = search_tasks(
        tasks,
        query,
        threshold=settings.threshold,
        limit=limit or settings.limit,
        min_length=settings.min_query_length,
    )

    output_format = resolve_output(output, json_opt)
    if output_format == "json":
        format_output(results, "json")
    else:
        format_output(results, output_format, query=query)
