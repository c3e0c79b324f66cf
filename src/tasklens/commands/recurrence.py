"""Recurrence commands."""

from datetime import datetime
from typing import Optional

import typer
from rich.table import Table

from tasklens.config import get_config_manager
from tasklens.errors import TaskLensError
from tasklens.services.task_store import load_pattern
from tasklens.utils.exit_codes import ERROR_INVALID_ARGS
from tasklens.utils.recurrence import (
    VALID_PATTERNS,
    describe_pattern,
    format_day,
    next_occurrence_for,
)
from tasklens.utils.ui.console import get_console
from tasklens.utils.ui.formatters import format_output

from .decorators import command_wrapper

console = get_console()


@command_wrapper
def next_command(
    current: datetime = typer.Argument(
        ..., help="Date of the current occurrence (YYYY-MM-DD)"
    ),
    pattern: str = typer.Argument(..., help=f"Pattern: {', '.join(VALID_PATTERNS)}"),
    custom: Optional[str] = typer.Option(
        None, "--custom", help="Rule text, required for custom patterns"
    ),
    end: Optional[datetime] = typer.Option(
        None, "--end", help="Last day an occurrence may land on (YYYY-MM-DD)"
    ),
    json_opt: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Compute the next occurrence of a recurring task.

    Once the series has ended (or for custom rules, which are not
    interpreted) there is no next occurrence and none is generated.
    """
    pattern = pattern.lower()
    if pattern not in VALID_PATTERNS:
        raise TaskLensError(
            f"Unknown pattern '{pattern}'. Choose from: {', '.join(VALID_PATTERNS)}",
            exit_code=ERROR_INVALID_ARGS,
        )
    recurring = load_pattern(
        {"pattern": pattern, "custom_pattern": custom, "end_date": end}
    )
    date_format = get_config_manager().config.output.date_format

    next_date = next_occurrence_for(recurring, current)
    description = describe_pattern(
        recurring.pattern,
        recurring.custom_pattern,
        recurring.end_date,
        date_format=date_format,
    )

    if json_opt:
        format_output(
            {
                "pattern": recurring.pattern.value,
                "current": current.date(),
                "next": next_date,
                "generate": next_date is not None,
                "description": description,
            },
            "json",
        )
        return

    table = Table(show_header=False, box=None)
    table.add_column("Field", style="bold cyan")
    table.add_column("Value")
    table.add_row("Pattern", description)
    table.add_row("Current", format_day(current, date_format))
    table.add_row(
        "Next",
        format_day(next_date, date_format) if next_date else "[dim]none[/dim]",
    )
    table.add_row(
        "Generate", "[green]yes[/green]" if next_date else "[yellow]no[/yellow]"
    )
    console.print(table)
