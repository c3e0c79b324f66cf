"""Output formatters for task views and search results."""

import json
from collections.abc import Sequence
from datetime import date, datetime, timedelta
from typing import Any

from pydantic import BaseModel
from rich.markup import escape
from rich.text import Text

from tasklens.config import DEFAULT_DATE_FORMAT
from tasklens.models import Priority, SearchResult, Task
from tasklens.utils.recurrence import format_day
from tasklens.utils.search import highlight_matches
from tasklens.utils.ui.console import get_console
from tasklens.utils.views import calendar_day, is_task_overdue

console = get_console()


PRIORITY_ICONS = {
    Priority.HIGH: "🔴",
    Priority.MEDIUM: "🟠",
    Priority.LOW: "🟡",
    Priority.NONE: "⚪",
}

PRIORITY_COLORS = {
    Priority.HIGH: "bold red",
    Priority.MEDIUM: "bold orange3",
    Priority.LOW: "bold yellow",
    Priority.NONE: "",
}

STATUS_ICONS = {
    "open": "⬜",
    "completed": "☑️",
}

HIGHLIGHT_STYLE = "bold black on yellow"


def to_jsonable(data: Any) -> Any:
    """Convert models (or lists of them) into JSON-ready values."""
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json")
    if isinstance(data, (list, tuple)):
        return [to_jsonable(item) for item in data]
    if isinstance(data, dict):
        return {key: to_jsonable(value) for key, value in data.items()}
    if isinstance(data, (date, datetime)):
        return data.isoformat()
    return data


def format_output(data: Any, output_format: str = "pretty", **kwargs: Any) -> None:
    """Format and display output based on format."""
    if output_format == "json":
        print(json.dumps(to_jsonable(data), indent=2, default=str))
        return

    if isinstance(data, list) and data and isinstance(data[0], SearchResult):
        format_search_results(data, **kwargs)
    elif isinstance(data, list):
        format_tasks_pretty(data, **kwargs)
    else:
        console.print(data)


def format_error(message: str) -> None:
    """Format and display an error message."""
    console.print(f"[bold red]Error:[/bold red] {escape(message)}")


def format_success(message: str) -> None:
    """Format and display a success message."""
    console.print(f"[bold green]Success:[/bold green] {message}")


def format_relative_day(
    value: date | datetime, now: date | datetime, date_format: str = DEFAULT_DATE_FORMAT
) -> str:
    """Name a day relative to today: Today, Tomorrow, Yesterday, or the date."""
    day = calendar_day(value)
    today = calendar_day(now)
    if day == today:
        return "Today"
    if day == today + timedelta(days=1):
        return "Tomorrow"
    if day == today - timedelta(days=1):
        return "Yesterday"
    if today < day <= today + timedelta(days=6):
        return day.strftime("%A")
    return format_day(day, date_format)


def highlight_text(text: str, indices: Sequence[Sequence[int]] | None) -> Text:
    """Build a Rich Text with the matched spans styled."""
    line = Text()
    for segment in highlight_matches(text, indices):
        line.append(segment.text, style=HIGHLIGHT_STYLE if segment.highlighted else "")
    return line


def format_task_item(
    task: Task,
    now: date | datetime,
    compact: bool = False,
    indent: str = "",
    date_format: str = DEFAULT_DATE_FORMAT,
) -> None:
    """Format a single task item."""
    status_icon = STATUS_ICONS["completed" if task.completed else "open"]

    line = Text(f"{indent}{status_icon} ")
    if task.completed:
        style = "dim"
    elif task.priority == Priority.HIGH:
        style = "bold"
    else:
        style = ""
    line.append(task.name, style=style)
    if task.priority != Priority.NONE:
        line.append(f" {PRIORITY_ICONS[task.priority]}")
    console.print(line)

    if compact:
        return

    meta: list[tuple[str, str]] = []
    if task.date is not None:
        meta.append((f"📅 {format_relative_day(task.date, now, date_format)}", "cyan"))
    if task.deadline is not None:
        deadline_str = f"⏱️ {format_relative_day(task.deadline, now, date_format)}"
        meta.append(
            (deadline_str, "bold red" if is_task_overdue(task, now) else "magenta")
        )
    if task.estimated_time:
        meta.append((f"~{task.estimated_time}m", "dim"))
    meta.append((f"#{task.id[-6:]}", "dim"))

    meta_line = Text()
    meta_line.append(f"{indent}   └─ ", style="dim")
    for i, (text, text_style) in enumerate(meta):
        if i > 0:
            meta_line.append(" • ", style="dim")
        meta_line.append(text, style=text_style)
    console.print(meta_line)


def format_tasks_pretty(
    tasks: list[Task],
    now: date | datetime | None = None,
    title: str = "Tasks",
    compact: bool = False,
    date_format: str = DEFAULT_DATE_FORMAT,
) -> None:
    """Format a task view grouped by priority."""
    if now is None:
        now = datetime.now()

    open_tasks = [task for task in tasks if not task.completed]
    header = Text()
    header.append(f"📋 {title} ", style="bold cyan")
    header.append(f"({len(open_tasks)} open, {len(tasks)} total)", style="dim")
    console.print(header)
    console.print()

    if not tasks:
        console.print("[yellow]No tasks in this view[/yellow]")
        return

    for priority in Priority:
        group = [task for task in tasks if task.priority == priority]
        if not group:
            continue
        console.print(
            f"{PRIORITY_ICONS[priority]} {priority.value.upper()}",
            style=PRIORITY_COLORS[priority] or None,
        )
        for task in group:
            format_task_item(task, now, compact, indent="  ", date_format=date_format)
        console.print()


def format_search_results(results: list[SearchResult], query: str = "") -> None:
    """Format search results with highlighted matches."""
    header = Text()
    header.append("🔎 Search ", style="bold cyan")
    if query:
        header.append(f"'{query}' ", style="bold")
    header.append(f"({len(results)} results)", style="dim")
    console.print(header)
    console.print()

    if not results:
        console.print("[yellow]No matching tasks[/yellow]")
        return

    for result in results:
        name_match = result.match_for("name")
        line = Text("  ")
        line.append_text(
            highlight_text(result.task.name, name_match.indices if name_match else None)
        )
        line.append(f"  {result.score:.3f}", style="dim")
        console.print(line)

        description_match = result.match_for("description")
        if description_match is not None:
            detail = Text("     ", style="dim")
            detail.append_text(
                highlight_text(description_match.value, description_match.indices)
            )
            console.print(detail)
