"""Helpers shared by the task commands."""

from datetime import datetime
from pathlib import Path
from typing import Optional

from tasklens.config import get_config_manager
from tasklens.models import Task
from tasklens.services.task_store import load_tasks

FILE_HELP = "Task snapshot (JSON). Defaults to data.tasks_file from config"
NOW_HELP = "Reference date for the view (YYYY-MM-DD). Defaults to now"
OUTPUT_HELP = "Output format: pretty or json. Defaults to output.format from config"


def load_snapshot(file: Optional[Path]) -> list[Task]:
    """Load the task snapshot named on the command line, or the configured one."""
    if file is None:
        file = Path(get_config_manager().config.data.tasks_file)
    return load_tasks(file)


def resolve_now(now: Optional[datetime]) -> datetime:
    """The explicit reference time, or the wall clock."""
    return now if now is not None else datetime.now()


def resolve_output(output: Optional[str], json_opt: bool = False) -> str:
    """Pick the output format from flags, falling back to config."""
    if json_opt:
        return "json"
    if output:
        return output
    return get_config_manager().config.output.format
