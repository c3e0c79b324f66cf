"""Read-only task snapshot loading.

A snapshot is a JSON array of task rows, or an object with the rows under
``"tasks"`` (the shape the web client exports). Rows may use snake_case or
camelCase keys.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter, ValidationError

from tasklens.errors import TaskLensError
from tasklens.models import RecurringPattern, Task
from tasklens.utils.exit_codes import ERROR_INVALID_ARGS, ERROR_NOT_FOUND
from tasklens.utils.logger import get_logger

_TASK_LIST = TypeAdapter(list[Task])


def parse_tasks(payload: Any) -> list[Task]:
    """Validate decoded JSON into task models.

    Raises:
        TaskLensError: If the payload is not a list of valid task rows
    """
    if isinstance(payload, dict):
        payload = payload.get("tasks", payload.get("items"))
    if not isinstance(payload, list):
        raise TaskLensError(
            "Task snapshot must be a JSON array or an object with a 'tasks' array",
            exit_code=ERROR_INVALID_ARGS,
        )
    try:
        return _TASK_LIST.validate_python(payload)
    except ValidationError as e:
        raise TaskLensError(
            f"Invalid task snapshot: {e.error_count()} validation error(s)\n{e}",
            exit_code=ERROR_INVALID_ARGS,
        ) from e


def load_tasks(path: str | Path) -> list[Task]:
    """Load and validate a task snapshot file.

    Raises:
        TaskLensError: If the file is missing, is not JSON, or holds invalid rows
    """
    path = Path(path).expanduser()
    if not path.is_file():
        raise TaskLensError(f"Task snapshot not found: {path}", exit_code=ERROR_NOT_FOUND)

    try:
        with open(path, encoding="utf-8") as f:
            payload = json.load(f)
    except json.JSONDecodeError as e:
        raise TaskLensError(
            f"Task snapshot is not valid JSON: {path} ({e.msg} at line {e.lineno})",
            exit_code=ERROR_INVALID_ARGS,
        ) from e
    except UnicodeDecodeError as e:
        raise TaskLensError(
            f"Task snapshot is not UTF-8 text: {path} (byte {e.start})",
            exit_code=ERROR_INVALID_ARGS,
        ) from e

    tasks = parse_tasks(payload)
    get_logger("task_store").debug("loaded %d task(s) from %s", len(tasks), path)
    return tasks


def load_pattern(raw: dict[str, Any]) -> RecurringPattern:
    """Validate a recurring pattern row.

    Raises:
        TaskLensError: If the row is not a valid pattern
    """
    try:
        return RecurringPattern.model_validate(raw)
    except ValidationError as e:
        raise TaskLensError(
            f"Invalid recurring pattern: {e}", exit_code=ERROR_INVALID_ARGS
        ) from e
