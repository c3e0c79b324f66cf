"""Shared test fixtures and configuration.

Provides infrastructure to isolate tests from real filesystem state and a
small task factory.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from unittest.mock import patch

import pytest

from tasklens.models import Task

_CREATED = datetime(2024, 1, 1, 9, 0, 0)


# ---------------------------------------------------------------------------
# Filesystem isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolated_dirs(tmp_path):
    """Point config, data and log directories at *tmp_path*.

    Also resets the config manager and logger singletons so every test
    starts fresh.
    """
    import tasklens.config as config_mod
    import tasklens.utils.logger as logger_mod

    config_dir = str(tmp_path / "config")
    data_dir = str(tmp_path / "data")
    log_dir = str(tmp_path / "logs")

    config_mod._config_manager = None
    logger_mod._root = None
    logging.getLogger("tasklens").handlers.clear()

    with patch("tasklens.config.user_config_dir", return_value=config_dir), patch(
        "tasklens.config.user_data_dir", return_value=data_dir
    ), patch("tasklens.utils.logger.user_log_dir", return_value=log_dir):
        yield tmp_path

    config_mod._config_manager = None
    logger_mod._root = None
    for handler in logging.getLogger("tasklens").handlers:
        handler.close()
    logging.getLogger("tasklens").handlers.clear()


# ---------------------------------------------------------------------------
# Task helpers
# ---------------------------------------------------------------------------


def make_task(task_id: str = "task-1", name: str = "Sample task", **fields) -> Task:
    """Build a task with sensible defaults; *fields* override any attribute."""
    fields.setdefault("list_id", "inbox")
    fields.setdefault("created_at", _CREATED)
    fields.setdefault("updated_at", _CREATED)
    return Task(id=task_id, name=name, **fields)


@pytest.fixture()
def task_factory():
    """Expose :func:`make_task` to tests."""
    return make_task


@pytest.fixture()
def snapshot_file(tmp_path):
    """Write task rows to a JSON file and return its path."""

    def _write(rows, name: str = "tasks.json"):
        path = tmp_path / name
        path.write_text(json.dumps(rows, default=str), encoding="utf-8")
        return path

    return _write
