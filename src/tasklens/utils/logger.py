"""Application-wide logger writing to platformdirs user_log_dir.

Modules ask for a child logger (``get_logger("recurrence")`` logs as
``tasklens.recurrence``); all children share the one rotating file handler
attached to the ``tasklens`` root logger.
"""

from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path

from platformdirs import user_log_dir

_APP_NAME = "tasklens"
_LOG_FILE = "tasklens.log"
_MAX_BYTES = 5 * 1024 * 1024  # 5 MB
_BACKUP_COUNT = 3

_root: logging.Logger | None = None


def _file_handler(log_dir: Path) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        log_dir / _LOG_FILE,
        maxBytes=_MAX_BYTES,
        backupCount=_BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
    )
    return handler


def _root_logger() -> logging.Logger:
    global _root
    if _root is not None:
        return _root

    log_dir = Path(user_log_dir(_APP_NAME))
    log_dir.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(_APP_NAME)
    logger.setLevel(logging.DEBUG)
    if not logger.handlers:
        logger.addHandler(_file_handler(log_dir))
    logger.propagate = False

    _root = logger
    return _root


def get_logger(name: str | None = None) -> logging.Logger:
    """Return the application logger, or one of its children.

    The file handler is installed lazily on the first call.
    """
    root = _root_logger()
    if not name:
        return root
    return root.getChild(name)
