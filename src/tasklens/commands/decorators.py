"""Decorators for command functions."""

import functools
import time
import traceback
from collections.abc import Callable

import typer

from tasklens.errors import TaskLensError
from tasklens.utils.logger import get_logger
from tasklens.utils.ui.formatters import format_error


def command_wrapper(func: Callable) -> Callable:
    """Log timing and turn errors into a printed message plus exit code."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logger = get_logger("commands")
        cmd = func.__name__
        start = time.monotonic()
        logger.info("command started: %s", cmd)
        try:
            result = func(*args, **kwargs)
            elapsed = time.monotonic() - start
            logger.info("command completed: %s (%.3fs)", cmd, elapsed)
            return result

        except TaskLensError as e:
            elapsed = time.monotonic() - start
            logger.error("command failed: %s (%.3fs) - %s", cmd, elapsed, str(e))
            format_error(str(e))
            raise typer.Exit(code=e.exit_code) from e

        except typer.Exit:
            # Typer's own exits (--help, explicit Exit(0))
            raise

        except Exception as e:
            elapsed = time.monotonic() - start
            logger.error(
                "command failed: %s (%.3fs) - %s\n%s",
                cmd,
                elapsed,
                str(e),
                traceback.format_exc(),
            )
            format_error(f"An unexpected error occurred: {str(e)}")
            raise typer.Exit(code=1) from e

    return wrapper
