"""Error types raised by the tasklens command surface."""

from tasklens.utils.exit_codes import ERROR_GENERAL


class TaskLensError(Exception):
    """Application error carrying the exit code the CLI should use."""

    def __init__(self, message: str, exit_code: int = ERROR_GENERAL):
        super().__init__(message)
        self.exit_code = exit_code
