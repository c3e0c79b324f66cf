"""Console utilities for tasklens."""

from functools import lru_cache

from rich.console import Console


@lru_cache(maxsize=2)
def get_console(highlight: bool = False) -> Console:
    """Get the shared Rich Console.

    Automatic highlighting is off by default so numbers and dates inside
    task names are printed as written.
    """
    return Console(highlight=highlight)
