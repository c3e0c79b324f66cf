"""tasklens: view filters, fuzzy search and recurrence for personal task lists."""

__version__ = "0.1.0"
