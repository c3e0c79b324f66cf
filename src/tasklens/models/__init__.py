"""tasklens domain models.

Pydantic models for the task snapshot consumed by the view filters, the
search results they produce, and the recurrence descriptors.
"""

from .search import FieldMatch, HighlightSegment, SearchResult
from .task import PatternKind, Priority, RecurringPattern, Task

__all__ = [
    # Task models
    "Task",
    "Priority",
    # Recurrence models
    "PatternKind",
    "RecurringPattern",
    # Search models
    "FieldMatch",
    "SearchResult",
    "HighlightSegment",
]
