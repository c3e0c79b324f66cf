"""Task and recurring pattern data models."""

from datetime import date, datetime, time
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


def _coerce_day(value: Any) -> Any:
    """Promote plain dates and ``YYYY-MM-DD`` strings to local midnight."""
    if isinstance(value, date) and not isinstance(value, datetime):
        return datetime.combine(value, time.min)
    if isinstance(value, str) and len(value) == 10:
        try:
            return datetime.combine(date.fromisoformat(value), time.min)
        except ValueError:
            return value
    return value


class Priority(StrEnum):
    """Task priority level."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    NONE = "none"


class PatternKind(StrEnum):
    """Kind of schedule a recurring task follows."""

    DAILY = "daily"
    WEEKLY = "weekly"
    WEEKDAY = "weekday"
    MONTHLY = "monthly"
    YEARLY = "yearly"
    CUSTOM = "custom"


class Task(BaseModel):
    """Task model as read from a task snapshot.

    Rows may use either snake_case or the camelCase keys the web client
    stores (``listId``, ``parentTaskId``, ...).

    Attributes:
        id: Unique identifier for the task
        name: Task title
        description: Optional detailed description
        list_id: Owning list identifier
        date: Optional scheduled date
        deadline: Optional hard deadline
        estimated_time: Estimated duration in minutes
        actual_time: Actual duration in minutes
        priority: Priority level
        completed: Completion status
        completed_at: Completion timestamp
        parent_task_id: Parent task ID when this task is a subtask
        position: Ordering position among siblings
        created_at: Creation timestamp
        updated_at: Last update timestamp
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: str
    name: str
    description: str | None = None
    list_id: str
    date: datetime | None = None
    deadline: datetime | None = None
    estimated_time: int | None = Field(default=None, ge=0)
    actual_time: int | None = Field(default=None, ge=0)
    priority: Priority = Priority.NONE
    completed: bool = False
    completed_at: datetime | None = None
    parent_task_id: str | None = None
    position: int = 0
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @field_validator("date", "deadline", mode="before")
    @classmethod
    def _date_only_to_midnight(cls, value: Any) -> Any:
        return _coerce_day(value)

    @property
    def is_subtask(self) -> bool:
        """Whether the task hangs off another task."""
        return self.parent_task_id is not None


class RecurringPattern(BaseModel):
    """Recurrence descriptor attached to a task.

    Attributes:
        pattern: Kind of schedule
        custom_pattern: Free-text rule, required for ``custom`` patterns
        end_date: Optional last day an occurrence may land on
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    pattern: PatternKind
    custom_pattern: str | None = None
    end_date: datetime | None = None

    @field_validator("end_date", mode="before")
    @classmethod
    def _date_only_to_midnight(cls, value: Any) -> Any:
        return _coerce_day(value)

    @model_validator(mode="after")
    def _custom_needs_rule(self) -> "RecurringPattern":
        if self.pattern == PatternKind.CUSTOM and not (self.custom_pattern or "").strip():
            raise ValueError("custom_pattern is required for custom recurring patterns")
        return self
