"""Recurrence utility functions for tasklens."""

from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta

from tasklens.config import DEFAULT_DATE_FORMAT
from tasklens.models import PatternKind, RecurringPattern
from tasklens.utils.logger import get_logger
from tasklens.utils.views import calendar_day

PATTERN_DESCRIPTIONS: dict[str, str] = {
    PatternKind.DAILY: "Every day",
    PatternKind.WEEKLY: "Every week",
    PatternKind.WEEKDAY: "Every weekday",
    PatternKind.MONTHLY: "Every month",
    PatternKind.YEARLY: "Every year",
}

VALID_PATTERNS = [kind.value for kind in PatternKind]

_SATURDAY = 5
_SUNDAY = 6


def add_months(day: date, months: int) -> date:
    """Shift *day* by whole months, clamping to the target month's last day.

    Jan 31 plus one month is Feb 29 in a leap year and Feb 28 otherwise.
    """
    month_index = day.month - 1 + months
    year = day.year + month_index // 12
    month = month_index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


def calculate_next_occurrence(
    current_date: date | datetime,
    pattern: PatternKind | str,
    custom_pattern: str | None = None,
) -> date | None:
    """Calculate the next occurrence of a recurring task.

    Args:
        current_date: Day of the current occurrence, read in local time
        pattern: Recurrence kind (e.g., "daily", "weekday")
        custom_pattern: Free-text rule of a custom pattern, kept for display

    Returns:
        Day of the next occurrence, or None for custom and unknown patterns
    """
    base = calendar_day(current_date)

    if pattern == PatternKind.DAILY:
        return base + timedelta(days=1)

    if pattern == PatternKind.WEEKLY:
        return base + timedelta(weeks=1)

    if pattern == PatternKind.WEEKDAY:
        next_day = base + timedelta(days=1)
        if next_day.weekday() == _SATURDAY:
            next_day += timedelta(days=2)
        elif next_day.weekday() == _SUNDAY:
            next_day += timedelta(days=1)
        return next_day

    if pattern == PatternKind.MONTHLY:
        return add_months(base, 1)

    if pattern == PatternKind.YEARLY:
        return add_months(base, 12)

    if pattern == PatternKind.CUSTOM:
        get_logger("recurrence").warning(
            "custom recurring pattern %r needs external interpretation; "
            "no next occurrence computed",
            custom_pattern,
        )
        return None

    get_logger("recurrence").warning(
        "unknown recurring pattern %r; no next occurrence computed", pattern
    )
    return None


def should_generate_next_instance(
    current_date: date | datetime,
    pattern: PatternKind | str,
    end_date: date | datetime | None = None,
) -> bool:
    """Decide whether completing this occurrence should create the next one.

    Custom patterns never generate. Otherwise the next occurrence is
    generated when there is no end date, or when it lands on or before it.
    """
    if not pattern or pattern == PatternKind.CUSTOM:
        return False

    next_date = calculate_next_occurrence(current_date, pattern)
    if next_date is None:
        return False

    if end_date is not None:
        return next_date <= calendar_day(end_date)

    return True


def next_occurrence_for(
    recurring: RecurringPattern, current_date: date | datetime
) -> date | None:
    """Next occurrence of *recurring*, or None once the series has ended."""
    if not should_generate_next_instance(
        current_date, recurring.pattern, recurring.end_date
    ):
        return None
    return calculate_next_occurrence(
        current_date, recurring.pattern, recurring.custom_pattern
    )


def format_day(value: date | datetime, date_format: str = DEFAULT_DATE_FORMAT) -> str:
    """Render a day with ``{month}``, ``{day}`` and ``{year}`` placeholders."""
    day = calendar_day(value)
    return date_format.format(month=day.month, day=day.day, year=day.year)


def describe_pattern(
    pattern: PatternKind | str,
    custom_pattern: str | None = None,
    end_date: date | datetime | None = None,
    date_format: str = DEFAULT_DATE_FORMAT,
) -> str:
    """Convert a recurring pattern to a human-readable description.

    Args:
        pattern: Recurrence kind
        custom_pattern: Free-text rule, echoed verbatim for custom patterns
        end_date: Optional end of the series
        date_format: Format of the end date

    Returns:
        Description such as "Every day until 12/31/2024"
    """
    if pattern == PatternKind.CUSTOM:
        description = custom_pattern or "Custom pattern"
    else:
        description = PATTERN_DESCRIPTIONS.get(pattern)
        if description is None:
            return "No recurrence"

    if end_date is not None:
        description += f" until {format_day(end_date, date_format)}"

    return description
