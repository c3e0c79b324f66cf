"""Date-bucket view filters.

Every filter takes the full task snapshot plus an explicit ``now`` and
returns a fresh list in snapshot order. Subtasks never appear in a top-level
bucket. Dates are compared by calendar day; time of day is ignored.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from datetime import date, datetime, timedelta

from tasklens.models import Task

DEFAULT_UPCOMING_DAYS = 7


def calendar_day(value: date | datetime) -> date:
    """Strip the time of day. Aware datetimes are read in local time."""
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone()
        return value.date()
    return value


def _top_level(tasks: Iterable[Task]) -> list[Task]:
    return [task for task in tasks if task.parent_task_id is None]


def get_all_tasks(tasks: Iterable[Task]) -> list[Task]:
    """Every task that is not a subtask."""
    return _top_level(tasks)


def get_today_tasks(tasks: Iterable[Task], now: date | datetime) -> list[Task]:
    """Tasks scheduled for today, completed or not."""
    today = calendar_day(now)
    return [
        task
        for task in _top_level(tasks)
        if task.date is not None and calendar_day(task.date) == today
    ]


def get_upcoming_tasks(tasks: Iterable[Task], now: date | datetime) -> list[Task]:
    """Tasks scheduled for today or any later day."""
    today = calendar_day(now)
    return [
        task
        for task in _top_level(tasks)
        if task.date is not None and calendar_day(task.date) >= today
    ]


def get_next_n_days_tasks(
    tasks: Iterable[Task], now: date | datetime, days: int
) -> list[Task]:
    """Tasks scheduled in the closed window ``[today, today + days]``."""
    today = calendar_day(now)
    last = today + timedelta(days=days)
    return [
        task
        for task in _top_level(tasks)
        if task.date is not None and today <= calendar_day(task.date) <= last
    ]


def get_next_7_days_tasks(tasks: Iterable[Task], now: date | datetime) -> list[Task]:
    """Tasks scheduled from today through seven days out, inclusive."""
    return get_next_n_days_tasks(tasks, now, DEFAULT_UPCOMING_DAYS)


def is_task_overdue(task: Task, now: date | datetime) -> bool:
    """
    Check whether a task is overdue.

    A task is overdue when it has a deadline, is not completed, and the
    deadline's day is before today. The scheduled date plays no part.
    """
    if task.deadline is None or task.completed:
        return False
    return calendar_day(task.deadline) < calendar_day(now)


def get_overdue_tasks(tasks: Iterable[Task], now: date | datetime) -> list[Task]:
    """Incomplete top-level tasks whose deadline day has passed."""
    return [task for task in _top_level(tasks) if is_task_overdue(task, now)]


def get_overdue_count(tasks: Iterable[Task], now: date | datetime) -> int:
    """Number of overdue top-level tasks, for badge counters."""
    return len(get_overdue_tasks(tasks, now))


def get_tasks_by_list(tasks: Iterable[Task], list_id: str) -> list[Task]:
    """Top-level tasks in a list, regardless of date or completion."""
    return [task for task in _top_level(tasks) if task.list_id == list_id]


def get_subtasks(tasks: Iterable[Task], parent_id: str) -> list[Task]:
    """Children of *parent_id* in ascending position order."""
    children = [task for task in tasks if task.parent_task_id == parent_id]
    return sorted(children, key=lambda task: task.position)


VIEW_FILTERS: dict[str, Callable[[Iterable[Task], date | datetime], list[Task]]] = {
    "today": get_today_tasks,
    "upcoming": get_upcoming_tasks,
    "next7days": get_next_7_days_tasks,
    "overdue": get_overdue_tasks,
    "all": lambda tasks, _now: get_all_tasks(tasks),
}

VIEW_NAMES = list(VIEW_FILTERS.keys())


def get_view(name: str, tasks: Iterable[Task], now: date | datetime) -> list[Task]:
    """Compute a named view bucket. Unknown names give an empty list."""
    view = VIEW_FILTERS.get(name.lower())
    if view is None:
        return []
    return view(list(tasks), now)
