"""Calendar week projection."""

import datetime as dt
from collections import defaultdict

from task_calendar.api.models import Task
from task_calendar.calendar.day_cell import DayCell
from task_calendar.controller.task_list import TaskListController


def week_dates(anchor: dt.date, week_start: int = 0) -> list[dt.date]:
    """Seven consecutive dates of the week containing anchor.

    Args:
        anchor: Any day of the week
        week_start: First weekday of the week (0 = Monday, 6 = Sunday)
    """
    offset = (anchor.weekday() - week_start) % 7
    first = anchor - dt.timedelta(days=offset)
    return [first + dt.timedelta(days=i) for i in range(7)]


def build_week(
    controller: TaskListController,
    anchor: dt.date,
    today: dt.date | None = None,
    week_start: int = 0,
) -> list[DayCell]:
    """One day cell per date of the week containing anchor."""
    return [
        DayCell(day, controller, index=i, today=today)
        for i, day in enumerate(week_dates(anchor, week_start))
    ]


def group_by_day(tasks: list[Task]) -> dict[dt.date, list[Task]]:
    """Group tasks by calendar day, keeping collection order within a day."""
    groups: dict[dt.date, list[Task]] = defaultdict(list)
    for task in tasks:
        groups[task.date].append(task)
    return dict(groups)
