"""Projection of date-ranged tasks onto days and month grids."""

from __future__ import annotations

import calendar
from datetime import date
from datetime import datetime
from typing import TYPE_CHECKING

from django.utils import timezone

if TYPE_CHECKING:
    from collections.abc import Iterable

    from workdesk.calendars.models import CalendarTask


def strip_time(value: date | datetime) -> date:
    if isinstance(value, datetime):
        if timezone.is_aware(value):
            value = timezone.localtime(value)
        return value.date()
    return value


def is_active_on(task: CalendarTask, day: date | datetime) -> bool:
    """Inclusive on both ends."""
    day = strip_time(day)
    return strip_time(task.start_date) <= day <= strip_time(task.end_date)


def tasks_active_on(tasks: Iterable[CalendarTask], day: date | datetime) -> list[CalendarTask]:
    return [task for task in tasks if is_active_on(task, day)]


def _weeks(year: int, month: int) -> list[list[date]]:
    return calendar.Calendar(firstweekday=calendar.MONDAY).monthdatescalendar(year, month)


def grid_bounds(year: int, month: int) -> tuple[date, date]:
    """First and last day shown on the month grid."""
    weeks = _weeks(year, month)
    return weeks[0][0], weeks[-1][-1]


def month_grid(year: int, month: int, tasks: Iterable[CalendarTask]) -> list[list[dict]]:
    """Monday-first weeks covering the month, padded with neighbouring days.

    Each cell is ``{"date", "in_month", "tasks"}``.
    """
    tasks = list(tasks)
    weeks = _weeks(year, month)
    return [
        [
            {
                "date": day,
                "in_month": day.month == month,
                "tasks": tasks_active_on(tasks, day),
            }
            for day in week
        ]
        for week in weeks
    ]
