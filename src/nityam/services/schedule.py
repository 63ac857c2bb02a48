"""Task-day evaluation for habit schedules."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Optional

from ..domain.habit import CustomScheduleType, Frequency, Habit, ScheduleError, Weekday
from .clock import ONE_DAY, days_since_epoch

DEFAULT_LOOKAHEAD_DAYS = 366


def is_task_day(habit: Habit, day: date) -> bool:
    """Return True when ``habit`` is scheduled on ``day``.

    Works for any date, past or future. A custom habit without a usable
    schedule is never scheduled.
    """
    if habit.frequency is Frequency.DAILY:
        return True

    if habit.frequency is Frequency.WEEKLY:
        return Weekday.of(day) in habit.task_days

    schedule = habit.custom_schedule
    if schedule is None:
        return False
    if schedule.schedule_type is CustomScheduleType.DAYS_OF_MONTH:
        return day.day in schedule.days_of_month
    if not schedule.interval or schedule.interval <= 0:
        return False
    return days_since_epoch(day) % schedule.interval == 0


def next_task_day_on_or_after(
    habit: Habit, day: date, max_lookahead_days: int = DEFAULT_LOOKAHEAD_DAYS
) -> Optional[date]:
    """Return the first task day in ``[day, day + max_lookahead_days]``, if any."""
    for offset in range(max_lookahead_days + 1):
        candidate = day + timedelta(days=offset)
        if is_task_day(habit, candidate):
            return candidate
    return None


def task_days_between(habit: Habit, start: date, end: date) -> list[date]:
    """List task days from ``start`` to ``end`` inclusive, oldest first."""
    days: list[date] = []
    cursor = start
    while cursor <= end:
        if is_task_day(habit, cursor):
            days.append(cursor)
        cursor += ONE_DAY
    return days


def validate_schedule(habit: Habit) -> None:
    """Reject schedule configurations the evaluator would silently treat as empty."""

    if habit.frequency is Frequency.WEEKLY and not habit.task_days:
        raise ScheduleError("A weekly habit needs at least one task day.")

    if habit.frequency is Frequency.CUSTOM:
        if habit.custom_schedule is None:
            raise ScheduleError("A custom habit needs a custom schedule.")
        habit.custom_schedule.validate()
    elif habit.custom_schedule is not None:
        raise ScheduleError("Only custom habits may carry a custom schedule.")
