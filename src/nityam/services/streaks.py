"""Streak calculations for scheduled habits.

Streaks count consecutive *task days*, not calendar days. Days the schedule
does not call for are skipped without breaking a streak, and completions
recorded on such days are ignored.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import date

from ..domain.habit import Habit
from .clock import ONE_DAY
from .schedule import is_task_day


def current_streak(habit: Habit, today: date) -> int:
    """Return the current streak as of ``today``.

    Today is still pending until it is completed: an unfinished task day
    today neither counts nor breaks the streak. Any earlier missed task
    day ends it.
    """
    completions = {day for day in habit.completion_dates if day <= today}
    if not completions:
        return 0

    cursor = today
    if not (is_task_day(habit, today) and today in completions):
        cursor = today - ONE_DAY

    # No task day before the earliest completion can have been completed.
    earliest = min(completions)
    streak = 0
    while cursor >= earliest:
        if is_task_day(habit, cursor):
            if cursor not in completions:
                break
            streak += 1
        cursor -= ONE_DAY
    return streak


def longest_streak(habit: Habit, today: date) -> int:
    """Return the longest run of completed task days up to ``today``."""
    completions = {day for day in habit.completion_dates if day <= today}
    if not completions:
        return 0

    longest = 0
    run = 0
    cursor = min(completions)
    while cursor <= today:
        if is_task_day(habit, cursor):
            if cursor in completions:
                run += 1
                longest = max(longest, run)
            else:
                run = 0
        cursor += ONE_DAY
    return longest


def recompute_streaks(habit: Habit, today: date) -> Habit:
    """Refresh ``current_streak`` and raise ``best_streak`` if it was beaten.

    ``best_streak`` never decreases, even when history is edited downward.
    """
    streak = current_streak(habit, today)
    return replace(habit, current_streak=streak, best_streak=max(habit.best_streak, streak))


def rebuild_best_streak(habit: Habit, today: date) -> Habit:
    """Seed ``best_streak`` from the full history, e.g. after an import."""
    habit = recompute_streaks(habit, today)
    return replace(habit, best_streak=max(habit.best_streak, longest_streak(habit, today)))
