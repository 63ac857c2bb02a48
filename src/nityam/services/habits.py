"""Habit state transitions: completion toggling, day rollover and edits."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date
from typing import Any

from ..domain.habit import Habit
from ..domain.repositories import HabitRepository
from ..logging_config import get_logger
from .schedule import is_task_day, validate_schedule
from .streaks import recompute_streaks

logger = get_logger(__name__)

_EDITABLE_FIELDS = {
    "name",
    "icon_name",
    "habit_type",
    "target_duration_seconds",
    "frequency",
    "task_days",
    "custom_schedule",
}


def _latest(dates: frozenset[date]) -> date | None:
    return max(dates) if dates else None


def check_and_reset_for_new_day(habit: Habit, today: date) -> Habit:
    """Process a day boundary if one was crossed since the last reset.

    The first call only records ``today``. Later calls on the same day return
    the habit unchanged.
    """
    if habit.last_reset_date is None:
        return replace(habit, last_reset_date=today)
    if habit.last_reset_date == today:
        return habit

    logger.debug("Day rollover for habit %s (%s -> %s)", habit.id, habit.last_reset_date, today)
    rolled = replace(
        habit,
        is_completed=today in habit.completion_dates and is_task_day(habit, today),
        last_reset_date=today,
    )
    return recompute_streaks(rolled, today)


def toggle_completion(habit: Habit, today: date) -> Habit:
    """Mark today done, or undo it.

    Returns ``habit`` itself when today is not a task day.
    """
    if not is_task_day(habit, today):
        logger.debug("Ignoring toggle for habit %s on non-task day %s", habit.id, today)
        return habit

    habit = check_and_reset_for_new_day(habit, today)
    completed = not habit.is_completed
    if completed:
        dates = habit.completion_dates | {today}
    else:
        dates = habit.completion_dates - {today}

    toggled = replace(
        habit,
        is_completed=completed,
        completion_dates=dates,
        last_completed_date=_latest(dates),
    )
    return recompute_streaks(toggled, today)


def edit_habit(habit: Habit, today: date, **changes: Any) -> Habit:
    """Apply user edits, validate the schedule and refresh streaks.

    Schedule changes take effect for every date immediately; the best streak
    is kept.
    """
    unknown = set(changes) - _EDITABLE_FIELDS
    if unknown:
        raise ValueError(f"Cannot edit fields: {sorted(unknown)}")

    edited = replace(habit, **changes)
    validate_schedule(edited)
    edited = replace(
        edited,
        is_completed=today in edited.completion_dates and is_task_day(edited, today),
    )
    return recompute_streaks(edited, today)


@dataclass
class RolloverReport:
    """Outcome of a rollover pass over every stored habit."""

    checked: int = 0
    updated: int = 0
    failed: list[str] = field(default_factory=list)


def rollover_all(repository: HabitRepository, today: date) -> RolloverReport:
    """Run the day-rollover check on every habit and persist the changes.

    Habits are processed independently; a failed save is recorded and the
    pass continues.
    """
    report = RolloverReport()
    for habit in repository.load_all_habits():
        report.checked += 1
        rolled = check_and_reset_for_new_day(habit, today)
        if rolled == habit:
            continue
        if repository.save(rolled):
            report.updated += 1
        else:
            report.failed.append(habit.id)

    logger.info(
        "Rollover for %s: %d checked, %d updated, %d failed",
        today,
        report.checked,
        report.updated,
        len(report.failed),
    )
    return report
