"""Habit scheduling and streak engine."""

from .habits import (
    RolloverReport,
    check_and_reset_for_new_day,
    edit_habit,
    rollover_all,
    toggle_completion,
)
from .schedule import is_task_day, next_task_day_on_or_after, task_days_between, validate_schedule
from .streaks import current_streak, longest_streak, rebuild_best_streak, recompute_streaks

__all__ = [
    "RolloverReport",
    "check_and_reset_for_new_day",
    "current_streak",
    "edit_habit",
    "is_task_day",
    "longest_streak",
    "next_task_day_on_or_after",
    "rebuild_best_streak",
    "recompute_streaks",
    "rollover_all",
    "task_days_between",
    "toggle_completion",
    "validate_schedule",
]
