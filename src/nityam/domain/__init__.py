"""Domain value types and repository protocols."""

from .habit import (
    ALL_WEEKDAYS,
    CustomSchedule,
    CustomScheduleType,
    Frequency,
    Habit,
    HabitType,
    ScheduleError,
    Weekday,
    days_of_month_schedule,
    interval_schedule,
)

__all__ = [
    "ALL_WEEKDAYS",
    "CustomSchedule",
    "CustomScheduleType",
    "Frequency",
    "Habit",
    "HabitType",
    "ScheduleError",
    "Weekday",
    "days_of_month_schedule",
    "interval_schedule",
]
