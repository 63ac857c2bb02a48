"""Habit value objects.

Habits are immutable: every operation in ``nityam.services`` returns an
updated copy built with :func:`dataclasses.replace`, and persistence is a
separate step performed by the caller.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum, IntEnum
from typing import Iterable, Optional
from uuid import uuid4


class ScheduleError(ValueError):
    """Raised when a schedule is rejected at creation or edit time."""


class HabitType(str, Enum):
    """Build a habit (positive) or break one (negative). Display-only."""

    POSITIVE = "positive"
    NEGATIVE = "negative"


class Frequency(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    CUSTOM = "custom"


class CustomScheduleType(str, Enum):
    DAYS_OF_MONTH = "daysOfMonth"
    INTERVAL_DAYS = "intervalDays"


class Weekday(IntEnum):
    """Days of the week numbered Sunday=1 through Saturday=7."""

    SUNDAY = 1
    MONDAY = 2
    TUESDAY = 3
    WEDNESDAY = 4
    THURSDAY = 5
    FRIDAY = 6
    SATURDAY = 7

    @property
    def short_name(self) -> str:
        return self.name[:3].title()

    @classmethod
    def of(cls, day: date) -> "Weekday":
        """Return the weekday of a calendar day."""
        # date.weekday() is Monday=0..Sunday=6
        return cls((day.weekday() + 1) % 7 + 1)

    @classmethod
    def parse(cls, token: str) -> "Weekday":
        """Accept a number (1-7), a short name ("Mon") or a full name."""
        token = token.strip()
        if token.isdigit():
            try:
                return cls(int(token))
            except ValueError as exc:
                raise ScheduleError(f"Weekday number out of range: {token}") from exc
        for weekday in cls:
            if token.lower() in (weekday.name.lower(), weekday.short_name.lower()):
                return weekday
        raise ScheduleError(f"Unknown weekday: {token!r}")


ALL_WEEKDAYS: frozenset[Weekday] = frozenset(Weekday)


@dataclass(frozen=True, slots=True)
class CustomSchedule:
    """Advanced schedule used when a habit's frequency is custom."""

    schedule_type: CustomScheduleType
    days_of_month: frozenset[int] = frozenset()
    interval: Optional[int] = None  # days, anchored at 1970-01-01

    def __post_init__(self) -> None:
        object.__setattr__(self, "schedule_type", CustomScheduleType(self.schedule_type))
        object.__setattr__(self, "days_of_month", frozenset(int(d) for d in self.days_of_month))

    def validate(self) -> None:
        """Raise ScheduleError unless the schedule is self-consistent."""
        if self.schedule_type is CustomScheduleType.DAYS_OF_MONTH:
            if not self.days_of_month:
                raise ScheduleError("A days-of-month schedule needs at least one day.")
            invalid = sorted(d for d in self.days_of_month if not 1 <= d <= 31)
            if invalid:
                raise ScheduleError(f"Days of month must be between 1 and 31: {invalid}")
        else:
            if self.interval is None or self.interval <= 0:
                raise ScheduleError("An interval schedule needs a positive interval.")


def days_of_month_schedule(days: Iterable[int]) -> CustomSchedule:
    """Build and validate a schedule firing on the given days of each month."""
    schedule = CustomSchedule(CustomScheduleType.DAYS_OF_MONTH, days_of_month=frozenset(days))
    schedule.validate()
    return schedule


def interval_schedule(interval: int) -> CustomSchedule:
    """Build and validate a schedule firing every ``interval`` days."""
    schedule = CustomSchedule(CustomScheduleType.INTERVAL_DAYS, interval=interval)
    schedule.validate()
    return schedule


def _as_day(value: date) -> date:
    # datetime subclasses date; keep only the calendar component
    if isinstance(value, datetime):
        return value.date()
    return value


@dataclass(frozen=True, slots=True)
class Habit:
    """A habit, its schedule and its completion history."""

    name: str
    icon_name: str = "checkmark"
    habit_type: HabitType = HabitType.POSITIVE
    target_duration_seconds: float = 0.0
    frequency: Frequency = Frequency.DAILY
    task_days: frozenset[Weekday] = ALL_WEEKDAYS
    custom_schedule: Optional[CustomSchedule] = None
    completion_dates: frozenset[date] = frozenset()
    is_completed: bool = False
    last_completed_date: Optional[date] = None
    last_reset_date: Optional[date] = None
    current_streak: int = 0
    best_streak: int = 0
    created_on: Optional[date] = None
    id: str = field(default_factory=lambda: str(uuid4()))

    def __post_init__(self) -> None:
        object.__setattr__(self, "habit_type", HabitType(self.habit_type))
        object.__setattr__(self, "frequency", Frequency(self.frequency))
        object.__setattr__(self, "task_days", frozenset(Weekday(d) for d in self.task_days))
        object.__setattr__(
            self, "completion_dates", frozenset(_as_day(d) for d in self.completion_dates)
        )
        if self.last_completed_date is not None:
            object.__setattr__(self, "last_completed_date", _as_day(self.last_completed_date))
        if self.last_reset_date is not None:
            object.__setattr__(self, "last_reset_date", _as_day(self.last_reset_date))
        if self.target_duration_seconds < 0:
            raise ValueError("target_duration_seconds must be non-negative")
        if self.current_streak < 0 or self.best_streak < 0:
            raise ValueError("streaks must be non-negative")

    @property
    def is_positive(self) -> bool:
        return self.habit_type is HabitType.POSITIVE

    def is_completed_on(self, day: date) -> bool:
        return day in self.completion_dates
