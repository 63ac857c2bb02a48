"""Read-only statistics over habits, for summary and history displays."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable

from ..domain.habit import Habit, Weekday
from .schedule import is_task_day, task_days_between
from .streaks import longest_streak

DEFAULT_WINDOW_DAYS = 30


@dataclass(frozen=True, slots=True)
class DayStatus:
    day: date
    scheduled: bool
    completed: bool


@dataclass(frozen=True, slots=True)
class WeekdayStat:
    weekday: Weekday
    scheduled: int
    completed: int

    @property
    def percentage(self) -> float:
        return self.completed / self.scheduled * 100 if self.scheduled else 0.0


@dataclass(frozen=True, slots=True)
class HabitSummary:
    habit_id: str
    name: str
    current_streak: int
    best_streak: int
    longest_streak: int
    total_completions: int
    completion_rate: float


@dataclass(frozen=True, slots=True)
class Overview:
    total_habits: int
    completed_today: int
    best_streak: int

    @property
    def completion_rate(self) -> float:
        return self.completed_today / self.total_habits if self.total_habits else 0.0


def _window_start(today: date, days: int) -> date:
    if days <= 0:
        raise ValueError("days must be positive")
    return today - timedelta(days=days - 1)


def completion_history(habit: Habit, today: date, days: int = DEFAULT_WINDOW_DAYS) -> list[DayStatus]:
    """Per-day status for the ``days`` days ending today, oldest first."""
    start = _window_start(today, days)
    return [
        DayStatus(
            day=day,
            scheduled=is_task_day(habit, day),
            completed=day in habit.completion_dates,
        )
        for day in (start + timedelta(days=offset) for offset in range(days))
    ]


def completion_rate(habit: Habit, today: date, days: int = DEFAULT_WINDOW_DAYS) -> float:
    """Fraction of task days in the window that were completed (0.0-1.0)."""
    scheduled = task_days_between(habit, _window_start(today, days), today)
    if not scheduled:
        return 0.0
    done = sum(1 for day in scheduled if day in habit.completion_dates)
    return done / len(scheduled)


def weekday_pattern(habit: Habit, today: date, days: int = DEFAULT_WINDOW_DAYS) -> list[WeekdayStat]:
    """Scheduled and completed counts per weekday over the window, Sunday first."""
    counts = {weekday: [0, 0] for weekday in Weekday}
    for day in task_days_between(habit, _window_start(today, days), today):
        bucket = counts[Weekday.of(day)]
        bucket[0] += 1
        if day in habit.completion_dates:
            bucket[1] += 1
    return [WeekdayStat(weekday, scheduled, completed) for weekday, (scheduled, completed) in counts.items()]


def summarize(habit: Habit, today: date, days: int = DEFAULT_WINDOW_DAYS) -> HabitSummary:
    return HabitSummary(
        habit_id=habit.id,
        name=habit.name,
        current_streak=habit.current_streak,
        best_streak=habit.best_streak,
        longest_streak=longest_streak(habit, today),
        total_completions=len(habit.completion_dates),
        completion_rate=completion_rate(habit, today, days),
    )


def overview(habits: Iterable[Habit]) -> Overview:
    """Aggregate counts across all habits for today's summary."""
    habits = list(habits)
    return Overview(
        total_habits=len(habits),
        completed_today=sum(1 for habit in habits if habit.is_completed),
        best_streak=max((habit.best_streak for habit in habits), default=0),
    )
