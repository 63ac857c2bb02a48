"""Habit storage tables."""

from __future__ import annotations

from datetime import date
from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel


class HabitRecord(SQLModel, table=True):
    """Stored form of a habit's scalar fields."""

    __tablename__: ClassVar[str] = "habit"

    id: str = Field(primary_key=True, max_length=36)
    name: str = Field(nullable=False, max_length=80, index=True)
    icon_name: str = Field(default="checkmark", max_length=64)
    habit_type: str = Field(default="positive", max_length=16)
    target_duration_seconds: float = Field(default=0.0, nullable=False)
    frequency: str = Field(default="daily", max_length=16)
    # Comma-separated weekday numbers, Sunday=1
    task_days: str = Field(default="1,2,3,4,5,6,7", max_length=32)
    custom_schedule_type: Optional[str] = Field(default=None, max_length=16)
    custom_days_of_month: str = Field(default="", max_length=128)
    custom_interval: Optional[int] = Field(default=None)
    is_completed: bool = Field(default=False, nullable=False)
    last_completed_date: Optional[date] = Field(default=None)
    last_reset_date: Optional[date] = Field(default=None)
    current_streak: int = Field(default=0, nullable=False)
    best_streak: int = Field(default=0, nullable=False)
    created_on: Optional[date] = Field(default=None)


class HabitCompletion(SQLModel, table=True):
    """One completed calendar day of a habit."""

    __tablename__: ClassVar[str] = "habit_completion"

    habit_id: str = Field(foreign_key="habit.id", primary_key=True, max_length=36)
    occurred_on: date = Field(primary_key=True, index=True)
