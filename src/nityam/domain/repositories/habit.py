"""Habit repository protocol."""

from __future__ import annotations

from typing import Optional, Protocol

from ..habit import Habit


class HabitRepository(Protocol):
    """Storage collaborator for habits."""

    def load_all_habits(self) -> list[Habit]:
        """Return every stored habit."""
        ...

    def get(self, habit_id: str) -> Optional[Habit]:
        """Retrieve a habit by ID."""
        ...

    def save(self, habit: Habit) -> bool:
        """Insert or replace a habit. Returns False if the write failed."""
        ...

    def delete(self, habit_id: str) -> bool:
        """Delete a habit and its history. Returns False if it did not exist."""
        ...
