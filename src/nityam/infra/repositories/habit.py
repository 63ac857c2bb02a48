"""SQLModel implementation of Habit repository."""

from __future__ import annotations

from collections import defaultdict
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from ...domain.habit import CustomSchedule, Habit, Weekday
from ...logging_config import get_logger
from ...models.habit import HabitCompletion, HabitRecord
from ..database import SessionFactory

logger = get_logger(__name__)


def _join_ints(values) -> str:
    return ",".join(str(int(v)) for v in sorted(values))


def _split_ints(raw: str) -> list[int]:
    return [int(token) for token in raw.split(",") if token.strip()]


def _apply_to_record(habit: Habit, record: HabitRecord) -> None:
    record.name = habit.name
    record.icon_name = habit.icon_name
    record.habit_type = habit.habit_type.value
    record.target_duration_seconds = habit.target_duration_seconds
    record.frequency = habit.frequency.value
    record.task_days = _join_ints(habit.task_days)
    schedule = habit.custom_schedule
    record.custom_schedule_type = schedule.schedule_type.value if schedule else None
    record.custom_days_of_month = _join_ints(schedule.days_of_month) if schedule else ""
    record.custom_interval = schedule.interval if schedule else None
    record.is_completed = habit.is_completed
    record.last_completed_date = habit.last_completed_date
    record.last_reset_date = habit.last_reset_date
    record.current_streak = habit.current_streak
    record.best_streak = habit.best_streak
    record.created_on = habit.created_on


def _to_domain(record: HabitRecord, completions: list[HabitCompletion]) -> Habit:
    schedule = None
    if record.custom_schedule_type:
        schedule = CustomSchedule(
            schedule_type=record.custom_schedule_type,
            days_of_month=frozenset(_split_ints(record.custom_days_of_month)),
            interval=record.custom_interval,
        )
    return Habit(
        id=record.id,
        name=record.name,
        icon_name=record.icon_name,
        habit_type=record.habit_type,
        target_duration_seconds=record.target_duration_seconds,
        frequency=record.frequency,
        task_days=frozenset(Weekday(d) for d in _split_ints(record.task_days)),
        custom_schedule=schedule,
        completion_dates=frozenset(c.occurred_on for c in completions),
        is_completed=record.is_completed,
        last_completed_date=record.last_completed_date,
        last_reset_date=record.last_reset_date,
        current_streak=record.current_streak,
        best_streak=record.best_streak,
        created_on=record.created_on,
    )


class SQLModelHabitRepository:
    """SQLModel-based habit repository implementation."""

    def __init__(self, session_factory: SessionFactory):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def _completions(self, session: Session, habit_id: str) -> list[HabitCompletion]:
        return list(
            session.exec(
                select(HabitCompletion)
                .where(HabitCompletion.habit_id == habit_id)
                .order_by(HabitCompletion.occurred_on)  # type: ignore
            ).all()
        )

    def load_all_habits(self) -> list[Habit]:
        """Return every habit ordered by name."""
        with self.session_factory() as session:
            records = session.exec(select(HabitRecord).order_by(HabitRecord.name)).all()  # type: ignore
            by_habit: dict[str, list[HabitCompletion]] = defaultdict(list)
            for row in session.exec(select(HabitCompletion)).all():
                by_habit[row.habit_id].append(row)
            return [_to_domain(r, by_habit[r.id]) for r in records]

    def get(self, habit_id: str) -> Optional[Habit]:
        """Retrieve a habit by ID."""
        with self.session_factory() as session:
            record = session.get(HabitRecord, habit_id)
            if record is None:
                return None
            return _to_domain(record, self._completions(session, habit_id))

    def save(self, habit: Habit) -> bool:
        """Insert or update a habit and synchronise its completion rows."""
        try:
            with self.session_factory() as session:
                record = session.get(HabitRecord, habit.id)
                if record is None:
                    record = HabitRecord(id=habit.id, name=habit.name)
                _apply_to_record(habit, record)
                session.add(record)
                session.flush()

                stored = {c.occurred_on: c for c in self._completions(session, habit.id)}
                for day, row in stored.items():
                    if day not in habit.completion_dates:
                        session.delete(row)
                for day in habit.completion_dates - set(stored):
                    session.add(HabitCompletion(habit_id=habit.id, occurred_on=day))
        except SQLAlchemyError:
            logger.error("Failed to save habit %s", habit.id, exc_info=True)
            return False
        return True

    def delete(self, habit_id: str) -> bool:
        """Delete a habit and all of its completions."""
        with self.session_factory() as session:
            record = session.get(HabitRecord, habit_id)
            if record is None:
                return False
            for row in self._completions(session, habit_id):
                session.delete(row)
            session.flush()
            session.delete(record)
        logger.info("Deleted habit %s", habit_id)
        return True
