"""Pytest configuration and shared fixtures for Nityam tests.

Provides fixed reference dates, an isolated SQLite database per test, and
factories for habits so tests never touch the real app database or the wall
clock.
"""

from __future__ import annotations

import tempfile
from datetime import date, timedelta
from pathlib import Path

import pytest
from sqlmodel import create_engine

from nityam.config import BaseConfig
from nityam.domain.habit import Frequency, Habit, Weekday, days_of_month_schedule, interval_schedule
from nityam.infra.database import create_session_factory, init_database
from nityam.infra.repositories import SQLModelHabitRepository
from nityam.services.clock import FixedClock

# 2024-03-15 is a Friday
FRIDAY = date(2024, 3, 15)


def days_before(day: date, *offsets: int) -> set[date]:
    """Return the dates ``offset`` days before ``day`` for each offset."""
    return {day - timedelta(days=offset) for offset in offsets}


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Point configuration at a temporary data directory for every test."""
    monkeypatch.setenv("NITYAM_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("NITYAM_TIMEZONE", "UTC")
    monkeypatch.delenv("NITYAM_DATABASE_URL", raising=False)
    monkeypatch.delenv("NITYAM_ROLLOVER_INTERVAL_MINUTES", raising=False)
    monkeypatch.delenv("NITYAM_LOOKAHEAD_DAYS", raising=False)
    monkeypatch.delenv("NITYAM_DEV_MODE", raising=False)


@pytest.fixture
def today() -> date:
    return FRIDAY


@pytest.fixture
def clock(today) -> FixedClock:
    return FixedClock(today)


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_engine():
    """Create an isolated SQLite database file for each test.

    Yields:
        Engine: SQLModel engine with all tables created
    """
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    engine = create_engine(f"sqlite:///{db_path}", echo=False)
    init_database(engine)

    yield engine

    engine.dispose()
    db_path.unlink(missing_ok=True)


@pytest.fixture
def session_factory(db_engine):
    """Session factory matching the one used by the application."""
    return create_session_factory(db_engine)


@pytest.fixture
def habit_repo(session_factory) -> SQLModelHabitRepository:
    return SQLModelHabitRepository(session_factory)


@pytest.fixture
def config(tmp_path) -> BaseConfig:
    cfg = BaseConfig()
    cfg.DATA_DIR = tmp_path
    return cfg


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def daily_habit():
    """Factory for daily habits with an optional completion history."""

    def _create(completions=(), name: str = "Meditate", **kwargs) -> Habit:
        return Habit(name=name, completion_dates=frozenset(completions), **kwargs)

    return _create


@pytest.fixture
def weekly_habit():
    """Factory for weekly habits; defaults to Monday/Wednesday/Friday."""

    def _create(
        completions=(),
        days=(Weekday.MONDAY, Weekday.WEDNESDAY, Weekday.FRIDAY),
        name: str = "Gym",
        **kwargs,
    ) -> Habit:
        return Habit(
            name=name,
            frequency=Frequency.WEEKLY,
            task_days=frozenset(days),
            completion_dates=frozenset(completions),
            **kwargs,
        )

    return _create


@pytest.fixture
def interval_habit():
    """Factory for every-N-days habits anchored at the Unix epoch."""

    def _create(interval: int = 3, completions=(), name: str = "Water plants", **kwargs) -> Habit:
        return Habit(
            name=name,
            frequency=Frequency.CUSTOM,
            custom_schedule=interval_schedule(interval),
            completion_dates=frozenset(completions),
            **kwargs,
        )

    return _create


@pytest.fixture
def monthly_habit():
    """Factory for habits scheduled on fixed days of the month."""

    def _create(days=(1, 15), completions=(), name: str = "Pay rent", **kwargs) -> Habit:
        return Habit(
            name=name,
            frequency=Frequency.CUSTOM,
            custom_schedule=days_of_month_schedule(days),
            completion_dates=frozenset(completions),
            **kwargs,
        )

    return _create
