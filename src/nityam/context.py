"""Application context for dependency injection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .config import BaseConfig
from .infra.database import SessionFactory, bootstrap_database
from .infra.repositories import SQLModelHabitRepository
from .services.clock import Clock, SystemClock


@dataclass
class AppContext:
    """Configuration, storage and clock shared by the CLI and scheduler."""

    config: BaseConfig
    session_factory: SessionFactory
    habit_repo: SQLModelHabitRepository
    clock: Clock


def create_app_context(config: Optional[BaseConfig] = None, clock: Optional[Clock] = None) -> AppContext:
    """Create and initialize the application context."""

    if config is None:
        config = BaseConfig()

    _, session_factory = bootstrap_database(config)
    return AppContext(
        config=config,
        session_factory=session_factory,
        habit_repo=SQLModelHabitRepository(session_factory),
        clock=clock or SystemClock(config.tzinfo()),
    )
