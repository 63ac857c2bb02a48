"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {value!r}") from exc


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "Nityam"
    DB_FILENAME = "nityam.db"
    SQLITE_PRAGMAS = {"journal_mode": "wal", "foreign_keys": "on"}

    def __init__(self) -> None:
        self.DATA_DIR = self._resolve_data_dir()
        self.DEV_MODE = _env_bool("NITYAM_DEV_MODE", default=True)
        self.DATABASE_URL = os.getenv("NITYAM_DATABASE_URL", self._build_sqlite_url())
        self.TIMEZONE = os.getenv("NITYAM_TIMEZONE", "UTC")
        self.ROLLOVER_INTERVAL_MINUTES = _env_int("NITYAM_ROLLOVER_INTERVAL_MINUTES", 15)
        self.LOOKAHEAD_DAYS = _env_int("NITYAM_LOOKAHEAD_DAYS", 366)
        if self.ROLLOVER_INTERVAL_MINUTES <= 0:
            raise ValueError("NITYAM_ROLLOVER_INTERVAL_MINUTES must be positive.")
        # Fail early on a bad zone name rather than at the first rollover.
        self.tzinfo()

    def _resolve_data_dir(self) -> Path:
        """Return the directory where the SQLite file and logs live."""

        data_root = os.getenv("NITYAM_DATA_DIR", "instance")
        path = Path(data_root).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    def _build_sqlite_url(self) -> str:
        db_path = self.DATA_DIR / self.DB_FILENAME
        return f"sqlite:///{db_path}"

    def tzinfo(self) -> ZoneInfo:
        """Return the zone that defines where a calendar day starts."""

        try:
            return ZoneInfo(self.TIMEZONE)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown timezone: {self.TIMEZONE!r}") from exc

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Expose engine kwargs for SQLModel to consume."""

        connect_args: dict[str, Any] = {}
        if self.DATABASE_URL.startswith("sqlite"):
            connect_args["check_same_thread"] = False
        return {"connect_args": connect_args}


class DevConfig(BaseConfig):
    """Development configuration using local SQLite."""

    DEBUG = True
    TESTING = False
