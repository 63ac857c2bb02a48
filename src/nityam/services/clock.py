"""Clock and calendar helpers.

The engine never reads the wall clock. Callers obtain "today" from a
:class:`Clock` and pass it in explicitly.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta, tzinfo
from typing import Optional, Protocol
from zoneinfo import ZoneInfo

EPOCH = date(1970, 1, 1)
ONE_DAY = timedelta(days=1)


class Clock(Protocol):
    """Supplies the current calendar day."""

    def today(self) -> date:  # pragma: no cover - interface
        ...


@dataclass(frozen=True)
class SystemClock:
    """Wall clock whose day boundary is local midnight in ``tz``."""

    tz: tzinfo = ZoneInfo("UTC")

    def now(self) -> datetime:
        return datetime.now(self.tz)

    def today(self) -> date:
        return self.now().date()


@dataclass
class FixedClock:
    """Clock pinned to a given day; ``advance`` moves it forward."""

    current: date

    def today(self) -> date:
        return self.current

    def advance(self, days: int = 1) -> date:
        self.current = self.current + timedelta(days=days)
        return self.current


def normalize_day(value: date, tz: Optional[tzinfo] = None) -> date:
    """Return the calendar day of ``value`` in ``tz``.

    Plain dates are returned unchanged. Aware datetimes are converted into
    ``tz`` first; naive datetimes are taken to be local already.
    """
    if not isinstance(value, datetime):
        return value
    if value.tzinfo is not None and tz is not None:
        value = value.astimezone(tz)
    return value.date()


def days_since_epoch(day: date) -> int:
    """Whole days between 1970-01-01 and ``day`` (negative before it)."""
    return (normalize_day(day) - EPOCH).days
