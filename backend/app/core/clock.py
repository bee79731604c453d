"""
Injectable "today" for date-driven staffing rules.

Rule functions never read the wall clock; services receive the current
calendar date from a Clock so tests can pin it across date boundaries.
"""

from abc import ABC, abstractmethod
from datetime import date, datetime
from zoneinfo import ZoneInfo

from app.core.config import settings


class Clock(ABC):
    @abstractmethod
    def today(self) -> date:
        """Current calendar date."""
        ...


class SystemClock(Clock):
    """Wall-clock date in the configured business timezone."""

    def __init__(self, tz_name: str | None = None):
        self._tz = ZoneInfo(tz_name or settings.TIMEZONE)

    def today(self) -> date:
        return datetime.now(self._tz).date()


class FixedClock(Clock):
    """Clock pinned to one date, for tests and replaying past states."""

    def __init__(self, fixed: date):
        self._fixed = fixed

    def today(self) -> date:
        return self._fixed


system_clock = SystemClock()
