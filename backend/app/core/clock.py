"""Calendar clock used for all reminder date math.

Handlers never read the system date directly. They receive a ``Clock``
through the ``get_clock`` dependency so tests can pin "today".
"""
from datetime import date, datetime, timedelta
from typing import Optional
from zoneinfo import ZoneInfo

from app.core.config import settings


class Clock:
    """Supplies the current calendar date."""

    def today(self) -> date:
        raise NotImplementedError


class SystemClock(Clock):
    """Current date in one fixed time zone."""

    def __init__(self, tz_name: Optional[str] = None):
        self.tz = ZoneInfo(tz_name or settings.TIMEZONE)

    def today(self) -> date:
        return datetime.now(self.tz).date()


class FixedClock(Clock):
    """Clock pinned to a given date, movable by hand."""

    def __init__(self, today: date):
        self._today = today

    def today(self) -> date:
        return self._today

    def set(self, today: date) -> None:
        self._today = today

    def advance(self, days: int = 1) -> date:
        self._today = self._today + timedelta(days=days)
        return self._today


_clock: Clock = SystemClock()


def get_clock() -> Clock:
    """Clock dependency; override in app.dependency_overrides for tests."""
    return _clock
