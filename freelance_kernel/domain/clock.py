"""
Time source for the ledger.

Payment dates are stamped from an injected ``Clock`` rather than read
inline, so tests can pin the instant a job was paid and reports can be
checked against exact window edges.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone


def as_utc(value: datetime) -> datetime:
    """Aware UTC copy of ``value``; naive values are taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class Clock(ABC):
    """Source of the current instant, always aware UTC."""

    @abstractmethod
    def now(self) -> datetime:
        ...


class SystemClock(Clock):
    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class DeterministicClock(Clock):
    """
    Clock pinned to a given instant until moved.

    ``now()`` keeps returning the same value, so every payment made through
    one service call shares its timestamp.  ``advance()`` moves it forward.
    """

    DEFAULT_START = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)

    def __init__(self, start: datetime | None = None):
        self._now = as_utc(start) if start is not None else self.DEFAULT_START

    def now(self) -> datetime:
        return self._now

    def advance(self, seconds: float = 1) -> datetime:
        """Move forward by ``seconds`` and return the new instant."""
        self._now += timedelta(seconds=seconds)
        return self._now
