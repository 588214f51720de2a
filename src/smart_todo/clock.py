"""Injectable source of the current date and time.

Validation, overdue derivation and creation timestamps all read the
clock through this module, so tests can pin "today" deterministically.

Example:
    >>> clock = FixedClock(date(2030, 1, 15))
    >>> clock.today()
    datetime.date(2030, 1, 15)
    >>> clock.advance(days=1)
    >>> clock.today()
    datetime.date(2030, 1, 16)
"""

import time
from datetime import date, datetime, timedelta
from typing import Protocol


class Clock(Protocol):
    """Provides the local calendar date and a millisecond timestamp."""

    def today(self) -> date: ...

    def now_ms(self) -> int: ...


class SystemClock:
    """Wall-clock implementation (local time zone)."""

    def today(self) -> date:
        return date.today()

    def now_ms(self) -> int:
        return int(time.time() * 1000)


class FixedClock:
    """Deterministic clock for tests and scripted sessions.

    ``now_ms()`` ticks forward by one millisecond per call so tasks
    created back to back still get strictly increasing timestamps.
    """

    def __init__(self, today: date, now_ms: int | None = None) -> None:
        self._today = today
        if now_ms is None:
            now_ms = int(datetime(today.year, today.month, today.day).timestamp() * 1000)
        self._now_ms = now_ms

    def today(self) -> date:
        return self._today

    def now_ms(self) -> int:
        value = self._now_ms
        self._now_ms += 1
        return value

    def advance(self, days: int = 0, ms: int = 0) -> None:
        """Move the clock forward."""
        self._today += timedelta(days=days)
        self._now_ms += days * 86_400_000 + ms
