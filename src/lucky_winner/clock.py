"""Time sources for the raffle interval."""

from __future__ import annotations

import time
from typing import Protocol


class Clock(Protocol):
    def now(self) -> int:
        """Return the current time in whole Unix seconds."""


class SystemClock:
    """Wall-clock time."""

    def now(self) -> int:
        return int(time.time())


class ManualClock:
    """Clock that only moves when told to, for local networks and tests."""

    def __init__(self, start: int | None = None) -> None:
        self._now = int(time.time()) if start is None else int(start)

    def now(self) -> int:
        return self._now

    def time_travel(self, seconds: int) -> int:
        """Advance the clock by ``seconds`` and return the new time."""
        if seconds < 0:
            raise ValueError("Cannot travel backwards in time")
        self._now += int(seconds)
        return self._now

    def set(self, timestamp: int) -> None:
        if timestamp < self._now:
            raise ValueError("Cannot travel backwards in time")
        self._now = int(timestamp)
