"""Injectable source of the current instant."""

from datetime import UTC, datetime
from typing import Protocol


class Clock(Protocol):
    def now(self) -> datetime: ...


class SystemClock:
    """Wall clock in UTC."""

    def now(self) -> datetime:
        return datetime.now(UTC)


system_clock = SystemClock()


def get_clock() -> Clock:
    """FastAPI dependency; tests override it with a fixed clock."""
    return system_clock
