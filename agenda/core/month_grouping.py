"""Partition an ascending event sequence into calendar-month buckets."""

from collections.abc import Callable, Iterable
from datetime import UTC, datetime
from typing import Protocol, TypeVar

# Fixed English names so bucket labels never depend on the process locale.
MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


class Scheduled(Protocol):
    scheduled_at: datetime


T = TypeVar("T", bound=Scheduled)


def as_utc(value: datetime) -> datetime:
    """Normalize to UTC; naive values are taken to already be UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def month_key(value: datetime) -> tuple[int, int]:
    utc_value = as_utc(value)
    return utc_value.year, utc_value.month


def month_label(key: tuple[int, int]) -> str:
    return MONTH_NAMES[key[1] - 1]


def group_by_month(
    events: Iterable[T],
    *,
    label: Callable[[tuple[int, int]], str] = month_label,
) -> dict[str, list[T]]:
    """Bucket events by the month of their ``scheduled_at``.

    Buckets keep the relative order of the input and keys appear in the order
    their first event was seen, so callers must pass events sorted ascending.
    """
    groups: dict[str, list[T]] = {}
    for event in events:
        groups.setdefault(label(month_key(event.scheduled_at)), []).append(event)
    return groups
