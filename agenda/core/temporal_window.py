"""Resolve event listing query parameters into a concrete date window.

A listing query carries an optional ``year`` plus an optional month range and
an optional explicit grouping flag. The resolver turns that into an inclusive
``[start, end]`` range of UTC instants and decides whether the listing is
grouped by month:

- no month range: the whole year, grouped by default
- a range spanning several months: grouped by default
- a single-month range (``start_month == end_month``): flat by default

An explicit ``grouped_by_month`` always wins over the default.
"""

import calendar
from dataclasses import dataclass
from datetime import UTC, datetime, time

from agenda.services.errors import InvalidRangeError


@dataclass(frozen=True)
class TemporalWindow:
    start: datetime
    end: datetime
    is_grouped: bool


def start_of_month(year: int, month: int) -> datetime:
    return datetime(year, month, 1, tzinfo=UTC)


def end_of_month(year: int, month: int) -> datetime:
    last_day = calendar.monthrange(year, month)[1]
    return datetime.combine(datetime(year, month, last_day).date(), time.max, tzinfo=UTC)


def resolve_window(
    year: int | None = None,
    start_month: int | None = None,
    end_month: int | None = None,
    grouped_by_month: bool | None = None,
    *,
    now: datetime,
) -> TemporalWindow:
    """Compute the listing window and grouping decision.

    Args:
        year: Calendar year; defaults to the year of ``now`` in UTC
        start_month: First month of the range (1-12)
        end_month: Last month of the range (1-12)
        grouped_by_month: Explicit grouping override
        now: Current instant, supplied by the caller's clock

    Raises:
        InvalidRangeError: If both months are given and ``end_month < start_month``
    """
    if year is None:
        year = now.astimezone(UTC).year

    range_provided = start_month is not None and end_month is not None

    if range_provided and end_month < start_month:
        raise InvalidRangeError("Invalid month range")

    is_same_month = range_provided and start_month == end_month
    default_grouped = not range_provided or not is_same_month
    is_grouped = default_grouped if grouped_by_month is None else grouped_by_month

    if range_provided:
        return TemporalWindow(
            start=start_of_month(year, start_month),
            end=end_of_month(year, end_month),
            is_grouped=is_grouped,
        )

    return TemporalWindow(
        start=start_of_month(year, 1),
        end=end_of_month(year, 12),
        is_grouped=is_grouped,
    )
