"""Tests for the event lifecycle service."""

from datetime import UTC, datetime, timedelta
from uuid import uuid4

import pytest
from sqlalchemy import select

from agenda.models import Event
from agenda.schemas import EventCreate, EventUpdate
from agenda.services import event_service
from agenda.services.errors import EventNotFoundError, InvalidRangeError, InvalidScheduleError
from tests.conftest import FIXED_NOW
from tests.factories import EventFactory, UserFactory


def _as_utc(value: datetime) -> datetime:
    return value if value.tzinfo else value.replace(tzinfo=UTC)


def _create_payload(scheduled_at: datetime, **overrides) -> EventCreate:
    data = {
        "title": "Spring concert",
        "datetime": scheduled_at,
        "location": "Auditorium",
        "thumbnail": "https://cdn.example.com/concert.png",
    }
    data.update(overrides)
    return EventCreate(**data)


@pytest.mark.asyncio
async def test_create_event_in_future(db, clock, manager_user):
    event = await event_service.create_event(
        db, manager_user.id, _create_payload(FIXED_NOW + timedelta(hours=1)), clock=clock
    )

    assert event.id is not None
    assert event.creator_id == manager_user.id
    assert _as_utc(event.scheduled_at) == FIXED_NOW + timedelta(hours=1)


@pytest.mark.asyncio
async def test_create_event_in_past_rejected(db, clock, manager_user):
    with pytest.raises(InvalidScheduleError, match="future"):
        await event_service.create_event(
            db, manager_user.id, _create_payload(FIXED_NOW - timedelta(seconds=1)), clock=clock
        )

    result = await db.execute(select(Event))
    assert result.scalars().all() == []


@pytest.mark.asyncio
async def test_create_event_exactly_now_rejected(db, clock, manager_user):
    with pytest.raises(InvalidScheduleError):
        await event_service.create_event(db, manager_user.id, _create_payload(FIXED_NOW), clock=clock)


async def _seed_year(db) -> None:
    for when in [
        datetime(2025, 12, 31, 23, 0, tzinfo=UTC),
        datetime(2026, 6, 2, 9, 0, tzinfo=UTC),
        datetime(2026, 3, 20, 9, 0, tzinfo=UTC),
        datetime(2026, 3, 5, 9, 0, tzinfo=UTC),
        datetime(2026, 4, 1, 0, 0, tzinfo=UTC),
        datetime(2026, 12, 31, 23, 59, tzinfo=UTC),
        datetime(2027, 1, 1, 0, 0, tzinfo=UTC),
    ]:
        await EventFactory.create_async(db, scheduled_at=when, title=when.isoformat())


@pytest.mark.asyncio
async def test_list_whole_year_is_grouped_and_bounded(db, clock):
    await _seed_year(db)

    listing = await event_service.list_events(db, clock=clock)

    assert listing.is_grouped is True
    assert list(listing.events) == ["March", "April", "June", "December"]
    flattened = [e for bucket in listing.events.values() for e in bucket]
    assert all(_as_utc(e.scheduled_at).year == 2026 for e in flattened)
    assert [_as_utc(e.scheduled_at) for e in listing.events["March"]] == [
        datetime(2026, 3, 5, 9, 0, tzinfo=UTC),
        datetime(2026, 3, 20, 9, 0, tzinfo=UTC),
    ]


@pytest.mark.asyncio
async def test_list_flat_year_is_ascending(db, clock):
    await _seed_year(db)

    listing = await event_service.list_events(db, clock=clock, year=2026, grouped_by_month=False)

    assert listing.is_grouped is False
    times = [_as_utc(e.scheduled_at) for e in listing.events]
    assert times == sorted(times)
    assert len(times) == 5


@pytest.mark.asyncio
async def test_list_single_month_is_flat(db, clock):
    await _seed_year(db)

    listing = await event_service.list_events(db, clock=clock, year=2026, start_month=3, end_month=3)

    assert listing.is_grouped is False
    assert [_as_utc(e.scheduled_at).day for e in listing.events] == [5, 20]


@pytest.mark.asyncio
async def test_list_single_month_forced_grouping(db, clock):
    await _seed_year(db)

    listing = await event_service.list_events(
        db, clock=clock, year=2026, start_month=3, end_month=3, grouped_by_month=True
    )

    assert listing.is_grouped is True
    assert list(listing.events) == ["March"]


@pytest.mark.asyncio
async def test_list_month_range_includes_boundaries(db, clock):
    await _seed_year(db)

    listing = await event_service.list_events(db, clock=clock, year=2026, start_month=3, end_month=6)

    assert listing.is_grouped is True
    assert list(listing.events) == ["March", "April", "June"]


@pytest.mark.asyncio
async def test_list_invalid_range(db, clock):
    with pytest.raises(InvalidRangeError):
        await event_service.list_events(db, clock=clock, start_month=3, end_month=2)


@pytest.mark.asyncio
async def test_get_event_includes_creator_projection(db):
    creator = await UserFactory.create_async(db, name="Grace", lastname="Hopper", email="grace@example.com")
    event = await EventFactory.create_async(db, creator_id=creator.id)
    db.expunge_all()

    fetched = await event_service.get_event(db, event.id)

    assert fetched.creator.id == creator.id
    assert fetched.creator.email == "grace@example.com"
    assert "hashed_password" not in fetched.creator.__dict__


@pytest.mark.asyncio
async def test_get_event_not_found(db):
    with pytest.raises(EventNotFoundError):
        await event_service.get_event(db, uuid4())


@pytest.mark.asyncio
async def test_update_event_partial(db, clock):
    event = await EventFactory.create_async(db, title="Old", location="Room 1")

    updated = await event_service.update_event(db, event.id, EventUpdate(title="New"), clock=clock)

    assert updated.title == "New"
    assert updated.location == "Room 1"


@pytest.mark.asyncio
async def test_update_event_past_datetime_rejected(db, clock):
    event = await EventFactory.create_async(db)

    with pytest.raises(InvalidScheduleError):
        await event_service.update_event(
            db, event.id, EventUpdate(datetime=FIXED_NOW - timedelta(days=1)), clock=clock
        )


@pytest.mark.asyncio
async def test_update_event_without_datetime_skips_schedule_check(db, clock):
    # Already in the past relative to the clock; editing other fields is allowed.
    event = await EventFactory.create_async(db, scheduled_at=FIXED_NOW - timedelta(days=30))

    updated = await event_service.update_event(db, event.id, EventUpdate(location="Patio"), clock=clock)

    assert updated.location == "Patio"


@pytest.mark.asyncio
async def test_update_event_not_found(db, clock):
    with pytest.raises(EventNotFoundError):
        await event_service.update_event(db, uuid4(), EventUpdate(title="x"), clock=clock)


@pytest.mark.asyncio
async def test_delete_event(db):
    event = await EventFactory.create_async(db)

    await event_service.delete_event(db, event.id)

    with pytest.raises(EventNotFoundError):
        await event_service.get_event(db, event.id)


@pytest.mark.asyncio
async def test_delete_event_not_found(db):
    with pytest.raises(EventNotFoundError):
        await event_service.delete_event(db, uuid4())
