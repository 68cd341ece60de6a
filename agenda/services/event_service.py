"""Event lifecycle: scheduling, listing by month window, edits and removal."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from agenda.core.clock import Clock
from agenda.core.month_grouping import as_utc, group_by_month
from agenda.core.temporal_window import resolve_window
from agenda.logger import get_logger
from agenda.models import Event, User
from agenda.schemas.event import EventCreate, EventUpdate
from agenda.services.errors import EventNotFoundError, InvalidScheduleError

logger = get_logger(__name__)


@dataclass
class EventListing:
    is_grouped: bool
    events: list[Event] | dict[str, list[Event]]


def ensure_future(scheduled_at: datetime, clock: Clock) -> None:
    if as_utc(scheduled_at) <= clock.now():
        raise InvalidScheduleError("The date must be in the future")


async def create_event(
    db: AsyncSession, creator_id: UUID, event_data: EventCreate, *, clock: Clock
) -> Event:
    ensure_future(event_data.scheduled_at, clock)

    event = Event(
        title=event_data.title,
        scheduled_at=event_data.scheduled_at,
        location=event_data.location,
        thumbnail=event_data.thumbnail,
        creator_id=creator_id,
    )
    db.add(event)
    await db.commit()
    await db.refresh(event)

    logger.info("Event created", event_id=str(event.id), creator_id=str(creator_id))
    return event


async def list_events(
    db: AsyncSession,
    *,
    clock: Clock,
    year: int | None = None,
    start_month: int | None = None,
    end_month: int | None = None,
    grouped_by_month: bool | None = None,
) -> EventListing:
    """List events inside the resolved window, grouped by month when requested."""
    window = resolve_window(year, start_month, end_month, grouped_by_month, now=clock.now())

    result = await db.execute(
        select(Event)
        .where(Event.scheduled_at >= window.start, Event.scheduled_at <= window.end)
        .order_by(Event.scheduled_at.asc())
    )
    events = list(result.scalars().all())

    if window.is_grouped:
        return EventListing(is_grouped=True, events=group_by_month(events))
    return EventListing(is_grouped=False, events=events)


async def get_event(db: AsyncSession, event_id: UUID) -> Event:
    """Fetch an event with its creator limited to public contact columns."""
    result = await db.execute(
        select(Event)
        .where(Event.id == event_id)
        .options(joinedload(Event.creator).load_only(User.id, User.name, User.lastname, User.email))
    )
    event = result.scalar_one_or_none()

    if not event:
        raise EventNotFoundError("Event not found")

    return event


async def _get_event_for_write(db: AsyncSession, event_id: UUID) -> Event:
    result = await db.execute(select(Event).where(Event.id == event_id))
    event = result.scalar_one_or_none()

    if not event:
        raise EventNotFoundError("Event not found")

    return event


async def update_event(
    db: AsyncSession, event_id: UUID, event_data: EventUpdate, *, clock: Clock
) -> Event:
    event = await _get_event_for_write(db, event_id)
    update_data = event_data.model_dump(exclude_unset=True)

    if update_data.get("scheduled_at") is not None:
        ensure_future(update_data["scheduled_at"], clock)

    for field, value in update_data.items():
        # Explicit nulls would violate NOT NULL columns; treat them as "unchanged".
        if value is not None:
            setattr(event, field, value)

    await db.commit()
    await db.refresh(event)

    logger.info("Event updated", event_id=str(event_id), fields=sorted(update_data))
    return event


async def delete_event(db: AsyncSession, event_id: UUID) -> None:
    event = await _get_event_for_write(db, event_id)

    await db.delete(event)
    await db.commit()

    logger.info("Event deleted", event_id=str(event_id))
