"""Event API router."""

from uuid import UUID

from fastapi import APIRouter, Query, status

from agenda.deps import ClockDep, CurrentPrincipal, DbSession
from agenda.logger import get_logger
from agenda.schemas import (
    ApiResponse,
    EventCreate,
    EventDetailResponse,
    EventListData,
    EventResponse,
    EventUpdate,
)
from agenda.services import event_service
from agenda.services.errors import ServiceError
from agenda.utils.exceptions import raise_for_service_error

router = APIRouter(prefix="/events", tags=["events"])
logger = get_logger(__name__)


@router.post("", response_model=ApiResponse[EventResponse], status_code=status.HTTP_201_CREATED)
async def create_event(
    event_data: EventCreate,
    db: DbSession,
    principal: CurrentPrincipal,
    clock: ClockDep,
) -> ApiResponse[EventResponse]:
    """Schedule a new event owned by the caller."""
    try:
        event = await event_service.create_event(db, principal.id, event_data, clock=clock)
    except ServiceError as e:
        raise_for_service_error(e)

    return ApiResponse(
        status_code=status.HTTP_201_CREATED,
        data=EventResponse.model_validate(event),
        message="Event created successfully",
    )


@router.get("", response_model=ApiResponse[EventListData])
async def list_events(
    db: DbSession,
    clock: ClockDep,
    year: int | None = Query(None, ge=1, le=9999, description="Defaults to the current year"),
    start_month: int | None = Query(None, alias="startMonth", ge=1, le=12),
    end_month: int | None = Query(None, alias="endMonth", ge=1, le=12),
    grouped_by_month: bool | None = Query(None, alias="groupedByMonth"),
) -> ApiResponse[EventListData]:
    """List events for a year or a month range, optionally grouped by month.

    Without a range the whole year is returned grouped by month. A range
    spanning several months is grouped as well; a single-month range is flat.
    ``groupedByMonth`` overrides either default.
    """
    try:
        listing = await event_service.list_events(
            db,
            clock=clock,
            year=year,
            start_month=start_month,
            end_month=end_month,
            grouped_by_month=grouped_by_month,
        )
    except ServiceError as e:
        logger.debug("Invalid event listing query", start_month=start_month, end_month=end_month)
        raise_for_service_error(e)

    if isinstance(listing.events, dict):
        events = {
            month: [EventResponse.model_validate(event) for event in bucket]
            for month, bucket in listing.events.items()
        }
    else:
        events = [EventResponse.model_validate(event) for event in listing.events]

    return ApiResponse(
        status_code=status.HTTP_200_OK,
        data=EventListData(is_grouped=listing.is_grouped, events=events),
        message="Events retrieved successfully",
    )


@router.get("/{event_id}", response_model=ApiResponse[EventDetailResponse])
async def get_event(event_id: UUID, db: DbSession) -> ApiResponse[EventDetailResponse]:
    """Get an event with its creator's public details."""
    try:
        event = await event_service.get_event(db, event_id)
    except ServiceError as e:
        raise_for_service_error(e)

    return ApiResponse(
        status_code=status.HTTP_200_OK,
        data=EventDetailResponse.model_validate(event),
        message="Event retrieved successfully",
    )


@router.patch("/{event_id}", response_model=ApiResponse[EventResponse])
async def update_event(
    event_id: UUID,
    event_data: EventUpdate,
    db: DbSession,
    principal: CurrentPrincipal,
    clock: ClockDep,
) -> ApiResponse[EventResponse]:
    try:
        event = await event_service.update_event(db, event_id, event_data, clock=clock)
    except ServiceError as e:
        raise_for_service_error(e)

    return ApiResponse(
        status_code=status.HTTP_200_OK,
        data=EventResponse.model_validate(event),
        message="Event updated successfully",
    )


@router.delete("/{event_id}", response_model=ApiResponse[None])
async def delete_event(event_id: UUID, db: DbSession, principal: CurrentPrincipal) -> ApiResponse[None]:
    try:
        await event_service.delete_event(db, event_id)
    except ServiceError as e:
        raise_for_service_error(e)

    return ApiResponse(
        status_code=status.HTTP_200_OK,
        data=None,
        message="Event deleted successfully",
    )
