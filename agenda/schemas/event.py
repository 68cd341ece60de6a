"""Pydantic schemas for events."""

from datetime import datetime
from typing import Annotated
from uuid import UUID

from pydantic import Field, StringConstraints, field_validator

from agenda.schemas.base import BaseResponse, CamelModel, ensure_utc

Title = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)]
Location = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)]
Thumbnail = Annotated[str, Field(min_length=1)]


class EventCreate(CamelModel):
    """Schema for scheduling an event."""

    title: Title
    scheduled_at: datetime = Field(alias="datetime")
    location: Location
    thumbnail: Thumbnail

    @field_validator("scheduled_at", mode="after")
    @classmethod
    def normalize_datetime(cls, v: datetime) -> datetime:
        return ensure_utc(v)


class EventUpdate(CamelModel):
    """Schema for a partial event update; only fields sent are applied."""

    title: Title | None = None
    scheduled_at: datetime | None = Field(default=None, alias="datetime")
    location: Location | None = None
    thumbnail: Thumbnail | None = None

    @field_validator("scheduled_at", mode="after")
    @classmethod
    def normalize_datetime(cls, v: datetime | None) -> datetime | None:
        return ensure_utc(v) if v is not None else None


class EventResponse(BaseResponse):
    """Schema for event response."""

    id: UUID
    title: str
    scheduled_at: datetime = Field(alias="datetime")
    location: str
    thumbnail: str
    creator_id: UUID | None
    created_at: datetime
    updated_at: datetime

    @field_validator("scheduled_at", "created_at", "updated_at", mode="after")
    @classmethod
    def ensure_timezone_aware(cls, v: datetime) -> datetime:
        return ensure_utc(v)


class EventCreatorResponse(BaseResponse):
    """Reduced creator projection embedded in event details."""

    id: UUID
    name: str
    lastname: str
    email: str


class EventDetailResponse(EventResponse):
    creator: EventCreatorResponse | None = None


class EventListData(CamelModel):
    """Listing payload: a flat list, or month name -> events when grouped."""

    is_grouped: bool
    events: list[EventResponse] | dict[str, list[EventResponse]]
