"""Scheduled event model."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import DateTime, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from agenda.database import Base
from agenda.models.base import TimestampMixin, UUIDMixin

if TYPE_CHECKING:
    from agenda.models.user import User


class Event(UUIDMixin, TimestampMixin, Base):
    """
    A public event on the agenda.

    ``creator_id`` records who scheduled the event; it is informational and
    does not restrict who may edit the event.
    """

    __tablename__ = "events"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    # Column keeps the public field name; the attribute avoids shadowing ``datetime``.
    scheduled_at: Mapped[datetime] = mapped_column(
        "datetime", DateTime(timezone=True), nullable=False, index=True
    )
    location: Mapped[str] = mapped_column(String(255), nullable=False)
    thumbnail: Mapped[str] = mapped_column(Text, nullable=False)
    creator_id: Mapped[UUID | None] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True
    )

    creator: Mapped[User | None] = relationship(lazy="raise")
