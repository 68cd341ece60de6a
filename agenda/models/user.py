"""User model."""

import enum

from sqlalchemy import Enum, String
from sqlalchemy.orm import Mapped, mapped_column

from agenda.database import Base
from agenda.models.base import TimestampMixin, UUIDMixin


class Role(str, enum.Enum):
    """Account role."""

    ADMIN = "ADMIN"
    CONTENT_MANAGER = "CONTENT_MANAGER"


class User(UUIDMixin, TimestampMixin, Base):
    """Back-office account that creates and curates events."""

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    lastname: Mapped[str] = mapped_column(String(100), nullable=False)
    role: Mapped[Role] = mapped_column(
        Enum(Role, name="user_role"), nullable=False, default=Role.CONTENT_MANAGER
    )
