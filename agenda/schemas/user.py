"""Pydantic schemas for users.

No schema here carries the password hash; ``UserCreate``/``UserUpdate`` accept
a plaintext password on input only.
"""

from datetime import datetime
from typing import Annotated
from uuid import UUID

from pydantic import AfterValidator, EmailStr, Field, field_validator

from agenda.models.user import Role
from agenda.schemas.base import BaseResponse, CamelModel, ensure_utc
from agenda.security import BCRYPT_MAX_PASSWORD_BYTES


def _check_password_bytes(value: str) -> str:
    if len(value.encode("utf-8")) > BCRYPT_MAX_PASSWORD_BYTES:
        raise ValueError(f"Password must be at most {BCRYPT_MAX_PASSWORD_BYTES} bytes when UTF-8 encoded")
    return value


Password = Annotated[str, Field(min_length=8, max_length=128), AfterValidator(_check_password_bytes)]
PersonName = Annotated[str, Field(min_length=1, max_length=100)]


class UserCreate(CamelModel):
    """Schema for creating a user."""

    email: EmailStr
    password: Password
    name: PersonName
    lastname: PersonName
    role: Role | None = None


class UserUpdate(CamelModel):
    """Schema for a partial user update."""

    email: EmailStr | None = None
    password: Password | None = None
    name: PersonName | None = None
    lastname: PersonName | None = None
    role: Role | None = None


class UserResponse(BaseResponse):
    """Schema for user response."""

    id: UUID
    email: EmailStr
    name: str
    lastname: str
    role: Role
    created_at: datetime
    updated_at: datetime

    @field_validator("created_at", "updated_at", mode="after")
    @classmethod
    def ensure_timezone_aware(cls, v: datetime) -> datetime:
        """Ensure datetime fields are timezone-aware."""
        return ensure_utc(v)
