"""Pydantic schemas for authentication."""

from pydantic import EmailStr

from agenda.schemas.base import CamelModel
from agenda.schemas.user import UserResponse


class LoginRequest(CamelModel):
    """Schema for user login."""

    email: EmailStr
    password: str


class AuthResponse(CamelModel):
    """Authenticated user plus a bearer token."""

    user: UserResponse
    access_token: str
    token_type: str = "bearer"
