from agenda.schemas.auth import AuthResponse, LoginRequest
from agenda.schemas.base import ApiResponse
from agenda.schemas.event import (
    EventCreate,
    EventCreatorResponse,
    EventDetailResponse,
    EventListData,
    EventResponse,
    EventUpdate,
)
from agenda.schemas.user import UserCreate, UserResponse, UserUpdate

__all__ = [
    "ApiResponse",
    "AuthResponse",
    "EventCreate",
    "EventCreatorResponse",
    "EventDetailResponse",
    "EventListData",
    "EventResponse",
    "EventUpdate",
    "LoginRequest",
    "UserCreate",
    "UserResponse",
    "UserUpdate",
]
