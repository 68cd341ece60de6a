"""API routers package."""

from agenda.routers import auth, events, users

__all__ = [
    "auth",
    "events",
    "users",
]
