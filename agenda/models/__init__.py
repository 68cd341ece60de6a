"""SQLAlchemy models package."""

from agenda.models.event import Event
from agenda.models.user import Role, User

__all__ = [
    "Event",
    "Role",
    "User",
]
