"""Domain errors raised by the services.

None of these are transient: retrying the same input reproduces the error.
"""


class ServiceError(Exception):
    """Base exception for service errors."""


class InvalidRangeError(ServiceError):
    """End month precedes start month."""


class InvalidScheduleError(ServiceError):
    """Event datetime is not strictly in the future."""


class DuplicateEmailError(ServiceError):
    """Another user already holds the email."""


class NotFoundError(ServiceError):
    """Referenced id does not resolve."""


class EventNotFoundError(NotFoundError):
    """Event not found error."""


class UserNotFoundError(NotFoundError):
    """User not found error."""


class ForbiddenError(ServiceError):
    """Authorization policy denied the mutation."""
