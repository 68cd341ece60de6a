"""Common exception utilities for FastAPI routers."""

from typing import NoReturn

from fastapi import HTTPException, status

from agenda.services.errors import (
    DuplicateEmailError,
    ForbiddenError,
    InvalidRangeError,
    InvalidScheduleError,
    NotFoundError,
    ServiceError,
)


def raise_not_found(detail: str, *, cause: Exception | None = None) -> NoReturn:
    raise HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=detail,
    ) from cause


def raise_bad_request(detail: str, *, cause: Exception | None = None) -> NoReturn:
    raise HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail=detail,
    ) from cause


def raise_unauthorized(detail: str, *, cause: Exception | None = None) -> NoReturn:
    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    ) from cause


def raise_forbidden(detail: str, *, cause: Exception | None = None) -> NoReturn:
    raise HTTPException(
        status_code=status.HTTP_403_FORBIDDEN,
        detail=detail,
    ) from cause


def raise_conflict(detail: str, *, cause: Exception | None = None) -> NoReturn:
    raise HTTPException(
        status_code=status.HTTP_409_CONFLICT,
        detail=detail,
    ) from cause


def raise_too_many_requests(detail: str, *, retry_after: int | None = None, cause: Exception | None = None) -> NoReturn:
    headers = {"Retry-After": str(retry_after)} if retry_after else None
    raise HTTPException(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        detail=detail,
        headers=headers,
    ) from cause


def raise_for_service_error(exc: ServiceError) -> NoReturn:
    """Translate a domain error into the matching HTTP error."""
    detail = str(exc)
    if isinstance(exc, NotFoundError):
        raise_not_found(detail, cause=exc)
    if isinstance(exc, ForbiddenError):
        raise_forbidden(detail, cause=exc)
    if isinstance(exc, DuplicateEmailError):
        raise_conflict(detail, cause=exc)
    if isinstance(exc, (InvalidRangeError, InvalidScheduleError)):
        raise_bad_request(detail, cause=exc)
    raise exc
