"""Authentication helpers for request-scoped principal context."""

from uuid import UUID

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from agenda.core.authorization import Principal
from agenda.database import get_db
from agenda.models import User
from agenda.security import decode_access_token

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login")
optional_oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login", auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def _resolve_principal(token: str, db: AsyncSession) -> Principal:
    payload = decode_access_token(token)
    if not payload:
        raise _unauthorized("Could not validate credentials")

    user_id_str = payload.get("sub")
    if not user_id_str:
        raise _unauthorized("Token missing subject")

    try:
        user_uuid = UUID(user_id_str)
    except ValueError:
        raise _unauthorized("Invalid user ID format in token")

    # Role is read from the database so role changes apply to live tokens.
    result = await db.execute(select(User.id, User.role).where(User.id == user_uuid))
    row = result.one_or_none()
    if row is None:
        raise _unauthorized("User not found")

    return Principal(id=row.id, role=row.role)


async def get_current_principal(
    token: str = Depends(oauth2_scheme),
    db: AsyncSession = Depends(get_db),
) -> Principal:
    """Resolve the acting principal from the bearer token."""
    return await _resolve_principal(token, db)


async def get_optional_principal(
    token: str | None = Depends(optional_oauth2_scheme),
    db: AsyncSession = Depends(get_db),
) -> Principal | None:
    """Like ``get_current_principal`` but anonymous requests yield ``None``."""
    if token is None:
        return None
    return await _resolve_principal(token, db)
