"""User lifecycle: registration, credential rotation and role-gated edits.

Read paths select only ``PUBLIC_USER_COLUMNS`` so the password hash never
leaves the database. ``find_user_by_email`` is the single exception and is
reserved for credential verification at login.

Email uniqueness is checked before writes, but two concurrent requests can
both pass that check. The unique constraint on ``users.email`` is the
backstop: an ``IntegrityError`` on commit is reported as ``DuplicateEmailError``.
"""

from collections.abc import Sequence
from uuid import UUID

from sqlalchemy import Row, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from agenda.core.authorization import Principal, can_change_role, can_mutate
from agenda.logger import get_logger, log_exception
from agenda.models import Role, User
from agenda.schemas.user import UserCreate, UserUpdate
from agenda.security import hash_password_async
from agenda.services.errors import DuplicateEmailError, ForbiddenError, UserNotFoundError

logger = get_logger(__name__)

PUBLIC_USER_COLUMNS = (
    User.id,
    User.email,
    User.name,
    User.lastname,
    User.role,
    User.created_at,
    User.updated_at,
)


async def _email_taken(db: AsyncSession, email: str) -> bool:
    result = await db.execute(select(User.id).where(User.email == email))
    return result.scalar_one_or_none() is not None


async def _commit_user(db: AsyncSession, email: str) -> None:
    try:
        await db.commit()
    except IntegrityError as exc:
        await db.rollback()
        log_exception(logger, exc, "User write rejected by unique constraint", level="warning")
        raise DuplicateEmailError(f"Email {email} is already in use") from exc


async def _get_public_user(db: AsyncSession, user_id: UUID) -> Row:
    result = await db.execute(select(*PUBLIC_USER_COLUMNS).where(User.id == user_id))
    row = result.one_or_none()

    if row is None:
        raise UserNotFoundError("User not found")

    return row


async def create_user(
    db: AsyncSession, user_data: UserCreate, principal: Principal | None = None
) -> Row:
    """Register a user; only admins may create accounts with an elevated role."""
    role = user_data.role or Role.CONTENT_MANAGER
    if role != Role.CONTENT_MANAGER and (principal is None or not can_change_role(principal)):
        raise ForbiddenError("Only admins can assign roles")

    if await _email_taken(db, user_data.email):
        raise DuplicateEmailError("User already exists")

    user = User(
        email=user_data.email,
        hashed_password=await hash_password_async(user_data.password),
        name=user_data.name,
        lastname=user_data.lastname,
        role=role,
    )
    db.add(user)
    await _commit_user(db, user_data.email)

    logger.info("User created", user_id=str(user.id), role=user.role.value)
    return await _get_public_user(db, user.id)


async def list_users(db: AsyncSession, excluding_id: UUID) -> Sequence[Row]:
    """List every user except ``excluding_id``, newest first."""
    result = await db.execute(
        select(*PUBLIC_USER_COLUMNS)
        .where(User.id != excluding_id)
        .order_by(User.created_at.desc())
    )
    return result.all()


async def get_user(db: AsyncSession, user_id: UUID) -> Row:
    return await _get_public_user(db, user_id)


async def update_user(
    db: AsyncSession, user_id: UUID, user_data: UserUpdate, principal: Principal
) -> Row:
    if not can_mutate(principal, user_id):
        logger.warning(
            "User update denied",
            principal_id=str(principal.id),
            target_id=str(user_id),
            role=principal.role.value,
        )
        raise ForbiddenError("You can only update your own user")

    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()

    if not user:
        raise UserNotFoundError("User not found")

    update_data = user_data.model_dump(exclude_unset=True, exclude_none=True)

    new_role = update_data.get("role")
    if new_role is not None and new_role != user.role and not can_change_role(principal):
        raise ForbiddenError("You cannot change user roles")

    new_email = update_data.get("email")
    if new_email is not None and new_email != user.email:
        if await _email_taken(db, new_email):
            raise DuplicateEmailError("This new email is already in use")

    password = update_data.pop("password", None)
    if password is not None:
        user.hashed_password = await hash_password_async(password)

    for field, value in update_data.items():
        setattr(user, field, value)

    await _commit_user(db, user.email)

    logger.info(
        "User updated",
        user_id=str(user_id),
        fields=sorted(update_data) + (["password"] if password is not None else []),
    )
    return await _get_public_user(db, user_id)


async def delete_user(db: AsyncSession, user_id: UUID, principal: Principal) -> None:
    if not can_mutate(principal, user_id):
        logger.warning(
            "User deletion denied",
            principal_id=str(principal.id),
            target_id=str(user_id),
            role=principal.role.value,
        )
        raise ForbiddenError("You can only delete your own user")

    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()

    if not user:
        raise UserNotFoundError("User not found")

    await db.delete(user)
    await db.commit()

    logger.info("User deleted", user_id=str(user_id))


async def find_user_by_email(db: AsyncSession, email: str) -> User | None:
    """Return the full record, hash included. Internal use by login only."""
    result = await db.execute(select(User).where(User.email == email))
    return result.scalar_one_or_none()
