"""User management API router."""

from uuid import UUID

from fastapi import APIRouter, status

from agenda.deps import CurrentPrincipal, DbSession, OptionalPrincipal
from agenda.schemas import ApiResponse, UserCreate, UserResponse, UserUpdate
from agenda.services import user_service
from agenda.services.errors import ServiceError
from agenda.utils.exceptions import raise_for_service_error

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=ApiResponse[UserResponse], status_code=status.HTTP_201_CREATED)
async def create_user(
    user_data: UserCreate,
    db: DbSession,
    principal: OptionalPrincipal,
) -> ApiResponse[UserResponse]:
    """Create a new user. Assigning a role other than CONTENT_MANAGER requires an admin token."""
    try:
        user = await user_service.create_user(db, user_data, principal)
    except ServiceError as e:
        raise_for_service_error(e)

    return ApiResponse(
        status_code=status.HTTP_201_CREATED,
        data=UserResponse.model_validate(user),
        message="User created",
    )


@router.get("", response_model=ApiResponse[list[UserResponse]])
async def list_users(db: DbSession, principal: CurrentPrincipal) -> ApiResponse[list[UserResponse]]:
    """List all users other than the caller, newest first."""
    users = await user_service.list_users(db, principal.id)

    return ApiResponse(
        status_code=status.HTTP_200_OK,
        data=[UserResponse.model_validate(user) for user in users],
        message="Users found",
    )


@router.get("/{user_id}", response_model=ApiResponse[UserResponse])
async def get_user(user_id: UUID, db: DbSession, principal: CurrentPrincipal) -> ApiResponse[UserResponse]:
    try:
        user = await user_service.get_user(db, user_id)
    except ServiceError as e:
        raise_for_service_error(e)

    return ApiResponse(
        status_code=status.HTTP_200_OK,
        data=UserResponse.model_validate(user),
        message="User found",
    )


@router.patch("/{user_id}", response_model=ApiResponse[UserResponse])
async def update_user(
    user_id: UUID,
    user_data: UserUpdate,
    db: DbSession,
    principal: CurrentPrincipal,
) -> ApiResponse[UserResponse]:
    """Update user details. Content managers may only update themselves."""
    try:
        user = await user_service.update_user(db, user_id, user_data, principal)
    except ServiceError as e:
        raise_for_service_error(e)

    return ApiResponse(
        status_code=status.HTTP_200_OK,
        data=UserResponse.model_validate(user),
        message="User updated",
    )


@router.delete("/{user_id}", response_model=ApiResponse[None])
async def delete_user(user_id: UUID, db: DbSession, principal: CurrentPrincipal) -> ApiResponse[None]:
    try:
        await user_service.delete_user(db, user_id, principal)
    except ServiceError as e:
        raise_for_service_error(e)

    return ApiResponse(
        status_code=status.HTTP_200_OK,
        data=None,
        message="User deleted",
    )
