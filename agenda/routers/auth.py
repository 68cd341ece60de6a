"""Authentication API router."""

import os

from fastapi import APIRouter, Request, status

from agenda.deps import CurrentPrincipal, DbSession
from agenda.logger import get_logger
from agenda.rate_limit import RateLimiter, login_rate_limiter
from agenda.schemas import ApiResponse, AuthResponse, LoginRequest, UserResponse
from agenda.security import create_access_token, dummy_password_hash, verify_password_async
from agenda.services import user_service
from agenda.services.errors import ServiceError
from agenda.utils.exceptions import raise_for_service_error, raise_too_many_requests, raise_unauthorized

router = APIRouter(prefix="/auth", tags=["auth"])
logger = get_logger(__name__)

# SECURITY: Only trust X-Forwarded-For from known proxies
# Set TRUST_PROXY=true when behind a trusted reverse proxy (nginx, cloudflare, etc.)
TRUST_PROXY = os.getenv("TRUST_PROXY", "false").lower() in ("true", "1", "yes")


def _get_client_ip(request: Request) -> str:
    """Extract client IP from request, considering proxies."""
    if TRUST_PROXY:
        forwarded = request.headers.get("X-Forwarded-For")
        if forwarded:
            return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def _check_rate_limit(request: Request, limiter: RateLimiter, error_msg: str) -> None:
    allowed, retry_after = limiter.is_allowed(_get_client_ip(request))
    if not allowed:
        raise_too_many_requests(error_msg, retry_after=retry_after)


@router.post("/login", response_model=ApiResponse[AuthResponse])
async def login(request: Request, data: LoginRequest, db: DbSession) -> ApiResponse[AuthResponse]:
    """Login with email and password."""
    _check_rate_limit(request, login_rate_limiter, "Too many login attempts. Please try again later.")

    user = await user_service.find_user_by_email(db, data.email)
    hashed_password = user.hashed_password if user else dummy_password_hash()
    password_ok = await verify_password_async(data.password, hashed_password)

    if not user or not password_ok:
        logger.warning("Failed login attempt", client_ip=_get_client_ip(request))
        raise_unauthorized("Invalid email or password")

    logger.info("Successful login", user_id=str(user.id), client_ip=_get_client_ip(request))
    login_rate_limiter.reset(_get_client_ip(request))

    access_token = create_access_token(data={"sub": str(user.id), "role": user.role.value})

    return ApiResponse(
        status_code=status.HTTP_200_OK,
        data=AuthResponse(user=UserResponse.model_validate(user), access_token=access_token),
        message="Login successful",
    )


@router.get("/me", response_model=ApiResponse[UserResponse])
async def get_me(db: DbSession, principal: CurrentPrincipal) -> ApiResponse[UserResponse]:
    """Get current authenticated user."""
    try:
        user = await user_service.get_user(db, principal.id)
    except ServiceError as e:
        raise_for_service_error(e)

    return ApiResponse(
        status_code=status.HTTP_200_OK,
        data=UserResponse.model_validate(user),
        message="User found",
    )
