"""Registration, login and current-account routes."""

from fastapi import APIRouter, Depends, Request, status

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import get_auth_service
from api.v1.schemas.auth import (
    LoginRequest,
    RegisterRequest,
    TokenResponse,
    UserDetailResponse,
    UserResponse,
)
from core.rate_limit import AUTH_LIMIT, READ_LIMIT, limiter
from domain.services.auth_service import AuthService

users_router = APIRouter(prefix="/users", tags=["auth"])
router = APIRouter(prefix="/auth", tags=["auth"])


@users_router.post(
    "",
    response_model=TokenResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a user",
    responses={
        201: {"description": "User registered, token issued"},
        400: {"description": "Validation failed or email already registered"},
    },
)
@limiter.limit(AUTH_LIMIT)  # type: ignore[untyped-decorator]
async def register(
    request: Request,
    body: RegisterRequest,
    service: AuthService = Depends(get_auth_service),
) -> TokenResponse:
    """Create an account and return a signed session token."""
    token = await service.register(body.name, body.email, body.password)
    return TokenResponse(token=token)


@router.post(
    "",
    response_model=TokenResponse,
    summary="Log in",
    responses={
        200: {"description": "Credentials accepted, token issued"},
        400: {"description": "Invalid credentials"},
    },
)
@limiter.limit(AUTH_LIMIT)  # type: ignore[untyped-decorator]
async def login(
    request: Request,
    body: LoginRequest,
    service: AuthService = Depends(get_auth_service),
) -> TokenResponse:
    """Exchange email and password for a signed session token."""
    token = await service.login(body.email, body.password)
    return TokenResponse(token=token)


@router.get(
    "",
    response_model=UserDetailResponse,
    summary="Get the current account",
    responses={
        401: {"description": "Missing, invalid or expired token"},
        404: {"description": "Account no longer exists"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_me(
    request: Request,
    user: CurrentUser,
    service: AuthService = Depends(get_auth_service),
) -> UserDetailResponse:
    """Return the account the token was issued for, without its password hash."""
    account = await service.get_current_account(user.user_id)
    return UserDetailResponse(data=UserResponse.model_validate(account))
