"""Authentication API routes.

Provides endpoints for:
- One-time setup of the first tenant and super admin
- Login/logout
- Token refresh
- Registering staff accounts
"""

from fastapi import APIRouter, Request, status

from qrmenu.config import settings
from qrmenu.core.auth.dependencies import CurrentUser
from qrmenu.core.auth.schemas import TokenPair
from qrmenu.core.auth.service import AuthSvc
from qrmenu.core.permissions.dependencies import OwnerPrincipal
from qrmenu.core.rate_limit import rate_limit
from qrmenu.core.schemas import ApiResponse
from qrmenu.modules.users.models import User
from qrmenu.modules.users.schemas import (
    AuthResponse,
    LoginRequest,
    RefreshTokenRequest,
    RegisterRequest,
    SetupRequest,
    UserProfile,
)


router = APIRouter(prefix="/auth", tags=["auth"])


def _auth_limit() -> int:
    return settings.auth_rate_limit_requests


def _auth_window() -> int:
    return settings.auth_rate_limit_window


def _auth_response(user: User, tokens: TokenPair) -> AuthResponse:
    return AuthResponse(
        access_token=tokens.access_token,
        refresh_token=tokens.refresh_token,
        expires_in=tokens.expires_in,
        user=UserProfile.model_validate(user),
    )


@router.post(
    "/setup",
    response_model=ApiResponse[AuthResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Initial setup",
    description=(
        "Creates the first tenant and a SUPER_ADMIN account. "
        "Refused once any user exists."
    ),
)
@rate_limit(requests=_auth_limit, window=_auth_window)
async def setup(
    request: Request,  # noqa: ARG001
    data: SetupRequest,
    service: AuthSvc,
) -> ApiResponse[AuthResponse]:
    user, tokens = await service.setup(data)
    return ApiResponse(data=_auth_response(user, tokens), message="Setup completed")


@router.post(
    "/login",
    response_model=ApiResponse[AuthResponse],
    summary="Login with email and password",
    description="Returns an access token, a refresh token and the user profile.",
)
@rate_limit(requests=_auth_limit, window=_auth_window)
async def login(
    request: Request,  # noqa: ARG001
    data: LoginRequest,
    service: AuthSvc,
) -> ApiResponse[AuthResponse]:
    user, tokens = await service.login(data.email, data.password)
    return ApiResponse(data=_auth_response(user, tokens))


@router.post(
    "/refresh",
    response_model=ApiResponse[AuthResponse],
    summary="Refresh access token",
    description="Exchanges a refresh token for a new pair and revokes the old one.",
)
@rate_limit(requests=_auth_limit, window=_auth_window)
async def refresh_token(
    request: Request,  # noqa: ARG001
    data: RefreshTokenRequest,
    service: AuthSvc,
) -> ApiResponse[AuthResponse]:
    user, tokens = await service.refresh_tokens(data.refresh_token)
    return ApiResponse(data=_auth_response(user, tokens))


@router.post(
    "/logout",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Logout",
    description="Revokes the refresh token.",
)
async def logout(
    data: RefreshTokenRequest,
    service: AuthSvc,
) -> None:
    await service.logout(data.refresh_token)


@router.post(
    "/register",
    response_model=ApiResponse[UserProfile],
    status_code=status.HTTP_201_CREATED,
    summary="Register staff account",
    description=(
        "SUPER_ADMIN registers an OWNER or MANAGER into any tenant; an OWNER "
        "registers managers into their own tenant."
    ),
)
async def register(
    data: RegisterRequest,
    principal: OwnerPrincipal,
    service: AuthSvc,
) -> ApiResponse[UserProfile]:
    user = await service.register(data, principal)
    return ApiResponse(data=UserProfile.model_validate(user))


@router.get(
    "/me",
    response_model=ApiResponse[UserProfile],
    summary="Get current user",
    description="Returns the authenticated user's profile and tenant.",
)
async def get_me(current_user: CurrentUser) -> ApiResponse[UserProfile]:
    return ApiResponse(data=UserProfile.model_validate(current_user))
