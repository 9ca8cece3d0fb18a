"""FastAPI dependencies for authentication.

This module provides FastAPI dependency injection functions for:
- Extracting and validating JWT access tokens
- Loading the current authenticated user
- Building the request Principal used by the authorization policy
"""

from typing import Annotated, Any

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from qrmenu.api.dependencies import DBSession
from qrmenu.core.auth.backend import decode_token
from qrmenu.core.auth.schemas import TokenData
from qrmenu.core.errors import ForbiddenError, UnauthorizedError
from qrmenu.core.permissions.policy import Principal, UserRole


# HTTP Bearer token security scheme
bearer_scheme = HTTPBearer(auto_error=False)


async def get_token_data(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> TokenData:
    """Extract and validate token data from the Authorization header.

    Args:
        credentials: Bearer token credentials from the request

    Returns:
        Decoded token data

    Raises:
        UnauthorizedError: If token is missing or invalid
    """
    if not credentials:
        raise UnauthorizedError(
            "Missing authentication token",
            error_code="missing_token",
        )

    token_data = decode_token(credentials.credentials)
    if not token_data:
        raise UnauthorizedError(
            "Invalid or expired token",
            error_code="invalid_token",
        )

    if token_data.type != "access":
        raise UnauthorizedError(
            "Invalid token type",
            error_code="invalid_token_type",
        )

    return token_data


async def get_current_user(
    token_data: Annotated[TokenData, Depends(get_token_data)],
    db: DBSession,
) -> Any:  # Returns User, but use Any to avoid circular import
    """Get the currently authenticated user.

    Args:
        token_data: Validated token data
        db: Database session

    Returns:
        The authenticated user

    Raises:
        UnauthorizedError: If the user no longer exists
        ForbiddenError: If the user's tenant is not active
    """
    from qrmenu.modules.tenants.models import TenantStatus  # noqa: PLC0415
    from qrmenu.modules.users.repos import UserRepository  # noqa: PLC0415

    repo = UserRepository(db)
    user = await repo.get_by_id(token_data.user_id)

    if not user:
        raise UnauthorizedError(
            "User not found",
            error_code="user_not_found",
        )

    if (
        user.role != UserRole.SUPER_ADMIN
        and user.tenant is not None
        and user.tenant.status != TenantStatus.ACTIVE
    ):
        raise ForbiddenError(
            "Tenant account is not active",
            error_code="tenant_suspended",
        )

    return user


async def get_principal(
    user: Annotated[Any, Depends(get_current_user)],
) -> Principal:
    """Build the authorization principal for the current user.

    Role and tenant come from the database row, not the token, so role
    changes apply to already-issued access tokens.
    """
    return Principal(
        user_id=user.id,
        tenant_id=user.tenant_id,
        role=UserRole(user.role),
    )


# Type aliases for cleaner dependency injection
# Use Any for User type to avoid circular imports at runtime
CurrentUser = Annotated[Any, Depends(get_current_user)]
CurrentPrincipal = Annotated[Principal, Depends(get_principal)]
