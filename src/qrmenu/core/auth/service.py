"""Authentication service for login, setup, registration, and token management."""

from datetime import UTC, datetime
from typing import Annotated

import structlog
from fastapi import Depends

from qrmenu.config import settings
from qrmenu.core.auth.backend import (
    create_access_token,
    create_refresh_token,
    get_token_expiration,
    hash_password,
    hash_token,
    verify_password,
)
from qrmenu.core.auth.schemas import TokenPair
from qrmenu.core.constants import DEFAULT_MAX_STORES, DEFAULT_PLAN
from qrmenu.core.errors import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from qrmenu.core.permissions.policy import Principal, UserRole
from qrmenu.core.utils.timezone import ensure_utc
from qrmenu.modules.tenants.models import Subscription, Tenant, TenantStatus
from qrmenu.modules.tenants.repos import TenantRepo
from qrmenu.modules.users.models import User
from qrmenu.modules.users.repos import UserRepo
from qrmenu.modules.users.schemas import RegisterRequest, SetupRequest


logger = structlog.get_logger()


class AuthService:
    """Service for authentication operations.

    Each user holds a single refresh token: logging in or refreshing
    replaces the stored hash, so older tokens stop working.
    """

    def __init__(self, users: UserRepo, tenants: TenantRepo) -> None:
        self.users = users
        self.tenants = tenants

    async def setup(self, data: SetupRequest) -> tuple[User, TokenPair]:
        """Bootstrap the first tenant and its SUPER_ADMIN.

        Only allowed while no user exists.

        Returns:
            Tuple of (user, token_pair)

        Raises:
            ForbiddenError: If setup has already been completed
            ConflictError: If the tenant slug is taken
        """
        if await self.users.count() > 0:
            raise ForbiddenError(
                "Setup has already been completed",
                error_code="setup_completed",
            )
        if await self.tenants.get_by_slug(data.tenant_slug):
            raise ConflictError(
                "Tenant slug already in use",
                error_code="slug_exists",
                details={"slug": data.tenant_slug},
            )

        tenant = await self.tenants.create(
            Tenant(name=data.tenant_name, slug=data.tenant_slug),
            Subscription(plan=DEFAULT_PLAN, max_stores=DEFAULT_MAX_STORES),
        )
        user = await self.users.create(
            User(
                tenant_id=tenant.id,
                name=data.name,
                email=data.email,
                password_hash=hash_password(data.password),
                role=UserRole.SUPER_ADMIN,
            )
        )
        logger.info("setup_completed", user_id=str(user.id), tenant_id=str(tenant.id))

        token_pair = await self._issue_tokens(user)
        return await self._reload(user), token_pair

    async def login(self, email: str, password: str) -> tuple[User, TokenPair]:
        """Authenticate a user with email and password.

        Args:
            email: User's email address
            password: Plain text password

        Returns:
            Tuple of (user, token_pair)

        Raises:
            UnauthorizedError: If credentials are invalid
            ForbiddenError: If the user's tenant is not active
        """
        user = await self.users.get_by_email(email)
        if not user or not verify_password(password, user.password_hash):
            logger.info("login_failed", email=email)
            raise UnauthorizedError(
                "Invalid email or password",
                error_code="invalid_credentials",
            )

        self._ensure_tenant_active(user)

        token_pair = await self._issue_tokens(user)
        logger.info("login_succeeded", user_id=str(user.id))
        return user, token_pair

    async def refresh_tokens(self, refresh_token: str) -> tuple[User, TokenPair]:
        """Exchange a refresh token for a new token pair.

        Raises:
            UnauthorizedError: If the token is unknown, superseded or expired
        """
        user = await self.users.get_by_refresh_hash(hash_token(refresh_token))
        if not user:
            raise UnauthorizedError(
                "Invalid refresh token",
                error_code="invalid_refresh_token",
            )

        # An expired token stays on the row until the next login replaces it
        expires_at = user.refresh_token_expires_at
        if expires_at is None or ensure_utc(expires_at) < datetime.now(UTC):
            logger.info("refresh_token_expired", user_id=str(user.id))
            raise UnauthorizedError(
                "Refresh token expired",
                error_code="token_expired",
            )

        self._ensure_tenant_active(user)
        return user, await self._issue_tokens(user)

    async def logout(self, refresh_token: str) -> None:
        """Forget the user's refresh token. Unknown tokens are ignored."""
        user = await self.users.get_by_refresh_hash(hash_token(refresh_token))
        if user:
            user.refresh_token_hash = None
            user.refresh_token_expires_at = None
            await self.users.update(user)
            logger.info("logout", user_id=str(user.id))

    async def register(self, data: RegisterRequest, principal: Principal) -> User:
        """Create an OWNER or MANAGER account.

        A SUPER_ADMIN names the tenant; an OWNER always registers into their
        own tenant and may only create managers.

        Raises:
            ForbiddenError: If an OWNER tries to create another OWNER
            ValidationError: If a SUPER_ADMIN omits the tenant
            NotFoundError: If the tenant does not exist
            ConflictError: If the email is already registered
        """
        if principal.is_super_admin:
            if data.tenant_id is None:
                raise ValidationError(
                    "Tenant ID is required",
                    errors=[{"field": "tenantId", "message": "Field required"}],
                    error_code="tenant_required",
                )
            tenant_id = data.tenant_id
        else:
            if data.role != UserRole.MANAGER:
                raise ForbiddenError(
                    "Owners can only register managers",
                    error_code="insufficient_role",
                )
            tenant_id = principal.tenant_id

        if tenant_id is None or not await self.tenants.get_by_id(tenant_id):
            raise NotFoundError(
                "Tenant not found", resource="tenant", resource_id=str(tenant_id)
            )

        if await self.users.get_by_email(data.email):
            raise ConflictError(
                "Email already registered",
                error_code="email_exists",
                details={"email": data.email},
            )

        user = await self.users.create(
            User(
                tenant_id=tenant_id,
                name=data.name,
                email=data.email,
                password_hash=hash_password(data.password),
                role=data.role,
            )
        )
        logger.info(
            "user_registered",
            user_id=str(user.id),
            tenant_id=str(tenant_id),
            role=str(data.role),
            registered_by=str(principal.user_id),
        )
        return await self._reload(user)

    @staticmethod
    def _ensure_tenant_active(user: User) -> None:
        if user.role == UserRole.SUPER_ADMIN or user.tenant is None:
            return
        if user.tenant.status != TenantStatus.ACTIVE:
            raise ForbiddenError(
                "Tenant account is not active",
                error_code="tenant_suspended",
            )

    async def _issue_tokens(self, user: User) -> TokenPair:
        """Create a token pair and store the refresh token's hash on the user."""
        access_token = create_access_token(
            user.id,
            user.tenant_id,
            str(user.role),
            additional_claims={"email": user.email},
        )
        refresh_token = create_refresh_token()

        user.refresh_token_hash = hash_token(refresh_token)
        user.refresh_token_expires_at = get_token_expiration()
        await self.users.update(user)

        return TokenPair(
            access_token=access_token,
            refresh_token=refresh_token,
            expires_in=settings.access_token_expire_minutes * 60,
        )

    async def _reload(self, user: User) -> User:
        reloaded = await self.users.get_by_id(user.id)
        return reloaded or user


# Type alias for dependency injection
AuthSvc = Annotated[AuthService, Depends(AuthService)]
