"""Pydantic schemas for users and authentication."""

from datetime import datetime
from uuid import UUID

from pydantic import EmailStr, Field, field_validator

from qrmenu.core.constants import (
    MAX_NAME_LENGTH,
    MAX_PASSWORD_LENGTH,
    MAX_SLUG_LENGTH,
    MIN_PASSWORD_LENGTH,
    SLUG_PATTERN,
)
from qrmenu.core.permissions.policy import UserRole
from qrmenu.core.schemas import CamelModel


# ============================================================
# User Schemas
# ============================================================


class TenantSummary(CamelModel):
    """Tenant fields embedded in a user profile."""

    id: UUID
    name: str
    slug: str


class UserRead(CamelModel):
    """Schema for user response data."""

    id: UUID
    name: str
    email: str
    role: UserRole
    tenant_id: UUID | None
    created_at: datetime


class UserProfile(UserRead):
    """User with their tenant, as returned by /auth/me and login."""

    tenant: TenantSummary | None = None


# ============================================================
# Auth Request Schemas
# ============================================================


class LoginRequest(CamelModel):
    """Schema for login request."""

    email: EmailStr
    password: str = Field(
        ..., min_length=MIN_PASSWORD_LENGTH, max_length=MAX_PASSWORD_LENGTH
    )


class RefreshTokenRequest(CamelModel):
    """Schema for refresh and logout requests."""

    refresh_token: str = Field(..., min_length=1)


class RegisterRequest(CamelModel):
    """Schema for creating a staff account.

    ``tenant_id`` is required when a SUPER_ADMIN registers a user and
    ignored for an OWNER, who always registers into their own tenant.
    """

    name: str = Field(..., min_length=1, max_length=MAX_NAME_LENGTH)
    email: EmailStr
    password: str = Field(
        ..., min_length=MIN_PASSWORD_LENGTH, max_length=MAX_PASSWORD_LENGTH
    )
    role: UserRole
    tenant_id: UUID | None = None

    @field_validator("role")
    @classmethod
    def staff_role_only(cls, v: UserRole) -> UserRole:
        """Only OWNER and MANAGER accounts can be registered."""
        if v == UserRole.SUPER_ADMIN:
            raise ValueError("role must be OWNER or MANAGER")
        return v


class SetupRequest(CamelModel):
    """Schema for the one-time bootstrap of the first tenant and super admin."""

    tenant_name: str = Field(..., min_length=1, max_length=MAX_NAME_LENGTH)
    tenant_slug: str = Field(
        ..., min_length=1, max_length=MAX_SLUG_LENGTH, pattern=SLUG_PATTERN
    )
    name: str = Field(..., min_length=1, max_length=MAX_NAME_LENGTH)
    email: EmailStr
    password: str = Field(
        ..., min_length=MIN_PASSWORD_LENGTH, max_length=MAX_PASSWORD_LENGTH
    )


# ============================================================
# Auth Response Schemas
# ============================================================


class TokenResponse(CamelModel):
    """Access and refresh token pair."""

    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: int


class AuthResponse(TokenResponse):
    """Token pair plus the authenticated user."""

    user: UserProfile
