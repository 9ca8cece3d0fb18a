"""Pydantic schemas for tenant operations."""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from qrmenu.core.constants import MAX_NAME_LENGTH, MAX_SLUG_LENGTH, SLUG_PATTERN
from qrmenu.core.schemas import CamelModel
from qrmenu.modules.tenants.models import TenantStatus
from qrmenu.modules.users.schemas import UserRead


class TenantCreate(CamelModel):
    """Schema for creating a tenant."""

    name: str = Field(..., min_length=1, max_length=MAX_NAME_LENGTH)
    slug: str = Field(
        ..., min_length=1, max_length=MAX_SLUG_LENGTH, pattern=SLUG_PATTERN
    )


class TenantUpdate(CamelModel):
    """Schema for updating a tenant. Omitted fields are left unchanged."""

    name: str | None = Field(None, min_length=1, max_length=MAX_NAME_LENGTH)
    slug: str | None = Field(
        None, min_length=1, max_length=MAX_SLUG_LENGTH, pattern=SLUG_PATTERN
    )
    status: TenantStatus | None = None


class SubscriptionRead(CamelModel):
    plan: str
    max_stores: int


class SubscriptionUpdate(CamelModel):
    """Schema for changing a tenant's plan or store cap."""

    plan: str | None = Field(None, min_length=1, max_length=50)
    max_stores: int | None = Field(None, ge=0)


class StoreSummary(CamelModel):
    id: UUID
    name: str
    slug: str
    is_active: bool


class TenantRead(CamelModel):
    """Schema for tenant response data."""

    id: UUID
    name: str
    slug: str
    status: TenantStatus
    created_at: datetime
    subscription: SubscriptionRead | None = None


class TenantListItem(TenantRead):
    """Tenant with store and user counts."""

    store_count: int = 0
    user_count: int = 0


class TenantDetail(TenantRead):
    """Tenant with its stores and users."""

    stores: list[StoreSummary] = []
    users: list[UserRead] = []
