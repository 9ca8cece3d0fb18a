"""Tenant service for business logic."""

from typing import Annotated
from uuid import UUID

import structlog
from fastapi import Depends

from qrmenu.core.constants import DEFAULT_MAX_STORES, DEFAULT_PLAN
from qrmenu.core.errors import ConflictError, NotFoundError
from qrmenu.modules.stores.repos import StoreRepo
from qrmenu.modules.tenants.models import Subscription, Tenant, TenantStatus
from qrmenu.modules.tenants.repos import TenantRepo
from qrmenu.modules.tenants.schemas import (
    StoreSummary,
    SubscriptionUpdate,
    TenantCreate,
    TenantDetail,
    TenantListItem,
    TenantRead,
    TenantUpdate,
)
from qrmenu.modules.users.repos import UserRepo
from qrmenu.modules.users.schemas import UserRead


logger = structlog.get_logger()


class TenantService:
    """Service for tenant administration.

    Only a SUPER_ADMIN reaches these operations. Tenants are soft deleted
    by moving them to the DELETED status.
    """

    def __init__(self, repo: TenantRepo, stores: StoreRepo, users: UserRepo) -> None:
        self.repo = repo
        self.stores = stores
        self.users = users

    async def list_tenants(self) -> list[TenantListItem]:
        tenants = await self.repo.list_all()
        tenant_ids = [tenant.id for tenant in tenants]
        store_counts = await self.stores.count_by_tenant(tenant_ids)
        user_counts = await self.users.count_by_tenant(tenant_ids)
        return [
            TenantListItem.model_validate(tenant).model_copy(
                update={
                    "store_count": store_counts.get(tenant.id, 0),
                    "user_count": user_counts.get(tenant.id, 0),
                }
            )
            for tenant in tenants
        ]

    async def create_tenant(self, data: TenantCreate) -> Tenant:
        """Create a tenant on the default plan.

        Raises:
            ConflictError: If the slug is taken
        """
        await self._ensure_slug_free(data.slug)
        tenant = await self.repo.create(
            Tenant(name=data.name, slug=data.slug, status=TenantStatus.ACTIVE),
            Subscription(plan=DEFAULT_PLAN, max_stores=DEFAULT_MAX_STORES),
        )
        logger.info("tenant_created", tenant_id=str(tenant.id), slug=tenant.slug)
        return tenant

    async def get_tenant(self, tenant_id: UUID) -> Tenant:
        tenant = await self.repo.get_by_id(tenant_id)
        if not tenant:
            raise NotFoundError(
                "Tenant not found", resource="tenant", resource_id=str(tenant_id)
            )
        return tenant

    async def get_tenant_detail(self, tenant_id: UUID) -> TenantDetail:
        """Get a tenant with its stores and users."""
        tenant = await self.get_tenant(tenant_id)
        stores = await self.stores.list_all(tenant_id)
        users = await self.users.list_by_tenant(tenant_id)
        return TenantDetail(
            **TenantRead.model_validate(tenant).model_dump(),
            stores=[StoreSummary.model_validate(store) for store in stores],
            users=[UserRead.model_validate(user) for user in users],
        )

    async def update_tenant(self, tenant_id: UUID, data: TenantUpdate) -> Tenant:
        """Update a tenant's name, slug or status.

        Raises:
            NotFoundError: If the tenant does not exist
            ConflictError: If the new slug is taken
        """
        tenant = await self.get_tenant(tenant_id)

        if data.slug and data.slug != tenant.slug:
            await self._ensure_slug_free(data.slug)
            tenant.slug = data.slug
        if data.name:
            tenant.name = data.name
        if data.status:
            if data.status != tenant.status:
                logger.info(
                    "tenant_status_changed",
                    tenant_id=str(tenant_id),
                    old_status=tenant.status,
                    new_status=data.status,
                )
            tenant.status = data.status

        return await self.repo.update(tenant)

    async def update_subscription(
        self,
        tenant_id: UUID,
        data: SubscriptionUpdate,
    ) -> Tenant:
        """Change a tenant's plan or store cap, creating the subscription if missing."""
        tenant = await self.get_tenant(tenant_id)

        if tenant.subscription is None:
            tenant.subscription = Subscription(
                plan=DEFAULT_PLAN, max_stores=DEFAULT_MAX_STORES
            )
        if data.plan is not None:
            tenant.subscription.plan = data.plan
        if data.max_stores is not None:
            tenant.subscription.max_stores = data.max_stores

        return await self.repo.update(tenant)

    async def delete_tenant(self, tenant_id: UUID) -> Tenant:
        """Soft delete a tenant. Its users can no longer sign in."""
        tenant = await self.get_tenant(tenant_id)
        tenant.status = TenantStatus.DELETED
        logger.info("tenant_deleted", tenant_id=str(tenant_id))
        return await self.repo.update(tenant)

    async def _ensure_slug_free(self, slug: str) -> None:
        if await self.repo.get_by_slug(slug):
            raise ConflictError(
                "Tenant slug already in use",
                error_code="slug_exists",
                details={"slug": slug},
            )


# Type alias for dependency injection
TenantSvc = Annotated[TenantService, Depends(TenantService)]
