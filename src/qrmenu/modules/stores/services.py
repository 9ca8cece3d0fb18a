"""Store service for business logic."""

from collections.abc import Iterable
from typing import Annotated
from uuid import UUID

import structlog
from fastapi import Depends

from qrmenu.core.errors import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
)
from qrmenu.core.permissions import (
    OWNER_ROLES,
    STAFF_ROLES,
    Principal,
    UserRole,
    ensure_access,
)
from qrmenu.modules.stores.models import Store
from qrmenu.modules.stores.repos import StoreRepo, StoreRepository
from qrmenu.modules.stores.schemas import (
    StoreCreate,
    StoreDetail,
    StoreListItem,
    StoreUpdate,
)
from qrmenu.modules.tenants.repos import TenantRepo


logger = structlog.get_logger()


async def load_store_for(
    repo: StoreRepository,
    principal: Principal,
    store_id: UUID,
    roles: Iterable[UserRole] = STAFF_ROLES,
) -> Store:
    """Load a store and check the principal may act on it.

    Raises:
        NotFoundError: If the store does not exist
        ForbiddenError: If the store belongs to another tenant
    """
    store = await repo.get_by_id(store_id)
    if not store:
        raise NotFoundError(
            "Store not found", resource="store", resource_id=str(store_id)
        )
    ensure_access(principal, roles, store.tenant_id)
    return store


class StoreService:
    """Service for store management.

    Owners manage the stores of their own tenant; a SUPER_ADMIN sees and
    manages every store.
    """

    def __init__(self, repo: StoreRepo, tenants: TenantRepo) -> None:
        self.repo = repo
        self.tenants = tenants

    async def list_stores(self, principal: Principal) -> list[StoreListItem]:
        tenant_id = None if principal.is_super_admin else principal.tenant_id
        stores = await self.repo.list_all(tenant_id)
        counts = await self.repo.related_counts([store.id for store in stores])
        return [
            StoreListItem.model_validate(store).model_copy(update=counts[store.id])
            for store in stores
        ]

    async def create_store(self, data: StoreCreate, principal: Principal) -> Store:
        """Create a store inside the tenant's subscription limit.

        Args:
            data: Store fields
            principal: The caller; a SUPER_ADMIN may target another tenant
                with ``data.tenant_id``

        Returns:
            The created store

        Raises:
            ValidationError: If no tenant can be determined
            ForbiddenError: If the tenant already owns ``max_stores`` stores
            ConflictError: If the slug is taken
        """
        tenant_id = principal.tenant_id
        if principal.is_super_admin and data.tenant_id:
            tenant_id = data.tenant_id
        if tenant_id is None:
            raise ValidationError(
                "Tenant ID is required", error_code="tenant_required"
            )

        tenant = await self.tenants.get_by_id(tenant_id)
        if not tenant:
            raise NotFoundError(
                "Tenant not found", resource="tenant", resource_id=str(tenant_id)
            )

        subscription = tenant.subscription
        if subscription is not None:
            store_count = await self.repo.count_for_tenant(tenant_id)
            if store_count >= subscription.max_stores:
                raise ForbiddenError(
                    f"Your plan allows {subscription.max_stores} store(s)",
                    error_code="store_limit_reached",
                    details={"max_stores": subscription.max_stores},
                )

        if await self.repo.slug_exists(data.slug):
            raise ConflictError(
                "Store slug already in use",
                error_code="slug_exists",
                details={"slug": data.slug},
            )

        store = Store(
            tenant_id=tenant_id,
            **data.model_dump(exclude={"tenant_id"}),
        )
        store = await self.repo.create(store)
        logger.info("store_created", store_id=str(store.id), tenant_id=str(tenant_id))
        return store

    async def get_store(self, store_id: UUID, principal: Principal) -> Store:
        return await load_store_for(self.repo, principal, store_id, OWNER_ROLES)

    async def get_store_detail(
        self, store_id: UUID, principal: Principal
    ) -> StoreDetail:
        """Get a store with its categories, products, tables and order count."""
        await self.get_store(store_id, principal)
        store = await self.repo.get_with_menu(store_id)
        counts = await self.repo.related_counts([store_id])
        return StoreDetail.model_validate(store).model_copy(
            update={"order_count": counts[store_id]["order_count"]}
        )

    async def update_store(
        self,
        store_id: UUID,
        data: StoreUpdate,
        principal: Principal,
    ) -> Store:
        """Update a store.

        Raises:
            NotFoundError: If the store does not exist
            ConflictError: If the new slug is taken
        """
        store = await self.get_store(store_id, principal)

        changes = data.model_dump(exclude_unset=True)
        slug = changes.get("slug")
        if slug and await self.repo.slug_exists(slug, store.id):
            raise ConflictError(
                "Store slug already in use",
                error_code="slug_exists",
                details={"slug": slug},
            )

        for field, value in changes.items():
            if value is None and field in ("name", "slug", "is_active"):
                continue
            setattr(store, field, value)

        return await self.repo.update(store)

    async def deactivate_store(self, store_id: UUID, principal: Principal) -> Store:
        """Deactivate a store. Stores are never hard deleted."""
        store = await self.get_store(store_id, principal)
        store.is_active = False
        logger.info("store_deactivated", store_id=str(store_id))
        return await self.repo.update(store)


# Type alias for dependency injection
StoreSvc = Annotated[StoreService, Depends(StoreService)]
