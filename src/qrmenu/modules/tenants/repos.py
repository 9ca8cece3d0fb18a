"""Tenant repository for database operations."""

from typing import Annotated
from uuid import UUID

from fastapi import Depends
from sqlalchemy import Select, select
from sqlalchemy.orm import selectinload

from qrmenu.api.dependencies import DBSession
from qrmenu.modules.tenants.models import Subscription, Tenant


class TenantRepository:
    """Repository for Tenant and Subscription database operations."""

    def __init__(self, session: DBSession) -> None:
        self.session = session

    async def create(self, tenant: Tenant, subscription: Subscription) -> Tenant:
        """Create a tenant together with its subscription.

        Args:
            tenant: Tenant instance to create
            subscription: Subscription to attach

        Returns:
            The created tenant with ID populated
        """
        tenant.subscription = subscription
        self.session.add(tenant)
        await self.session.flush()
        return tenant

    async def get_by_id(self, tenant_id: UUID) -> Tenant | None:
        result = await self.session.execute(
            self._select().where(Tenant.id == tenant_id)
        )
        return result.scalar_one_or_none()

    async def get_by_slug(self, slug: str) -> Tenant | None:
        result = await self.session.execute(self._select().where(Tenant.slug == slug))
        return result.scalar_one_or_none()

    async def list_all(self) -> list[Tenant]:
        """List every tenant, newest first, including soft-deleted ones."""
        result = await self.session.execute(
            self._select().order_by(Tenant.created_at.desc())
        )
        return list(result.scalars().all())

    async def update(self, tenant: Tenant) -> Tenant:
        """Flush pending changes to a tenant."""
        await self.session.flush()
        return tenant

    @staticmethod
    def _select() -> Select[tuple[Tenant]]:
        # populate_existing re-runs eager loaders on identity-map hits
        return (
            select(Tenant)
            .options(selectinload(Tenant.subscription))
            .execution_options(populate_existing=True)
        )


# Type alias for dependency injection
TenantRepo = Annotated[TenantRepository, Depends(TenantRepository)]
