"""Store repository for database operations."""

from typing import Annotated
from uuid import UUID

from fastapi import Depends
from sqlalchemy import Select, func, select, update
from sqlalchemy.orm import selectinload

from qrmenu.api.dependencies import DBSession
from qrmenu.modules.categories.models import Category
from qrmenu.modules.orders.models import Order
from qrmenu.modules.products.models import Product
from qrmenu.modules.stores.models import Store
from qrmenu.modules.tables.models import DiningTable


class StoreRepository:
    """Repository for Store database operations."""

    def __init__(self, session: DBSession) -> None:
        self.session = session

    async def create(self, store: Store) -> Store:
        self.session.add(store)
        await self.session.flush()
        return store

    async def get_by_id(self, store_id: UUID) -> Store | None:
        result = await self.session.execute(self._select().where(Store.id == store_id))
        return result.scalar_one_or_none()

    async def get_by_slug(self, slug: str) -> Store | None:
        result = await self.session.execute(self._select().where(Store.slug == slug))
        return result.scalar_one_or_none()

    async def get_with_menu(self, store_id: UUID) -> Store | None:
        """Load a store with categories (and their products) and tables."""
        result = await self.session.execute(
            self._select()
            .where(Store.id == store_id)
            .options(
                selectinload(Store.categories).selectinload(Category.products),
                selectinload(Store.tables),
            )
        )
        return result.scalar_one_or_none()

    async def list_all(self, tenant_id: UUID | None = None) -> list[Store]:
        """List stores newest first, optionally limited to one tenant."""
        stmt = self._select().order_by(Store.created_at.desc())
        if tenant_id is not None:
            stmt = stmt.where(Store.tenant_id == tenant_id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count_for_tenant(self, tenant_id: UUID) -> int:
        result = await self.session.execute(
            select(func.count(Store.id)).where(Store.tenant_id == tenant_id)
        )
        return result.scalar_one()

    async def count_by_tenant(self, tenant_ids: list[UUID]) -> dict[UUID, int]:
        """Count stores per tenant."""
        if not tenant_ids:
            return {}
        result = await self.session.execute(
            select(Store.tenant_id, func.count(Store.id))
            .where(Store.tenant_id.in_(tenant_ids))
            .group_by(Store.tenant_id)
        )
        return {tenant_id: count for tenant_id, count in result.all()}

    async def slug_exists(self, slug: str, exclude_id: UUID | None = None) -> bool:
        stmt = select(Store.id).where(Store.slug == slug)
        if exclude_id is not None:
            stmt = stmt.where(Store.id != exclude_id)
        result = await self.session.execute(stmt.limit(1))
        return result.first() is not None

    async def related_counts(self, store_ids: list[UUID]) -> dict[UUID, dict[str, int]]:
        """Count tables, products and orders for each store."""
        counts: dict[UUID, dict[str, int]] = {
            store_id: {"table_count": 0, "product_count": 0, "order_count": 0}
            for store_id in store_ids
        }
        if not store_ids:
            return counts

        for key, model in (
            ("table_count", DiningTable),
            ("product_count", Product),
            ("order_count", Order),
        ):
            result = await self.session.execute(
                select(model.store_id, func.count(model.id))
                .where(model.store_id.in_(store_ids))
                .group_by(model.store_id)
            )
            for store_id, count in result.all():
                counts[store_id][key] = count
        return counts

    async def next_order_sequence(self, store_id: UUID) -> int:
        """Atomically increment and return the store's order sequence.

        A single ``UPDATE ... RETURNING`` holds the row lock until the
        surrounding transaction ends, so concurrent orders for one store
        get distinct, increasing numbers.
        """
        result = await self.session.execute(
            update(Store)
            .where(Store.id == store_id)
            .values(order_sequence=Store.order_sequence + 1)
            .returning(Store.order_sequence)
            .execution_options(synchronize_session=False)
        )
        return result.scalar_one()

    async def update(self, store: Store) -> Store:
        await self.session.flush()
        return store

    @staticmethod
    def _select() -> Select[tuple[Store]]:
        # populate_existing re-runs eager loaders on identity-map hits
        return (
            select(Store)
            .options(selectinload(Store.tenant))
            .execution_options(populate_existing=True)
        )


# Type alias for dependency injection
StoreRepo = Annotated[StoreRepository, Depends(StoreRepository)]
