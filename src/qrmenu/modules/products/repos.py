"""Product repository for database operations."""

from typing import Annotated
from uuid import UUID

from fastapi import Depends
from sqlalchemy import Select, select
from sqlalchemy.orm import selectinload

from qrmenu.api.dependencies import DBSession
from qrmenu.modules.products.models import Product


class ProductRepository:
    """Repository for Product database operations."""

    def __init__(self, session: DBSession) -> None:
        self.session = session

    async def create(self, product: Product) -> Product:
        self.session.add(product)
        await self.session.flush()
        return product

    async def get_by_id(self, product_id: UUID) -> Product | None:
        result = await self.session.execute(
            self._select().where(Product.id == product_id)
        )
        return result.scalar_one_or_none()

    async def get_many_in_store(
        self, store_id: UUID, product_ids: list[UUID]
    ) -> list[Product]:
        """Fetch the given products, ignoring any that belong to another store."""
        if not product_ids:
            return []
        result = await self.session.execute(
            self._select().where(
                Product.store_id == store_id, Product.id.in_(product_ids)
            )
        )
        return list(result.scalars().all())

    async def list_by_store(
        self,
        store_id: UUID,
        category_id: UUID | None = None,
    ) -> list[Product]:
        """List a store's products by sort order then name."""
        stmt = (
            self._select()
            .where(Product.store_id == store_id)
            .order_by(Product.sort_order, Product.name)
        )
        if category_id is not None:
            stmt = stmt.where(Product.category_id == category_id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def slug_exists(
        self,
        store_id: UUID,
        slug: str,
        exclude_id: UUID | None = None,
    ) -> bool:
        stmt = select(Product.id).where(
            Product.store_id == store_id, Product.slug == slug
        )
        if exclude_id is not None:
            stmt = stmt.where(Product.id != exclude_id)
        result = await self.session.execute(stmt.limit(1))
        return result.first() is not None

    async def update(self, product: Product) -> Product:
        await self.session.flush()
        return product

    async def delete(self, product: Product) -> None:
        await self.session.delete(product)
        await self.session.flush()

    async def commit(self) -> None:
        """Commit so listeners are only told about persisted changes."""
        await self.session.commit()

    @staticmethod
    def _select() -> Select[tuple[Product]]:
        # populate_existing re-runs eager loaders on identity-map hits
        return (
            select(Product)
            .options(selectinload(Product.category))
            .execution_options(populate_existing=True)
        )


# Type alias for dependency injection
ProductRepo = Annotated[ProductRepository, Depends(ProductRepository)]
