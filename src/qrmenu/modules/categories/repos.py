"""Category repository for database operations."""

from typing import Annotated
from uuid import UUID

from fastapi import Depends
from sqlalchemy import func, select
from sqlalchemy.orm import selectinload

from qrmenu.api.dependencies import DBSession
from qrmenu.modules.categories.models import Category
from qrmenu.modules.products.models import Product


class CategoryRepository:
    """Repository for Category database operations."""

    def __init__(self, session: DBSession) -> None:
        self.session = session

    async def create(self, category: Category) -> Category:
        self.session.add(category)
        await self.session.flush()
        return category

    async def get_by_id(self, category_id: UUID) -> Category | None:
        result = await self.session.execute(
            select(Category)
            .where(Category.id == category_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def list_by_store(self, store_id: UUID) -> list[tuple[Category, int]]:
        """List a store's categories by sort order, each with its product count."""
        product_count = (
            select(func.count(Product.id))
            .where(Product.category_id == Category.id)
            .correlate(Category)
            .scalar_subquery()
        )
        result = await self.session.execute(
            select(Category, product_count)
            .where(Category.store_id == store_id)
            .order_by(Category.sort_order, Category.name)
        )
        return [(category, count) for category, count in result.all()]

    async def list_active_with_products(self, store_id: UUID) -> list[Category]:
        """List a store's active categories with their products loaded."""
        result = await self.session.execute(
            select(Category)
            .where(Category.store_id == store_id, Category.is_active.is_(True))
            .options(selectinload(Category.products))
            .order_by(Category.sort_order, Category.name)
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    async def slug_exists(
        self,
        store_id: UUID,
        slug: str,
        exclude_id: UUID | None = None,
    ) -> bool:
        stmt = select(Category.id).where(
            Category.store_id == store_id, Category.slug == slug
        )
        if exclude_id is not None:
            stmt = stmt.where(Category.id != exclude_id)
        result = await self.session.execute(stmt.limit(1))
        return result.first() is not None

    async def update(self, category: Category) -> Category:
        await self.session.flush()
        return category

    async def delete(self, category: Category) -> None:
        await self.session.delete(category)
        await self.session.flush()


# Type alias for dependency injection
CategoryRepo = Annotated[CategoryRepository, Depends(CategoryRepository)]
