"""Category service for business logic."""

from typing import Annotated
from uuid import UUID

import structlog
from fastapi import Depends

from qrmenu.core.errors import ConflictError, NotFoundError, ValidationError
from qrmenu.core.permissions import Principal
from qrmenu.core.utils.text import generate_slug
from qrmenu.modules.categories.models import Category
from qrmenu.modules.categories.repos import CategoryRepo
from qrmenu.modules.categories.schemas import (
    CategoryCreate,
    CategoryListItem,
    CategoryUpdate,
)
from qrmenu.modules.stores.repos import StoreRepo
from qrmenu.modules.stores.services import load_store_for


logger = structlog.get_logger()


class CategoryService:
    """Service for menu categories, scoped to the caller's tenant."""

    def __init__(self, repo: CategoryRepo, stores: StoreRepo) -> None:
        self.repo = repo
        self.stores = stores

    async def list_categories(
        self, store_id: UUID, principal: Principal
    ) -> list[CategoryListItem]:
        await load_store_for(self.stores, principal, store_id)
        rows = await self.repo.list_by_store(store_id)
        return [
            CategoryListItem.model_validate(category).model_copy(
                update={"product_count": count}
            )
            for category, count in rows
        ]

    async def create_category(
        self,
        store_id: UUID,
        data: CategoryCreate,
        principal: Principal,
    ) -> Category:
        """Create a category in a store.

        Raises:
            NotFoundError: If the store does not exist
            ConflictError: If the slug is already used in the store
        """
        await load_store_for(self.stores, principal, store_id)

        slug = data.slug or generate_slug(data.name)
        if not slug:
            raise ValidationError(
                "Could not derive a slug from the name",
                errors=[{"field": "slug", "message": "Slug is required"}],
            )
        await self._ensure_slug_free(store_id, slug)

        category = Category(
            store_id=store_id,
            **data.model_dump(exclude={"slug"}),
            slug=slug,
        )
        category = await self.repo.create(category)
        logger.info(
            "category_created",
            category_id=str(category.id),
            store_id=str(store_id),
        )
        return category

    async def get_category(self, category_id: UUID, principal: Principal) -> Category:
        category = await self.repo.get_by_id(category_id)
        if not category:
            raise NotFoundError(
                "Category not found",
                resource="category",
                resource_id=str(category_id),
            )
        await load_store_for(self.stores, principal, category.store_id)
        return category

    async def update_category(
        self,
        category_id: UUID,
        data: CategoryUpdate,
        principal: Principal,
    ) -> Category:
        category = await self.get_category(category_id, principal)

        if data.slug and data.slug != category.slug:
            await self._ensure_slug_free(category.store_id, data.slug, category.id)

        for field, value in data.model_dump(exclude_unset=True).items():
            if value is None and field != "description":
                continue
            setattr(category, field, value)

        return await self.repo.update(category)

    async def delete_category(self, category_id: UUID, principal: Principal) -> None:
        """Delete a category together with its products."""
        category = await self.get_category(category_id, principal)
        await self.repo.delete(category)
        logger.info("category_deleted", category_id=str(category_id))

    async def _ensure_slug_free(
        self,
        store_id: UUID,
        slug: str,
        exclude_id: UUID | None = None,
    ) -> None:
        if await self.repo.slug_exists(store_id, slug, exclude_id):
            raise ConflictError(
                "Category slug already exists in this store",
                error_code="slug_exists",
                details={"slug": slug},
            )


# Type alias for dependency injection
CategorySvc = Annotated[CategoryService, Depends(CategoryService)]
