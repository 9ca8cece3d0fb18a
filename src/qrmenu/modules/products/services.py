"""Product service for business logic."""

from typing import Annotated
from uuid import UUID

import structlog
from fastapi import Depends
from sqlalchemy.exc import SQLAlchemyError
from starlette.datastructures import UploadFile

from qrmenu.core.errors import ConflictError, NotFoundError, ValidationError
from qrmenu.core.permissions import Principal
from qrmenu.core.realtime import Publisher
from qrmenu.core.storage import delete_stored_image, save_product_image
from qrmenu.core.utils.text import generate_slug
from qrmenu.modules.categories.repos import CategoryRepo
from qrmenu.modules.products.models import Product
from qrmenu.modules.products.repos import ProductRepo
from qrmenu.modules.products.schemas import ProductCreate, ProductUpdate, StockUpdate
from qrmenu.modules.stores.repos import StoreRepo
from qrmenu.modules.stores.services import load_store_for


logger = structlog.get_logger()


class ProductService:
    """Service for menu products.

    Availability changes are broadcast to customers viewing the store's
    menu once they are committed.
    """

    def __init__(
        self,
        repo: ProductRepo,
        categories: CategoryRepo,
        stores: StoreRepo,
        publisher: Publisher,
    ) -> None:
        self.repo = repo
        self.categories = categories
        self.stores = stores
        self.publisher = publisher

    async def list_products(
        self,
        store_id: UUID,
        principal: Principal,
        category_id: UUID | None = None,
    ) -> list[Product]:
        await load_store_for(self.stores, principal, store_id)
        return await self.repo.list_by_store(store_id, category_id)

    async def create_product(
        self,
        store_id: UUID,
        data: ProductCreate,
        principal: Principal,
        image: UploadFile | None = None,
    ) -> Product:
        """Create a product, storing its image if one was uploaded.

        Raises:
            NotFoundError: If the store does not exist
            ValidationError: If the category is not in the store or the image
                is rejected
            ConflictError: If the slug is already used in the store
        """
        await load_store_for(self.stores, principal, store_id)
        await self._ensure_category_in_store(data.category_id, store_id)

        slug = data.slug or generate_slug(data.name)
        if not slug:
            raise ValidationError(
                "Could not derive a slug from the name",
                errors=[{"field": "slug", "message": "Slug is required"}],
            )
        await self._ensure_slug_free(store_id, slug)

        product = Product(
            store_id=store_id,
            **data.model_dump(exclude={"slug"}),
            slug=slug,
        )
        if image is not None:
            product.image = await save_product_image(image)

        try:
            product = await self.repo.create(product)
        except SQLAlchemyError:
            await delete_stored_image(product.image)
            raise
        logger.info(
            "product_created", product_id=str(product.id), store_id=str(store_id)
        )
        return await self.get_product(product.id, principal)

    async def get_product(self, product_id: UUID, principal: Principal) -> Product:
        product = await self.repo.get_by_id(product_id)
        if not product:
            raise NotFoundError(
                "Product not found", resource="product", resource_id=str(product_id)
            )
        await load_store_for(self.stores, principal, product.store_id)
        return product

    async def update_product(
        self,
        product_id: UUID,
        data: ProductUpdate,
        principal: Principal,
        image: UploadFile | None = None,
    ) -> Product:
        """Update a product, replacing its image if a new one was uploaded."""
        product = await self.get_product(product_id, principal)
        was_available = product.is_available

        changes = data.model_dump(exclude_unset=True)
        category_id = changes.get("category_id")
        if category_id:
            await self._ensure_category_in_store(category_id, product.store_id)
        slug = changes.get("slug")
        if slug and slug != product.slug:
            await self._ensure_slug_free(product.store_id, slug, product.id)

        for field, value in changes.items():
            if value is None and field != "description":
                continue
            setattr(product, field, value)

        old_image = new_image = None
        if image is not None:
            old_image = product.image
            new_image = product.image = await save_product_image(image)

        try:
            await self.repo.update(product)
        except SQLAlchemyError:
            await delete_stored_image(new_image)
            raise
        if old_image:
            await delete_stored_image(old_image)

        product = await self.get_product(product_id, principal)
        if product.is_available != was_available:
            await self._broadcast_stock(product)
        return product

    async def set_availability(
        self,
        product_id: UUID,
        is_available: bool,
        principal: Principal,
    ) -> Product:
        """Toggle a product's availability and publish ``stock:update``."""
        product = await self.get_product(product_id, principal)
        product.is_available = is_available
        await self.repo.update(product)
        logger.info(
            "product_availability_changed",
            product_id=str(product_id),
            is_available=is_available,
        )
        await self._broadcast_stock(product)
        return product

    async def delete_product(self, product_id: UUID, principal: Principal) -> None:
        """Delete a product and its stored image.

        Products referenced by past orders cannot be deleted; the database
        rejects it and the caller gets a 409.
        """
        product = await self.get_product(product_id, principal)
        image = product.image
        await self.repo.delete(product)
        await delete_stored_image(image)
        logger.info("product_deleted", product_id=str(product_id))

    async def _broadcast_stock(self, product: Product) -> None:
        await self.repo.commit()
        payload = StockUpdate(
            product_id=product.id,
            name=product.name,
            is_available=product.is_available,
            category=product.category.name if product.category else None,
        )
        await self.publisher.stock_changed(
            product.store_id, payload.model_dump(mode="json", by_alias=True)
        )

    async def _ensure_category_in_store(
        self, category_id: UUID, store_id: UUID
    ) -> None:
        category = await self.categories.get_by_id(category_id)
        if not category or category.store_id != store_id:
            raise ValidationError(
                "Category does not belong to this store",
                errors=[{"field": "categoryId", "message": "Unknown category"}],
                error_code="invalid_category",
            )

    async def _ensure_slug_free(
        self,
        store_id: UUID,
        slug: str,
        exclude_id: UUID | None = None,
    ) -> None:
        if await self.repo.slug_exists(store_id, slug, exclude_id):
            raise ConflictError(
                "Product slug already exists in this store",
                error_code="slug_exists",
                details={"slug": slug},
            )


# Type alias for dependency injection
ProductSvc = Annotated[ProductService, Depends(ProductService)]
