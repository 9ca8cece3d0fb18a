"""Pydantic schemas for store operations."""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from qrmenu.core.constants import (
    MAX_IMAGE_PATH_LENGTH,
    MAX_NAME_LENGTH,
    MAX_PHONE_LENGTH,
    MAX_SLUG_LENGTH,
    SLUG_PATTERN,
)
from qrmenu.core.schemas import CamelModel
from qrmenu.modules.categories.schemas import CategoryRead
from qrmenu.modules.products.schemas import ProductRead
from qrmenu.modules.tables.schemas import TableRead


class StoreCreate(CamelModel):
    """Schema for creating a store.

    ``tenant_id`` is only honoured for a SUPER_ADMIN; owners always create
    stores in their own tenant.
    """

    name: str = Field(..., min_length=1, max_length=MAX_NAME_LENGTH)
    slug: str = Field(
        ..., min_length=1, max_length=MAX_SLUG_LENGTH, pattern=SLUG_PATTERN
    )
    address: str | None = None
    phone: str | None = Field(None, max_length=MAX_PHONE_LENGTH)
    description: str | None = None
    logo: str | None = Field(None, max_length=MAX_IMAGE_PATH_LENGTH)
    tenant_id: UUID | None = None


class StoreUpdate(CamelModel):
    """Schema for updating a store. Omitted fields are left unchanged."""

    name: str | None = Field(None, min_length=1, max_length=MAX_NAME_LENGTH)
    slug: str | None = Field(
        None, min_length=1, max_length=MAX_SLUG_LENGTH, pattern=SLUG_PATTERN
    )
    address: str | None = None
    phone: str | None = Field(None, max_length=MAX_PHONE_LENGTH)
    description: str | None = None
    logo: str | None = Field(None, max_length=MAX_IMAGE_PATH_LENGTH)
    is_active: bool | None = None


class StoreRead(CamelModel):
    """Schema for store response data."""

    id: UUID
    tenant_id: UUID
    name: str
    slug: str
    address: str | None
    phone: str | None
    description: str | None
    logo: str | None
    is_active: bool
    created_at: datetime


class StoreListItem(StoreRead):
    """Store with table, product and order counts."""

    table_count: int = 0
    product_count: int = 0
    order_count: int = 0


class CategoryWithProducts(CategoryRead):
    products: list[ProductRead] = []


class StoreDetail(StoreRead):
    """Store with its menu, tables and order count."""

    categories: list[CategoryWithProducts] = []
    tables: list[TableRead] = []
    order_count: int = 0
