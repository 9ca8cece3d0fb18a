"""Pydantic schemas for product operations.

Create and update requests arrive as multipart forms; the route decodes
the form fields into these schemas once, so type errors are rejected
instead of silently coerced.
"""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import Field

from qrmenu.core.constants import MAX_NAME_LENGTH, MAX_SLUG_LENGTH, SLUG_PATTERN
from qrmenu.core.schemas import CamelModel, Money


class ProductCreate(CamelModel):
    """Schema for creating a product. The slug defaults to one built from the name."""

    name: str = Field(..., min_length=1, max_length=MAX_NAME_LENGTH)
    slug: str | None = Field(
        None, min_length=1, max_length=MAX_SLUG_LENGTH, pattern=SLUG_PATTERN
    )
    description: str | None = None
    price: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)
    category_id: UUID
    is_available: bool = True
    sort_order: int = Field(0, ge=0)


class ProductUpdate(CamelModel):
    """Schema for updating a product. Omitted fields are left unchanged."""

    name: str | None = Field(None, min_length=1, max_length=MAX_NAME_LENGTH)
    slug: str | None = Field(
        None, min_length=1, max_length=MAX_SLUG_LENGTH, pattern=SLUG_PATTERN
    )
    description: str | None = None
    price: Decimal | None = Field(None, gt=0, max_digits=12, decimal_places=2)
    category_id: UUID | None = None
    is_available: bool | None = None
    sort_order: int | None = Field(None, ge=0)


class AvailabilityUpdate(CamelModel):
    """Schema for toggling a product's availability."""

    is_available: bool


class CategoryRef(CamelModel):
    id: UUID
    name: str
    slug: str


class ProductRead(CamelModel):
    """Schema for product response data."""

    id: UUID
    store_id: UUID
    category_id: UUID
    name: str
    slug: str
    description: str | None
    price: Money
    image: str | None
    is_available: bool
    sort_order: int
    created_at: datetime
    category: CategoryRef | None = None


class StockUpdate(CamelModel):
    """Payload of the ``stock:update`` event."""

    product_id: UUID
    name: str
    is_available: bool
    category: str | None
