"""Pydantic schemas for category operations."""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from qrmenu.core.constants import MAX_NAME_LENGTH, MAX_SLUG_LENGTH, SLUG_PATTERN
from qrmenu.core.schemas import CamelModel


class CategoryCreate(CamelModel):
    """Schema for creating a category. The slug defaults to one built from the name."""

    name: str = Field(..., min_length=1, max_length=MAX_NAME_LENGTH)
    slug: str | None = Field(
        None, min_length=1, max_length=MAX_SLUG_LENGTH, pattern=SLUG_PATTERN
    )
    description: str | None = None
    sort_order: int = Field(0, ge=0)
    is_active: bool = True


class CategoryUpdate(CamelModel):
    """Schema for updating a category. Omitted fields are left unchanged."""

    name: str | None = Field(None, min_length=1, max_length=MAX_NAME_LENGTH)
    slug: str | None = Field(
        None, min_length=1, max_length=MAX_SLUG_LENGTH, pattern=SLUG_PATTERN
    )
    description: str | None = None
    sort_order: int | None = Field(None, ge=0)
    is_active: bool | None = None


class CategoryRead(CamelModel):
    id: UUID
    store_id: UUID
    name: str
    slug: str
    description: str | None
    sort_order: int
    is_active: bool
    created_at: datetime


class CategoryListItem(CategoryRead):
    """Category with the number of products filed under it."""

    product_count: int = 0
