"""Pydantic schemas for the public menu."""

from uuid import UUID

from qrmenu.core.schemas import CamelModel, Money


class MenuStore(CamelModel):
    id: UUID
    name: str
    slug: str
    address: str | None
    phone: str | None
    description: str | None
    logo: str | None
    tenant_name: str | None = None


class MenuTable(CamelModel):
    id: UUID
    number: int
    label: str | None


class MenuProduct(CamelModel):
    id: UUID
    name: str
    slug: str
    description: str | None
    price: Money
    image: str | None
    is_available: bool


class MenuCategory(CamelModel):
    id: UUID
    name: str
    slug: str
    description: str | None
    sort_order: int
    products: list[MenuProduct] = []


class MenuResponse(CamelModel):
    """What a customer sees after scanning a table's QR code."""

    store: MenuStore
    table: MenuTable | None = None
    categories: list[MenuCategory] = []
