"""Factories for store, category, product and table payloads."""

from decimal import Decimal
from uuid import uuid4

from polyfactory.factories.pydantic_factory import ModelFactory

from qrmenu.modules.categories.schemas import CategoryCreate
from qrmenu.modules.products.schemas import ProductCreate
from qrmenu.modules.stores.schemas import StoreCreate
from qrmenu.modules.tables.schemas import TableCreate


class StoreCreateFactory(ModelFactory[StoreCreate]):
    """Factory for store payloads. ``tenant_id`` is left out by default."""

    __model__ = StoreCreate

    @classmethod
    def name(cls) -> str:
        return f"Kafe {cls.__faker__.first_name()}"

    @classmethod
    def slug(cls) -> str:
        """Generate a URL-safe slug."""
        return f"kafe-{uuid4().hex[:8]}"

    @classmethod
    def phone(cls) -> str:
        return "08123456789"

    @classmethod
    def logo(cls) -> None:
        return None

    @classmethod
    def tenant_id(cls) -> None:
        return None


class CategoryCreateFactory(ModelFactory[CategoryCreate]):
    __model__ = CategoryCreate

    @classmethod
    def name(cls) -> str:
        return f"Category {uuid4().hex[:6]}"

    @classmethod
    def slug(cls) -> None:
        """Let the service derive the slug from the name."""
        return None

    @classmethod
    def sort_order(cls) -> int:
        return 0

    @classmethod
    def is_active(cls) -> bool:
        return True


class ProductCreateFactory(ModelFactory[ProductCreate]):
    """Factory for product payloads. Pass ``category_id`` when building."""

    __model__ = ProductCreate

    @classmethod
    def name(cls) -> str:
        return f"Product {uuid4().hex[:6]}"

    @classmethod
    def slug(cls) -> None:
        return None

    @classmethod
    def price(cls) -> Decimal:
        return Decimal("15000.00")

    @classmethod
    def is_available(cls) -> bool:
        return True

    @classmethod
    def sort_order(cls) -> int:
        return 0


class TableCreateFactory(ModelFactory[TableCreate]):
    __model__ = TableCreate

    @classmethod
    def number(cls) -> int:
        return cls.__random__.randint(1, 500)

    @classmethod
    def label(cls) -> None:
        return None
