"""Test data factories."""

from tests.factories.catalog import (
    CategoryCreateFactory,
    ProductCreateFactory,
    StoreCreateFactory,
    TableCreateFactory,
)
from tests.factories.tenant import TenantCreateFactory
from tests.factories.user import (
    DEFAULT_PASSWORD,
    RegisterRequestFactory,
    unique_email,
)


__all__ = [
    "DEFAULT_PASSWORD",
    "CategoryCreateFactory",
    "ProductCreateFactory",
    "RegisterRequestFactory",
    "StoreCreateFactory",
    "TableCreateFactory",
    "TenantCreateFactory",
    "unique_email",
]
