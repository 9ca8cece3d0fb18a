"""Public menu service."""

from typing import Annotated

from fastapi import Depends

from qrmenu.core.errors import NotFoundError
from qrmenu.core.utils.text import parse_table_token
from qrmenu.modules.categories.repos import CategoryRepo
from qrmenu.modules.menu.schemas import (
    MenuCategory,
    MenuProduct,
    MenuResponse,
    MenuStore,
    MenuTable,
)
from qrmenu.modules.stores.repos import StoreRepo
from qrmenu.modules.tables.repos import TableRepo


class MenuService:
    """Builds the customer-facing menu of an active store."""

    def __init__(
        self,
        stores: StoreRepo,
        tables: TableRepo,
        categories: CategoryRepo,
    ) -> None:
        self.stores = stores
        self.tables = tables
        self.categories = categories

    async def get_menu(
        self, store_slug: str, table_token: str | None = None
    ) -> MenuResponse:
        """Load a store's menu and resolve the table from its QR token.

        An unparsable or unknown table token yields ``table=None`` rather
        than an error so walk-in customers can still order.

        Raises:
            NotFoundError: If the store does not exist or is inactive
        """
        store = await self.stores.get_by_slug(store_slug)
        if not store or not store.is_active:
            raise NotFoundError(
                "Store not found", resource="store", resource_id=store_slug
            )

        table = None
        number = parse_table_token(table_token)
        if number is not None:
            found = await self.tables.get_by_number(store.id, number)
            table = MenuTable.model_validate(found) if found else None

        categories = [
            MenuCategory.model_validate(category).model_copy(
                update={
                    "products": [
                        MenuProduct.model_validate(product)
                        for product in category.products
                        if product.is_available
                    ]
                }
            )
            for category in await self.categories.list_active_with_products(store.id)
        ]

        return MenuResponse(
            store=MenuStore.model_validate(store).model_copy(
                update={"tenant_name": store.tenant.name if store.tenant else None}
            ),
            table=table,
            categories=categories,
        )


# Type alias for dependency injection
MenuSvc = Annotated[MenuService, Depends(MenuService)]
