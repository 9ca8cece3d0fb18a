"""Order placement and fulfilment."""

from decimal import Decimal
from typing import Annotated
from uuid import UUID

import structlog
from fastapi import Depends

from qrmenu.config import settings
from qrmenu.core.errors import NotFoundError, ValidationError
from qrmenu.core.permissions import Principal
from qrmenu.core.realtime import Publisher
from qrmenu.core.schemas import PageParams
from qrmenu.core.utils.text import format_order_number, parse_table_token
from qrmenu.modules.orders.models import Order, OrderItem
from qrmenu.modules.orders.repos import OrderRepo
from qrmenu.modules.orders.schemas import OrderCreate, OrderRead
from qrmenu.modules.orders.status import OrderStatus, can_transition
from qrmenu.modules.products.repos import ProductRepo
from qrmenu.modules.stores.repos import StoreRepo
from qrmenu.modules.stores.services import load_store_for
from qrmenu.modules.tables.repos import TableRepo


logger = structlog.get_logger()


class OrderService:
    """Service for customer orders.

    Orders are written in one transaction and only announced to staff
    dashboards after that transaction commits.
    """

    def __init__(
        self,
        repo: OrderRepo,
        stores: StoreRepo,
        products: ProductRepo,
        tables: TableRepo,
        publisher: Publisher,
    ) -> None:
        self.repo = repo
        self.stores = stores
        self.products = products
        self.tables = tables
        self.publisher = publisher

    async def place_order(self, data: OrderCreate) -> OrderRead:
        """Place an order from the public menu.

        Prices and availability are read from the database at this moment;
        the client only supplies product ids and quantities. Nothing is
        written unless every item is valid.

        Args:
            data: The customer's cart

        Returns:
            The persisted order

        Raises:
            NotFoundError: If the store does not exist or is inactive
            ValidationError: If an item references an unknown or unavailable
                product
        """
        store = await self.stores.get_by_slug(data.store_slug)
        if not store or not store.is_active:
            raise NotFoundError(
                "Store not found", resource="store", resource_id=data.store_slug
            )

        # Unknown tables are tolerated so walk-in and takeaway orders work
        table_id = None
        table_number = data.table_number or parse_table_token(data.table)
        if table_number is not None:
            table = await self.tables.get_by_number(store.id, table_number)
            table_id = table.id if table else None

        requested_ids = list(dict.fromkeys(item.product_id for item in data.items))
        found = await self.products.get_many_in_store(store.id, requested_ids)
        products = {product.id: product for product in found}

        unknown = [
            {"field": f"items.{index}.productId", "message": "Unknown product"}
            for index, item in enumerate(data.items)
            if item.product_id not in products
        ]
        if unknown:
            raise ValidationError(
                "Some items reference products not found in this store",
                errors=unknown,
                error_code="unknown_products",
            )

        unavailable = [p for p in products.values() if not p.is_available]
        if unavailable:
            names = ", ".join(sorted(p.name for p in unavailable))
            raise ValidationError(
                f"These products are currently unavailable: {names}",
                errors=[
                    {"field": "items", "message": f"{p.name} is unavailable"}
                    for p in unavailable
                ],
                error_code="products_unavailable",
                details={"product_ids": [str(p.id) for p in unavailable]},
            )

        items = [
            OrderItem(
                product_id=item.product_id,
                quantity=item.quantity,
                price=products[item.product_id].price,
                notes=item.notes,
            )
            for item in data.items
        ]
        total = sum((line.price * line.quantity for line in items), Decimal("0"))

        sequence = await self.stores.next_order_sequence(store.id)
        order = Order(
            store_id=store.id,
            table_id=table_id,
            order_number=format_order_number(store.slug, sequence),
            guest_name=data.guest_name,
            notes=data.notes,
            total_amount=total,
            status=OrderStatus.PENDING,
            items=items,
        )
        order = await self.repo.create(order)
        await self.repo.commit()

        logger.info(
            "order_placed",
            order_id=str(order.id),
            order_number=order.order_number,
            store_id=str(store.id),
            total_amount=str(total),
            item_count=len(items),
        )

        result = await self._read(order.id)
        await self.publisher.order_created(
            store.id, result.model_dump(mode="json", by_alias=True)
        )
        return result

    async def list_orders(
        self,
        store_id: UUID,
        principal: Principal,
        page: PageParams,
        status: OrderStatus | None = None,
    ) -> tuple[list[OrderRead], int]:
        await load_store_for(self.stores, principal, store_id)
        orders, total = await self.repo.list_by_store(
            store_id, status, offset=page.offset, limit=page.limit
        )
        return [OrderRead.model_validate(order) for order in orders], total

    async def get_order(self, order_id: UUID, principal: Principal) -> Order:
        order = await self.repo.get_by_id(order_id)
        if not order:
            raise NotFoundError(
                "Order not found", resource="order", resource_id=str(order_id)
            )
        await load_store_for(self.stores, principal, order.store_id)
        return order

    async def update_status(
        self,
        order_id: UUID,
        status: OrderStatus,
        principal: Principal,
    ) -> OrderRead:
        """Move an order to a new status and notify the store's dashboards.

        Raises:
            NotFoundError: If the order does not exist
            ValidationError: If strict transitions are enabled and the move
                is not allowed
        """
        order = await self.get_order(order_id, principal)
        previous = order.status

        if not can_transition(previous, status, settings.enforce_order_transitions):
            raise ValidationError(
                f"Cannot change order status from {previous} to {status}",
                error_code="invalid_status_transition",
                details={"current": str(previous), "requested": str(status)},
            )

        order.status = status
        await self.repo.update(order)
        await self.repo.commit()

        logger.info(
            "order_status_changed",
            order_id=str(order_id),
            old_status=str(previous),
            new_status=str(status),
        )

        result = OrderRead.model_validate(order)
        await self.publisher.order_updated(
            order.store_id, result.model_dump(mode="json", by_alias=True)
        )
        return result

    async def _read(self, order_id: UUID) -> OrderRead:
        order = await self.repo.get_by_id(order_id)
        return OrderRead.model_validate(order)


# Type alias for dependency injection
OrderSvc = Annotated[OrderService, Depends(OrderService)]
