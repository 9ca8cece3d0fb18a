"""Order repository for database operations."""

from datetime import datetime
from typing import Annotated
from uuid import UUID

from fastapi import Depends
from sqlalchemy import Select, func, select
from sqlalchemy.orm import selectinload

from qrmenu.api.dependencies import DBSession
from qrmenu.modules.orders.models import Order, OrderItem
from qrmenu.modules.orders.status import OrderStatus


class OrderRepository:
    """Repository for Order database operations."""

    def __init__(self, session: DBSession) -> None:
        self.session = session

    async def create(self, order: Order) -> Order:
        """Add an order with its items in the current transaction."""
        self.session.add(order)
        await self.session.flush()
        return order

    async def get_by_id(self, order_id: UUID) -> Order | None:
        result = await self.session.execute(self._select().where(Order.id == order_id))
        return result.scalar_one_or_none()

    async def list_by_store(
        self,
        store_id: UUID,
        status: OrderStatus | None = None,
        offset: int = 0,
        limit: int = 20,
    ) -> tuple[list[Order], int]:
        """List a store's orders newest first.

        Returns:
            Tuple of (orders on the page, total matching orders)
        """
        filters = [Order.store_id == store_id]
        if status is not None:
            filters.append(Order.status == status)

        total = await self.session.execute(
            select(func.count(Order.id)).where(*filters)
        )
        result = await self.session.execute(
            self._select()
            .where(*filters)
            .order_by(Order.created_at.desc(), Order.order_number.desc())
            .offset(offset)
            .limit(limit)
        )
        return list(result.scalars().all()), total.scalar_one()

    async def list_completed_since(
        self,
        store_id: UUID,
        since: datetime | None = None,
    ) -> list[Order]:
        """Non-cancelled orders of a store, optionally created at or after ``since``."""
        stmt = self._select().where(
            Order.store_id == store_id,
            Order.status != OrderStatus.CANCELLED,
        )
        if since is not None:
            stmt = stmt.where(Order.created_at >= since)
        result = await self.session.execute(stmt.order_by(Order.created_at))
        return list(result.scalars().all())

    async def update(self, order: Order) -> Order:
        await self.session.flush()
        return order

    async def commit(self) -> None:
        """Commit so listeners are only told about persisted orders."""
        await self.session.commit()

    @staticmethod
    def _select() -> Select[tuple[Order]]:
        # populate_existing re-runs eager loaders on identity-map hits
        return (
            select(Order)
            .options(
                selectinload(Order.items).selectinload(OrderItem.product),
                selectinload(Order.table),
            )
            .execution_options(populate_existing=True)
        )


# Type alias for dependency injection
OrderRepo = Annotated[OrderRepository, Depends(OrderRepository)]
