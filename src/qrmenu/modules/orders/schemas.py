"""Pydantic schemas for order operations."""

from datetime import datetime
from uuid import UUID

from pydantic import Field, computed_field

from qrmenu.core.constants import MAX_NAME_LENGTH
from qrmenu.core.schemas import CamelModel, Money
from qrmenu.modules.orders.status import OrderStatus
from qrmenu.modules.orders.status import next_status as suggest_next_status


# ============================================================
# Request Schemas
# ============================================================


class OrderItemCreate(CamelModel):
    product_id: UUID
    quantity: int = Field(..., ge=1)
    notes: str | None = None


class OrderCreate(CamelModel):
    """Schema for placing an order from the public menu.

    The table may be given as ``table_number`` or as the raw QR token in
    ``table`` (e.g. ``"T5"``). Prices are never taken from the client.
    """

    store_slug: str = Field(..., min_length=1)
    table_number: int | None = Field(None, gt=0)
    table: str | None = None
    guest_name: str | None = Field(None, max_length=MAX_NAME_LENGTH)
    notes: str | None = None
    items: list[OrderItemCreate] = Field(..., min_length=1)


class OrderStatusUpdate(CamelModel):
    status: OrderStatus


# ============================================================
# Response Schemas
# ============================================================


class OrderProduct(CamelModel):
    id: UUID
    name: str
    image: str | None


class OrderItemRead(CamelModel):
    id: UUID
    product_id: UUID
    quantity: int
    price: Money
    subtotal: Money
    notes: str | None
    product: OrderProduct | None = None


class OrderTable(CamelModel):
    id: UUID
    number: int
    label: str | None


class OrderRead(CamelModel):
    """An order with its items and table, as shown on the staff dashboard."""

    id: UUID
    store_id: UUID
    order_number: str
    table_id: UUID | None
    table: OrderTable | None = None
    guest_name: str | None
    notes: str | None
    total_amount: Money
    status: OrderStatus
    created_at: datetime
    updated_at: datetime
    items: list[OrderItemRead] = []

    @computed_field(alias="nextStatus")  # type: ignore[prop-decorator]
    @property
    def next_status(self) -> OrderStatus | None:
        """Forward step the dashboard offers as the primary action."""
        return suggest_next_status(self.status)
