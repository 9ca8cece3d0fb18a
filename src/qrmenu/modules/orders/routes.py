"""Order API routes.

Placing an order is public; reading and updating orders is for store
staff.
"""

from uuid import UUID

from fastapi import APIRouter, Query, Request, status

from qrmenu.api.dependencies import Pages
from qrmenu.config import settings
from qrmenu.core.permissions.dependencies import StaffPrincipal
from qrmenu.core.rate_limit import rate_limit
from qrmenu.core.schemas import ApiResponse, PaginatedResponse, Pagination
from qrmenu.modules.orders.schemas import OrderCreate, OrderRead, OrderStatusUpdate
from qrmenu.modules.orders.services import OrderSvc
from qrmenu.modules.orders.status import OrderStatus


router = APIRouter(prefix="/orders", tags=["orders"])


@router.post(
    "",
    response_model=ApiResponse[OrderRead],
    status_code=status.HTTP_201_CREATED,
    summary="Place order",
    description=(
        "Public endpoint used by the customer menu. Prices come from the "
        "database and every product must be available."
    ),
)
@rate_limit(
    requests=lambda: settings.order_rate_limit_requests,
    window=lambda: settings.order_rate_limit_window,
)
async def place_order(
    request: Request,  # noqa: ARG001
    data: OrderCreate,
    service: OrderSvc,
) -> ApiResponse[OrderRead]:
    order = await service.place_order(data)
    return ApiResponse(data=order, message="Order placed")


@router.get(
    "",
    response_model=PaginatedResponse[OrderRead],
    summary="List orders",
    description="Paginated orders of a store, newest first.",
)
async def list_orders(
    principal: StaffPrincipal,
    service: OrderSvc,
    pages: Pages,
    store_id: UUID = Query(..., alias="storeId"),
    order_status: OrderStatus | None = Query(None, alias="status"),
) -> PaginatedResponse[OrderRead]:
    orders, total = await service.list_orders(store_id, principal, pages, order_status)
    return PaginatedResponse(
        data=orders,
        pagination=Pagination.build(pages.page, pages.limit, total),
    )


@router.get(
    "/{order_id}",
    response_model=ApiResponse[OrderRead],
    summary="Get order",
)
async def get_order(
    order_id: UUID,
    principal: StaffPrincipal,
    service: OrderSvc,
) -> ApiResponse[OrderRead]:
    order = await service.get_order(order_id, principal)
    return ApiResponse(data=OrderRead.model_validate(order))


@router.patch(
    "/{order_id}/status",
    response_model=ApiResponse[OrderRead],
    summary="Update order status",
    description="Changes the status and notifies the store's order dashboards.",
)
async def update_order_status(
    order_id: UUID,
    data: OrderStatusUpdate,
    principal: StaffPrincipal,
    service: OrderSvc,
) -> ApiResponse[OrderRead]:
    order = await service.update_status(order_id, data.status, principal)
    return ApiResponse(data=order)
