"""Store API routes."""

from uuid import UUID

from fastapi import APIRouter, status

from qrmenu.core.permissions.dependencies import OwnerPrincipal
from qrmenu.core.schemas import ApiResponse
from qrmenu.modules.stores.schemas import (
    StoreCreate,
    StoreDetail,
    StoreListItem,
    StoreRead,
    StoreUpdate,
)
from qrmenu.modules.stores.services import StoreSvc


router = APIRouter(prefix="/stores", tags=["stores"])


@router.get(
    "",
    response_model=ApiResponse[list[StoreListItem]],
    summary="List stores",
    description="Lists the caller's stores, or every store for a SUPER_ADMIN.",
)
async def list_stores(
    principal: OwnerPrincipal,
    service: StoreSvc,
) -> ApiResponse[list[StoreListItem]]:
    return ApiResponse(data=await service.list_stores(principal))


@router.post(
    "",
    response_model=ApiResponse[StoreRead],
    status_code=status.HTTP_201_CREATED,
    summary="Create store",
    description="Creates a store within the tenant's subscription store limit.",
)
async def create_store(
    data: StoreCreate,
    principal: OwnerPrincipal,
    service: StoreSvc,
) -> ApiResponse[StoreRead]:
    store = await service.create_store(data, principal)
    return ApiResponse(data=StoreRead.model_validate(store))


@router.get(
    "/{store_id}",
    response_model=ApiResponse[StoreDetail],
    summary="Get store",
    description="Returns a store with its categories, products and tables.",
)
async def get_store(
    store_id: UUID,
    principal: OwnerPrincipal,
    service: StoreSvc,
) -> ApiResponse[StoreDetail]:
    return ApiResponse(data=await service.get_store_detail(store_id, principal))


@router.patch(
    "/{store_id}",
    response_model=ApiResponse[StoreRead],
    summary="Update store",
)
async def update_store(
    store_id: UUID,
    data: StoreUpdate,
    principal: OwnerPrincipal,
    service: StoreSvc,
) -> ApiResponse[StoreRead]:
    store = await service.update_store(store_id, data, principal)
    return ApiResponse(data=StoreRead.model_validate(store))


@router.delete(
    "/{store_id}",
    response_model=ApiResponse[StoreRead],
    summary="Deactivate store",
    description="Marks the store inactive. Its menu and orders are kept.",
)
async def delete_store(
    store_id: UUID,
    principal: OwnerPrincipal,
    service: StoreSvc,
) -> ApiResponse[StoreRead]:
    store = await service.deactivate_store(store_id, principal)
    return ApiResponse(
        data=StoreRead.model_validate(store),
        message="Store deactivated",
    )
