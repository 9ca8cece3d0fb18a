"""Category API routes."""

from uuid import UUID

from fastapi import APIRouter, Query, status

from qrmenu.core.permissions.dependencies import StaffPrincipal
from qrmenu.core.schemas import ApiResponse
from qrmenu.modules.categories.schemas import (
    CategoryCreate,
    CategoryListItem,
    CategoryRead,
    CategoryUpdate,
)
from qrmenu.modules.categories.services import CategorySvc


router = APIRouter(prefix="/categories", tags=["categories"])


@router.get(
    "",
    response_model=ApiResponse[list[CategoryListItem]],
    summary="List categories",
    description="Lists a store's categories in display order with product counts.",
)
async def list_categories(
    principal: StaffPrincipal,
    service: CategorySvc,
    store_id: UUID = Query(..., alias="storeId"),
) -> ApiResponse[list[CategoryListItem]]:
    return ApiResponse(data=await service.list_categories(store_id, principal))


@router.post(
    "",
    response_model=ApiResponse[CategoryRead],
    status_code=status.HTTP_201_CREATED,
    summary="Create category",
)
async def create_category(
    data: CategoryCreate,
    principal: StaffPrincipal,
    service: CategorySvc,
    store_id: UUID = Query(..., alias="storeId"),
) -> ApiResponse[CategoryRead]:
    category = await service.create_category(store_id, data, principal)
    return ApiResponse(data=CategoryRead.model_validate(category))


@router.patch(
    "/{category_id}",
    response_model=ApiResponse[CategoryRead],
    summary="Update category",
)
async def update_category(
    category_id: UUID,
    data: CategoryUpdate,
    principal: StaffPrincipal,
    service: CategorySvc,
) -> ApiResponse[CategoryRead]:
    category = await service.update_category(category_id, data, principal)
    return ApiResponse(data=CategoryRead.model_validate(category))


@router.delete(
    "/{category_id}",
    response_model=ApiResponse[None],
    summary="Delete category",
    description="Deletes the category and every product filed under it.",
)
async def delete_category(
    category_id: UUID,
    principal: StaffPrincipal,
    service: CategorySvc,
) -> ApiResponse[None]:
    await service.delete_category(category_id, principal)
    return ApiResponse(message="Category deleted")
