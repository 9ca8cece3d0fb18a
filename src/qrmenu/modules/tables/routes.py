"""Dining table API routes."""

from uuid import UUID

from fastapi import APIRouter, Query, status

from qrmenu.core.permissions.dependencies import StaffPrincipal
from qrmenu.core.schemas import ApiResponse
from qrmenu.modules.tables.schemas import TableCreate, TableUpdate, TableWithQr
from qrmenu.modules.tables.services import TableSvc


router = APIRouter(prefix="/tables", tags=["tables"])


@router.get(
    "",
    response_model=ApiResponse[list[TableWithQr]],
    summary="List tables",
    description="Lists a store's tables with the menu URL for each QR code.",
)
async def list_tables(
    principal: StaffPrincipal,
    service: TableSvc,
    store_id: UUID = Query(..., alias="storeId"),
) -> ApiResponse[list[TableWithQr]]:
    return ApiResponse(data=await service.list_tables(store_id, principal))


@router.post(
    "",
    response_model=ApiResponse[TableWithQr],
    status_code=status.HTTP_201_CREATED,
    summary="Create table",
)
async def create_table(
    data: TableCreate,
    principal: StaffPrincipal,
    service: TableSvc,
    store_id: UUID = Query(..., alias="storeId"),
) -> ApiResponse[TableWithQr]:
    return ApiResponse(data=await service.create_table(store_id, data, principal))


@router.patch(
    "/{table_id}",
    response_model=ApiResponse[TableWithQr],
    summary="Update table",
)
async def update_table(
    table_id: UUID,
    data: TableUpdate,
    principal: StaffPrincipal,
    service: TableSvc,
) -> ApiResponse[TableWithQr]:
    return ApiResponse(data=await service.update_table(table_id, data, principal))


@router.delete(
    "/{table_id}",
    response_model=ApiResponse[None],
    summary="Delete table",
)
async def delete_table(
    table_id: UUID,
    principal: StaffPrincipal,
    service: TableSvc,
) -> ApiResponse[None]:
    await service.delete_table(table_id, principal)
    return ApiResponse(message="Table deleted")
