"""Tenant administration API routes. SUPER_ADMIN only."""

from uuid import UUID

from fastapi import APIRouter, status

from qrmenu.core.permissions.dependencies import AdminPrincipal
from qrmenu.core.schemas import ApiResponse
from qrmenu.modules.tenants.schemas import (
    SubscriptionUpdate,
    TenantCreate,
    TenantDetail,
    TenantListItem,
    TenantRead,
    TenantUpdate,
)
from qrmenu.modules.tenants.services import TenantSvc


router = APIRouter(prefix="/tenants", tags=["tenants"])


@router.get(
    "",
    response_model=ApiResponse[list[TenantListItem]],
    summary="List tenants",
    description="Lists every tenant with its subscription and store/user counts.",
)
async def list_tenants(
    _principal: AdminPrincipal,
    service: TenantSvc,
) -> ApiResponse[list[TenantListItem]]:
    return ApiResponse(data=await service.list_tenants())


@router.post(
    "",
    response_model=ApiResponse[TenantRead],
    status_code=status.HTTP_201_CREATED,
    summary="Create tenant",
    description="Creates a tenant on the FREE plan with a single store allowed.",
)
async def create_tenant(
    data: TenantCreate,
    _principal: AdminPrincipal,
    service: TenantSvc,
) -> ApiResponse[TenantRead]:
    tenant = await service.create_tenant(data)
    return ApiResponse(data=TenantRead.model_validate(tenant))


@router.get(
    "/{tenant_id}",
    response_model=ApiResponse[TenantDetail],
    summary="Get tenant",
)
async def get_tenant(
    tenant_id: UUID,
    _principal: AdminPrincipal,
    service: TenantSvc,
) -> ApiResponse[TenantDetail]:
    return ApiResponse(data=await service.get_tenant_detail(tenant_id))


@router.patch(
    "/{tenant_id}",
    response_model=ApiResponse[TenantRead],
    summary="Update tenant",
)
async def update_tenant(
    tenant_id: UUID,
    data: TenantUpdate,
    _principal: AdminPrincipal,
    service: TenantSvc,
) -> ApiResponse[TenantRead]:
    tenant = await service.update_tenant(tenant_id, data)
    return ApiResponse(data=TenantRead.model_validate(tenant))


@router.patch(
    "/{tenant_id}/subscription",
    response_model=ApiResponse[TenantRead],
    summary="Update subscription",
    description="Changes the tenant's plan or the number of stores it may own.",
)
async def update_subscription(
    tenant_id: UUID,
    data: SubscriptionUpdate,
    _principal: AdminPrincipal,
    service: TenantSvc,
) -> ApiResponse[TenantRead]:
    tenant = await service.update_subscription(tenant_id, data)
    return ApiResponse(data=TenantRead.model_validate(tenant))


@router.delete(
    "/{tenant_id}",
    response_model=ApiResponse[TenantRead],
    summary="Delete tenant",
    description="Soft deletes the tenant by setting its status to DELETED.",
)
async def delete_tenant(
    tenant_id: UUID,
    _principal: AdminPrincipal,
    service: TenantSvc,
) -> ApiResponse[TenantRead]:
    tenant = await service.delete_tenant(tenant_id)
    return ApiResponse(data=TenantRead.model_validate(tenant), message="Tenant deleted")
