"""Report API routes."""

from uuid import UUID

from fastapi import APIRouter, Query

from qrmenu.core.permissions.dependencies import StaffPrincipal
from qrmenu.core.schemas import ApiResponse
from qrmenu.modules.reports.aggregation import ReportPeriod
from qrmenu.modules.reports.schemas import AffinityReport, SalesReport
from qrmenu.modules.reports.services import ReportSvc


router = APIRouter(prefix="/reports", tags=["reports"])


@router.get(
    "/sales",
    response_model=ApiResponse[SalesReport],
    summary="Sales report",
    description=(
        "Revenue summary, sales per day, peak hours and top products for "
        "the period. Cancelled orders are excluded."
    ),
)
async def sales_report(
    principal: StaffPrincipal,
    service: ReportSvc,
    store_id: UUID = Query(..., alias="storeId"),
    period: ReportPeriod = Query(ReportPeriod.WEEKLY),
) -> ApiResponse[SalesReport]:
    return ApiResponse(data=await service.sales_report(store_id, period, principal))


@router.get(
    "/affinity",
    response_model=ApiResponse[AffinityReport],
    summary="Product affinity",
    description="Pairs of products most often ordered together.",
)
async def affinity_report(
    principal: StaffPrincipal,
    service: ReportSvc,
    store_id: UUID = Query(..., alias="storeId"),
) -> ApiResponse[AffinityReport]:
    return ApiResponse(data=await service.affinity_report(store_id, principal))
