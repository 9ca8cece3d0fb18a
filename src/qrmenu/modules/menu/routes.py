"""Public menu API routes. No authentication required."""

from fastapi import APIRouter, Query

from qrmenu.core.schemas import ApiResponse
from qrmenu.modules.menu.schemas import MenuResponse
from qrmenu.modules.menu.services import MenuSvc


router = APIRouter(prefix="/menu", tags=["menu"])


@router.get(
    "/{store_slug}",
    response_model=ApiResponse[MenuResponse],
    summary="Public store menu",
    description=(
        "Returns the store, the table resolved from the QR token (e.g. ``T5``) "
        "and the active categories with their available products."
    ),
)
async def get_menu(
    store_slug: str,
    service: MenuSvc,
    table: str | None = Query(None, description="Table token such as T5"),
) -> ApiResponse[MenuResponse]:
    return ApiResponse(data=await service.get_menu(store_slug, table))
