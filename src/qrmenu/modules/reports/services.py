"""Report service: loads orders and hands them to the aggregation functions."""

from datetime import datetime
from typing import Annotated
from uuid import UUID

import structlog
from fastapi import Depends

from qrmenu.core.permissions import Principal
from qrmenu.core.utils.timezone import business_now, get_business_tz
from qrmenu.modules.orders.repos import OrderRepo
from qrmenu.modules.reports.aggregation import (
    ReportPeriod,
    affinity_pairs,
    peak_hours,
    resolve_period_start,
    sales_by_date,
    summarize,
    to_report_orders,
    top_products,
)
from qrmenu.modules.reports.schemas import AffinityReport, SalesReport
from qrmenu.modules.stores.repos import StoreRepo
from qrmenu.modules.stores.services import load_store_for


logger = structlog.get_logger()


class ReportService:
    """Sales and affinity reports over a store's non-cancelled orders."""

    def __init__(self, orders: OrderRepo, stores: StoreRepo) -> None:
        self.orders = orders
        self.stores = stores

    async def sales_report(
        self,
        store_id: UUID,
        period: ReportPeriod,
        principal: Principal,
        now: datetime | None = None,
    ) -> SalesReport:
        """Build the sales report for a period ending now.

        Args:
            store_id: Store to report on
            period: daily, weekly or monthly
            principal: The caller
            now: Reference time, defaults to the current time
        """
        await load_store_for(self.stores, principal, store_id)

        tz = get_business_tz()
        since = resolve_period_start(period, now or business_now(tz), tz)
        orders = to_report_orders(
            await self.orders.list_completed_since(store_id, since)
        )
        logger.debug(
            "sales_report_built",
            store_id=str(store_id),
            period=str(period),
            order_count=len(orders),
        )

        return SalesReport.model_validate(
            {
                "period": period,
                "since": since,
                "summary": summarize(orders),
                "sales_by_date": sales_by_date(orders, tz),
                "peak_hours": peak_hours(orders, tz),
                "top_products": top_products(orders),
            }
        )

    async def affinity_report(
        self, store_id: UUID, principal: Principal
    ) -> AffinityReport:
        """Count product pairs ordered together across all history."""
        await load_store_for(self.stores, principal, store_id)

        orders = to_report_orders(await self.orders.list_completed_since(store_id))
        return AffinityReport.model_validate(
            {
                "affinity_pairs": affinity_pairs(orders),
                "total_orders_analyzed": len(orders),
            }
        )


# Type alias for dependency injection
ReportSvc = Annotated[ReportService, Depends(ReportService)]
