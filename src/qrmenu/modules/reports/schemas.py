"""Pydantic schemas for sales and affinity reports."""

from datetime import datetime
from uuid import UUID

from qrmenu.core.schemas import CamelModel, Money
from qrmenu.modules.reports.aggregation import ReportPeriod


class SalesSummary(CamelModel):
    total_revenue: Money
    total_orders: int
    average_order_value: Money


class DailySales(CamelModel):
    date: str
    revenue: Money
    orders: int


class HourlySales(CamelModel):
    hour: int
    orders: int
    revenue: Money


class TopProduct(CamelModel):
    product_id: UUID
    name: str
    quantity: int
    revenue: Money


class SalesReport(CamelModel):
    """Sales figures for one store over a reporting period."""

    period: ReportPeriod
    since: datetime
    summary: SalesSummary
    sales_by_date: list[DailySales]
    peak_hours: list[HourlySales]
    top_products: list[TopProduct]


class AffinityPair(CamelModel):
    product_a: str
    product_b: str
    count: int


class AffinityReport(CamelModel):
    """Products most often ordered together."""

    affinity_pairs: list[AffinityPair]
    total_orders_analyzed: int
