"""Sales and product affinity aggregation.

Everything here is pure: it takes already-loaded orders and returns plain
rows, recomputed from scratch on every call. Dates and hours are bucketed
in the business time zone.
"""

from collections import Counter
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from decimal import Decimal
from enum import StrEnum
from itertools import combinations
from typing import Any
from uuid import UUID

import pytz

from qrmenu.core.constants import AFFINITY_PAIRS_LIMIT, TOP_PRODUCTS_LIMIT
from qrmenu.core.utils.timezone import (
    ensure_utc,
    start_of_day,
    start_of_month,
    to_business_tz,
)


ZERO = Decimal("0")


class ReportPeriod(StrEnum):
    """Reporting windows accepted by the sales report."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


@dataclass(frozen=True)
class ReportLine:
    """One order item as seen by the reports."""

    product_id: UUID
    name: str
    quantity: int
    price: Decimal

    @property
    def revenue(self) -> Decimal:
        return self.price * self.quantity


@dataclass(frozen=True)
class ReportOrder:
    """A non-cancelled order reduced to what the reports need."""

    created_at: datetime
    total_amount: Decimal
    lines: Sequence[ReportLine] = field(default_factory=tuple)


def to_report_orders(orders: Iterable[Any]) -> list[ReportOrder]:
    """Reduce ORM orders (with items and products loaded) to report rows."""
    return [
        ReportOrder(
            created_at=order.created_at,
            total_amount=order.total_amount,
            lines=tuple(
                ReportLine(
                    product_id=item.product_id,
                    name=item.product.name if item.product else "",
                    quantity=item.quantity,
                    price=item.price,
                )
                for item in order.items
            ),
        )
        for order in orders
    ]


def resolve_period_start(
    period: ReportPeriod | str,
    now: datetime,
    tz: pytz.BaseTzInfo,
) -> datetime:
    """First instant included in a report window, in UTC.

    ``daily`` starts at today's midnight and ``monthly`` at the first of
    the month, both in the business time zone. ``weekly`` is the trailing
    seven days.

    Raises:
        ValueError: If the period is unknown
    """
    period = ReportPeriod(period)
    if period is ReportPeriod.DAILY:
        start = start_of_day(now, tz)
    elif period is ReportPeriod.MONTHLY:
        start = start_of_month(now, tz)
    else:
        start = ensure_utc(now) - timedelta(days=7)
    return start.astimezone(pytz.utc)


def sales_by_date(
    orders: Iterable[ReportOrder], tz: pytz.BaseTzInfo
) -> list[dict[str, Any]]:
    """Revenue and order count per business-day, oldest first."""
    buckets: dict[str, dict[str, Any]] = {}
    for order in orders:
        key = to_business_tz(order.created_at, tz).date().isoformat()
        bucket = buckets.setdefault(key, {"date": key, "revenue": ZERO, "orders": 0})
        bucket["revenue"] += order.total_amount
        bucket["orders"] += 1
    return [buckets[key] for key in sorted(buckets)]


def peak_hours(
    orders: Iterable[ReportOrder], tz: pytz.BaseTzInfo
) -> list[dict[str, Any]]:
    """Order count and revenue per hour of day (0-23), for hours with orders."""
    buckets: dict[int, dict[str, Any]] = {}
    for order in orders:
        hour = to_business_tz(order.created_at, tz).hour
        bucket = buckets.setdefault(hour, {"hour": hour, "orders": 0, "revenue": ZERO})
        bucket["orders"] += 1
        bucket["revenue"] += order.total_amount
    return [buckets[hour] for hour in sorted(buckets)]


def top_products(
    orders: Iterable[ReportOrder], limit: int = TOP_PRODUCTS_LIMIT
) -> list[dict[str, Any]]:
    """Best-selling products by revenue, then quantity."""
    totals: dict[UUID, dict[str, Any]] = {}
    for order in orders:
        for line in order.lines:
            entry = totals.setdefault(
                line.product_id,
                {
                    "product_id": line.product_id,
                    "name": line.name,
                    "quantity": 0,
                    "revenue": ZERO,
                },
            )
            entry["quantity"] += line.quantity
            entry["revenue"] += line.revenue
    ranked = sorted(
        totals.values(),
        key=lambda e: (-e["revenue"], -e["quantity"], e["name"]),
    )
    return ranked[:limit]


def summarize(orders: Sequence[ReportOrder]) -> dict[str, Any]:
    """Total revenue, order count and average order value."""
    total_revenue = sum((order.total_amount for order in orders), ZERO)
    total_orders = len(orders)
    average = total_revenue / total_orders if total_orders else ZERO
    return {
        "total_revenue": total_revenue,
        "total_orders": total_orders,
        "average_order_value": average.quantize(Decimal("0.01")),
    }


def affinity_pairs(
    orders: Iterable[ReportOrder], limit: int = AFFINITY_PAIRS_LIMIT
) -> list[dict[str, Any]]:
    """Products most often bought together.

    Each order contributes at most one count per unordered pair of
    distinct products, however many lines mention them.
    """
    counts: Counter[tuple[tuple[str, UUID], tuple[str, UUID]]] = Counter()
    for order in orders:
        products = {(line.name, line.product_id) for line in order.lines}
        for pair in combinations(sorted(products, key=_pair_key), 2):
            counts[pair] += 1

    ranked = sorted(
        counts.items(),
        key=lambda item: (-item[1], item[0][0][0], item[0][1][0]),
    )
    return [
        {"product_a": a[0], "product_b": b[0], "count": count}
        for (a, b), count in ranked[:limit]
    ]


def _pair_key(product: tuple[str, UUID]) -> tuple[str, str]:
    name, product_id = product
    return name, str(product_id)
