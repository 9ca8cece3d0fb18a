"""Domain-facing facade over the topic hub.

Services call these methods after their writes are committed. Publishing
is fire-and-forget; it never fails the request that triggered it.
"""

from typing import Annotated, Any
from uuid import UUID

import structlog
from fastapi import Depends

from qrmenu.core.realtime.events import (
    ORDER_NEW,
    ORDER_UPDATE,
    STOCK_UPDATE,
    orders_topic,
    store_topic,
)
from qrmenu.core.realtime.hub import TopicHub, hub


logger = structlog.get_logger()


class EventPublisher:
    """Publishes stock and order events to store topics."""

    def __init__(self, topic_hub: TopicHub | None = None) -> None:
        self.hub = topic_hub or hub

    async def stock_changed(self, store_id: UUID, payload: dict[str, Any]) -> int:
        return await self._publish(store_topic(store_id), STOCK_UPDATE, payload)

    async def order_created(self, store_id: UUID, payload: dict[str, Any]) -> int:
        return await self._publish(orders_topic(store_id), ORDER_NEW, payload)

    async def order_updated(self, store_id: UUID, payload: dict[str, Any]) -> int:
        return await self._publish(orders_topic(store_id), ORDER_UPDATE, payload)

    async def _publish(self, topic: str, event: str, payload: dict[str, Any]) -> int:
        delivered = await self.hub.publish(topic, event, payload)
        logger.info(
            "event_published", topic=topic, event_name=event, delivered=delivered
        )
        return delivered


def get_publisher() -> EventPublisher:
    """Dependency returning a publisher bound to the process hub."""
    return EventPublisher()


Publisher = Annotated[EventPublisher, Depends(get_publisher)]
