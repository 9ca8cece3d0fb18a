"""Tests for the in-process topic hub and the event publisher."""

import asyncio
from typing import Any
from uuid import uuid4

from qrmenu.core.realtime import EventPublisher, TopicHub, orders_topic, store_topic


class RecordingConnection:
    """Connection double that records every message sent to it."""

    def __init__(self, connection_id: str | None = None) -> None:
        self.id = connection_id or uuid4().hex
        self.messages: list[dict[str, Any]] = []

    async def send_json(self, data: Any) -> None:
        self.messages.append(data)


class BrokenConnection(RecordingConnection):
    async def send_json(self, data: Any) -> None:
        raise ConnectionError("socket closed")


class SlowConnection(RecordingConnection):
    async def send_json(self, data: Any) -> None:
        await asyncio.sleep(10)


class TestTopicHub:
    """Tests for TopicHub."""

    async def test_publish_reaches_subscribers(self):
        hub = TopicHub()
        first, second = RecordingConnection(), RecordingConnection()
        await hub.subscribe("store:1", first)
        await hub.subscribe("store:1", second)

        delivered = await hub.publish("store:1", "stock:update", {"name": "Teh"})

        assert delivered == 2
        assert first.messages == [{"event": "stock:update", "data": {"name": "Teh"}}]
        assert second.messages == first.messages

    async def test_publish_without_subscribers(self):
        assert await TopicHub().publish("store:1", "order:new", {}) == 0

    async def test_other_topics_do_not_receive(self):
        hub = TopicHub()
        menu, dashboard = RecordingConnection(), RecordingConnection()
        await hub.subscribe("store:1", menu)
        await hub.subscribe("store:1:orders", dashboard)

        await hub.publish("store:1:orders", "order:new", {"id": "x"})

        assert menu.messages == []
        assert len(dashboard.messages) == 1

    async def test_subscribe_twice_delivers_once(self):
        hub = TopicHub()
        connection = RecordingConnection()
        await hub.subscribe("store:1", connection)
        await hub.subscribe("store:1", connection)

        assert await hub.publish("store:1", "stock:update", {}) == 1
        assert len(connection.messages) == 1

    async def test_unsubscribe(self):
        hub = TopicHub()
        connection = RecordingConnection()
        await hub.subscribe("store:1", connection)

        await hub.unsubscribe("store:1", connection.id)
        await hub.unsubscribe("store:1", "unknown")

        assert hub.subscribers("store:1") == set()
        assert await hub.publish("store:1", "stock:update", {}) == 0

    async def test_disconnect_leaves_every_topic(self):
        hub = TopicHub()
        connection = RecordingConnection()
        await hub.subscribe("store:1", connection)
        await hub.subscribe("store:1:orders", connection)

        topics = await hub.disconnect(connection.id)

        assert sorted(topics) == ["store:1", "store:1:orders"]
        assert hub.topics_of(connection.id) == set()

    async def test_failing_connection_is_dropped(self):
        hub = TopicHub()
        healthy, broken = RecordingConnection(), BrokenConnection()
        await hub.subscribe("store:1", healthy)
        await hub.subscribe("store:1", broken)

        delivered = await hub.publish("store:1", "stock:update", {})

        assert delivered == 1
        assert len(healthy.messages) == 1
        assert hub.subscribers("store:1") == {healthy.id}

    async def test_slow_connection_times_out(self):
        hub = TopicHub(send_timeout=0.05)
        healthy, slow = RecordingConnection(), SlowConnection()
        await hub.subscribe("store:1", healthy)
        await hub.subscribe("store:1", slow)

        assert await hub.publish("store:1", "stock:update", {}) == 1
        assert slow.id not in hub.subscribers("store:1")


class TestEventPublisher:
    async def test_stock_events_go_to_store_topic(self):
        hub = TopicHub()
        store_id = uuid4()
        menu = RecordingConnection()
        await hub.subscribe(store_topic(store_id), menu)

        await EventPublisher(hub).stock_changed(store_id, {"isAvailable": False})

        assert menu.messages == [
            {"event": "stock:update", "data": {"isAvailable": False}}
        ]

    async def test_order_events_go_to_orders_topic(self):
        hub = TopicHub()
        store_id = uuid4()
        menu, dashboard = RecordingConnection(), RecordingConnection()
        await hub.subscribe(store_topic(store_id), menu)
        await hub.subscribe(orders_topic(store_id), dashboard)
        publisher = EventPublisher(hub)

        await publisher.order_created(store_id, {"orderNumber": "ORD-KAFE-00001"})
        await publisher.order_updated(store_id, {"status": "READY"})

        assert menu.messages == []
        assert [m["event"] for m in dashboard.messages] == ["order:new", "order:update"]

    def test_topic_names(self):
        store_id = uuid4()

        assert store_topic(store_id) == f"store:{store_id}"
        assert orders_topic(store_id) == f"store:{store_id}:orders"
