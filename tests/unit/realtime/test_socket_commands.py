"""Tests for WebSocket topic commands."""

from typing import Any
from uuid import uuid4

import pytest

from qrmenu.core.realtime import hub, orders_topic, store_topic
from qrmenu.core.realtime.routes import handle_message


class FakeSocketConnection:
    def __init__(self) -> None:
        self.id = uuid4().hex
        self.messages: list[dict[str, Any]] = []

    async def send_json(self, data: Any) -> None:
        self.messages.append(data)


@pytest.fixture
async def connection():
    connection = FakeSocketConnection()
    yield connection
    await hub.disconnect(connection.id)


class TestHandleMessage:
    """Tests for handle_message."""

    async def test_join_store(self, connection):
        store_id = uuid4()

        await handle_message(connection, {"event": "join:store", "data": str(store_id)})

        topic = store_topic(store_id)
        assert connection.id in hub.subscribers(topic)
        assert connection.messages == [{"event": "joined", "data": {"topic": topic}}]

    async def test_join_and_leave_orders(self, connection):
        store_id = uuid4()
        topic = orders_topic(store_id)

        await handle_message(
            connection, {"event": "join:orders", "data": str(store_id)}
        )
        await handle_message(
            connection, {"event": "leave:orders", "data": str(store_id)}
        )

        assert connection.id not in hub.subscribers(topic)
        assert connection.messages[-1] == {"event": "left", "data": {"topic": topic}}

    async def test_unknown_command(self, connection):
        await handle_message(connection, {"event": "join:kitchen", "data": "x"})

        assert connection.messages[0]["event"] == "error"
        assert hub.topics_of(connection.id) == set()

    async def test_non_object_message(self, connection):
        await handle_message(connection, ["join:store"])

        assert connection.messages[0]["event"] == "error"

    async def test_store_id_must_be_uuid(self, connection):
        await handle_message(connection, {"event": "join:store", "data": "kafe"})

        assert connection.messages == [
            {"event": "error", "data": {"message": "data must be a store id"}}
        ]
        assert hub.topics_of(connection.id) == set()
