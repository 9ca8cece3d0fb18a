"""WebSocket endpoint for live stock and order updates.

Clients send ``{"event": "join:store", "data": "<storeId>"}`` (or
``leave:store``, ``join:orders``, ``leave:orders``) and receive
``{"event": "<name>", "data": {...}}`` messages.
"""

import uuid
from typing import Any
from uuid import UUID

import structlog
from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from qrmenu.core.realtime.events import (
    ERROR,
    JOIN_ORDERS,
    JOIN_STORE,
    JOINED,
    LEAVE_ORDERS,
    LEAVE_STORE,
    LEFT,
    orders_topic,
    store_topic,
)
from qrmenu.core.realtime.hub import hub


router = APIRouter(tags=["realtime"])

logger = structlog.get_logger()

COMMANDS = {
    JOIN_STORE: (store_topic, True),
    LEAVE_STORE: (store_topic, False),
    JOIN_ORDERS: (orders_topic, True),
    LEAVE_ORDERS: (orders_topic, False),
}


class WebSocketConnection:
    """Adapts a Starlette WebSocket to the hub's Connection protocol."""

    def __init__(self, websocket: WebSocket) -> None:
        self.id = uuid.uuid4().hex
        self.websocket = websocket

    async def send_json(self, data: Any) -> None:
        await self.websocket.send_json(data)


async def handle_message(connection: WebSocketConnection, message: Any) -> None:
    """Apply one client command and acknowledge it."""
    if not isinstance(message, dict) or message.get("event") not in COMMANDS:
        await connection.send_json(
            {"event": ERROR, "data": {"message": "Unknown command"}}
        )
        return

    try:
        store_id = UUID(str(message.get("data")))
    except ValueError:
        await connection.send_json(
            {"event": ERROR, "data": {"message": "data must be a store id"}}
        )
        return

    topic_for, joining = COMMANDS[message["event"]]
    topic = topic_for(store_id)
    if joining:
        await hub.subscribe(topic, connection)
        await connection.send_json({"event": JOINED, "data": {"topic": topic}})
    else:
        await hub.unsubscribe(topic, connection.id)
        await connection.send_json({"event": LEFT, "data": {"topic": topic}})


@router.websocket("/ws")
async def realtime_socket(websocket: WebSocket) -> None:
    """Persistent connection carrying topic commands and events."""
    await websocket.accept()
    connection = WebSocketConnection(websocket)
    logger.info("realtime_connected", connection_id=connection.id)

    try:
        while True:
            try:
                message = await websocket.receive_json()
            except ValueError:
                await connection.send_json(
                    {"event": ERROR, "data": {"message": "Malformed JSON"}}
                )
                continue
            await handle_message(connection, message)
    except WebSocketDisconnect:
        pass
    finally:
        topics = await hub.disconnect(connection.id)
        logger.info(
            "realtime_disconnected",
            connection_id=connection.id,
            topics=topics,
        )
