"""Live stock and order updates over WebSocket topics."""

from qrmenu.core.realtime.events import orders_topic, store_topic
from qrmenu.core.realtime.hub import Connection, TopicHub, hub
from qrmenu.core.realtime.publisher import EventPublisher, Publisher, get_publisher


__all__ = [
    "Connection",
    "EventPublisher",
    "Publisher",
    "TopicHub",
    "get_publisher",
    "hub",
    "orders_topic",
    "store_topic",
]
