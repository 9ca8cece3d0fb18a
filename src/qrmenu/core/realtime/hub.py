"""In-process topic hub for live updates.

Maps topic keys to the connections subscribed to them. Delivery is
best-effort and at-most-once: nothing is queued for offline clients and a
connection whose send fails is dropped from every topic.

Only one hub exists per process. Several API processes would need an
external relay in front of ``publish``.
"""

import asyncio
from collections import defaultdict
from typing import Any, Protocol

import structlog


logger = structlog.get_logger()

DEFAULT_SEND_TIMEOUT = 5.0


class Connection(Protocol):
    """Anything the hub can push JSON messages to."""

    id: str

    async def send_json(self, data: Any) -> None: ...


class TopicHub:
    """Topic-keyed publish/subscribe registry.

    Membership changes and the subscriber snapshot taken by ``publish``
    happen under one lock; sends happen outside it so a slow client never
    blocks subscribe or unsubscribe.
    """

    def __init__(self, send_timeout: float = DEFAULT_SEND_TIMEOUT) -> None:
        self.send_timeout = send_timeout
        self._topics: dict[str, dict[str, Connection]] = defaultdict(dict)
        self._memberships: dict[str, set[str]] = defaultdict(set)
        self._lock = asyncio.Lock()

    async def subscribe(self, topic: str, connection: Connection) -> None:
        """Add a connection to a topic. Subscribing twice is a no-op."""
        async with self._lock:
            self._topics[topic][connection.id] = connection
            self._memberships[connection.id].add(topic)
        logger.debug("realtime_subscribed", topic=topic, connection_id=connection.id)

    async def unsubscribe(self, topic: str, connection_id: str) -> None:
        """Remove a connection from a topic. Unknown pairs are ignored."""
        async with self._lock:
            self._remove(topic, connection_id)
        logger.debug("realtime_unsubscribed", topic=topic, connection_id=connection_id)

    async def disconnect(self, connection_id: str) -> list[str]:
        """Remove a connection from every topic it joined.

        Returns:
            The topics the connection was removed from
        """
        async with self._lock:
            topics = list(self._memberships.get(connection_id, ()))
            for topic in topics:
                self._remove(topic, connection_id)
        return topics

    async def publish(self, topic: str, event: str, payload: Any) -> int:
        """Deliver an event to every current subscriber of a topic.

        Send failures are logged and the failing connection is dropped;
        they never propagate to the caller.

        Args:
            topic: Topic key
            event: Event name sent as ``event``
            payload: JSON-serializable body sent as ``data``

        Returns:
            Number of connections the event reached
        """
        async with self._lock:
            targets = list(self._topics.get(topic, {}).values())

        if not targets:
            return 0

        message = {"event": event, "data": payload}
        results = await asyncio.gather(
            *(self._send(connection, message) for connection in targets),
            return_exceptions=True,
        )

        failed = 0
        for connection, result in zip(targets, results, strict=True):
            if not isinstance(result, BaseException):
                continue
            failed += 1
            logger.warning(
                "realtime_send_failed",
                topic=topic,
                event_name=event,
                connection_id=connection.id,
                error=repr(result),
            )
            await self.disconnect(connection.id)

        delivered = len(targets) - failed
        logger.debug(
            "realtime_published",
            topic=topic,
            event_name=event,
            delivered=delivered,
        )
        return delivered

    def subscribers(self, topic: str) -> set[str]:
        """Connection ids currently subscribed to a topic."""
        return set(self._topics.get(topic, {}))

    def topics_of(self, connection_id: str) -> set[str]:
        """Topics a connection is currently subscribed to."""
        return set(self._memberships.get(connection_id, ()))

    async def _send(self, connection: Connection, message: dict[str, Any]) -> None:
        await asyncio.wait_for(connection.send_json(message), timeout=self.send_timeout)

    def _remove(self, topic: str, connection_id: str) -> None:
        members = self._topics.get(topic)
        if members is not None:
            members.pop(connection_id, None)
            if not members:
                del self._topics[topic]
        topics = self._memberships.get(connection_id)
        if topics is not None:
            topics.discard(topic)
            if not topics:
                del self._memberships[connection_id]


# Process-wide hub
hub = TopicHub()
