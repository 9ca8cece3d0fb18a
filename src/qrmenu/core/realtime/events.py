"""Topic keys and event names for live updates."""

from uuid import UUID


# Server -> client events
ORDER_NEW = "order:new"
ORDER_UPDATE = "order:update"
STOCK_UPDATE = "stock:update"

# Client -> server commands
JOIN_STORE = "join:store"
LEAVE_STORE = "leave:store"
JOIN_ORDERS = "join:orders"
LEAVE_ORDERS = "leave:orders"

# Server acknowledgements
JOINED = "joined"
LEFT = "left"
ERROR = "error"


def store_topic(store_id: UUID | str) -> str:
    """Topic customers browsing a store's menu listen on."""
    return f"store:{store_id}"


def orders_topic(store_id: UUID | str) -> str:
    """Topic staff dashboards listen on for a store's orders."""
    return f"store:{store_id}:orders"
