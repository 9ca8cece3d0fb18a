"""Order status lifecycle.

PENDING -> CONFIRMED -> PREPARING -> READY -> SERVED, with CANCELLED
reachable from any non-terminal state. SERVED and CANCELLED are terminal.

Staff may override the flow: by default any target status is accepted.
Strict mode (``enforce_order_transitions``) only allows the next forward
step, cancellation of a live order, or re-sending the current status.
"""

from enum import StrEnum


class OrderStatus(StrEnum):
    """Lifecycle state of an order."""

    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    PREPARING = "PREPARING"
    READY = "READY"
    SERVED = "SERVED"
    CANCELLED = "CANCELLED"


FORWARD_FLOW: dict[OrderStatus, OrderStatus] = {
    OrderStatus.PENDING: OrderStatus.CONFIRMED,
    OrderStatus.CONFIRMED: OrderStatus.PREPARING,
    OrderStatus.PREPARING: OrderStatus.READY,
    OrderStatus.READY: OrderStatus.SERVED,
}

TERMINAL_STATUSES = frozenset({OrderStatus.SERVED, OrderStatus.CANCELLED})


def next_status(current: OrderStatus) -> OrderStatus | None:
    """Suggested forward step for the dashboard, None once terminal."""
    return FORWARD_FLOW.get(current)


def is_terminal(status: OrderStatus) -> bool:
    return status in TERMINAL_STATUSES


def can_transition(
    current: OrderStatus,
    target: OrderStatus,
    strict: bool = False,
) -> bool:
    """Check whether an order may move from ``current`` to ``target``.

    Args:
        current: Status the order has now
        target: Requested status
        strict: Enforce the forward-only flow

    Returns:
        True if the move is accepted
    """
    if not strict or current == target:
        return True
    if is_terminal(current):
        return False
    if target == OrderStatus.CANCELLED:
        return True
    return FORWARD_FLOW.get(current) == target
