from typing import Optional

from flowershop.models.order import Order, OrderStatus

NEXT_STATUS = {
    OrderStatus.PAID.value: OrderStatus.ON_PROCESS.value,
    OrderStatus.ON_PROCESS.value: OrderStatus.DELIVERED.value,
}

CUSTOMER_LABELS = {
    OrderStatus.PAID.value: "Payment Confirmed",
    OrderStatus.ON_PROCESS.value: "Arranging Flowers",
    OrderStatus.DELIVERED.value: "Delivered",
}

FLORIST_LABELS = {
    OrderStatus.PAID.value: "New Order",
    OrderStatus.ON_PROCESS.value: "Arranging Flowers",
    OrderStatus.DELIVERED.value: "Delivered",
}

ACTION_LABELS = {
    OrderStatus.PAID.value: "Start Arranging",
    OrderStatus.ON_PROCESS.value: "Mark as Delivered",
}


def next_status(status: str) -> Optional[str]:
    """Return the only status reachable from ``status``, or None.

    ``delivered`` is terminal and unrecognized values have no transitions.
    """
    return NEXT_STATUS.get(status)


def can_progress(status: str) -> bool:
    return status in NEXT_STATUS


def advance(order: Order) -> Order:
    """Move the order one step forward; terminal orders come back unchanged."""
    nxt = next_status(order.status)
    if nxt is None:
        return order
    return order.model_copy(update={"status": nxt})


def status_label(status: str, florist: bool = False) -> str:
    labels = FLORIST_LABELS if florist else CUSTOMER_LABELS
    return labels.get(status) or status[:1].upper() + status[1:]


def action_label(status: str) -> Optional[str]:
    return ACTION_LABELS.get(status)
