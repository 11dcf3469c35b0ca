from typing import Any, Dict, List
import logging

from pydantic import ValidationError

from flowershop.db.storage import ORDERS_KEY, SHOP_SCOPE, read_record, remove_record, write_record
from flowershop.errors import NotFound
from flowershop.models.order import Order, OrderStatus

logger = logging.getLogger(__name__)


class OrderStore:
    """Append-only list of orders kept as one JSON array under the ``orders`` key.

    Every write rewrites the whole array. There is no version check, so two
    writers racing on the same list lose one of the updates.
    """

    def __init__(self, scope: str = SHOP_SCOPE):
        self.scope = scope
        # entries skipped by the last load; a save rewrites the list without them
        self._unreadable = 0

    def _load(self) -> List[Order]:
        self._unreadable = 0
        raw = read_record(self.scope, ORDERS_KEY, default=[])
        if not isinstance(raw, list):
            logger.warning("Dropping non-list orders record (%s)", type(raw).__name__)
            remove_record(self.scope, ORDERS_KEY)
            return []
        orders = []
        for entry in raw:
            try:
                orders.append(Order.model_validate(entry))
            except ValidationError as e:
                self._unreadable += 1
                logger.warning("Skipping unreadable order record: %s", e)
        return orders

    def _save(self, orders: List[Order]) -> None:
        if self._unreadable:
            logger.warning(
                "Rewriting orders without %d unreadable record(s); they are lost", self._unreadable
            )
            self._unreadable = 0
        write_record(self.scope, ORDERS_KEY, [o.model_dump(mode="json") for o in orders])

    def list_orders(self) -> List[Order]:
        """All orders, most recent first."""
        return sorted(self._load(), key=lambda o: o.created_at, reverse=True)

    def get(self, order_id: str) -> Order:
        for order in self._load():
            if order.id == order_id:
                return order
        raise NotFound(f"order {order_id} not found")

    def append(self, order: Order) -> Order:
        orders = self._load()
        orders.append(order)
        self._save(orders)
        logger.info("Stored order id=%s total=%s", order.id, order.total)
        return order

    def replace(self, order: Order) -> Order:
        orders = self._load()
        if not any(o.id == order.id for o in orders):
            raise NotFound(f"order {order.id} not found")
        self._save([order if o.id == order.id else o for o in orders])
        return order

    def orders_for(self, email: str) -> List[Order]:
        return [o for o in self.list_orders() if o.placed_by == email]

    def stats(self) -> Dict[str, Any]:
        orders = self._load()
        by_status: Dict[str, int] = {s.value: 0 for s in OrderStatus}
        for o in orders:
            by_status[o.status] = by_status.get(o.status, 0) + 1
        return {
            "total_orders": len(orders),
            "revenue": sum(o.total for o in orders),
            "by_status": by_status,
        }
