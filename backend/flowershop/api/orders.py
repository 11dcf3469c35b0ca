from fastapi import APIRouter, Depends

from flowershop.api.deps import require_roles
from flowershop.errors import NotFound
from flowershop.models.order import Order
from flowershop.models.user import Role, User
from flowershop.services import order_status
from flowershop.services.order_store import OrderStore

router = APIRouter()


def get_order_store() -> OrderStore:
    return OrderStore()


def order_out(order: Order, florist: bool = False):
    return {
        **order.model_dump(mode="json"),
        "status_label": order_status.status_label(order.status, florist=florist),
    }


@router.get("")
def my_orders(user: User = Depends(require_roles(Role.CUSTOMER)), store: OrderStore = Depends(get_order_store)):
    return [order_out(o) for o in store.orders_for(user.email)]


@router.get("/{order_id}")
def my_order(order_id: str, user: User = Depends(require_roles(Role.CUSTOMER)), store: OrderStore = Depends(get_order_store)):
    order = store.get(order_id)
    if order.placed_by != user.email:
        # someone else's order looks the same as a missing one
        raise NotFound(f"order {order_id} not found")
    return order_out(order)
