from fastapi import APIRouter, Depends, Header
from starlette.responses import HTMLResponse
from typing import Optional
from html import escape
import logging

from flowershop.api.deps import require_roles, wants_html
from flowershop.api.orders import get_order_store, order_out
from flowershop.models.user import Role, User
from flowershop.services import order_status
from flowershop.services.notifier import ORDER_STATUS_CHANGED, OrderNotifier
from flowershop.services.order_store import OrderStore

logger = logging.getLogger(__name__)
router = APIRouter()

staff_only = require_roles(Role.FLORIST, Role.ADMIN)


def get_notifier() -> OrderNotifier:
    return OrderNotifier()


def _detail(order):
    return {
        **order_out(order, florist=True),
        "can_progress": order_status.can_progress(order.status),
        "next_status": order_status.next_status(order.status),
        "next_action": order_status.action_label(order.status),
    }


def _render_orders_html(orders) -> str:
    rows_html = ''.join([
        f"<tr><td>{escape(o.id)}</td><td>{escape(o.customer_info.name)}</td><td>{len(o.items)}</td>"
        f"<td>Rp {o.total:,}</td><td>{escape(order_status.status_label(o.status, florist=True))}</td>"
        f"<td>{o.created_at:%Y-%m-%d}</td></tr>"
        for o in orders
    ])
    return f"""
<!doctype html>
<html><head><meta charset='utf-8' /><title>Florist Orders</title>
<style>body{{font-family:Inter,system-ui, -apple-system, 'Segoe UI', Roboto; background:#f3f4f6; padding:24px}} table{{width:100%; border-collapse:collapse; background:white}}th,td{{padding:12px;border-bottom:1px solid #eef2f7}}thead{{background:#f9fafb}}</style>
</head><body><div class='container'><h1>Orders</h1><table><thead><tr><th>ID</th><th>Customer</th><th>Lines</th><th>Total</th><th>Status</th><th>Date</th></tr></thead><tbody>{rows_html}</tbody></table></div></body></html>
"""


@router.get("/orders")
def list_orders(
    status: Optional[str] = None,
    accept: Optional[str] = Header(None),
    user: User = Depends(staff_only),
    store: OrderStore = Depends(get_order_store),
):
    orders = store.list_orders()
    if status:
        orders = [o for o in orders if o.status == status]
    if wants_html(accept):
        return HTMLResponse(content=_render_orders_html(orders))
    return [_detail(o) for o in orders]


@router.get("/orders/counts")
def order_counts(user: User = Depends(staff_only), store: OrderStore = Depends(get_order_store)):
    """Number of orders in each status, for the filter tabs."""
    counts = store.stats()["by_status"]
    return {**counts, "all": sum(counts.values())}


@router.get("/orders/{order_id}")
def get_order(order_id: str, user: User = Depends(staff_only), store: OrderStore = Depends(get_order_store)):
    return _detail(store.get(order_id))


@router.post("/orders/{order_id}/advance")
def advance_order(
    order_id: str,
    user: User = Depends(staff_only),
    store: OrderStore = Depends(get_order_store),
    notifier: OrderNotifier = Depends(get_notifier),
):
    """Move an order one step along paid -> on_process -> delivered.

    Delivered orders are returned unchanged with ``changed`` set to False.
    """
    order = store.get(order_id)
    updated = order_status.advance(order)
    changed = updated.status != order.status
    if changed:
        store.replace(updated)
        logger.info("Order status advanced id=%s %s -> %s by=%s", order_id, order.status, updated.status, user.email)
        notifier.notify(ORDER_STATUS_CHANGED, {
            "order_id": updated.id,
            "status": updated.status,
            "previous_status": order.status,
        })
    else:
        logger.info("Order id=%s already terminal (%s), nothing to do", order_id, order.status)
    return {"changed": changed, "order": _detail(updated)}
