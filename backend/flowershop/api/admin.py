from fastapi import APIRouter, Depends, Header
from pydantic import BaseModel
from starlette.responses import HTMLResponse
from typing import Optional
from html import escape

from flowershop.api.deps import require_roles, wants_html
from flowershop.api.orders import get_order_store
from flowershop.models.user import Role, User
from flowershop.services import catalog, order_status
from flowershop.services.order_store import OrderStore

router = APIRouter()

admin_only = require_roles(Role.ADMIN)

RECENT_ORDERS = 10


class StockUpdate(BaseModel):
    stock: int


class StockAdjustment(BaseModel):
    delta: int


def _render_summary_html(stats, recent) -> str:
    rows = ''.join([
        f"<tr><td>{escape(o.id)}</td><td>{escape(o.customer_info.name)}</td><td>{o.created_at:%Y-%m-%d}</td>"
        f"<td>{escape(order_status.status_label(o.status, florist=True))}</td><td>Rp {o.total:,}</td></tr>"
        for o in recent
    ])
    by_status = stats["by_status"]
    return f"""
<!doctype html>
<html>
<head>
  <meta charset="utf-8" />
  <title>Admin Dashboard</title>
  <style>
    body {{ font-family: Inter, system-ui, -apple-system, 'Segoe UI', Roboto, 'Helvetica Neue', Arial; background:#f3f4f6; padding:24px; }}
    .container {{ max-width:1100px; margin:0 auto; }}
    .cards {{ display:flex; gap:16px; margin-bottom:20px; }}
    .card {{ background:white;padding:20px;border-radius:8px; box-shadow:0 1px 3px rgba(0,0,0,0.06); flex:1 }}
    .title {{ color:#6b7280; font-size:13px }}
    .value {{ font-size:28px; font-weight:700; margin-top:6px }}
    table {{ width:100%; border-collapse:collapse; margin-top:12px; background:white; border-radius:8px; overflow:hidden }}
    th, td {{ padding:12px; text-align:left; border-bottom:1px solid #eef2f7 }}
    thead {{ background:#f9fafb }}
    .nav {{ margin-bottom:18px }}
    .nav a {{ margin-right:12px; color:#2563eb; text-decoration:none }}
  </style>
</head>
<body>
  <div class="container">
    <div class="nav"><a href="/">Shop</a> <a href="/florist/orders">Orders</a> <a href="/admin/stock">Stock</a></div>
    <h1>Admin Dashboard</h1>
    <div class="cards">
      <div class="card"><div class="title">Total Revenue</div><div class="value">Rp {stats['revenue']:,}</div></div>
      <div class="card"><div class="title">New Orders</div><div class="value">{by_status.get('paid', 0)}</div></div>
      <div class="card"><div class="title">Processing</div><div class="value">{by_status.get('on_process', 0)}</div></div>
      <div class="card"><div class="title">Delivered</div><div class="value">{by_status.get('delivered', 0)}</div></div>
    </div>
    <h2>Recent Orders</h2>
    <table>
      <thead><tr><th>ID</th><th>Customer</th><th>Date</th><th>Status</th><th>Total</th></tr></thead>
      <tbody>{rows}</tbody>
    </table>
  </div>
</body>
</html>
"""


@router.get("")
def summary(
    accept: Optional[str] = Header(None),
    user: User = Depends(admin_only),
    store: OrderStore = Depends(get_order_store),
):
    stats = store.stats()
    recent = store.list_orders()[:RECENT_ORDERS]
    if wants_html(accept):
        return HTMLResponse(content=_render_summary_html(stats, recent))
    return {**stats, "recent_orders": [o.id for o in recent]}


@router.get("/stock")
def stock(user: User = Depends(admin_only)):
    return catalog.stock_report()


@router.put("/stock/{product_id}")
def set_stock(product_id: int, upd: StockUpdate, user: User = Depends(admin_only)):
    product = catalog.set_stock(product_id, upd.stock)
    return {**product.model_dump(), "stock_status": catalog.stock_status(product).value}


@router.post("/stock/{product_id}/adjust")
def adjust_stock(product_id: int, adj: StockAdjustment, user: User = Depends(admin_only)):
    product = catalog.adjust_stock(product_id, adj.delta)
    return {**product.model_dump(), "stock_status": catalog.stock_status(product).value}
