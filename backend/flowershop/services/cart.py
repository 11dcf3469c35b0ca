"""Cart reducers.

Every operation takes a CartState and returns a new one; the input is never
mutated. The total is recomputed from the remaining lines after each change.
"""
from datetime import date, timedelta
from typing import List, Optional
from uuid import uuid4

from flowershop.errors import InvalidInput
from flowershop.models.cart import CartItem, CartState
from flowershop.models.catalog import Extra, ProductRead


def unit_price(product: ProductRead, extras: List[Extra]) -> int:
    return product.price + sum(e.price for e in extras)


def earliest_delivery_date(today: Optional[date] = None) -> date:
    return (today or date.today()) + timedelta(days=1)


def _with_items(items: List[CartItem]) -> CartState:
    return CartState(items=items)


def add_item(
    state: CartState,
    product: ProductRead,
    extras: Optional[List[Extra]] = None,
    delivery_date: Optional[date] = None,
    today: Optional[date] = None,
) -> CartState:
    """Append a new line with quantity 1.

    Lines are never merged: adding the same product twice, with or without the
    same extras, yields two separately priced lines.
    """
    extras = list(extras or [])
    if delivery_date is not None and delivery_date < earliest_delivery_date(today):
        raise InvalidInput("delivery date must be at least one day ahead", fields=["delivery_date"])

    item = CartItem(
        line_id=uuid4().hex,
        product=product,
        quantity=1,
        extras=extras,
        delivery_date=delivery_date,
        unit_price=unit_price(product, extras),
    )
    return _with_items([*state.items, item])


def update_quantity(state: CartState, line_id: str, quantity: int) -> CartState:
    quantity = max(0, quantity)
    items = []
    for item in state.items:
        if item.line_id == line_id:
            if quantity == 0:
                continue
            item = item.model_copy(update={"quantity": quantity})
        items.append(item)
    return _with_items(items)


def remove_item(state: CartState, line_id: str) -> CartState:
    return _with_items([i for i in state.items if i.line_id != line_id])


def clear_cart(state: CartState) -> CartState:
    return CartState()
