from datetime import date
from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from typing import List, Optional
import logging

from flowershop.api.deps import get_shop_session
from flowershop.models.cart import CartState
from flowershop.models.catalog import ProductRead
from flowershop.services import cart as cart_engine
from flowershop.services import catalog
from flowershop.services.auth import ShopSession

logger = logging.getLogger(__name__)
router = APIRouter()


class AddToCartRequest(BaseModel):
    product_id: int
    extra_ids: List[str] = Field(default_factory=list)
    delivery_date: Optional[date] = None


class QuantityUpdate(BaseModel):
    quantity: int


def _cart_out(cart: CartState):
    return {
        "items": [{**i.model_dump(mode="json"), "line_total": i.line_total} for i in cart.items],
        "total": cart.total,
        "item_count": cart.item_count,
    }


@router.get("")
def get_cart(shop_session: ShopSession = Depends(get_shop_session)):
    return _cart_out(shop_session.cart)


@router.post("/items", status_code=201)
def add_to_cart(req: AddToCartRequest, shop_session: ShopSession = Depends(get_shop_session)):
    product = ProductRead.model_validate(catalog.get_product(req.product_id).model_dump())
    extras = catalog.resolve_extras(req.extra_ids)
    cart = cart_engine.add_item(shop_session.cart, product, extras, req.delivery_date)
    shop_session.set_cart(cart)
    logger.info("Added product_id=%s extras=%s session=%s", product.id, [e.id for e in extras], shop_session.session_id)
    return _cart_out(cart)


@router.patch("/items/{line_id}")
def update_quantity(line_id: str, upd: QuantityUpdate, shop_session: ShopSession = Depends(get_shop_session)):
    cart = shop_session.set_cart(cart_engine.update_quantity(shop_session.cart, line_id, upd.quantity))
    return _cart_out(cart)


@router.delete("/items/{line_id}")
def remove_item(line_id: str, shop_session: ShopSession = Depends(get_shop_session)):
    cart = shop_session.set_cart(cart_engine.remove_item(shop_session.cart, line_id))
    return _cart_out(cart)


@router.delete("")
def clear_cart(shop_session: ShopSession = Depends(get_shop_session)):
    cart = shop_session.set_cart(cart_engine.clear_cart(shop_session.cart))
    return _cart_out(cart)
