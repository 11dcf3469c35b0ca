from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional
from uuid import uuid4
import logging
import os
import time

from flowershop.errors import InvalidInput
from flowershop.models.order import CustomerInfo, DeliveryOption, Order, OrderStatus, PaymentMethod
from flowershop.services import cart as cart_engine
from flowershop.services.auth import ShopSession
from flowershop.services.notifier import ORDER_CREATED, OrderNotifier
from flowershop.services.order_store import OrderStore

logger = logging.getLogger(__name__)

PAYMENT_DELAY_SECONDS = float(os.getenv("CHECKOUT_PAYMENT_DELAY_SECONDS", "3.0"))

REQUIRED_FIELDS = ("name", "email", "phone", "address", "city", "postal_code")

DELIVERY_OPTIONS: Dict[str, DeliveryOption] = {
    "standard": DeliveryOption(key="standard", label="Free", fee=0),
    "express": DeliveryOption(key="express", label="Express", fee=25000),
}
DEFAULT_DELIVERY_OPTION = "standard"


def missing_fields(info: CustomerInfo) -> List[str]:
    """Names of required fields that are blank. Presence only, no format checks."""
    return [f for f in REQUIRED_FIELDS if not (getattr(info, f) or "").strip()]


def delivery_fee(option: Optional[str]) -> int:
    if option is None:
        return 0
    chosen = DELIVERY_OPTIONS.get(option)
    if chosen is None:
        raise InvalidInput(f"unknown delivery option {option}", fields=["delivery_option"])
    return chosen.fee


def new_order_id() -> str:
    return "ORD-" + uuid4().hex[:12].upper()


class CheckoutService:
    """Turns the session's cart into a paid Order.

    Payment is simulated by a fixed wait and always succeeds once the form is
    complete.
    """

    def __init__(
        self,
        store: Optional[OrderStore] = None,
        notifier: Optional[OrderNotifier] = None,
        payment_delay: Optional[float] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.store = store or OrderStore()
        self.notifier = notifier or OrderNotifier()
        self.payment_delay = PAYMENT_DELAY_SECONDS if payment_delay is None else payment_delay
        self.sleep = sleep

    def place_order(
        self,
        shop_session: ShopSession,
        customer_info: CustomerInfo,
        payment_method: PaymentMethod = PaymentMethod.CREDIT_CARD,
        delivery_option: Optional[str] = DEFAULT_DELIVERY_OPTION,
    ) -> Order:
        cart = shop_session.cart
        if not cart.items:
            raise InvalidInput("cart is empty", fields=["cart"])
        missing = missing_fields(customer_info)
        if missing:
            logger.warning("Checkout blocked session=%s missing=%s", shop_session.session_id, missing)
            raise InvalidInput("required fields are empty", fields=missing)
        fee = delivery_fee(delivery_option)

        if self.payment_delay > 0:
            self.sleep(self.payment_delay)

        order = Order(
            id=new_order_id(),
            customer_info=customer_info,
            items=list(cart.items),
            subtotal=cart.total,
            delivery_option=delivery_option,
            delivery_fee=fee,
            total=cart.total + fee,
            payment_method=payment_method,
            status=OrderStatus.PAID.value,
            placed_by=shop_session.user.email if shop_session.user else None,
            created_at=datetime.now(timezone.utc),
        )
        self.store.append(order)
        shop_session.set_cart(cart_engine.clear_cart(cart))
        logger.info("Order placed id=%s session=%s total=%s", order.id, shop_session.session_id, order.total)

        self.notifier.notify(ORDER_CREATED, {
            "order_id": order.id,
            "status": order.status,
            "total": order.total,
            "email": customer_info.email,
        })
        return order
