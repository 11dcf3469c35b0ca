from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from typing import Optional

from flowershop.api.deps import get_shop_session, require_roles
from flowershop.models.order import CustomerInfo, PaymentMethod
from flowershop.models.user import Role
from flowershop.services.auth import ShopSession
from flowershop.services.checkout import DEFAULT_DELIVERY_OPTION, DELIVERY_OPTIONS, CheckoutService

router = APIRouter()


class CheckoutRequest(BaseModel):
    customer_info: CustomerInfo = Field(default_factory=CustomerInfo)
    payment_method: PaymentMethod = PaymentMethod.CREDIT_CARD
    delivery_option: Optional[str] = DEFAULT_DELIVERY_OPTION


def get_checkout_service() -> CheckoutService:
    return CheckoutService()


@router.get("/options")
def checkout_options():
    return {
        "payment_methods": [m.value for m in PaymentMethod],
        "delivery_options": [o.model_dump() for o in DELIVERY_OPTIONS.values()],
        "default_delivery_option": DEFAULT_DELIVERY_OPTION,
    }


@router.post("", status_code=201, dependencies=[Depends(require_roles(Role.CUSTOMER, Role.FLORIST, Role.ADMIN))])
def place_order(
    req: CheckoutRequest,
    shop_session: ShopSession = Depends(get_shop_session),
    service: CheckoutService = Depends(get_checkout_service),
):
    order = service.place_order(shop_session, req.customer_info, req.payment_method, req.delivery_option)
    return {"completed": True, "order": order.model_dump(mode="json")}
