from datetime import datetime
from enum import Enum
from typing import List, Optional
from sqlmodel import SQLModel, Field

from flowershop.models.cart import CartItem


class OrderStatus(str, Enum):
    PAID = "paid"
    ON_PROCESS = "on_process"
    DELIVERED = "delivered"


class PaymentMethod(str, Enum):
    CREDIT_CARD = "credit_card"
    BANK_TRANSFER = "bank_transfer"
    E_WALLET = "e_wallet"


class DeliveryOption(SQLModel):
    key: str
    label: str
    fee: int = 0


class CustomerInfo(SQLModel):
    name: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""
    city: str = ""
    postal_code: str = ""


class Order(SQLModel):
    id: str
    customer_info: CustomerInfo
    items: List[CartItem] = Field(default_factory=list)
    subtotal: int
    delivery_option: Optional[str] = None
    delivery_fee: int = 0
    total: int
    payment_method: PaymentMethod = PaymentMethod.CREDIT_CARD
    # kept as a plain string: records written by older clients may carry
    # values outside OrderStatus
    status: str = OrderStatus.PAID.value
    placed_by: Optional[str] = None
    created_at: datetime
