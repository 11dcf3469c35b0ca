from datetime import date
from typing import List, Optional
from sqlmodel import SQLModel, Field

from flowershop.models.catalog import Extra, ProductRead


class CartItem(SQLModel):
    line_id: str
    product: ProductRead
    quantity: int = Field(default=1, ge=1)
    extras: List[Extra] = Field(default_factory=list)
    delivery_date: Optional[date] = None
    # price of one unit (product + extras) as it was when the line was added
    unit_price: int

    @property
    def line_total(self) -> int:
        return self.unit_price * self.quantity


class CartState(SQLModel):
    items: List[CartItem] = Field(default_factory=list)

    # always derived from the lines; a stored "total" key is ignored on load
    @property
    def total(self) -> int:
        return sum(item.line_total for item in self.items)

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)
