from enum import Enum
from typing import Optional
from sqlmodel import SQLModel, Field


class ExtraCategory(str, Enum):
    PACKAGING = "packaging"
    ACCESSORIES = "accessories"
    CARDS = "cards"


class StockStatus(str, Enum):
    OUT = "out"
    LOW = "low"
    GOOD = "good"


class ProductBase(SQLModel):
    name: str
    description: str = ""
    price: int = Field(ge=0)
    image: Optional[str] = None
    stock: int = Field(default=0, ge=0)
    low_stock_threshold: int = Field(default=0, ge=0)


class Product(ProductBase, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)


class ProductRead(ProductBase):
    id: int


class Extra(SQLModel):
    id: str
    name: str
    description: str = ""
    price: int = Field(ge=0)
    category: ExtraCategory
