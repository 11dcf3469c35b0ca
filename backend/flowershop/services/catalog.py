from typing import Any, Dict, Iterable, List, Optional
import logging

from sqlmodel import select

from flowershop.db.session import get_session
from flowershop.errors import InvalidInput, NotFound
from flowershop.models.catalog import Extra, ExtraCategory, Product, StockStatus

logger = logging.getLogger(__name__)

SEED_PRODUCTS: List[Dict[str, Any]] = [
    {
        "id": 1,
        "name": "Orchid Bouquet",
        "description": "Classic purple orchid arranged elegantly, perfect for romantic occasions.",
        "price": 500000,
        "image": "/images/ungu.jpg",
        "stock": 25,
        "low_stock_threshold": 5,
    },
    {
        "id": 2,
        "name": "White Arrangement",
        "description": "Bright orchid in assorted colors, symbolizing happiness and cheer.",
        "price": 650000,
        "image": "/images/white.webp",
        "stock": 15,
        "low_stock_threshold": 3,
    },
    {
        "id": 3,
        "name": "Orchid Basket",
        "description": "A refined orchid arrangement that brings a touch of luxury to any room.",
        "price": 800000,
        "image": "/images/kuning.jpeg",
        "stock": 8,
        "low_stock_threshold": 2,
    },
]

EXTRAS: Dict[str, Extra] = {
    e.id: e
    for e in [
        Extra(id="premium-wrap", name="Premium Gift Wrapping",
              description="Elegant gift wrapping with ribbon and bow",
              price=25000, category=ExtraCategory.PACKAGING),
        Extra(id="deluxe-box", name="Deluxe Gift Box",
              description="Premium wooden gift box presentation",
              price=50000, category=ExtraCategory.PACKAGING),
        Extra(id="waterproof-wrap", name="Waterproof Wrapping",
              description="Weather-resistant packaging for outdoor delivery",
              price=15000, category=ExtraCategory.PACKAGING),
        Extra(id="greeting-card", name="Personalized Greeting Card",
              description="Custom message card with your personal note",
              price=10000, category=ExtraCategory.CARDS),
        Extra(id="chocolate-box", name="Premium Chocolate Box",
              description="Assorted premium chocolates (12 pieces)",
              price=75000, category=ExtraCategory.ACCESSORIES),
        Extra(id="teddy-bear", name="Small Teddy Bear",
              description="Cute plush teddy bear companion",
              price=45000, category=ExtraCategory.ACCESSORIES),
        Extra(id="balloon-set", name="Balloon Bouquet",
              description="Set of 5 colorful helium balloons",
              price=30000, category=ExtraCategory.ACCESSORIES),
        Extra(id="birthday-card", name="Birthday Card",
              description="Special birthday wishes card",
              price=8000, category=ExtraCategory.CARDS),
        Extra(id="love-card", name="Love & Romance Card",
              description="Romantic message card for special occasions",
              price=8000, category=ExtraCategory.CARDS),
        Extra(id="congratulations-card", name="Congratulations Card",
              description="Celebration and achievement card",
              price=8000, category=ExtraCategory.CARDS),
    ]
}

EXTRA_CATEGORY_LABELS = {
    ExtraCategory.PACKAGING: "Gift Wrapping & Packaging",
    ExtraCategory.ACCESSORIES: "Add-on Gifts",
    ExtraCategory.CARDS: "Greeting Cards",
}

STOCK_STATUS_LABELS = {
    StockStatus.OUT: "Out of Stock",
    StockStatus.LOW: "Low Stock",
    StockStatus.GOOD: "In Stock",
}


def seed_catalog() -> int:
    """Insert the demo products if the product table is empty."""
    session = get_session()
    try:
        if session.exec(select(Product)).first() is not None:
            return 0
        for p in SEED_PRODUCTS:
            session.add(Product(**p))
        session.commit()
        logger.info("Seeded %d products", len(SEED_PRODUCTS))
        return len(SEED_PRODUCTS)
    finally:
        session.close()


def list_products() -> List[Product]:
    session = get_session()
    try:
        return list(session.exec(select(Product).order_by(Product.id)).all())
    finally:
        session.close()


def get_product(product_id: int) -> Product:
    session = get_session()
    try:
        product = session.get(Product, product_id)
    finally:
        session.close()
    if product is None:
        raise NotFound(f"product {product_id} not found")
    return product


def list_extras(category: Optional[ExtraCategory] = None) -> List[Extra]:
    return [e for e in EXTRAS.values() if category is None or e.category == category]


def resolve_extras(extra_ids: Iterable[str]) -> List[Extra]:
    """Map extra ids to Extras, keeping first-seen order and dropping repeats."""
    resolved: List[Extra] = []
    unknown: List[str] = []
    for extra_id in extra_ids:
        extra = EXTRAS.get(extra_id)
        if extra is None:
            unknown.append(extra_id)
        elif extra not in resolved:
            resolved.append(extra)
    if unknown:
        raise InvalidInput("unknown extras", fields=[f"extra_ids:{u}" for u in unknown])
    return resolved


def stock_status(product: Product) -> StockStatus:
    if product.stock == 0:
        return StockStatus.OUT
    if product.stock <= product.low_stock_threshold:
        return StockStatus.LOW
    return StockStatus.GOOD


def set_stock(product_id: int, stock: int) -> Product:
    """Overwrite a product's stock count. Negative values clamp to 0; last write wins."""
    session = get_session()
    try:
        product = session.get(Product, product_id)
        if product is None:
            raise NotFound(f"product {product_id} not found")
        previous = product.stock
        product.stock = max(0, stock)
        session.add(product)
        session.commit()
        session.refresh(product)
        logger.info("Stock updated product_id=%s %s -> %s", product_id, previous, product.stock)
        return product
    finally:
        session.close()


def adjust_stock(product_id: int, delta: int) -> Product:
    product = get_product(product_id)
    return set_stock(product_id, product.stock + delta)


def stock_report() -> Dict[str, Any]:
    products = list_products()
    rows = []
    for p in products:
        status = stock_status(p)
        rows.append({**p.model_dump(), "stock_status": status.value, "stock_label": STOCK_STATUS_LABELS[status]})
    return {
        "products": rows,
        "low_stock": [p.id for p in products if 0 < p.stock <= p.low_stock_threshold],
        "out_of_stock": [p.id for p in products if p.stock == 0],
    }
