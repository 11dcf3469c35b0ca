from fastapi import APIRouter
from typing import Any, Dict, List, Optional

from flowershop.models.catalog import Extra, ExtraCategory
from flowershop.services import catalog

router = APIRouter()


def _product_out(product) -> Dict[str, Any]:
    status = catalog.stock_status(product)
    return {
        **product.model_dump(),
        "stock_status": status.value,
        "stock_label": catalog.STOCK_STATUS_LABELS[status],
    }


@router.get("/products")
def list_products() -> List[Dict[str, Any]]:
    return [_product_out(p) for p in catalog.list_products()]


@router.get("/products/{product_id}")
def get_product(product_id: int) -> Dict[str, Any]:
    return _product_out(catalog.get_product(product_id))


@router.get("/extras", response_model=List[Extra])
def list_extras(category: Optional[ExtraCategory] = None):
    return catalog.list_extras(category)


@router.get("/extras/categories")
def extra_categories():
    return [{"key": k.value, "label": v} for k, v in catalog.EXTRA_CATEGORY_LABELS.items()]
