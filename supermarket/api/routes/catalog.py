"""Catalog endpoints for the checkout API."""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from supermarket.api.dependencies import get_session
from supermarket.catalog import Product
from supermarket.session import CheckoutSession

# Configure module logger
logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/products",
    tags=["catalog"],
)


class ProductSummary(BaseModel):
    """Catalog listing entry.

    Attributes:
        index: Stable catalog index used to add the product to the cart.
        name: Product name.
        price: Unit price.
        stock: Units still available.
        kind: "standard" or "perishable".
        shelf_life_days: Shelf life for perishables, otherwise null.
        summary: Printable one-line listing.
    """

    index: int = Field(..., description="Catalog index")
    name: str
    price: float = Field(..., ge=0)
    stock: int = Field(..., ge=0)
    kind: str
    shelf_life_days: Optional[int] = None
    summary: str


class ProductDetails(ProductSummary):
    description: str
    details: str = Field(..., description="Printable detailed rendering")


def _summary(index: int, product: Product) -> ProductSummary:
    return ProductSummary(
        index=index,
        name=product.name,
        price=product.price,
        stock=product.stock,
        kind=product.kind.value,
        shelf_life_days=product.shelf_life_days,
        summary=product.summary(),
    )


@router.get("", response_model=List[ProductSummary])
def list_products(
    session: CheckoutSession = Depends(get_session),
) -> List[ProductSummary]:
    """List every catalog entry in index order."""
    return [_summary(idx, product) for idx, product in enumerate(session.catalog)]


@router.get("/{index}", response_model=ProductDetails)
def get_product_details(
    index: int,
    session: CheckoutSession = Depends(get_session),
) -> ProductDetails:
    """Get one catalog entry with its description.

    Raises:
        InvalidIndexError: If index is out of range (404).
    """
    details = session.get_product_details(index)
    product = session.catalog.get(index)
    return ProductDetails(
        **_summary(index, product).model_dump(),
        description=product.description,
        details=details,
    )
