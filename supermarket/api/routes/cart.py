"""Cart endpoints for the checkout API.

Adding to the cart reserves stock and then records the purchase for the
session's shopper, the same order the menu CLI uses.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from supermarket.api.dependencies import get_session
from supermarket.session import CheckoutSession

# Configure module logger
logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/cart",
    tags=["cart"],
)


class AddToCartRequest(BaseModel):
    # Range checks happen in the cart so the error kinds stay the same
    # as for the CLI
    index: int = Field(..., description="Catalog index of the product")
    quantity: int = Field(..., description="Units to reserve")


class CartLineResponse(BaseModel):
    index: int
    name: str
    quantity: int
    unit_price: float
    line_total: float


class CartResponse(BaseModel):
    """Current cart contents.

    Attributes:
        user: Shopper the cart belongs to.
        lines: Cart lines in insertion order.
        total: Sum of line totals before any discount.
        rendering: Printable cart.
    """

    user: str
    lines: List[CartLineResponse]
    total: float
    rendering: str


def _cart_response(session: CheckoutSession) -> CartResponse:
    cart = session.cart
    lines = []
    for line in cart.lines:
        product = cart.product_for(line)
        lines.append(
            CartLineResponse(
                index=line.index,
                name=product.name,
                quantity=line.quantity,
                unit_price=product.price,
                line_total=cart.line_total(line),
            )
        )
    return CartResponse(
        user=session.user,
        lines=lines,
        total=cart.total_cost(),
        rendering=session.view_cart(),
    )


@router.post("", response_model=CartResponse, status_code=status.HTTP_201_CREATED)
def add_to_cart(
    request: AddToCartRequest,
    session: CheckoutSession = Depends(get_session),
) -> CartResponse:
    """Reserve stock for a product and record the purchase.

    Raises:
        InvalidIndexError: Unknown catalog index (404).
        InvalidQuantityError: Quantity of zero or less (400).
        InsufficientStockError: Not enough stock (409).
    """
    line = session.add_to_cart(request.index, request.quantity)
    product = session.catalog.get(line.index)
    session.record_purchase(session.user, product.name)
    return _cart_response(session)


@router.get("", response_model=CartResponse)
def view_cart(session: CheckoutSession = Depends(get_session)) -> CartResponse:
    """Show the cart with a per-line breakdown and the total."""
    return _cart_response(session)
