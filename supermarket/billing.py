"""Bill rendering and discount application.

Billing holds no discount policy of its own. The caller picks the discount
and Billing only evaluates it.
"""

import logging
from dataclasses import dataclass

from supermarket.cart import Cart
from supermarket.discount import Discount

# Configure module logger
logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Bill:
    """Outcome of a checkout, before payment.

    Attributes:
        subtotal: Cart total before the discount.
        discount: Discount that was applied.
        total: Amount handed to the payment collaborator.
        rendering: Printable receipt.
    """

    subtotal: float
    discount: Discount
    total: float
    rendering: str

    @property
    def savings(self) -> float:
        return self.subtotal - self.total


def generate_bill(cart: Cart) -> str:
    """Render the cart as a receipt. Does not modify the cart."""
    return "Generating bill...\n" + cart.render()


def apply_discount(amount: float, discount: Discount) -> float:
    """Apply the caller-chosen discount to an amount."""
    return discount.apply(amount)


def build_bill(cart: Cart, discount: Discount) -> Bill:
    """Render the cart, apply the discount and bundle the result."""
    subtotal = cart.total_cost()
    total = apply_discount(subtotal, discount)
    rendering = "\n".join(
        [
            generate_bill(cart),
            f"Discount: {discount.label(cart.currency)}",
            f"Discounted Total: {cart.currency} {total:.2f}",
        ]
    )

    logger.info(
        "Bill generated",
        extra={
            "lines": len(cart),
            "subtotal": round(subtotal, 2),
            "discount_kind": discount.kind.value,
            "discount_value": discount.value,
            "total": round(total, 2),
        },
    )
    return Bill(subtotal=subtotal, discount=discount, total=total, rendering=rendering)
