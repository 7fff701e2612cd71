"""Shopping cart with stock reservation.

A cart line keeps the catalog index of its product, never the product
itself. Adding to the cart reserves stock immediately; the reservation and
the new line happen together or not at all.
"""

import logging
from dataclasses import dataclass
from typing import List

from supermarket.catalog import Catalog, Product
from supermarket.config import DEFAULT_CURRENCY
from supermarket.exceptions import InsufficientStockError, InvalidQuantityError

# Configure module logger
logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CartLine:
    """One reserved quantity of one catalog entry."""

    index: int
    quantity: int


class Cart:
    """Ordered cart lines for the current session.

    Repeated additions of the same product are kept as separate lines, in
    the order they were added.
    """

    def __init__(self, catalog: Catalog, currency: str = DEFAULT_CURRENCY):
        self.catalog = catalog
        self.currency = currency
        self._lines: List[CartLine] = []

    def __len__(self) -> int:
        return len(self._lines)

    @property
    def lines(self) -> List[CartLine]:
        return list(self._lines)

    @property
    def is_empty(self) -> bool:
        return not self._lines

    def product_for(self, line: CartLine) -> Product:
        return self.catalog.get(line.index)

    def line_total(self, line: CartLine) -> float:
        return self.product_for(line).price * line.quantity

    def add_to_cart(self, index: int, quantity: int) -> CartLine:
        """Reserve stock for a catalog entry and append a cart line.

        Args:
            index: Catalog index of the product.
            quantity: Units to add. Must be positive.

        Returns:
            The new cart line.

        Raises:
            InvalidIndexError: If index is not in the catalog.
            InvalidQuantityError: If quantity is zero or negative.
            InsufficientStockError: If the product has fewer units in stock.
        """
        product = self.catalog.get(index)

        if quantity <= 0:
            raise InvalidQuantityError(quantity)
        if product.stock < quantity:
            raise InsufficientStockError(product.name, quantity, product.stock)

        product.reserve(quantity)
        line = CartLine(index=index, quantity=quantity)
        self._lines.append(line)

        logger.info(
            "Added to cart",
            extra={
                "product": product.name,
                "index": index,
                "quantity": quantity,
                "remaining_stock": product.stock,
            },
        )
        return line

    def total_cost(self) -> float:
        """Sum of unit price times quantity over all lines."""
        return sum((self.line_total(line) for line in self._lines), 0.0)

    def render(self) -> str:
        """Per-line breakdown followed by the total, in insertion order."""
        currency = self.currency
        rows = ["Shopping Cart:"]
        for line in self._lines:
            product = self.product_for(line)
            rows.append(
                f"{product.name} x {line.quantity} = "
                f"{currency} {self.line_total(line):.2f}"
            )
        rows.append(f"Total: {currency} {self.total_cost():.2f}")
        return "\n".join(rows)
