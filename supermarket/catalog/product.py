"""Product variants and stock reservation."""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from supermarket.config import DEFAULT_CURRENCY
from supermarket.exceptions import InsufficientStockError, InvalidQuantityError

# Configure module logger
logger = logging.getLogger(__name__)


class ProductKind(str, Enum):
    """Variant tag for catalog entries."""

    STANDARD = "standard"
    PERISHABLE = "perishable"


@dataclass
class Product:
    """One sellable item and its remaining stock.

    Name, price, description and shelf life are fixed once created. Stock
    only changes through ``reserve``.

    Attributes:
        name: Display name, also the key used in purchase history.
        price: Unit price in the store currency.
        stock: Units still available.
        description: Free-text description shown in the details view.
        kind: Variant tag.
        shelf_life_days: Days a perishable product keeps; None for standard.
        currency: Unit of account used in renderings.
    """

    name: str
    price: float
    stock: int
    description: str = ""
    kind: ProductKind = ProductKind.STANDARD
    shelf_life_days: Optional[int] = None
    currency: str = field(default=DEFAULT_CURRENCY, repr=False)

    def __post_init__(self) -> None:
        if self.price < 0:
            raise ValueError(f"Price must be non-negative, got {self.price}")
        if self.stock < 0:
            raise ValueError(f"Stock must be non-negative, got {self.stock}")
        if self.kind is ProductKind.PERISHABLE:
            if self.shelf_life_days is None or self.shelf_life_days <= 0:
                raise ValueError(
                    f"Perishable product {self.name!r} needs a positive shelf life"
                )
        elif self.shelf_life_days is not None:
            raise ValueError(
                f"Standard product {self.name!r} cannot have a shelf life"
            )

    @classmethod
    def standard(
        cls, name: str, price: float, stock: int, description: str = ""
    ) -> "Product":
        return cls(name=name, price=price, stock=stock, description=description)

    @classmethod
    def perishable(
        cls,
        name: str,
        price: float,
        stock: int,
        description: str,
        shelf_life_days: int,
    ) -> "Product":
        return cls(
            name=name,
            price=price,
            stock=stock,
            description=description,
            kind=ProductKind.PERISHABLE,
            shelf_life_days=shelf_life_days,
        )

    @property
    def is_perishable(self) -> bool:
        return self.kind is ProductKind.PERISHABLE

    def reserve(self, quantity: int) -> None:
        """Take ``quantity`` units out of stock.

        Args:
            quantity: Units to reserve. Must be positive.

        Raises:
            InvalidQuantityError: If quantity is zero or negative.
            InsufficientStockError: If quantity exceeds the current stock.
                Stock is left untouched.
        """
        if quantity <= 0:
            raise InvalidQuantityError(quantity)
        if quantity > self.stock:
            raise InsufficientStockError(self.name, quantity, self.stock)

        self.stock -= quantity
        logger.debug(
            "Reserved stock",
            extra={"product": self.name, "quantity": quantity, "stock": self.stock},
        )

    def _base_line(self) -> str:
        return (
            f"Product: {self.name}, Price: {self.currency} {self.price:.2f}, "
            f"Stock: {self.stock}"
        )

    def _with_variant_fields(self, lines: List[str]) -> str:
        # Perishables overlay their shelf life on the base rendering
        if self.kind is ProductKind.PERISHABLE:
            lines.append(f"Shelf Life: {self.shelf_life_days} days")
        return "\n".join(lines)

    def summary(self) -> str:
        """One-line listing, plus the shelf life for perishables."""
        return self._with_variant_fields([self._base_line()])

    def describe(self) -> str:
        """Full details: the listing, the description, then variant fields."""
        return self._with_variant_fields(
            [self._base_line(), f"Description: {self.description}"]
        )
