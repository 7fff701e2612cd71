"""Discount policies applied to a cart total at checkout.

A discount is a tagged value over two kinds. Evaluating it is a pure
function of the amount, so one instance can be reused across checkouts.
"""

import math
from dataclasses import dataclass
from enum import Enum

from supermarket.exceptions import InvalidDiscountError


class DiscountKind(str, Enum):
    """Variant tag for discounts."""

    PERCENTAGE = "percentage"
    FIXED_AMOUNT = "fixed_amount"


@dataclass(frozen=True)
class Discount:
    """A percentage rate in [0, 100] or a non-negative fixed amount.

    Example:
        >>> Discount.percentage(10).apply(100.0)
        90.0
        >>> Discount.fixed_amount(150).apply(100.0)
        0.0
    """

    kind: DiscountKind
    value: float

    def __post_init__(self) -> None:
        if not math.isfinite(self.value):
            raise InvalidDiscountError(self.kind.value, self.value)
        if self.kind is DiscountKind.PERCENTAGE:
            if not 0 <= self.value <= 100:
                raise InvalidDiscountError(self.kind.value, self.value)
        elif self.value < 0:
            raise InvalidDiscountError(self.kind.value, self.value)

    @classmethod
    def percentage(cls, rate: float) -> "Discount":
        return cls(DiscountKind.PERCENTAGE, float(rate))

    @classmethod
    def fixed_amount(cls, amount: float) -> "Discount":
        return cls(DiscountKind.FIXED_AMOUNT, float(amount))

    @classmethod
    def none(cls) -> "Discount":
        return cls.percentage(0)

    def apply(self, amount: float) -> float:
        """Return the discounted amount. Never larger than ``amount``."""
        if self.kind is DiscountKind.PERCENTAGE:
            return amount * (1 - self.value / 100)
        return max(0.0, amount - self.value)

    def label(self, currency: str) -> str:
        if self.kind is DiscountKind.PERCENTAGE:
            return f"{self.value:g}% off"
        return f"{currency} {self.value:.2f} off"
