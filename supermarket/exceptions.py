"""Custom exceptions for the supermarket checkout.

Every domain failure is a local validation error raised at the offending
call. Each carries the HTTP status code the API answers with.
"""

import math
from typing import Any, Dict, Optional


class SupermarketError(Exception):
    """Base exception for supermarket errors."""

    error = "SupermarketError"

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
    ):
        """Initialize exception.

        Args:
            message: Human-readable error message
            status_code: HTTP status code for API responses
            details: Additional error details for debugging
        """
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details or {}


class InvalidQuantityError(SupermarketError):
    """Raised when a requested quantity is zero or negative."""

    error = "InvalidQuantity"

    def __init__(self, quantity: int):
        super().__init__(
            message=f"Quantity must be positive, got {quantity}",
            status_code=400,
            details={"quantity": quantity},
        )


class InsufficientStockError(SupermarketError):
    """Raised when a reservation asks for more than the available stock."""

    error = "InsufficientStock"

    def __init__(self, product_name: str, requested: int, available: int):
        super().__init__(
            message=(
                f"Not enough stock for {product_name}: "
                f"requested {requested}, available {available}"
            ),
            status_code=409,
            details={
                "product": product_name,
                "requested": requested,
                "available": available,
            },
        )


class InvalidIndexError(SupermarketError):
    """Raised when a catalog index is out of range."""

    error = "InvalidIndex"

    def __init__(self, index: int, size: int):
        super().__init__(
            message=f"Invalid product index {index}; catalog has {size} products",
            status_code=404,
            details={"index": index, "catalog_size": size},
        )


class InvalidDiscountError(SupermarketError):
    """Raised when a discount parameter is outside its allowed range."""

    error = "InvalidDiscount"

    def __init__(self, kind: str, value: float):
        super().__init__(
            message=f"Invalid {kind} discount value: {value}",
            status_code=400,
            # NaN and infinities are not valid JSON numbers
            details={
                "kind": kind,
                "value": value if math.isfinite(value) else str(value),
            },
        )


class InvalidPaymentDetailsError(SupermarketError):
    """Raised when a payment stub is missing account, phone or PIN."""

    error = "InvalidPaymentDetails"

    def __init__(self, method: str, field: str):
        super().__init__(
            message=f"Missing {field} for {method} payment",
            status_code=400,
            details={"method": method, "field": field},
        )
