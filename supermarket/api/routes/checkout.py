"""Checkout endpoint for the checkout API.

Bills the cart with the chosen discount, then hands the final amount to
one of the payment stubs if the caller asked for one.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends
from pydantic import BaseModel, Field

from supermarket.api.dependencies import get_session
from supermarket.api.metrics import metrics_service
from supermarket.discount import Discount, DiscountKind
from supermarket.payment import (
    PaymentConfirmation,
    PaymentMethod,
    check_payment_details,
    process_bank_payment,
    process_mpesa_payment,
)
from supermarket.session import CheckoutSession

# Configure module logger
logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/checkout",
    tags=["checkout"],
)


class DiscountRequest(BaseModel):
    kind: DiscountKind = Field(..., description="percentage or fixed_amount")
    value: float = Field(..., description="Rate in percent or amount off")


class PaymentRequest(BaseModel):
    method: PaymentMethod
    account_number: Optional[str] = None
    phone_number: Optional[str] = None
    pin: Optional[str] = None


class CheckoutRequest(BaseModel):
    """Checkout options.

    Attributes:
        discount: Discount to apply; the store default when omitted.
        payment: Payment stub to run with the final amount; none when omitted.
    """

    discount: Optional[DiscountRequest] = None
    payment: Optional[PaymentRequest] = None


class PaymentResponse(BaseModel):
    method: PaymentMethod
    amount: float
    reference: str
    message: str


class CheckoutResponse(BaseModel):
    user: str
    subtotal: float
    discount_kind: DiscountKind
    discount_value: float
    total: float
    savings: float
    bill: str
    payment: Optional[PaymentResponse] = None


def _pay(
    payment: PaymentRequest, amount: float, currency: str
) -> PaymentConfirmation:
    if payment.method is PaymentMethod.BANK:
        return process_bank_payment(payment.account_number or "", amount, currency)
    return process_mpesa_payment(
        payment.phone_number or "", payment.pin or "", amount, currency
    )


@router.post("", response_model=CheckoutResponse)
def checkout(
    request: Optional[CheckoutRequest] = Body(default=None),
    session: CheckoutSession = Depends(get_session),
) -> CheckoutResponse:
    """Bill the cart, apply the discount and optionally run a payment stub.

    The cart is emptied after billing. Purchase history is kept.

    Raises:
        InvalidDiscountError: Discount value out of range (400).
        InvalidPaymentDetailsError: Missing account, phone or PIN (400).
    """
    request = request or CheckoutRequest()

    discount = None
    if request.discount is not None:
        discount = Discount(request.discount.kind, request.discount.value)

    # Payment details are checked before the cart is billed and emptied
    if request.payment is not None:
        check_payment_details(
            request.payment.method,
            account_number=request.payment.account_number,
            phone_number=request.payment.phone_number,
            pin=request.payment.pin,
        )

    bill = session.checkout(discount)
    metrics_service.record_checkout(bill.total)

    confirmation = None
    if request.payment is not None:
        confirmation = _pay(request.payment, bill.total, session.config.currency)

    return CheckoutResponse(
        user=session.user,
        subtotal=bill.subtotal,
        discount_kind=bill.discount.kind,
        discount_value=bill.discount.value,
        total=bill.total,
        savings=bill.savings,
        bill=bill.rendering,
        payment=(
            PaymentResponse(
                method=confirmation.method,
                amount=confirmation.amount,
                reference=confirmation.reference,
                message=confirmation.message,
            )
            if confirmation is not None
            else None
        ),
    )
