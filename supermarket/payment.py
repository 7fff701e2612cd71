"""Payment stubs.

These only format a confirmation for an amount the checkout already
computed. Nothing is settled and nothing flows back into the session.
"""

import logging
import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from supermarket.config import DEFAULT_CURRENCY
from supermarket.exceptions import InvalidPaymentDetailsError

# Configure module logger
logger = logging.getLogger(__name__)


class PaymentMethod(str, Enum):
    BANK = "bank"
    MPESA = "mpesa"


@dataclass(frozen=True)
class PaymentConfirmation:
    method: PaymentMethod
    amount: float
    reference: str
    message: str


def _reference() -> str:
    return uuid.uuid4().hex[:10].upper()


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def check_payment_details(
    method: PaymentMethod,
    account_number: Optional[str] = None,
    phone_number: Optional[str] = None,
    pin: Optional[str] = None,
) -> None:
    """Make sure the fields a payment method needs are present.

    Raises:
        InvalidPaymentDetailsError: If a required field is blank.
    """
    if method is PaymentMethod.BANK:
        if _is_blank(account_number):
            raise InvalidPaymentDetailsError(method.value, "account_number")
        return
    if _is_blank(phone_number):
        raise InvalidPaymentDetailsError(method.value, "phone_number")
    if _is_blank(pin):
        raise InvalidPaymentDetailsError(method.value, "pin")


def process_bank_payment(
    account_number: str,
    amount: float,
    currency: str = DEFAULT_CURRENCY,
) -> PaymentConfirmation:
    """Confirm a bank payment of ``amount`` from ``account_number``.

    Raises:
        InvalidPaymentDetailsError: If the account number is blank.
    """
    check_payment_details(PaymentMethod.BANK, account_number=account_number)

    message = (
        f"Processing bank payment of {currency} {amount:.2f} "
        f"from account {account_number}"
    )
    logger.info("Bank payment processed", extra={"amount": round(amount, 2)})
    return PaymentConfirmation(PaymentMethod.BANK, amount, _reference(), message)


def process_mpesa_payment(
    phone_number: str,
    pin: str,
    amount: float,
    currency: str = DEFAULT_CURRENCY,
) -> PaymentConfirmation:
    """Confirm an M-PESA payment of ``amount`` from ``phone_number``.

    The PIN is only checked for presence and never echoed back.

    Raises:
        InvalidPaymentDetailsError: If the phone number or PIN is blank.
    """
    check_payment_details(
        PaymentMethod.MPESA, phone_number=phone_number, pin=pin
    )

    message = (
        f"Processing M-PESA payment of {currency} {amount:.2f} "
        f"from phone number {phone_number}\n"
        "PIN verified. Payment successful."
    )
    logger.info("M-PESA payment processed", extra={"amount": round(amount, 2)})
    return PaymentConfirmation(PaymentMethod.MPESA, amount, _reference(), message)
