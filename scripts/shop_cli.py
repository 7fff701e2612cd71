"""Interactive menu for the supermarket checkout.

Runs the classic seven-option till menu against a checkout session: list
products, show details, add to cart, view the cart, check out and pay, get
recommendations, or exit.
"""

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Callable, Optional

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from supermarket.config import StoreConfig
from supermarket.exceptions import SupermarketError
from supermarket.payment import process_bank_payment, process_mpesa_payment
from supermarket.session import CheckoutSession

# Setup logging
logging.basicConfig(
    level=logging.WARNING,
    format="%(levelname)s: %(message)s"
)
logger = logging.getLogger(__name__)

MENU = (
    "\n1. View Product List\n2. View Product Details\n3. Add to Cart\n"
    "4. View Cart\n5. Checkout\n6. Get Recommendations\n7. Exit"
)

InputFn = Callable[[str], str]
OutputFn = Callable[[str], None]


def _read_int(prompt: str, read: InputFn) -> Optional[int]:
    try:
        return int(read(prompt).strip())
    except ValueError:
        return None


def add_to_cart(session: CheckoutSession, read: InputFn, write: OutputFn) -> None:
    """Prompt for an index and quantity, then add and record the purchase."""
    index = _read_int(f"Enter product index (0-{len(session.catalog) - 1}): ", read)
    if index is None:
        write("Invalid product index. Please try again.")
        return

    try:
        write(session.get_product_details(index))
    except SupermarketError:
        write("Invalid product index. Please try again.")
        return

    quantity = _read_int("Enter quantity: ", read)
    if quantity is None:
        write("Error: Quantity must be a whole number")
        return

    try:
        session.add_to_cart(index, quantity)
    except SupermarketError as e:
        write(f"Error: {e.message}")
        return

    write("Item added to cart.")
    session.record_purchase(session.user, session.catalog.get(index).name)


def checkout(session: CheckoutSession, read: InputFn, write: OutputFn) -> bool:
    """Bill the cart with the store discount and run a payment stub.

    Returns:
        True when a payment went through.
    """
    bill = session.checkout()
    write(bill.rendering)

    choice = _read_int("1. Bank\n2. M-PESA\nChoose payment method: ", read)
    try:
        if choice == 1:
            account_number = read("Enter bank account number: ")
            confirmation = process_bank_payment(
                account_number, bill.total, session.config.currency
            )
        elif choice == 2:
            phone_number = read("Enter M-PESA phone number: ")
            pin = read("Enter M-PESA PIN: ")
            confirmation = process_mpesa_payment(
                phone_number, pin, bill.total, session.config.currency
            )
        else:
            write("Invalid payment method. Transaction cancelled.")
            return False
    except SupermarketError as e:
        write(f"Error: {e.message}. Transaction cancelled.")
        return False

    write(confirmation.message)
    return True


def run_menu(
    session: CheckoutSession,
    read: InputFn = input,
    write: OutputFn = print,
) -> None:
    """Loop over the menu until the shopper exits or checks out."""
    while True:
        write(MENU)
        choice = _read_int("Enter your choice: ", read)

        if choice == 1:
            write("Product List:")
            for index, summary in session.list_products():
                write(f"Index {index}: {summary}")
        elif choice == 2:
            index = _read_int("Enter product index to view details: ", read)
            try:
                write(session.get_product_details(index if index is not None else -1))
            except SupermarketError:
                write("Invalid product index. Please try again.")
        elif choice == 3:
            add_to_cart(session, read, write)
        elif choice == 4:
            write(session.view_cart())
        elif choice == 5:
            checkout(session, read, write)
            return
        elif choice == 6:
            write("Recommended products for you:")
            for name in session.get_recommendations():
                write(f"- {name}")
        elif choice == 7:
            write("Thank you for using our system!")
            return
        else:
            write("Invalid choice. Please try again.")


def main() -> None:
    """Main CLI function."""
    parser = argparse.ArgumentParser(
        description="Supermarket checkout menu",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python scripts/shop_cli.py
  python scripts/shop_cli.py --user Wanjiku
  python scripts/shop_cli.py --history-csv data/fake_purchases.csv -v
        """
    )

    parser.add_argument(
        "--user",
        type=str,
        default=None,
        help="Shopper identifier (default: SUPERMARKET_DEFAULT_USER or User1)"
    )

    parser.add_argument(
        "--history-csv",
        type=str,
        default=None,
        help="CSV of past purchases used to seed recommendations"
    )

    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging"
    )

    args = parser.parse_args()

    if args.verbose:
        logging.getLogger().setLevel(logging.INFO)

    config = StoreConfig.from_env()
    overrides = {}
    if args.user:
        overrides["default_user"] = args.user
    if args.history_csv:
        overrides["history_csv"] = args.history_csv
    if overrides:
        config = replace(config, **overrides)

    try:
        session = CheckoutSession.create(config)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        run_menu(session)
    except (EOFError, KeyboardInterrupt):
        print()


if __name__ == "__main__":
    main()
