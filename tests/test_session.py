"""Tests for the checkout session facade."""

from pathlib import Path

import pandas as pd
import pytest

from supermarket.config import StoreConfig
from supermarket.discount import Discount
from supermarket.exceptions import InsufficientStockError, InvalidIndexError
from supermarket.session import CheckoutSession


@pytest.fixture
def session() -> CheckoutSession:
    return CheckoutSession.create(StoreConfig())


def test_list_and_details(session: CheckoutSession) -> None:
    listing = session.list_products()

    assert listing[0] == (0, "Product: Apple, Price: KES 50.00, Stock: 100")
    assert session.get_product_details(2).endswith(
        "Description: Pasteurized whole milk from Brookside dairy\n"
        "Shelf Life: 7 days"
    )


def test_details_for_bad_index(session: CheckoutSession) -> None:
    with pytest.raises(InvalidIndexError):
        session.get_product_details(99)


def test_add_to_cart_does_not_record_purchase(session: CheckoutSession) -> None:
    session.add_to_cart(0, 2)

    assert session.engine.history(session.user) == []
    assert session.view_cart().endswith("Total: KES 100.00")


def test_failed_add_leaves_session_unchanged(session: CheckoutSession) -> None:
    with pytest.raises(InsufficientStockError):
        session.add_to_cart(0, 200)

    assert session.catalog.get(0).stock == 100
    assert session.cart.is_empty


def test_checkout_uses_default_discount_and_resets_cart(
    session: CheckoutSession,
) -> None:
    session.add_to_cart(0, 2)
    session.record_purchase(session.user, "Apple")

    bill = session.checkout()

    assert bill.subtotal == pytest.approx(100.00)
    assert bill.total == pytest.approx(90.00)
    assert bill.discount == Discount.percentage(10)
    assert session.cart.is_empty
    # Stock stays reserved and history stays recorded after checkout
    assert session.catalog.get(0).stock == 98
    assert session.engine.history(session.user) == ["Apple"]


def test_checkout_with_explicit_discount(session: CheckoutSession) -> None:
    session.add_to_cart(1, 1)

    bill = session.checkout(Discount.fixed_amount(100))

    assert bill.total == 0.0


def test_checkout_of_empty_cart(session: CheckoutSession) -> None:
    bill = session.checkout(Discount.none())

    assert bill.subtotal == 0.0
    assert bill.total == 0.0


def test_recommendations_default_to_session_user(session: CheckoutSession) -> None:
    session.record_purchase("User1", "Milk")
    session.record_purchase("User2", "Milk")
    session.record_purchase("User2", "Bread")

    assert session.get_recommendations() == ["Bread"]
    assert session.get_recommendations("User2") == []
    assert session.get_recommendations("nobody") == []


def test_empty_user_name_is_not_the_session_user(session: CheckoutSession) -> None:
    session.record_purchase("User1", "Milk")
    session.record_purchase("User2", "Milk")
    session.record_purchase("User2", "Bread")

    assert session.get_recommendations() == ["Bread"]
    assert session.get_recommendations("") == []


def test_create_honours_config(tmp_path: Path) -> None:
    csv_path = tmp_path / "history.csv"
    pd.DataFrame(
        {"user": ["Shopper1"] * 3, "product": ["Milk", "Bread", "Ringos"]}
    ).to_csv(csv_path, index=False)
    config = StoreConfig(
        currency="USD",
        max_recommendations=1,
        default_discount_rate=0.0,
        default_user="Amina",
        history_csv=str(csv_path),
    )

    session = CheckoutSession.create(config)
    session.add_to_cart(2, 1)
    session.record_purchase(session.user, "Milk")

    assert session.user == "Amina"
    assert session.view_cart().startswith("Shopping Cart:\nMilk x 1 = USD 120.00")
    assert session.get_recommendations() == ["Bread"]
    assert session.checkout().total == pytest.approx(120.00)


def test_config_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SUPERMARKET_MAX_RECOMMENDATIONS", "3")
    monkeypatch.setenv("SUPERMARKET_DEFAULT_DISCOUNT_RATE", "12.5")
    monkeypatch.setenv("SUPERMARKET_DEFAULT_USER", "Otieno")
    monkeypatch.setenv("SUPERMARKET_LOG_LEVEL", "debug")
    monkeypatch.setenv("SUPERMARKET_HISTORY_CSV", "  ")

    config = StoreConfig.from_env()

    assert config.max_recommendations == 3
    assert config.default_discount_rate == 12.5
    assert config.default_user == "Otieno"
    assert config.log_level == "DEBUG"
    assert config.history_csv is None
    assert config.currency == "KES"
