"""Tests for error handling in the checkout API.

Every domain error comes back as JSON with ``error``, ``message`` and
``details`` keys, and leaves the session untouched.
"""

import logging

import pytest
from fastapi.testclient import TestClient

from supermarket.api.dependencies import reset_session
from supermarket.api.main import app
from supermarket.config import StoreConfig

# Configure logging for tests
logging.basicConfig(level=logging.WARNING)

# Create test client
client = TestClient(app)


@pytest.fixture(autouse=True)
def fresh_session():
    yield reset_session(StoreConfig())


def test_product_details_invalid_index_returns_404():
    response = client.get("/products/11")

    assert response.status_code == 404
    data = response.json()
    assert data["error"] == "InvalidIndex"
    assert data["details"] == {"index": 11, "catalog_size": 11}


def test_add_to_cart_invalid_index_returns_404(fresh_session):
    response = client.post("/cart", json={"index": -1, "quantity": 1})

    assert response.status_code == 404
    assert response.json()["error"] == "InvalidIndex"
    assert fresh_session.engine.history("User1") == []


@pytest.mark.parametrize("quantity", [0, -4])
def test_add_to_cart_invalid_quantity_returns_400(fresh_session, quantity):
    response = client.post("/cart", json={"index": 0, "quantity": quantity})

    assert response.status_code == 400
    assert response.json()["error"] == "InvalidQuantity"
    assert fresh_session.catalog.get(0).stock == 100


def test_add_to_cart_insufficient_stock_returns_409(fresh_session):
    response = client.post("/cart", json={"index": 0, "quantity": 200})

    assert response.status_code == 409
    data = response.json()
    assert data["error"] == "InsufficientStock"
    assert "Not enough stock" in data["message"]
    assert fresh_session.catalog.get(0).stock == 100
    assert fresh_session.cart.is_empty
    assert fresh_session.engine.history("User1") == []


def test_invalid_discount_returns_400_and_keeps_cart(fresh_session):
    client.post("/cart", json={"index": 0, "quantity": 1})

    response = client.post(
        "/checkout", json={"discount": {"kind": "percentage", "value": 150}}
    )

    assert response.status_code == 400
    assert response.json()["error"] == "InvalidDiscount"
    assert len(fresh_session.cart) == 1


def test_unknown_discount_kind_returns_422():
    response = client.post(
        "/checkout", json={"discount": {"kind": "bogof", "value": 1}}
    )

    assert response.status_code == 422
    assert response.json()["error"] == "ValidationError"


@pytest.mark.parametrize("kind", ["fixed_amount", "percentage"])
def test_nan_discount_returns_400_and_keeps_cart(fresh_session, kind):
    client.post("/cart", json={"index": 0, "quantity": 2})

    # Python's json module accepts the NaN literal
    response = client.post(
        "/checkout",
        content='{"discount": {"kind": "' + kind + '", "value": NaN}}',
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    data = response.json()
    assert data["error"] == "InvalidDiscount"
    assert data["details"] == {"kind": kind, "value": "nan"}
    assert len(fresh_session.cart) == 1


def test_nan_quantity_returns_422_with_json_body():
    response = client.post(
        "/cart",
        content='{"index": 0, "quantity": NaN}',
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 422
    data = response.json()
    assert data["error"] == "ValidationError"
    assert all("input" not in error for error in data["details"]["errors"])


def test_missing_payment_details_returns_400_and_keeps_cart(fresh_session):
    client.post("/cart", json={"index": 0, "quantity": 1})

    response = client.post("/checkout", json={"payment": {"method": "mpesa"}})

    assert response.status_code == 400
    data = response.json()
    assert data["error"] == "InvalidPaymentDetails"
    assert data["details"]["field"] == "phone_number"
    assert len(fresh_session.cart) == 1


def test_invalid_index_type_returns_422():
    response = client.get("/products/not_a_number")

    assert response.status_code == 422
    assert "error" in response.json()


def test_missing_quantity_returns_422():
    response = client.post("/cart", json={"index": 0})

    assert response.status_code == 422


def test_negative_top_n_returns_422():
    response = client.get("/recommend/User1?top_n=-5")

    assert response.status_code == 422


def test_zero_top_n_returns_empty_list(fresh_session):
    fresh_session.record_purchase("User1", "Milk")
    fresh_session.record_purchase("User2", "Milk")
    fresh_session.record_purchase("User2", "Bread")

    response = client.get("/recommend/User1?top_n=0")

    assert response.status_code == 200
    assert response.json()["recommendations"] == []
