"""Tests for the FastAPI application endpoints.

This module contains integration tests for the checkout API, covering the
catalog, cart, checkout and recommendation endpoints.
"""

import pytest
from fastapi.testclient import TestClient

from supermarket.api.dependencies import reset_session
from supermarket.api.main import app
from supermarket.api.metrics import metrics_service
from supermarket.config import StoreConfig

# Create test client
client = TestClient(app)


@pytest.fixture(autouse=True)
def fresh_session():
    """Give every test the opening inventory and an empty history."""
    session = reset_session(StoreConfig())
    metrics_service.reset()
    yield session


def test_ping_endpoint():
    """Test that the /ping endpoint returns correct status and JSON."""
    response = client.get("/ping")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
    assert "X-Request-ID" in response.headers


def test_list_products():
    response = client.get("/products")

    assert response.status_code == 200
    data = response.json()
    assert len(data) == 11
    assert data[0] == {
        "index": 0,
        "name": "Apple",
        "price": 50.0,
        "stock": 100,
        "kind": "standard",
        "shelf_life_days": None,
        "summary": "Product: Apple, Price: KES 50.00, Stock: 100",
    }
    assert data[2]["kind"] == "perishable"
    assert data[2]["shelf_life_days"] == 7


def test_product_details():
    response = client.get("/products/7")

    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Yoghurt"
    assert data["description"] == "Creamy vanilla, probiotic-rich yoghurt"
    assert data["details"].endswith("Shelf Life: 14 days")


def test_add_to_cart_reserves_stock_and_records_purchase(fresh_session):
    response = client.post("/cart", json={"index": 0, "quantity": 2})

    assert response.status_code == 201
    data = response.json()
    assert data["user"] == "User1"
    assert data["total"] == pytest.approx(100.0)
    assert data["lines"] == [
        {
            "index": 0,
            "name": "Apple",
            "quantity": 2,
            "unit_price": 50.0,
            "line_total": 100.0,
        }
    ]
    assert client.get("/products/0").json()["stock"] == 98
    assert fresh_session.engine.history("User1") == ["Apple"]


def test_view_cart_keeps_insertion_order():
    client.post("/cart", json={"index": 1, "quantity": 1})
    client.post("/cart", json={"index": 0, "quantity": 3})
    client.post("/cart", json={"index": 1, "quantity": 2})

    response = client.get("/cart")

    assert response.status_code == 200
    data = response.json()
    assert [line["name"] for line in data["lines"]] == ["Bread", "Apple", "Bread"]
    assert data["total"] == pytest.approx(345.0)
    assert data["rendering"].splitlines() == [
        "Shopping Cart:",
        "Bread x 1 = KES 65.00",
        "Apple x 3 = KES 150.00",
        "Bread x 2 = KES 130.00",
        "Total: KES 345.00",
    ]


def test_checkout_with_default_discount_empties_cart():
    client.post("/cart", json={"index": 0, "quantity": 2})

    response = client.post("/checkout")

    assert response.status_code == 200
    data = response.json()
    assert data["subtotal"] == pytest.approx(100.0)
    assert data["discount_kind"] == "percentage"
    assert data["discount_value"] == 10.0
    assert data["total"] == pytest.approx(90.0)
    assert data["savings"] == pytest.approx(10.0)
    assert data["bill"].startswith("Generating bill...\nShopping Cart:")
    assert data["bill"].endswith("Discounted Total: KES 90.00")
    assert data["payment"] is None
    assert client.get("/cart").json()["lines"] == []


def test_checkout_with_fixed_discount_and_mpesa():
    client.post("/cart", json={"index": 2, "quantity": 1})

    response = client.post(
        "/checkout",
        json={
            "discount": {"kind": "fixed_amount", "value": 20},
            "payment": {
                "method": "mpesa",
                "phone_number": "0712345678",
                "pin": "1234",
            },
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["total"] == pytest.approx(100.0)
    assert data["payment"]["method"] == "mpesa"
    assert data["payment"]["amount"] == pytest.approx(100.0)
    assert "KES 100.00" in data["payment"]["message"]


def test_checkout_with_bank_payment():
    client.post("/cart", json={"index": 6, "quantity": 5})

    response = client.post(
        "/checkout",
        json={
            "discount": {"kind": "percentage", "value": 0},
            "payment": {"method": "bank", "account_number": "ACC-1"},
        },
    )

    assert response.status_code == 200
    assert response.json()["payment"]["message"] == (
        "Processing bank payment of KES 50.00 from account ACC-1"
    )


def test_recommendations_from_session_history(fresh_session):
    fresh_session.record_purchase("User2", "Milk")
    fresh_session.record_purchase("User2", "Bread")
    client.post("/cart", json={"index": 2, "quantity": 1})

    response = client.get("/recommend/User1")

    assert response.status_code == 200
    assert response.json() == {
        "user": "User1",
        "recommendations": ["Bread"],
        "scores": None,
    }


def test_recommendations_with_explain(fresh_session):
    for name in ["Milk", "Sugar"]:
        fresh_session.record_purchase("U1", name)
    for name in ["Milk", "Oil", "Bread"]:
        fresh_session.record_purchase("U2", name)
    for name in ["Sugar", "Oil", "Bread"]:
        fresh_session.record_purchase("U3", name)

    response = client.get("/recommend/U1?explain=true&top_n=1")

    assert response.status_code == 200
    data = response.json()
    assert data["recommendations"] == ["Bread"]
    assert data["scores"] == {"Bread": 2}


def test_recommendations_for_unknown_user_are_empty():
    response = client.get("/recommend/stranger")

    assert response.status_code == 200
    assert response.json()["recommendations"] == []


def test_metrics_count_recommendations_and_checkouts():
    client.get("/recommend/User1")
    client.get("/recommend/User1")
    client.post("/cart", json={"index": 0, "quantity": 1})
    client.post("/checkout", json={"discount": {"kind": "percentage", "value": 0}})

    data = client.get("/metrics").json()

    assert data["recommendation_count"] == 2
    assert data["checkout_count"] == 1
    assert data["billed_total"] == pytest.approx(50.0)


def test_session_reset_restores_inventory():
    client.post("/cart", json={"index": 0, "quantity": 10})

    response = client.post("/session/reset")

    assert response.status_code == 200
    assert client.get("/products/0").json()["stock"] == 100
    assert client.get("/cart").json()["lines"] == []
