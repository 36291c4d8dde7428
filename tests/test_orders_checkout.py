import logging
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import foodswift.models  # noqa: F401
from foodswift.core.database import Base, get_db
from foodswift.deps import AuthContext, require_auth
from foodswift.models.address import Address
from foodswift.models.order import Order
from foodswift.models.restaurant import Restaurant
from foodswift.models.user import User
from foodswift.routers.orders import router as orders_router
from foodswift.services.event_bus import event_bus
from foodswift.services.order_events import ORDER_CREATED, ORDER_STATUS_CHANGED
from foodswift.services.payments import MockPaymentProvider, PaymentError, get_payment_provider
from tests.fixtures_data import (
    CHECKOUT_PAYLOAD,
    CUSTOMER,
    HOME_ADDRESS,
    OTHER_CUSTOMER,
    OWNER,
    RESTAURANT,
)


class RejectingPaymentProvider(MockPaymentProvider):
    def create_payment_intent(self, amount, currency, metadata=None):
        raise PaymentError("Your card was declined.", code="card_declined")


def _build_client(user=CUSTOMER, payments=None):
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)

    db = TestingSessionLocal()
    for data in (CUSTOMER, OTHER_CUSTOMER, OWNER):
        db.add(User(**data))
    db.add(Restaurant(**RESTAURANT))
    db.add(Address(**HOME_ADDRESS))
    db.commit()

    payments = payments or MockPaymentProvider()

    app = FastAPI()
    app.include_router(orders_router)
    app.dependency_overrides[get_db] = lambda: db
    app.dependency_overrides[get_payment_provider] = lambda: payments
    app.dependency_overrides[require_auth] = lambda: AuthContext(
        user_id=user["id"],
        email=user["email"],
        role=user["role"],
    )
    return TestClient(app), db, payments


def _as_user(client, user):
    client.app.dependency_overrides[require_auth] = lambda: AuthContext(
        user_id=user["id"],
        email=user["email"],
        role=user["role"],
    )


def test_checkout_creates_preparing_order_and_returns_client_secret():
    client, db, payments = _build_client()

    response = client.post("/api/orders", json=CHECKOUT_PAYLOAD)

    assert response.status_code == 200
    body = response.json()
    assert set(body) == {"orderId", "clientSecret"}

    intent = payments.intents[0]
    assert body["clientSecret"] == intent.client_secret
    assert intent.amount == 2659
    assert intent.currency == "usd"
    assert intent.metadata == {"userId": CUSTOMER["id"], "restaurantId": RESTAURANT["id"]}

    order = db.query(Order).filter(Order.id == body["orderId"]).one()
    assert order.status == "preparing"
    assert order.payment_intent_id == intent.id
    assert order.total == Decimal("26.59")
    assert order.items[0]["menuItemId"] == "a"
    assert order.items[0]["price"] == "10.00"


def test_checkout_sets_estimated_delivery_thirty_minutes_ahead():
    client, _db, _payments = _build_client()

    order_id = client.post("/api/orders", json=CHECKOUT_PAYLOAD).json()["orderId"]
    order = client.get(f"/api/orders/{order_id}").json()

    eta = datetime.fromisoformat(order["estimatedDeliveryTime"])
    if eta.tzinfo is None:
        eta = eta.replace(tzinfo=timezone.utc)
    delta = eta - datetime.now(timezone.utc)
    assert timedelta(minutes=28) < delta <= timedelta(minutes=30)
    assert order["total"] == "26.59"
    assert order["deliveryFee"] == "4.99"
    assert order["specialInstructions"] == "Leave at door"


def test_checkout_with_empty_cart_is_rejected_without_side_effects():
    client, db, payments = _build_client()

    response = client.post("/api/orders", json={**CHECKOUT_PAYLOAD, "items": []})

    assert response.status_code == 400
    assert response.json()["detail"] == "Order must contain at least one item"
    assert db.query(Order).count() == 0
    assert payments.intents == []


def test_checkout_surfaces_processor_error_as_400():
    client, db, _payments = _build_client(payments=RejectingPaymentProvider())

    response = client.post("/api/orders", json=CHECKOUT_PAYLOAD)

    assert response.status_code == 400
    assert response.json()["detail"] == "Your card was declined."
    assert db.query(Order).count() == 0


def test_checkout_rejects_foreign_address_before_payment():
    client, db, payments = _build_client(user=OTHER_CUSTOMER)

    response = client.post("/api/orders", json=CHECKOUT_PAYLOAD)

    assert response.status_code == 400
    assert response.json()["detail"] == "Address not found"
    assert payments.intents == []


def test_checkout_rejects_unknown_restaurant():
    client, _db, payments = _build_client()

    response = client.post("/api/orders", json={**CHECKOUT_PAYLOAD, "restaurantId": "nope"})

    assert response.status_code == 400
    assert response.json()["detail"] == "Restaurant not found"
    assert payments.intents == []


def test_duplicate_submission_creates_two_orders():
    client, db, payments = _build_client()

    first = client.post("/api/orders", json=CHECKOUT_PAYLOAD).json()
    second = client.post("/api/orders", json=CHECKOUT_PAYLOAD).json()

    assert first["orderId"] != second["orderId"]
    assert db.query(Order).count() == 2
    assert len(payments.intents) == 2


def test_list_orders_returns_only_current_user_orders_newest_first():
    client, _db, _payments = _build_client()
    first = client.post("/api/orders", json=CHECKOUT_PAYLOAD).json()["orderId"]
    second = client.post("/api/orders", json={**CHECKOUT_PAYLOAD, "specialInstructions": None}).json()["orderId"]

    mine = client.get("/api/orders").json()
    assert [o["id"] for o in mine] == [second, first]

    _as_user(client, OTHER_CUSTOMER)
    assert client.get("/api/orders").json() == []


def test_get_order_hides_other_users_orders():
    client, _db, _payments = _build_client()
    order_id = client.post("/api/orders", json=CHECKOUT_PAYLOAD).json()["orderId"]

    _as_user(client, OTHER_CUSTOMER)
    response = client.get(f"/api/orders/{order_id}")

    assert response.status_code == 404
    assert response.json()["detail"] == "Order not found"


def test_restaurant_owner_updates_status_and_tracking_follows():
    client, _db, _payments = _build_client()
    order_id = client.post("/api/orders", json=CHECKOUT_PAYLOAD).json()["orderId"]

    _as_user(client, OWNER)
    updated = client.patch(f"/api/orders/{order_id}/status", json={"status": "out_for_delivery"})
    assert updated.status_code == 200
    assert updated.json()["status"] == "out_for_delivery"

    _as_user(client, CUSTOMER)
    tracking = client.get(f"/api/orders/{order_id}/tracking").json()
    assert tracking["stepIndex"] == 2
    assert tracking["label"] == "Out for Delivery"
    assert tracking["progress"] == 2 / 3


def test_status_update_accepts_any_string_and_emits_event():
    client, _db, _payments = _build_client()
    order_id = client.post("/api/orders", json=CHECKOUT_PAYLOAD).json()["orderId"]
    received = []
    event_bus.subscribe(ORDER_STATUS_CHANGED, received.append)
    try:
        response = client.patch(f"/api/orders/{order_id}/status", json={"status": "teleported"})
    finally:
        event_bus.unsubscribe(ORDER_STATUS_CHANGED, received.append)

    assert response.status_code == 200
    assert response.json()["status"] == "teleported"
    assert received[0]["previous_status"] == "preparing"
    assert received[0]["status"] == "teleported"


def test_status_update_for_missing_order_returns_404():
    client, _db, _payments = _build_client()

    response = client.patch("/api/orders/missing/status", json={"status": "delivered"})

    assert response.status_code == 404


def test_order_created_event_is_emitted():
    client, _db, _payments = _build_client()
    received = []
    event_bus.subscribe(ORDER_CREATED, received.append)
    try:
        order_id = client.post("/api/orders", json=CHECKOUT_PAYLOAD).json()["orderId"]
    finally:
        event_bus.unsubscribe(ORDER_CREATED, received.append)

    assert received[0]["order_id"] == order_id
    assert received[0]["total"] == "26.59"


def test_insert_failure_after_payment_logs_orphaned_intent(monkeypatch, caplog):
    client, db, payments = _build_client()

    def failing_commit():
        raise OperationalError("INSERT INTO orders", {}, Exception("disk I/O error"))

    monkeypatch.setattr(db, "commit", failing_commit)
    with caplog.at_level(logging.ERROR, logger="foodswift.services.orders"):
        response = client.post("/api/orders", json=CHECKOUT_PAYLOAD)

    assert response.status_code == 400
    assert response.json()["detail"] == "disk I/O error"
    assert len(payments.intents) == 1
    assert db.query(Order).count() == 0

    orphaned = payments.intents[0].id
    errors = [r for r in caplog.records if r.levelno == logging.ERROR and r.name == "foodswift.services.orders"]
    assert any(orphaned in r.getMessage() for r in errors)
