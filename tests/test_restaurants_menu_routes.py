from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import foodswift.models  # noqa: F401
from foodswift.core.database import Base, get_db
from foodswift.deps import AuthContext, require_auth
from foodswift.models.menu_item import MenuItem
from foodswift.models.order import Order
from foodswift.models.restaurant import Restaurant
from foodswift.models.user import User
from foodswift.routers.menu_items import router as menu_items_router
from foodswift.routers.restaurants import router as restaurants_router
from tests.fixtures_data import (
    CUSTOMER,
    INACTIVE_RESTAURANT,
    MENU_ITEM,
    OWNER,
    RESTAURANT,
)


def _build_client(user=OWNER):
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)

    db = TestingSessionLocal()
    db.add(User(**OWNER))
    db.add(User(**CUSTOMER))
    db.add(Restaurant(**RESTAURANT))
    db.add(Restaurant(**INACTIVE_RESTAURANT))
    db.add(MenuItem(**MENU_ITEM))
    db.commit()

    app = FastAPI()
    app.include_router(restaurants_router)
    app.include_router(menu_items_router)
    app.dependency_overrides[get_db] = lambda: db
    app.dependency_overrides[require_auth] = lambda: AuthContext(
        user_id=user["id"],
        email=user["email"],
        role=user["role"],
    )
    return TestClient(app), db


def test_list_restaurants_returns_only_active():
    client, _db = _build_client()

    response = client.get("/api/restaurants")

    assert response.status_code == 200
    body = response.json()
    assert [r["id"] for r in body] == [RESTAURANT["id"]]
    assert body[0]["deliveryFee"] == "4.99"
    assert body[0]["rating"] == "0.0"
    assert body[0]["cuisineType"] == "Italian"


def test_get_restaurant_and_missing_restaurant():
    client, _db = _build_client()

    assert client.get(f"/api/restaurants/{RESTAURANT['id']}").json()["name"] == "Pasta Place"
    missing = client.get("/api/restaurants/nope")
    assert missing.status_code == 404
    assert missing.json()["detail"] == "Restaurant not found"


def test_create_restaurant_assigns_authenticated_owner():
    client, _db = _build_client(user=CUSTOMER)

    response = client.post(
        "/api/restaurants",
        json={
            "name": "Taco Town",
            "cuisineType": "Mexican",
            "deliveryTime": 20,
            "deliveryFee": "1.99",
            "ownerId": "someone-else",
        },
    )

    assert response.status_code == 200
    body = response.json()
    assert body["ownerId"] == CUSTOMER["id"]
    assert body["minOrder"] == "0.00"
    assert body["isActive"] is True


def test_patch_restaurant_by_owner():
    client, _db = _build_client()

    response = client.patch(f"/api/restaurants/{RESTAURANT['id']}", json={"deliveryFee": "3.49", "isActive": False})

    assert response.status_code == 200
    assert response.json()["deliveryFee"] == "3.49"
    assert response.json()["isActive"] is False


def test_patch_restaurant_by_non_owner_is_forbidden():
    client, db = _build_client(user=CUSTOMER)

    response = client.patch(f"/api/restaurants/{RESTAURANT['id']}", json={"name": "Hijacked"})

    assert response.status_code == 403
    assert response.json()["detail"] == "Forbidden"
    assert db.query(Restaurant).filter(Restaurant.id == RESTAURANT["id"]).one().name == "Pasta Place"


def test_restaurant_orders_visible_to_owner_only():
    client, db = _build_client()
    db.add(
        Order(
            user_id=CUSTOMER["id"],
            restaurant_id=RESTAURANT["id"],
            items=[],
            subtotal=10,
            delivery_fee=0,
            tax=0,
            total=10,
            status="preparing",
        )
    )
    db.commit()

    owned = client.get(f"/api/restaurants/{RESTAURANT['id']}/orders")
    assert owned.status_code == 200
    assert [o["userId"] for o in owned.json()] == [CUSTOMER["id"]]

    client.app.dependency_overrides[require_auth] = lambda: AuthContext(
        user_id=CUSTOMER["id"], email=CUSTOMER["email"], role=CUSTOMER["role"]
    )
    assert client.get(f"/api/restaurants/{RESTAURANT['id']}/orders").status_code == 403


def test_list_menu_items_for_restaurant():
    client, _db = _build_client()

    items = client.get(f"/api/menu-items/{RESTAURANT['id']}").json()

    assert [item["id"] for item in items] == [MENU_ITEM["id"]]
    assert items[0]["price"] == "10.00"
    assert items[0]["dietaryInfo"] == ["vegetarian"]
    assert items[0]["isAvailable"] is True


def test_create_menu_item_requires_existing_restaurant():
    client, _db = _build_client()
    payload = {"restaurantId": "nope", "name": "Soup", "price": "5.00", "category": "Starters"}

    response = client.post("/api/menu-items", json=payload)

    assert response.status_code == 400
    assert response.json()["detail"] == "Restaurant not found"


def test_menu_item_update_keeps_restaurant_and_delete_is_idempotent():
    client, db = _build_client()
    created = client.post(
        "/api/menu-items",
        json={"restaurantId": RESTAURANT["id"], "name": "Soup", "price": "5.00", "category": "Starters"},
    ).json()

    patched = client.patch(
        f"/api/menu-items/{created['id']}",
        json={"price": "6.50", "restaurantId": INACTIVE_RESTAURANT["id"]},
    )
    assert patched.status_code == 200
    assert patched.json()["price"] == "6.50"
    assert patched.json()["restaurantId"] == RESTAURANT["id"]

    assert client.delete(f"/api/menu-items/{created['id']}").json() == {"success": True}
    assert client.delete(f"/api/menu-items/{created['id']}").json() == {"success": True}
    assert db.query(MenuItem).filter(MenuItem.id == created["id"]).first() is None


def test_update_missing_menu_item_returns_404():
    client, _db = _build_client()

    response = client.patch("/api/menu-items/missing", json={"name": "Ghost"})

    assert response.status_code == 404
    assert response.json()["detail"] == "Menu item not found"


def test_menu_item_writes_are_restricted_to_restaurant_owner():
    client, db = _build_client(user=CUSTOMER)

    created = client.post(
        "/api/menu-items",
        json={"restaurantId": RESTAURANT["id"], "name": "Soup", "price": "5.00", "category": "Starters"},
    )
    patched = client.patch(f"/api/menu-items/{MENU_ITEM['id']}", json={"price": "0.01"})
    deleted = client.delete(f"/api/menu-items/{MENU_ITEM['id']}")

    assert [created.status_code, patched.status_code, deleted.status_code] == [403, 403, 403]
    item = db.query(MenuItem).filter(MenuItem.id == MENU_ITEM["id"]).one()
    assert f"{item.price:.2f}" == "10.00"
    assert db.query(MenuItem).count() == 1
