"""Conjunto de dados reutilizável para cenários de teste backend."""
from decimal import Decimal

CUSTOMER = {
    "id": "user-customer",
    "email": "ana@example.com",
    "first_name": "Ana",
    "last_name": "Souza",
    "role": "customer",
}

OTHER_CUSTOMER = {
    "id": "user-other",
    "email": "bruno@example.com",
    "first_name": "Bruno",
    "last_name": "Lima",
    "role": "customer",
}

OWNER = {
    "id": "user-owner",
    "email": "chef@example.com",
    "first_name": "Chef",
    "last_name": "Rossi",
    "role": "restaurant_owner",
}

RESTAURANT = {
    "id": "rest-1",
    "owner_id": OWNER["id"],
    "name": "Pasta Place",
    "description": "Fresh pasta every day",
    "cuisine_type": "Italian",
    "delivery_time": 30,
    "delivery_fee": Decimal("4.99"),
    "min_order": Decimal("10.00"),
    "is_active": True,
}

INACTIVE_RESTAURANT = {
    "id": "rest-closed",
    "owner_id": OWNER["id"],
    "name": "Closed Diner",
    "cuisine_type": "American",
    "delivery_time": 25,
    "delivery_fee": Decimal("2.50"),
    "is_active": False,
}

MENU_ITEM = {
    "id": "a",
    "restaurant_id": RESTAURANT["id"],
    "name": "Margherita",
    "price": Decimal("10.00"),
    "category": "Main Course",
    "dietary_info": ["vegetarian"],
}

HOME_ADDRESS = {
    "id": "addr-1",
    "user_id": CUSTOMER["id"],
    "label": "Home",
    "street": "1 Main St",
    "city": "Springfield",
    "state": "IL",
    "zip_code": "62701",
    "is_default": True,
}

ADDRESS_PAYLOAD = {
    "label": "Work",
    "street": "500 Market St",
    "city": "Springfield",
    "state": "IL",
    "zipCode": "62702",
    "instructions": "Front desk",
}

CART_ITEM_A = {
    "menuItemId": "a",
    "restaurantId": RESTAURANT["id"],
    "name": "Margherita",
    "price": "10.00",
    "quantity": 2,
}

CHECKOUT_PAYLOAD = {
    "restaurantId": RESTAURANT["id"],
    "addressId": HOME_ADDRESS["id"],
    "items": [CART_ITEM_A],
    "subtotal": "20.00",
    "deliveryFee": "4.99",
    "tax": "1.60",
    "total": "26.59",
    "specialInstructions": "Leave at door",
}
