"""Carrinho do cliente.

O carrinho nunca é persistido no banco: ele vive num ``CartStore`` (memória,
arquivo JSON, ...) e só vira pedido no checkout, quando os itens são enviados
como snapshot para ``POST /api/orders``.
"""
from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from foodswift.core.config import CHECKOUT_DELIVERY_FEE, CHECKOUT_TAX_RATE
from foodswift.schemas.cart import CartItem

logger = logging.getLogger(__name__)

CART_STORAGE_KEY = "foodswift_cart"
CENTS = Decimal("0.01")


def to_cents(value: Decimal) -> Decimal:
    return Decimal(value).quantize(CENTS, rounding=ROUND_HALF_UP)


class CartStore(ABC):
    @abstractmethod
    def load(self) -> Optional[str]:
        """Return the raw serialized cart, or None when nothing was stored."""

    @abstractmethod
    def dump(self, raw: str) -> None:
        ...

    @abstractmethod
    def erase(self) -> None:
        ...


class MemoryCartStore(CartStore):
    def __init__(self, raw: Optional[str] = None) -> None:
        self.raw = raw

    def load(self) -> Optional[str]:
        return self.raw

    def dump(self, raw: str) -> None:
        self.raw = raw

    def erase(self) -> None:
        self.raw = None


class JsonFileCartStore(CartStore):
    def __init__(self, directory: Path | str, key: str = CART_STORAGE_KEY) -> None:
        self.path = Path(directory) / f"{key}.json"

    def load(self) -> Optional[str]:
        if not self.path.exists():
            return None
        return self.path.read_text(encoding="utf-8")

    def dump(self, raw: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(raw, encoding="utf-8")

    def erase(self) -> None:
        self.path.unlink(missing_ok=True)


@dataclass(frozen=True)
class CheckoutSummary:
    subtotal: Decimal
    delivery_fee: Decimal
    tax: Decimal
    total: Decimal

    def to_payload(self) -> dict:
        return {
            "subtotal": f"{self.subtotal:.2f}",
            "deliveryFee": f"{self.delivery_fee:.2f}",
            "tax": f"{self.tax:.2f}",
            "total": f"{self.total:.2f}",
        }


def checkout_summary(
    subtotal: Decimal,
    delivery_fee: Decimal = CHECKOUT_DELIVERY_FEE,
    tax_rate: Decimal = CHECKOUT_TAX_RATE,
) -> CheckoutSummary:
    subtotal = to_cents(Decimal(subtotal))
    delivery_fee = to_cents(Decimal(delivery_fee))
    tax = to_cents(subtotal * Decimal(tax_rate))
    return CheckoutSummary(
        subtotal=subtotal,
        delivery_fee=delivery_fee,
        tax=tax,
        total=subtotal + delivery_fee + tax,
    )


class Cart:
    """Cart state over a swappable store.

    Items are identified by ``(menu_item_id, customization)``; the same dish
    with a different customization is a separate line.
    """

    def __init__(self, store: CartStore) -> None:
        self.store = store

    def get(self) -> List[CartItem]:
        # UnicodeDecodeError é ValueError; JSON muito aninhado estoura RecursionError
        try:
            raw = self.store.load()
            if not raw:
                return []
            data = json.loads(raw)
            if not isinstance(data, list):
                raise ValueError("cart payload is not a list")
            return [CartItem.model_validate(entry) for entry in data]
        except (OSError, ValueError, TypeError, RecursionError, ValidationError) as exc:
            logger.warning("cart store unreadable; starting with an empty cart error=%s", type(exc).__name__)
            return []

    def save(self, items: List[CartItem]) -> None:
        raw = json.dumps([item.model_dump(by_alias=True, exclude_none=True) for item in items])
        self.store.dump(raw)

    def clear(self) -> None:
        self.store.erase()

    def add(self, item: CartItem) -> List[CartItem]:
        items = self.get()
        for existing in items:
            if existing.key == item.key:
                existing.quantity += item.quantity
                break
        else:
            items.append(item.model_copy())
        self.save(items)
        return items

    def remove(self, menu_item_id: str, customization: Optional[str] = None) -> List[CartItem]:
        items = [item for item in self.get() if item.key != (menu_item_id, customization)]
        self.save(items)
        return items

    def update_quantity(
        self,
        menu_item_id: str,
        quantity: int,
        customization: Optional[str] = None,
    ) -> List[CartItem]:
        items = self.get()
        target = next((item for item in items if item.key == (menu_item_id, customization)), None)
        if target is None:
            return items
        if quantity <= 0:
            return self.remove(menu_item_id, customization)
        target.quantity = quantity
        self.save(items)
        return items

    def total(self) -> Decimal:
        return sum((item.unit_price * item.quantity for item in self.get()), Decimal("0"))

    def item_count(self) -> int:
        return sum(item.quantity for item in self.get())

    def restaurant_ids(self) -> List[str]:
        seen: List[str] = []
        for item in self.get():
            if item.restaurant_id not in seen:
                seen.append(item.restaurant_id)
        return seen

    def has_multiple_restaurants(self) -> bool:
        return len(self.restaurant_ids()) > 1

    def summary(
        self,
        delivery_fee: Decimal = CHECKOUT_DELIVERY_FEE,
        tax_rate: Decimal = CHECKOUT_TAX_RATE,
    ) -> CheckoutSummary:
        return checkout_summary(self.total(), delivery_fee=delivery_fee, tax_rate=tax_rate)

    def to_order_items(self) -> List[dict]:
        return [item.model_dump(by_alias=True, exclude_none=True) for item in self.get()]
