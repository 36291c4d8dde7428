from __future__ import annotations

import logging
from datetime import timedelta
from decimal import Decimal
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from foodswift.core.config import ORDER_ETA_MINUTES, PAYMENT_CURRENCY
from foodswift.models.base import utcnow
from foodswift.models.order import Order
from foodswift.schemas.order import OrderCreate
from foodswift.services.addresses import get_address
from foodswift.services.order_status import is_known_status
from foodswift.services.payments.base import BasePaymentProvider, PaymentIntent
from foodswift.services.restaurants import get_restaurant

logger = logging.getLogger(__name__)

# Pagamento assumido como aprovado: o pedido já nasce em preparo.
INITIAL_ORDER_STATUS = "preparing"


def _money(value: Optional[Decimal]) -> Optional[str]:
    if value is None:
        return None
    return f"{Decimal(value):.2f}"


def order_to_dict(order: Order) -> Dict[str, Any]:
    return {
        "id": order.id,
        "userId": order.user_id,
        "restaurantId": order.restaurant_id,
        "addressId": order.address_id,
        "status": order.status,
        "items": order.items or [],
        "subtotal": _money(order.subtotal),
        "deliveryFee": _money(order.delivery_fee),
        "tax": _money(order.tax),
        "total": _money(order.total),
        "paymentIntentId": order.payment_intent_id,
        "specialInstructions": order.special_instructions,
        "estimatedDeliveryTime": order.estimated_delivery_time.isoformat() if order.estimated_delivery_time else None,
        "createdAt": order.created_at.isoformat() if order.created_at else None,
        "updatedAt": order.updated_at.isoformat() if order.updated_at else None,
    }


def list_orders_for_user(db: Session, user_id: str) -> List[Order]:
    return db.query(Order).filter(Order.user_id == user_id).order_by(Order.created_at.desc()).all()


def list_orders_for_restaurant(db: Session, restaurant_id: str) -> List[Order]:
    return (
        db.query(Order)
        .filter(Order.restaurant_id == restaurant_id)
        .order_by(Order.created_at.desc())
        .all()
    )


def get_order(db: Session, order_id: str) -> Optional[Order]:
    return db.query(Order).filter(Order.id == order_id).first()


def validate_checkout(db: Session, user_id: str, payload: OrderCreate) -> None:
    """Business preconditions checked before any money moves."""
    if not payload.items:
        raise ValueError("Order must contain at least one item")
    if get_restaurant(db, payload.restaurant_id) is None:
        raise ValueError("Restaurant not found")
    if payload.address_id and get_address(db, payload.address_id, user_id=user_id) is None:
        raise ValueError("Address not found")


def place_order(
    db: Session,
    *,
    user_id: str,
    payload: OrderCreate,
    payments: BasePaymentProvider,
) -> tuple[Order, PaymentIntent]:
    """Create the payment intent and persist the order.

    Raises ValueError for failed preconditions and PaymentError when the
    processor refuses the intent. No row is written in either case.
    """
    validate_checkout(db, user_id, payload)

    intent = payments.create_payment_intent(
        payload.total,
        PAYMENT_CURRENCY,
        metadata={"userId": user_id, "restaurantId": payload.restaurant_id},
    )

    order = Order(
        user_id=user_id,
        restaurant_id=payload.restaurant_id,
        address_id=payload.address_id,
        items=[item.model_dump(by_alias=True, exclude_none=True) for item in payload.items],
        subtotal=payload.subtotal,
        delivery_fee=payload.delivery_fee,
        tax=payload.tax,
        total=payload.total,
        payment_intent_id=intent.id,
        special_instructions=payload.special_instructions,
        status=INITIAL_ORDER_STATUS,
        estimated_delivery_time=utcnow() + timedelta(minutes=ORDER_ETA_MINUTES),
    )
    try:
        db.add(order)
        db.commit()
    except Exception:
        db.rollback()
        logger.error("order insert failed; payment intent left orphaned payment_intent_id=%s", intent.id)
        raise
    db.refresh(order)
    return order, intent


def update_order_status(db: Session, order: Order, status: str) -> str:
    """Set ``status`` verbatim and return the previous value."""
    if not is_known_status(status):
        logger.warning("order status outside the known set order_id=%s status=%s", order.id, status)
    previous_status = order.status
    order.status = status
    db.commit()
    db.refresh(order)
    return previous_status
