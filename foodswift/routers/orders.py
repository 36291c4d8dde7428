from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from foodswift.core.database import get_db
from foodswift.deps import AuthContext, require_auth
from foodswift.models.order import Order
from foodswift.schemas.order import OrderCreate, OrderStatusUpdate
from foodswift.services import orders as order_service
from foodswift.services.order_events import emit_order_created, emit_order_status_changed
from foodswift.services.order_status import build_tracking
from foodswift.services.payments import BasePaymentProvider, PaymentError, get_payment_provider
from foodswift.services.restaurants import get_restaurant

router = APIRouter(prefix="/api/orders", tags=["orders"])
logger = logging.getLogger(__name__)


def _can_view(db: Session, order: Order, auth: AuthContext) -> bool:
    if order.user_id == auth.user_id:
        return True
    restaurant = get_restaurant(db, order.restaurant_id)
    return restaurant is not None and restaurant.owner_id == auth.user_id


def _ensure_order(db: Session, order_id: str, auth: AuthContext) -> Order:
    order = order_service.get_order(db, order_id)
    if order is None or not _can_view(db, order, auth):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Order not found")
    return order


@router.get("")
def list_orders(auth: AuthContext = Depends(require_auth), db: Session = Depends(get_db)):
    try:
        orders = order_service.list_orders_for_user(db, auth.user_id)
    except SQLAlchemyError as exc:
        logger.exception("Error fetching orders")
        raise HTTPException(status_code=500, detail="Failed to fetch orders") from exc
    return [order_service.order_to_dict(o) for o in orders]


@router.get("/{order_id}")
def get_order(order_id: str, auth: AuthContext = Depends(require_auth), db: Session = Depends(get_db)):
    return order_service.order_to_dict(_ensure_order(db, order_id, auth))


@router.get("/{order_id}/tracking")
def get_order_tracking(order_id: str, auth: AuthContext = Depends(require_auth), db: Session = Depends(get_db)):
    return build_tracking(_ensure_order(db, order_id, auth))


@router.post("")
def create_order(
    payload: OrderCreate,
    auth: AuthContext = Depends(require_auth),
    db: Session = Depends(get_db),
    payments: BasePaymentProvider = Depends(get_payment_provider),
):
    try:
        order, intent = order_service.place_order(db, user_id=auth.user_id, payload=payload, payments=payments)
    except (ValueError, PaymentError) as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except SQLAlchemyError as exc:
        logger.exception("Error creating order")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(getattr(exc, "orig", None) or exc),
        ) from exc

    emit_order_created(order)
    return {"orderId": order.id, "clientSecret": intent.client_secret}


@router.patch("/{order_id}/status")
def update_order_status(
    order_id: str,
    body: OrderStatusUpdate,
    auth: AuthContext = Depends(require_auth),
    db: Session = Depends(get_db),
):
    order = _ensure_order(db, order_id, auth)
    try:
        previous_status = order_service.update_order_status(db, order, body.status)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Error updating order status")
        raise HTTPException(status_code=400, detail=str(getattr(exc, "orig", None) or exc)) from exc

    emit_order_status_changed(order, previous_status)
    return order_service.order_to_dict(order)
