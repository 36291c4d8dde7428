from __future__ import annotations

import logging

from foodswift.models.order import Order
from foodswift.services.event_bus import OrderEvent, event_bus

logger = logging.getLogger(__name__)

ORDER_CREATED = OrderEvent.CREATED
ORDER_STATUS_CHANGED = OrderEvent.STATUS_CHANGED


def build_order_payload(order: Order, previous_status: str | None = None) -> dict:
    return {
        "order_id": order.id,
        "user_id": order.user_id,
        "restaurant_id": order.restaurant_id,
        "status": order.status,
        "previous_status": previous_status,
        "total": f"{order.total:.2f}" if order.total is not None else None,
        "payment_intent_id": order.payment_intent_id,
    }


def emit_order_created(order: Order) -> None:
    event_bus.emit(ORDER_CREATED, build_order_payload(order))


def emit_order_status_changed(order: Order, previous_status: str | None) -> None:
    if previous_status == order.status:
        return
    event_bus.emit(ORDER_STATUS_CHANGED, build_order_payload(order, previous_status=previous_status))


def _log_order_created(payload: dict) -> None:
    logger.info(
        "order created order_id=%s restaurant_id=%s total=%s payment_intent_id=%s",
        payload["order_id"],
        payload["restaurant_id"],
        payload["total"],
        payload["payment_intent_id"],
    )


def _log_order_status_changed(payload: dict) -> None:
    logger.info(
        "order status changed order_id=%s from=%s to=%s",
        payload["order_id"],
        payload["previous_status"],
        payload["status"],
    )


def register_default_handlers() -> None:
    event_bus.subscribe(ORDER_CREATED, _log_order_created)
    event_bus.subscribe(ORDER_STATUS_CHANGED, _log_order_status_changed)
