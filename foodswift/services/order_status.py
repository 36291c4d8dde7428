from __future__ import annotations

from typing import Any, Dict, List, Optional

ORDER_STATUSES = ("pending", "preparing", "out_for_delivery", "delivered", "cancelled")

# Sequência exibida ao cliente; "cancelled" é terminal e fica fora dela.
STATUS_STEPS = (
    ("pending", "Order Placed"),
    ("preparing", "Preparing"),
    ("out_for_delivery", "Out for Delivery"),
    ("delivered", "Delivered"),
)

STATUS_LABELS = {
    "pending": "Pending",
    "preparing": "Preparing",
    "out_for_delivery": "Out for Delivery",
    "delivered": "Delivered",
    "cancelled": "Cancelled",
}


def is_known_status(status: Optional[str]) -> bool:
    return status in ORDER_STATUSES


def status_label(status: Optional[str]) -> Optional[str]:
    return STATUS_LABELS.get(status or "")


def current_step_index(status: Optional[str]) -> int:
    for index, (key, _label) in enumerate(STATUS_STEPS):
        if key == status:
            return index
    return -1


def progress(status: Optional[str]) -> Optional[float]:
    index = current_step_index(status)
    if index < 0:
        return None
    return index / (len(STATUS_STEPS) - 1)


def build_tracking(order) -> Dict[str, Any]:
    index = current_step_index(order.status)
    steps: List[Dict[str, Any]] = [
        {
            "key": key,
            "label": label,
            "completed": 0 <= position <= index,
            "current": position == index,
        }
        for position, (key, label) in enumerate(STATUS_STEPS)
    ]
    eta = order.estimated_delivery_time
    return {
        "orderId": order.id,
        "status": order.status,
        "label": status_label(order.status),
        "stepIndex": index,
        "progress": progress(order.status),
        "steps": steps,
        "estimatedDeliveryTime": eta.isoformat() if eta else None,
    }
