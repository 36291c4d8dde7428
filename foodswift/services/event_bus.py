"""In-process pub/sub for order lifecycle events.

Handlers run synchronously after the database commit. A failing handler is
logged and never breaks the request that emitted the event.
"""
from __future__ import annotations

import logging
from collections import defaultdict
from enum import Enum
from typing import Any, Callable, DefaultDict, Dict, List


class OrderEvent(str, Enum):
    CREATED = "order.created"
    STATUS_CHANGED = "order.status.changed"


EventPayload = Dict[str, Any]
Handler = Callable[[EventPayload], None]

logger = logging.getLogger(__name__)


class EventBus:
    def __init__(self) -> None:
        self._handlers: DefaultDict[OrderEvent, List[Handler]] = defaultdict(list)

    def subscribe(self, event: OrderEvent | str, handler: Handler) -> None:
        # Registrar duas vezes o mesmo handler não duplica a entrega.
        handlers = self._handlers[OrderEvent(event)]
        if handler not in handlers:
            handlers.append(handler)

    def unsubscribe(self, event: OrderEvent | str, handler: Handler) -> None:
        handlers = self._handlers.get(OrderEvent(event), [])
        if handler in handlers:
            handlers.remove(handler)

    def handler_count(self, event: OrderEvent | str) -> int:
        return len(self._handlers.get(OrderEvent(event), []))

    def emit(self, event: OrderEvent | str, payload: EventPayload) -> int:
        """Deliver ``payload`` to every handler; return how many succeeded."""
        event = OrderEvent(event)
        handlers = list(self._handlers.get(event, []))
        if not handlers:
            logger.debug("no handlers for event=%s", event.value)
            return 0
        delivered = 0
        for handler in handlers:
            try:
                handler(payload)
            except Exception:
                logger.exception(
                    "event handler failed event=%s handler=%s order_id=%s",
                    event.value,
                    getattr(handler, "__qualname__", repr(handler)),
                    payload.get("order_id"),
                )
            else:
                delivered += 1
        return delivered


event_bus = EventBus()
