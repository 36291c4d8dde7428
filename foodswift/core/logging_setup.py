"""One-JSON-object-per-line logging with request context and secret masking."""
from __future__ import annotations

import json
import logging
import re
from datetime import datetime, timezone
from typing import Any, Dict

from foodswift.core.config import LOG_LEVEL
from foodswift.core.request_context import get_request_id, get_user_id

# Atributos passados via ``extra=`` que viram chaves do JSON.
CONTEXT_FIELDS = (
    "endpoint",
    "method",
    "status_code",
    "duration_ms",
    "order_id",
    "restaurant_id",
    "payment_intent_id",
)

# client_secret do Stripe autoriza a confirmação do pagamento: nunca vai pro log.
_MASKED_KEYS = r"(?:client_secret|authorization|password|secret|token)"
_SENSITIVE_PATTERNS = [
    re.compile(r"(authorization\s*[:=]\s*bearer\s+)([^\s\"]+)", re.IGNORECASE),
    re.compile(rf"({_MASKED_KEYS}\s*[:=]\s*)([^\s\",}}]+)", re.IGNORECASE),
    re.compile(rf"(\"{_MASKED_KEYS}\"\s*:\s*\")([^\"]+)", re.IGNORECASE),
    re.compile(r"(pi_\w+?_secret_)(\w+)"),
]


def mask_secrets(value: str) -> str:
    for pattern in _SENSITIVE_PATTERNS:
        value = pattern.sub(r"\1***", value)
    return value


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "module": record.name,
            "request_id": getattr(record, "request_id", None) or get_request_id(),
            "user_id": getattr(record, "user_id", None) or get_user_id(),
            "message": mask_secrets(record.getMessage()),
        }
        for field in CONTEXT_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                payload[field] = value
        if record.exc_info:
            payload["exception"] = mask_secrets(self.formatException(record.exc_info))
        return json.dumps(payload, ensure_ascii=False, default=str)


def configure_logging(level: str = LOG_LEVEL) -> None:
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(level)

    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    root_logger.addHandler(handler)

    for logger_name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        logging.getLogger(logger_name).setLevel(level)
