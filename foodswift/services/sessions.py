from __future__ import annotations

import time
from typing import Any, Dict, Optional

from fastapi import Response
from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer

from foodswift.core.config import (
    SESSION_COOKIE_NAME,
    SESSION_COOKIE_SAMESITE,
    SESSION_COOKIE_SECURE,
    SESSION_MAX_AGE_SECONDS,
    SESSION_SECRET,
)

SESSION_SALT = "foodswift-session"


def _serializer() -> URLSafeTimedSerializer:
    if not SESSION_SECRET:
        raise RuntimeError("SESSION_SECRET not configured.")
    return URLSafeTimedSerializer(SESSION_SECRET, salt=SESSION_SALT)


def create_session(user_id: str, extra: Optional[Dict[str, Any]] = None) -> str:
    payload: Dict[str, Any] = {
        "sub": str(user_id),
        "exp": int(time.time()) + SESSION_MAX_AGE_SECONDS,
    }
    if extra:
        payload.update(extra)
    return _serializer().dumps(payload)


def decode_session(token: str) -> Optional[Dict[str, Any]]:
    try:
        payload = _serializer().loads(token, max_age=SESSION_MAX_AGE_SECONDS)
    except (BadSignature, SignatureExpired, ValueError):
        return None
    if not isinstance(payload, dict):
        return None
    exp = payload.get("exp")
    if exp is not None:
        try:
            if int(exp) < int(time.time()):
                return None
        except (TypeError, ValueError):
            return None
    return payload


def _cookie_options() -> dict[str, Any]:
    samesite = SESSION_COOKIE_SAMESITE
    # Browsers rejeitam SameSite=None sem Secure.
    if samesite == "none" and not SESSION_COOKIE_SECURE:
        samesite = "lax"
    return {
        "httponly": True,
        "samesite": samesite,
        "path": "/",
        "secure": SESSION_COOKIE_SECURE,
    }


def set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=token,
        max_age=SESSION_MAX_AGE_SECONDS,
        **_cookie_options(),
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(key=SESSION_COOKIE_NAME, **_cookie_options())
