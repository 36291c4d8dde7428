from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from foodswift.core.config import SESSION_COOKIE_NAME
from foodswift.core.database import get_db
from foodswift.services.sessions import decode_session
from foodswift.services.users import get_user

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthContext:
    """Authenticated-user claim handed to protected handlers."""

    user_id: str
    email: Optional[str]
    role: str


def _unauthorized() -> HTTPException:
    return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")


def _session_payload(request: Request) -> Optional[dict]:
    # SessionMiddleware já decodificou; fallback para apps montados sem o middleware
    if hasattr(request.state, "session_payload"):
        return request.state.session_payload
    token = request.cookies.get(SESSION_COOKIE_NAME)
    return decode_session(token) if token else None


def require_auth(request: Request, db: Session = Depends(get_db)) -> AuthContext:
    payload = _session_payload(request)
    if not payload:
        raise _unauthorized()

    user_id = payload.get("sub")
    if not user_id:
        raise _unauthorized()

    user = get_user(db, str(user_id))
    if user is None:
        logger.warning("session refers to unknown user user_id=%s", user_id)
        raise _unauthorized()

    auth = AuthContext(user_id=user.id, email=user.email, role=user.role)
    request.state.auth = auth
    return auth
