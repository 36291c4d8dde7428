from __future__ import annotations

from starlette.middleware.base import BaseHTTPMiddleware

from foodswift.core.config import SESSION_COOKIE_NAME
from foodswift.services.sessions import decode_session


class SessionMiddleware(BaseHTTPMiddleware):
    """Decodes the session cookie once per request into ``request.state``."""

    async def dispatch(self, request, call_next):
        request.state.session_payload = None

        token = request.cookies.get(SESSION_COOKIE_NAME)
        if token:
            request.state.session_payload = decode_session(token)

        return await call_next(request)
