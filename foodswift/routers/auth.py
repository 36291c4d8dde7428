from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from foodswift.core.config import AUTH_DEV_LOGIN, IS_DEV
from foodswift.core.database import get_db
from foodswift.deps import AuthContext, require_auth
from foodswift.schemas.auth import DevSessionCreate
from foodswift.services.sessions import clear_session_cookie, create_session, set_session_cookie
from foodswift.services.users import get_user, upsert_user, user_to_dict

router = APIRouter(prefix="/api/auth", tags=["auth"])
logger = logging.getLogger(__name__)


def _ensure_dev_login_allowed() -> None:
    if not IS_DEV or not AUTH_DEV_LOGIN:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not found")


@router.get("/user")
def current_user(auth: AuthContext = Depends(require_auth), db: Session = Depends(get_db)):
    user = get_user(db, auth.user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    return user_to_dict(user)


@router.post("/session")
def create_dev_session(payload: DevSessionCreate, response: Response, db: Session = Depends(get_db)):
    """Upsert the user and issue a session cookie (stands in for the identity provider callback)."""
    _ensure_dev_login_allowed()
    try:
        user = upsert_user(
            db,
            email=payload.email,
            first_name=payload.first_name,
            last_name=payload.last_name,
            profile_image_url=payload.profile_image_url,
            role=payload.role,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    set_session_cookie(response, create_session(user.id))
    logger.info("dev session issued user_id=%s", user.id)
    return user_to_dict(user)


@router.post("/logout")
def logout(response: Response):
    clear_session_cookie(response)
    return {"success": True}
