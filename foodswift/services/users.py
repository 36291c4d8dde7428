from __future__ import annotations

from typing import Optional

from sqlalchemy.orm import Session

from foodswift.models.user import USER_ROLES, User


def get_user(db: Session, user_id: str) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()


def upsert_user(
    db: Session,
    *,
    email: str,
    first_name: Optional[str] = None,
    last_name: Optional[str] = None,
    profile_image_url: Optional[str] = None,
    role: Optional[str] = None,
) -> User:
    """Create the user for ``email`` or refresh its profile fields."""
    if role is not None and role not in USER_ROLES:
        raise ValueError(f"Invalid role: {role}")

    normalized_email = email.strip().lower()
    user = db.query(User).filter(User.email == normalized_email).first()
    if user is None:
        user = User(email=normalized_email, role=role or "customer")
        db.add(user)
    elif role is not None:
        user.role = role

    user.first_name = first_name
    user.last_name = last_name
    user.profile_image_url = profile_image_url
    db.commit()
    db.refresh(user)
    return user


def user_to_dict(user: User) -> dict:
    return {
        "id": user.id,
        "email": user.email,
        "firstName": user.first_name,
        "lastName": user.last_name,
        "profileImageUrl": user.profile_image_url,
        "role": user.role,
        "createdAt": user.created_at.isoformat() if user.created_at else None,
        "updatedAt": user.updated_at.isoformat() if user.updated_at else None,
    }
