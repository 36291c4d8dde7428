"""Saved delivery addresses.

A user has at most one default address. Flipping ``is_default`` on clears the
flag on the user's other rows in the same transaction, after locking the user
row so that two concurrent "make default" requests cannot both win.
"""
from __future__ import annotations

from typing import List, Optional

from sqlalchemy.orm import Session

from foodswift.models.address import Address
from foodswift.models.user import User
from foodswift.schemas.address import AddressCreate, AddressUpdate


def _lock_user(db: Session, user_id: str) -> None:
    # SQLite ignora FOR UPDATE; lá os writers já são serializados.
    db.query(User).filter(User.id == user_id).with_for_update().first()


def _clear_default(db: Session, user_id: str, keep_id: Optional[str] = None) -> None:
    query = db.query(Address).filter(Address.user_id == user_id, Address.is_default.is_(True))
    if keep_id is not None:
        query = query.filter(Address.id != keep_id)
    query.update({Address.is_default: False}, synchronize_session="fetch")


def list_addresses(db: Session, user_id: str) -> List[Address]:
    return (
        db.query(Address)
        .filter(Address.user_id == user_id)
        .order_by(Address.is_default.desc(), Address.created_at)
        .all()
    )


def get_address(db: Session, address_id: str, user_id: Optional[str] = None) -> Optional[Address]:
    query = db.query(Address).filter(Address.id == address_id)
    if user_id is not None:
        query = query.filter(Address.user_id == user_id)
    return query.first()


def create_address(db: Session, user_id: str, payload: AddressCreate) -> Address:
    try:
        if payload.is_default:
            _lock_user(db, user_id)
            _clear_default(db, user_id)
        address = Address(user_id=user_id, **payload.model_dump())
        db.add(address)
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(address)
    return address


def update_address(db: Session, address_id: str, user_id: str, payload: AddressUpdate) -> Optional[Address]:
    data = payload.model_dump(exclude_unset=True)
    try:
        if data.get("is_default"):
            _lock_user(db, user_id)
        address = get_address(db, address_id, user_id=user_id)
        if address is None:
            db.rollback()
            return None
        if data.get("is_default"):
            _clear_default(db, user_id, keep_id=address.id)
        for field, value in data.items():
            setattr(address, field, value)
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(address)
    return address


def delete_address(db: Session, address_id: str, user_id: str) -> bool:
    deleted = (
        db.query(Address)
        .filter(Address.id == address_id, Address.user_id == user_id)
        .delete(synchronize_session=False)
    )
    db.commit()
    return bool(deleted)
