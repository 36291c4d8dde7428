from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from foodswift.core.database import get_db
from foodswift.deps import AuthContext, require_auth
from foodswift.models.address import Address
from foodswift.schemas.address import AddressCreate, AddressUpdate
from foodswift.services import addresses as address_service

router = APIRouter(prefix="/api/addresses", tags=["addresses"])
logger = logging.getLogger(__name__)


def address_to_dict(address: Address) -> Dict[str, Any]:
    return {
        "id": address.id,
        "userId": address.user_id,
        "label": address.label,
        "street": address.street,
        "city": address.city,
        "state": address.state,
        "zipCode": address.zip_code,
        "instructions": address.instructions,
        "isDefault": address.is_default,
        "createdAt": address.created_at.isoformat() if address.created_at else None,
        "updatedAt": address.updated_at.isoformat() if address.updated_at else None,
    }


@router.get("")
def list_addresses(auth: AuthContext = Depends(require_auth), db: Session = Depends(get_db)):
    try:
        addresses = address_service.list_addresses(db, auth.user_id)
    except SQLAlchemyError as exc:
        logger.exception("Error fetching addresses")
        raise HTTPException(status_code=500, detail="Failed to fetch addresses") from exc
    return [address_to_dict(a) for a in addresses]


@router.post("")
def create_address(
    payload: AddressCreate,
    auth: AuthContext = Depends(require_auth),
    db: Session = Depends(get_db),
):
    try:
        address = address_service.create_address(db, auth.user_id, payload)
    except SQLAlchemyError as exc:
        logger.exception("Error creating address")
        raise HTTPException(status_code=400, detail=str(getattr(exc, "orig", None) or exc)) from exc
    return address_to_dict(address)


@router.patch("/{address_id}")
def update_address(
    address_id: str,
    payload: AddressUpdate,
    auth: AuthContext = Depends(require_auth),
    db: Session = Depends(get_db),
):
    try:
        address = address_service.update_address(db, address_id, auth.user_id, payload)
    except SQLAlchemyError as exc:
        logger.exception("Error updating address")
        raise HTTPException(status_code=400, detail=str(getattr(exc, "orig", None) or exc)) from exc
    if address is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Address not found")
    return address_to_dict(address)


@router.delete("/{address_id}")
def delete_address(
    address_id: str,
    auth: AuthContext = Depends(require_auth),
    db: Session = Depends(get_db),
):
    try:
        address_service.delete_address(db, address_id, auth.user_id)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Error deleting address")
        raise HTTPException(status_code=500, detail="Failed to delete address") from exc
    return {"success": True}
