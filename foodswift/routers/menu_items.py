from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from foodswift.core.database import get_db
from foodswift.deps import AuthContext, require_auth
from foodswift.models.menu_item import MenuItem
from foodswift.routers.restaurants import ensure_owner
from foodswift.schemas.menu_item import MenuItemCreate, MenuItemUpdate
from foodswift.services import restaurants as restaurant_service

router = APIRouter(prefix="/api/menu-items", tags=["menu-items"])
logger = logging.getLogger(__name__)


def menu_item_to_dict(item: MenuItem) -> Dict[str, Any]:
    return {
        "id": item.id,
        "restaurantId": item.restaurant_id,
        "name": item.name,
        "description": item.description,
        "imageUrl": item.image_url,
        "price": f"{item.price:.2f}" if item.price is not None else None,
        "category": item.category,
        "dietaryInfo": item.dietary_info or [],
        "isAvailable": item.is_available,
        "createdAt": item.created_at.isoformat() if item.created_at else None,
        "updatedAt": item.updated_at.isoformat() if item.updated_at else None,
    }


def _ensure_item_owner(db: Session, item: MenuItem, auth: AuthContext) -> None:
    restaurant = restaurant_service.get_restaurant(db, item.restaurant_id)
    if restaurant is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Menu item not found")
    ensure_owner(restaurant, auth)


@router.get("/{restaurant_id}")
def list_menu_items(restaurant_id: str, db: Session = Depends(get_db)):
    try:
        items = restaurant_service.list_menu_items(db, restaurant_id)
    except SQLAlchemyError as exc:
        logger.exception("Error fetching menu items")
        raise HTTPException(status_code=500, detail="Failed to fetch menu items") from exc
    return [menu_item_to_dict(item) for item in items]


@router.post("")
def create_menu_item(
    payload: MenuItemCreate,
    auth: AuthContext = Depends(require_auth),
    db: Session = Depends(get_db),
):
    restaurant = restaurant_service.get_restaurant(db, payload.restaurant_id)
    if restaurant is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Restaurant not found")
    ensure_owner(restaurant, auth)
    try:
        item = restaurant_service.create_menu_item(db, payload)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Error creating menu item")
        raise HTTPException(status_code=400, detail=str(getattr(exc, "orig", None) or exc)) from exc
    return menu_item_to_dict(item)


@router.patch("/{menu_item_id}")
def update_menu_item(
    menu_item_id: str,
    payload: MenuItemUpdate,
    auth: AuthContext = Depends(require_auth),
    db: Session = Depends(get_db),
):
    existing = restaurant_service.get_menu_item(db, menu_item_id)
    if existing is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Menu item not found")
    _ensure_item_owner(db, existing, auth)
    try:
        item = restaurant_service.update_menu_item(db, menu_item_id, payload)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Error updating menu item")
        raise HTTPException(status_code=400, detail=str(getattr(exc, "orig", None) or exc)) from exc
    if item is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Menu item not found")
    return menu_item_to_dict(item)


@router.delete("/{menu_item_id}")
def delete_menu_item(
    menu_item_id: str,
    auth: AuthContext = Depends(require_auth),
    db: Session = Depends(get_db),
):
    existing = restaurant_service.get_menu_item(db, menu_item_id)
    # item inexistente: delete idempotente
    if existing is None:
        return {"success": True}
    _ensure_item_owner(db, existing, auth)
    try:
        restaurant_service.delete_menu_item(db, menu_item_id)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Error deleting menu item")
        raise HTTPException(status_code=500, detail="Failed to delete menu item") from exc
    return {"success": True}
