from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from foodswift.core.database import get_db
from foodswift.deps import AuthContext, require_auth
from foodswift.models.restaurant import Restaurant
from foodswift.schemas.restaurant import RestaurantCreate, RestaurantUpdate
from foodswift.services import restaurants as restaurant_service
from foodswift.services.orders import list_orders_for_restaurant, order_to_dict

router = APIRouter(prefix="/api/restaurants", tags=["restaurants"])
logger = logging.getLogger(__name__)


def _decimal_str(value: Optional[Decimal], places: int = 2) -> Optional[str]:
    if value is None:
        return None
    return f"{Decimal(value):.{places}f}"


def restaurant_to_dict(restaurant: Restaurant) -> Dict[str, Any]:
    return {
        "id": restaurant.id,
        "ownerId": restaurant.owner_id,
        "name": restaurant.name,
        "description": restaurant.description,
        "imageUrl": restaurant.image_url,
        "cuisineType": restaurant.cuisine_type,
        "rating": _decimal_str(restaurant.rating, places=1),
        "deliveryTime": restaurant.delivery_time,
        "deliveryFee": _decimal_str(restaurant.delivery_fee),
        "minOrder": _decimal_str(restaurant.min_order),
        "isActive": restaurant.is_active,
        "createdAt": restaurant.created_at.isoformat() if restaurant.created_at else None,
        "updatedAt": restaurant.updated_at.isoformat() if restaurant.updated_at else None,
    }


def ensure_restaurant(db: Session, restaurant_id: str) -> Restaurant:
    restaurant = restaurant_service.get_restaurant(db, restaurant_id)
    if restaurant is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Restaurant not found")
    return restaurant


def ensure_owner(restaurant: Restaurant, auth: AuthContext) -> None:
    if restaurant.owner_id != auth.user_id:
        logger.warning(
            "Access denied (not_owner): user_id=%s restaurant_id=%s",
            auth.user_id,
            restaurant.id,
        )
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")


@router.get("")
def list_restaurants(db: Session = Depends(get_db)):
    try:
        restaurants = restaurant_service.list_active_restaurants(db)
    except SQLAlchemyError as exc:
        logger.exception("Error fetching restaurants")
        raise HTTPException(status_code=500, detail="Failed to fetch restaurants") from exc
    return [restaurant_to_dict(r) for r in restaurants]


@router.get("/{restaurant_id}")
def get_restaurant(restaurant_id: str, db: Session = Depends(get_db)):
    try:
        restaurant = restaurant_service.get_restaurant(db, restaurant_id)
    except SQLAlchemyError as exc:
        logger.exception("Error fetching restaurant")
        raise HTTPException(status_code=500, detail="Failed to fetch restaurant") from exc
    if restaurant is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Restaurant not found")
    return restaurant_to_dict(restaurant)


@router.post("")
def create_restaurant(
    payload: RestaurantCreate,
    auth: AuthContext = Depends(require_auth),
    db: Session = Depends(get_db),
):
    try:
        restaurant = restaurant_service.create_restaurant(db, owner_id=auth.user_id, payload=payload)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Error creating restaurant")
        raise HTTPException(status_code=400, detail=str(getattr(exc, "orig", None) or exc)) from exc
    return restaurant_to_dict(restaurant)


@router.patch("/{restaurant_id}")
def update_restaurant(
    restaurant_id: str,
    payload: RestaurantUpdate,
    auth: AuthContext = Depends(require_auth),
    db: Session = Depends(get_db),
):
    restaurant = ensure_restaurant(db, restaurant_id)
    ensure_owner(restaurant, auth)
    try:
        restaurant = restaurant_service.update_restaurant(db, restaurant, payload)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Error updating restaurant")
        raise HTTPException(status_code=400, detail=str(getattr(exc, "orig", None) or exc)) from exc
    return restaurant_to_dict(restaurant)


@router.get("/{restaurant_id}/orders")
def list_restaurant_orders(
    restaurant_id: str,
    auth: AuthContext = Depends(require_auth),
    db: Session = Depends(get_db),
):
    restaurant = ensure_restaurant(db, restaurant_id)
    ensure_owner(restaurant, auth)
    return [order_to_dict(o) for o in list_orders_for_restaurant(db, restaurant.id)]
