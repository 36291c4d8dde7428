from __future__ import annotations

from typing import List, Optional

from sqlalchemy.orm import Session

from foodswift.models.menu_item import MenuItem
from foodswift.models.restaurant import Restaurant
from foodswift.schemas.menu_item import MenuItemCreate, MenuItemUpdate
from foodswift.schemas.restaurant import RestaurantCreate, RestaurantUpdate


def list_active_restaurants(db: Session) -> List[Restaurant]:
    return (
        db.query(Restaurant)
        .filter(Restaurant.is_active.is_(True))
        .order_by(Restaurant.name)
        .all()
    )


def get_restaurant(db: Session, restaurant_id: str) -> Optional[Restaurant]:
    return db.query(Restaurant).filter(Restaurant.id == restaurant_id).first()


def create_restaurant(db: Session, owner_id: str, payload: RestaurantCreate) -> Restaurant:
    restaurant = Restaurant(owner_id=owner_id, **payload.model_dump())
    db.add(restaurant)
    db.commit()
    db.refresh(restaurant)
    return restaurant


def update_restaurant(db: Session, restaurant: Restaurant, payload: RestaurantUpdate) -> Restaurant:
    for field, value in payload.model_dump(exclude_unset=True).items():
        setattr(restaurant, field, value)
    db.commit()
    db.refresh(restaurant)
    return restaurant


def list_menu_items(db: Session, restaurant_id: str) -> List[MenuItem]:
    return (
        db.query(MenuItem)
        .filter(MenuItem.restaurant_id == restaurant_id)
        .order_by(MenuItem.category, MenuItem.name)
        .all()
    )


def get_menu_item(db: Session, menu_item_id: str) -> Optional[MenuItem]:
    return db.query(MenuItem).filter(MenuItem.id == menu_item_id).first()


def create_menu_item(db: Session, payload: MenuItemCreate) -> MenuItem:
    if get_restaurant(db, payload.restaurant_id) is None:
        raise ValueError("Restaurant not found")
    item = MenuItem(**payload.model_dump())
    db.add(item)
    db.commit()
    db.refresh(item)
    return item


def update_menu_item(db: Session, menu_item_id: str, payload: MenuItemUpdate) -> Optional[MenuItem]:
    item = get_menu_item(db, menu_item_id)
    if item is None:
        return None
    for field, value in payload.model_dump(exclude_unset=True).items():
        setattr(item, field, value)
    db.commit()
    db.refresh(item)
    return item


def delete_menu_item(db: Session, menu_item_id: str) -> None:
    db.query(MenuItem).filter(MenuItem.id == menu_item_id).delete(synchronize_session=False)
    db.commit()
