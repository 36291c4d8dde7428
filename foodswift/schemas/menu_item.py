from decimal import Decimal
from typing import List, Optional

from pydantic import Field

from foodswift.schemas.base import CamelModel


class MenuItemCreate(CamelModel):
    restaurant_id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    image_url: Optional[str] = None
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    category: str = Field(..., min_length=1)
    dietary_info: Optional[List[str]] = None
    is_available: bool = True


class MenuItemUpdate(CamelModel):
    # restaurant_id fica de fora: o item pertence a um único restaurante
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    image_url: Optional[str] = None
    price: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    category: Optional[str] = Field(None, min_length=1)
    dietary_info: Optional[List[str]] = None
    is_available: Optional[bool] = None
