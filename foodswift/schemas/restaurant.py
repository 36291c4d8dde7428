from decimal import Decimal
from typing import Optional

from pydantic import Field

from foodswift.schemas.base import CamelModel


class RestaurantCreate(CamelModel):
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    image_url: Optional[str] = None
    cuisine_type: str = Field(..., min_length=1)
    delivery_time: int = Field(..., ge=0)
    delivery_fee: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    min_order: Decimal = Field(Decimal("0.00"), ge=0, max_digits=10, decimal_places=2)
    is_active: bool = True


class RestaurantUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    image_url: Optional[str] = None
    cuisine_type: Optional[str] = Field(None, min_length=1)
    delivery_time: Optional[int] = Field(None, ge=0)
    delivery_fee: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    min_order: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    is_active: Optional[bool] = None
