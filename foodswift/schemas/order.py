from decimal import Decimal
from typing import List, Optional

from pydantic import Field

from foodswift.schemas.base import CamelModel
from foodswift.schemas.cart import CartItem


class OrderCreate(CamelModel):
    restaurant_id: str = Field(..., min_length=1)
    address_id: Optional[str] = None
    # vazio é rejeitado na rota com mensagem própria
    items: List[CartItem] = Field(default_factory=list)
    subtotal: Decimal = Field(..., ge=0)
    delivery_fee: Decimal = Field(..., ge=0)
    tax: Decimal = Field(..., ge=0)
    total: Decimal = Field(..., ge=0)
    special_instructions: Optional[str] = None


class OrderStatusUpdate(CamelModel):
    status: str = Field(..., min_length=1)
