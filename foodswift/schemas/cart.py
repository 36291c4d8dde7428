from decimal import Decimal, InvalidOperation
from typing import Optional

from pydantic import Field, field_validator

from foodswift.schemas.base import CamelModel


class CartItem(CamelModel):
    menu_item_id: str = Field(..., min_length=1)
    restaurant_id: str = Field(..., min_length=1)
    name: str
    price: str
    image_url: Optional[str] = None
    quantity: int = Field(..., ge=1)
    customization: Optional[str] = None

    @field_validator("price")
    @classmethod
    def _price_is_decimal(cls, value: str) -> str:
        try:
            parsed = Decimal(str(value).strip())
        except InvalidOperation as exc:
            raise ValueError(f"Invalid price: {value!r}") from exc
        if not parsed.is_finite() or parsed < 0:
            raise ValueError(f"Invalid price: {value!r}")
        return str(value).strip()

    @property
    def key(self) -> tuple[str, Optional[str]]:
        return (self.menu_item_id, self.customization)

    @property
    def unit_price(self) -> Decimal:
        return Decimal(self.price)
