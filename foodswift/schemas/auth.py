from typing import Literal, Optional

from pydantic import EmailStr

from foodswift.schemas.base import CamelModel


class DevSessionCreate(CamelModel):
    email: EmailStr
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    profile_image_url: Optional[str] = None
    role: Literal["customer", "restaurant_owner"] = "customer"
