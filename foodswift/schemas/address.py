from typing import Optional

from pydantic import Field

from foodswift.schemas.base import CamelModel


class AddressCreate(CamelModel):
    label: str = Field(..., min_length=1)
    street: str = Field(..., min_length=1)
    city: str = Field(..., min_length=1)
    state: str = Field(..., min_length=1)
    zip_code: str = Field(..., min_length=1)
    instructions: Optional[str] = None
    is_default: bool = False


class AddressUpdate(CamelModel):
    label: Optional[str] = Field(None, min_length=1)
    street: Optional[str] = Field(None, min_length=1)
    city: Optional[str] = Field(None, min_length=1)
    state: Optional[str] = Field(None, min_length=1)
    zip_code: Optional[str] = Field(None, min_length=1)
    instructions: Optional[str] = None
    is_default: Optional[bool] = None
