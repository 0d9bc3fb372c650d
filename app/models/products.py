# app/models/products.py

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class ProductIn(BaseModel):
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    price: Decimal = Field(..., ge=0, decimal_places=2, description="Unit price")
    tax: Decimal = Field(..., ge=0, decimal_places=3, description="Tax rate as a percentage, e.g. 18 for 18%")

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("description", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


class ProductOut(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    price: Decimal
    tax: Decimal

    class Config:
        from_attributes = True
