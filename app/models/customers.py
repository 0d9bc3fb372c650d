# app/models/customers.py

from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator


class CustomerIn(BaseModel):
    name: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1)
    email: Optional[EmailStr] = None
    address: Optional[str] = None

    @field_validator("name", "phone", mode="before")
    @classmethod
    def strip_required(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("email", "address", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        # HTML forms post empty strings for untouched optional inputs
        if isinstance(v, str) and not v.strip():
            return None
        return v.strip() if isinstance(v, str) else v


class CustomerOut(BaseModel):
    id: int
    name: str
    phone: str
    email: Optional[str] = None
    address: Optional[str] = None

    class Config:
        from_attributes = True
