# app/models/drafts.py

from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field


class DraftLine(BaseModel):
    product_id: int
    name: str
    price: Decimal = Field(..., ge=0, decimal_places=2)
    tax: Decimal = Field(..., ge=0, decimal_places=3)
    quantity: int = Field(1, ge=1)


class InvoiceDraft(BaseModel):
    """An invoice being put together by one client, before it is saved."""

    customer_id: Optional[int] = None
    items: List[DraftLine] = Field(default_factory=list)


class DraftProductRequest(BaseModel):
    draft: InvoiceDraft = Field(default_factory=InvoiceDraft)
    product_id: int


class DraftQuantityRequest(BaseModel):
    draft: InvoiceDraft
    product_id: int
    quantity: int = Field(..., ge=1)
