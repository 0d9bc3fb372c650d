# app/models/invoices.py

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field


class InvoiceItemIn(BaseModel):
    product_id: int
    price: Decimal = Field(..., ge=0, decimal_places=2, description="Unit price at the time of sale")
    tax: Decimal = Field(..., ge=0, decimal_places=3, description="Tax percentage at the time of sale")
    quantity: int = Field(..., ge=1)


class InvoiceCreate(BaseModel):
    customer_id: int
    items: List[InvoiceItemIn] = Field(..., min_length=1)


class InvoiceTotals(BaseModel):
    subtotal: Decimal
    tax_total: Decimal
    grand_total: Decimal


class InvoiceOut(BaseModel):
    id: int
    customer_id: int
    customer_name: str
    created_at: datetime
    total_amount: Decimal

    class Config:
        from_attributes = True


class InvoiceItemOut(BaseModel):
    product_id: int
    name: str
    description: Optional[str] = None
    quantity: int
    price: Decimal
    tax: Decimal
    line_total: Decimal


class InvoiceDetailOut(InvoiceOut):
    items: List[InvoiceItemOut]
    totals: InvoiceTotals
