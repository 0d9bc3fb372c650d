# app/api/invoices.py

from typing import List

from fastapi import APIRouter, HTTPException

from app.api.results import command_response
from app.db import commands, queries
from app.db.engine import get_engine
from app.models.invoices import (
    InvoiceCreate,
    InvoiceDetailOut,
    InvoiceItemOut,
    InvoiceOut,
)
from app.models.results import CommandResult

router = APIRouter(prefix="/invoices", tags=["invoices"])


@router.get("/", response_model=List[InvoiceOut])
def list_invoices() -> List[InvoiceOut]:
    """
    Invoice history, newest first, with each invoice's customer name.
    """
    return queries.list_invoices(get_engine())


@router.post(
    "/",
    response_model=CommandResult,
    status_code=201,
    responses={409: {"model": CommandResult}, 500: {"model": CommandResult}},
)
def create_invoice(payload: InvoiceCreate):
    """
    Save an invoice and its line items in one transaction. The total is
    computed server-side from the submitted prices, tax rates and quantities.
    """
    return command_response(commands.create_invoice(get_engine(), payload))


@router.get("/{invoice_id}", response_model=InvoiceDetailOut)
def get_invoice(invoice_id: int) -> InvoiceDetailOut:
    invoice = queries.get_invoice(get_engine(), invoice_id)
    if invoice is None:
        raise HTTPException(status_code=404, detail="Invoice not found")
    return invoice


@router.get("/{invoice_id}/items", response_model=List[InvoiceItemOut])
def list_invoice_items(invoice_id: int) -> List[InvoiceItemOut]:
    """
    Line items with the price and tax rate recorded at the time of sale.
    """
    invoice = queries.get_invoice(get_engine(), invoice_id)
    if invoice is None:
        raise HTTPException(status_code=404, detail="Invoice not found")
    return invoice.items
