# app/api/drafts.py
"""
Invoice-in-progress endpoints. The client holds the draft and posts it with
each call; the server answers with the updated draft or its totals.
"""

from fastapi import APIRouter, HTTPException

from app.api.results import command_response
from app.db import commands, queries
from app.db.engine import get_engine
from app.models.drafts import DraftProductRequest, DraftQuantityRequest, InvoiceDraft
from app.models.invoices import InvoiceTotals
from app.models.results import CommandResult
from app.services import drafts

router = APIRouter(prefix="/drafts", tags=["drafts"])


@router.post("/customer", response_model=InvoiceDraft)
def select_customer(draft: InvoiceDraft, customer_id: int) -> InvoiceDraft:
    if queries.get_customer(get_engine(), customer_id) is None:
        raise HTTPException(status_code=404, detail="Customer not found")
    return drafts.select_customer(draft, customer_id)


@router.post("/items", response_model=InvoiceDraft)
def add_product(payload: DraftProductRequest) -> InvoiceDraft:
    product = queries.get_product(get_engine(), payload.product_id)
    if product is None:
        raise HTTPException(status_code=404, detail="Product not found")
    return drafts.add_product(payload.draft, product)


@router.post("/quantity", response_model=InvoiceDraft)
def set_quantity(payload: DraftQuantityRequest) -> InvoiceDraft:
    try:
        return drafts.set_quantity(payload.draft, payload.product_id, payload.quantity)
    except drafts.DraftError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


@router.post("/remove", response_model=InvoiceDraft)
def remove_item(payload: DraftProductRequest) -> InvoiceDraft:
    return drafts.remove_item(payload.draft, payload.product_id)


@router.post("/preview", response_model=InvoiceTotals)
def preview(draft: InvoiceDraft) -> InvoiceTotals:
    return drafts.preview(draft)


@router.post(
    "/submit",
    response_model=CommandResult,
    status_code=201,
    responses={409: {"model": CommandResult}, 500: {"model": CommandResult}},
)
def submit(draft: InvoiceDraft):
    try:
        invoice = drafts.to_invoice_create(draft)
    except drafts.DraftError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return command_response(commands.create_invoice(get_engine(), invoice))
