# app/services/drafts.py
"""
Operations on an in-progress invoice.

The draft is a value owned by the client and sent back with every request;
nothing here is kept between requests, so two browser tabs building two
invoices never see each other's lines. Every operation returns a new draft
and leaves its input untouched.
"""

from app.models.drafts import DraftLine, InvoiceDraft
from app.models.invoices import InvoiceCreate, InvoiceItemIn, InvoiceTotals
from app.models.products import ProductOut
from app.services.totals import compute_totals


class DraftError(ValueError):
    """The draft is not in a state that allows the requested operation."""


def select_customer(draft: InvoiceDraft, customer_id: int) -> InvoiceDraft:
    return draft.model_copy(update={"customer_id": customer_id}, deep=True)


def add_product(draft: InvoiceDraft, product: ProductOut) -> InvoiceDraft:
    """
    Add one unit of `product`. A product already on the draft gets its
    quantity bumped; a new one is added with the product's current price
    and tax rate, which become the sale-time snapshot.
    """
    new = draft.model_copy(deep=True)

    for line in new.items:
        if line.product_id == product.id:
            line.quantity += 1
            return new

    new.items.append(
        DraftLine(
            product_id=product.id,
            name=product.name,
            price=product.price,
            tax=product.tax,
            quantity=1,
        )
    )
    return new


def set_quantity(draft: InvoiceDraft, product_id: int, quantity: int) -> InvoiceDraft:
    if quantity < 1:
        raise DraftError("quantity must be at least 1")

    new = draft.model_copy(deep=True)
    for line in new.items:
        if line.product_id == product_id:
            line.quantity = quantity
            return new

    raise DraftError(f"product {product_id} is not on this invoice")


def remove_item(draft: InvoiceDraft, product_id: int) -> InvoiceDraft:
    new = draft.model_copy(deep=True)
    new.items = [line for line in new.items if line.product_id != product_id]
    return new


def preview(draft: InvoiceDraft) -> InvoiceTotals:
    return compute_totals(draft.items)


def to_invoice_create(draft: InvoiceDraft) -> InvoiceCreate:
    if draft.customer_id is None:
        raise DraftError("select a customer before saving the invoice")
    if not draft.items:
        raise DraftError("add at least one product before saving the invoice")

    return InvoiceCreate(
        customer_id=draft.customer_id,
        items=[
            InvoiceItemIn(
                product_id=line.product_id,
                price=line.price,
                tax=line.tax,
                quantity=line.quantity,
            )
            for line in draft.items
        ],
    )
