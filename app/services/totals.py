# app/services/totals.py
"""
Invoice arithmetic shared by the draft preview and the create-invoice
command, so a previewed total and a stored total can never disagree.

    item_total = price * quantity
    item_tax   = item_total * tax / 100
    grand      = round(sum(item_total)) + round(sum(item_tax))

Rounding to cents happens here and nowhere else; the stored total is
exactly the grand total returned by compute_totals.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Protocol, Tuple

from app.models.invoices import InvoiceTotals

HUNDRED = Decimal("100")
CENT = Decimal("0.01")


class PricedLine(Protocol):
    price: Decimal
    quantity: int
    tax: Decimal


def to_cents(amount: Decimal) -> Decimal:
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def line_total(price, quantity, tax) -> Tuple[Decimal, Decimal]:
    """Return the unrounded (item_total, item_tax) for one line."""
    item_total = Decimal(str(price)) * quantity
    item_tax = item_total * (Decimal(str(tax)) / HUNDRED)
    return item_total, item_tax


def compute_totals(items: Iterable[PricedLine]) -> InvoiceTotals:
    subtotal = Decimal("0")
    tax_total = Decimal("0")

    for item in items:
        item_total, item_tax = line_total(item.price, item.quantity, item.tax)
        subtotal += item_total
        tax_total += item_tax

    subtotal = to_cents(subtotal)
    tax_total = to_cents(tax_total)

    return InvoiceTotals(
        subtotal=subtotal,
        tax_total=tax_total,
        grand_total=subtotal + tax_total,
    )
