# app/db/queries.py

from datetime import timezone
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.engine import Engine

from app.db.schema import customers, invoice_items, invoices, products
from app.models.customers import CustomerOut
from app.models.invoices import InvoiceDetailOut, InvoiceItemOut, InvoiceOut
from app.models.products import ProductOut
from app.services.totals import compute_totals, line_total, to_cents


def _row_to_customer(row) -> CustomerOut:
    return CustomerOut(
        id=row["id"],
        name=row["name"],
        phone=row["phone"],
        email=row["email"],
        address=row["address"],
    )


def _row_to_product(row) -> ProductOut:
    return ProductOut(
        id=row["id"],
        name=row["name"],
        description=row["description"],
        price=row["price"],
        tax=row["tax"],
    )


def _row_to_invoice(row) -> InvoiceOut:
    created_at = row["created_at"]
    # SQLite keeps the timestamp without its offset; it was written in UTC
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)

    return InvoiceOut(
        id=row["id"],
        customer_id=row["customer_id"],
        customer_name=row["customer_name"],
        created_at=created_at,
        total_amount=row["total_amount"],
    )


def _row_to_item(row) -> InvoiceItemOut:
    item_total, item_tax = line_total(row["price"], row["quantity"], row["tax"])
    return InvoiceItemOut(
        product_id=row["product_id"],
        name=row["name"],
        description=row["description"],
        quantity=row["quantity"],
        price=row["price"],
        tax=row["tax"],
        line_total=to_cents(item_total + item_tax),
    )


# ---- Customers ----

def list_customers(engine: Engine) -> List[CustomerOut]:
    with engine.connect() as conn:
        stmt = select(customers).order_by(customers.c.name, customers.c.id)
        rows = conn.execute(stmt).mappings().all()

    return [_row_to_customer(row) for row in rows]


def get_customer(engine: Engine, customer_id: int) -> Optional[CustomerOut]:
    with engine.connect() as conn:
        stmt = select(customers).where(customers.c.id == customer_id)
        row = conn.execute(stmt).mappings().first()

    return _row_to_customer(row) if row is not None else None


def find_customer_by_phone(engine: Engine, phone: str) -> Optional[CustomerOut]:
    """Exact match on phone, which is unique per customer."""
    with engine.connect() as conn:
        stmt = select(customers).where(customers.c.phone == phone.strip())
        row = conn.execute(stmt).mappings().first()

    return _row_to_customer(row) if row is not None else None


# ---- Products ----

def list_products(engine: Engine) -> List[ProductOut]:
    with engine.connect() as conn:
        stmt = select(products).order_by(products.c.name, products.c.id)
        rows = conn.execute(stmt).mappings().all()

    return [_row_to_product(row) for row in rows]


def get_product(engine: Engine, product_id: int) -> Optional[ProductOut]:
    with engine.connect() as conn:
        stmt = select(products).where(products.c.id == product_id)
        row = conn.execute(stmt).mappings().first()

    return _row_to_product(row) if row is not None else None


# ---- Invoices ----

def _invoice_select():
    return (
        select(
            invoices.c.id,
            invoices.c.customer_id,
            customers.c.name.label("customer_name"),
            invoices.c.created_at,
            invoices.c.total_amount,
        )
        .select_from(invoices.join(customers))
    )


def list_invoices(engine: Engine) -> List[InvoiceOut]:
    """Newest first."""
    with engine.connect() as conn:
        stmt = _invoice_select().order_by(
            invoices.c.created_at.desc(),
            invoices.c.id.desc(),
        )
        rows = conn.execute(stmt).mappings().all()

    return [_row_to_invoice(row) for row in rows]


def list_invoice_items(engine: Engine, invoice_id: int) -> List[InvoiceItemOut]:
    """
    Line items of one invoice. price/tax come from the sale-time snapshot
    columns, not from the product's current values.
    """
    with engine.connect() as conn:
        stmt = (
            select(
                invoice_items.c.product_id,
                products.c.name,
                products.c.description,
                invoice_items.c.quantity,
                invoice_items.c.price_at_sale.label("price"),
                invoice_items.c.tax_at_sale.label("tax"),
            )
            .select_from(invoice_items.join(products))
            .where(invoice_items.c.invoice_id == invoice_id)
            .order_by(invoice_items.c.id)
        )
        rows = conn.execute(stmt).mappings().all()

    return [_row_to_item(row) for row in rows]


def get_invoice(engine: Engine, invoice_id: int) -> Optional[InvoiceDetailOut]:
    with engine.connect() as conn:
        stmt = _invoice_select().where(invoices.c.id == invoice_id)
        row = conn.execute(stmt).mappings().first()

    if row is None:
        return None

    items = list_invoice_items(engine, invoice_id)
    header = _row_to_invoice(row)

    return InvoiceDetailOut(
        **header.model_dump(),
        items=items,
        totals=compute_totals(items),
    )
