# app/db/schema.py

import logging

from sqlalchemy import (
    MetaData, Table, Column, Integer, String,
    Numeric, DateTime, ForeignKey, CheckConstraint, Text
)
from sqlalchemy.engine import Engine

logger = logging.getLogger(__name__)

metadata = MetaData()

customers = Table(
    "customers",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String, nullable=False),
    Column("phone", String, nullable=False, unique=True),
    Column("email", String, nullable=True),
    Column("address", Text, nullable=True),
    CheckConstraint("length(name) > 0", name="ck_customers_name_nonempty"),
    CheckConstraint("length(phone) > 0", name="ck_customers_phone_nonempty"),
)

products = Table(
    "products",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String, nullable=False),
    Column("description", Text, nullable=True),
    Column("price", Numeric(18, 2), nullable=False),
    Column("tax", Numeric(7, 3), nullable=False),
    CheckConstraint("price >= 0", name="ck_products_price_nonneg"),
    CheckConstraint("tax >= 0", name="ck_products_tax_nonneg"),
)

invoices = Table(
    "invoices",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("customer_id", Integer, ForeignKey("customers.id"), nullable=False),
    Column("created_at", DateTime(timezone=True), nullable=False),
    Column("total_amount", Numeric(18, 2), nullable=False),
    CheckConstraint("total_amount >= 0", name="ck_invoices_total_amount_nonneg"),
)

# price_at_sale / tax_at_sale are copies taken when the invoice is created,
# never joined back to products.price / products.tax.
invoice_items = Table(
    "invoice_items",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("invoice_id", Integer, ForeignKey("invoices.id"), nullable=False),
    Column("product_id", Integer, ForeignKey("products.id"), nullable=False),
    Column("quantity", Integer, nullable=False),
    Column("price_at_sale", Numeric(18, 2), nullable=False),
    Column("tax_at_sale", Numeric(7, 3), nullable=False),
    CheckConstraint("quantity > 0", name="ck_invoice_items_quantity_pos"),
    CheckConstraint("price_at_sale >= 0", name="ck_invoice_items_price_nonneg"),
    CheckConstraint("tax_at_sale >= 0", name="ck_invoice_items_tax_nonneg"),
)


def init_db(engine: Engine) -> None:
    """Create any missing tables. Existing tables are left untouched."""
    metadata.create_all(engine)
    logger.info("Invoicing schema ready on %s", engine.url)
