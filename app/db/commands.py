# app/db/commands.py
"""
Write commands. Each one runs in its own transaction and reports its
outcome as a CommandResult; storage errors are logged and converted,
never raised to the caller.
"""

import logging
from datetime import datetime, timezone

from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError

from app.db.schema import customers, invoice_items, invoices, products
from app.models.customers import CustomerIn
from app.models.invoices import InvoiceCreate
from app.models.products import ProductIn
from app.models.results import CommandResult, ErrorKind
from app.services.totals import compute_totals

logger = logging.getLogger(__name__)

INVOICE_FAILED = "Failed to save invoice."


def _is_unique_violation(exc: IntegrityError) -> bool:
    return "UNIQUE constraint failed" in str(exc.orig)


def add_customer(engine: Engine, data: CustomerIn) -> CommandResult:
    try:
        with engine.begin() as conn:
            result = conn.execute(
                customers.insert().values(
                    name=data.name,
                    phone=data.phone,
                    email=data.email,
                    address=data.address,
                )
            )
            customer_id = result.inserted_primary_key[0]
    except IntegrityError as exc:
        if _is_unique_violation(exc):
            logger.warning("Rejected customer %r: phone %s already in use", data.name, data.phone)
            return CommandResult.fail(
                ErrorKind.CONFLICT,
                f"A customer with phone {data.phone} already exists.",
                detail=str(exc.orig),
            )
        logger.warning("Rejected customer %r: %s", data.name, exc.orig)
        return CommandResult.fail(ErrorKind.CONSTRAINT, "Customer violates a constraint.", detail=str(exc.orig))
    except Exception as exc:
        logger.exception("Customer creation failed")
        return CommandResult.fail(ErrorKind.FAILURE, "Failed to save customer.", detail=repr(exc))

    logger.info("Created customer %s (%s)", customer_id, data.name)
    return CommandResult.ok(customer_id, "Customer added.")


def add_product(engine: Engine, data: ProductIn) -> CommandResult:
    try:
        with engine.begin() as conn:
            result = conn.execute(
                products.insert().values(
                    name=data.name,
                    description=data.description,
                    price=data.price,
                    tax=data.tax,
                )
            )
            product_id = result.inserted_primary_key[0]
    except IntegrityError as exc:
        logger.warning("Rejected product %r: %s", data.name, exc.orig)
        return CommandResult.fail(ErrorKind.CONSTRAINT, "Product violates a constraint.", detail=str(exc.orig))
    except Exception as exc:
        logger.exception("Product creation failed")
        return CommandResult.fail(ErrorKind.FAILURE, "Failed to save product.", detail=repr(exc))

    logger.info("Created product %s (%s)", product_id, data.name)
    return CommandResult.ok(product_id, "Product added.")


def create_invoice(engine: Engine, data: InvoiceCreate) -> CommandResult:
    """
    Persist an invoice header and all of its line items atomically.

    Line prices and tax rates are the values the client submitted, stored
    as the sale-time snapshot; they are not re-read from the products table.
    The stored total is computed here with the same calculator the draft
    preview uses.
    """
    try:
        totals = compute_totals(data.items)
        created_at = datetime.now(timezone.utc)

        # engine.begin() commits on clean exit and rolls back on any exception
        with engine.begin() as conn:
            result = conn.execute(
                invoices.insert().values(
                    customer_id=data.customer_id,
                    created_at=created_at,
                    total_amount=totals.grand_total,
                )
            )
            invoice_id = result.inserted_primary_key[0]

            conn.execute(
                invoice_items.insert(),
                [
                    {
                        "invoice_id": invoice_id,
                        "product_id": item.product_id,
                        "quantity": item.quantity,
                        "price_at_sale": item.price,
                        "tax_at_sale": item.tax,
                    }
                    for item in data.items
                ],
            )
    except IntegrityError as exc:
        logger.warning(
            "Invoice for customer %s rolled back: %s", data.customer_id, exc.orig
        )
        return CommandResult.fail(ErrorKind.CONSTRAINT, INVOICE_FAILED, detail=str(exc.orig))
    except Exception as exc:
        logger.exception("Invoice creation failed for customer %s", data.customer_id)
        return CommandResult.fail(ErrorKind.FAILURE, INVOICE_FAILED, detail=repr(exc))

    logger.info(
        "Created invoice %s for customer %s: %d item(s), total %s",
        invoice_id,
        data.customer_id,
        len(data.items),
        totals.grand_total,
    )
    return CommandResult.ok(invoice_id, "Invoice saved successfully!")
