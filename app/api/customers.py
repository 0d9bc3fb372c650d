# app/api/customers.py

from typing import List

from fastapi import APIRouter, HTTPException, Query

from app.api.results import command_response
from app.db import commands, queries
from app.db.engine import get_engine
from app.models.customers import CustomerIn, CustomerOut
from app.models.results import CommandResult

router = APIRouter(prefix="/customers", tags=["customers"])


@router.get("/", response_model=List[CustomerOut])
def list_customers() -> List[CustomerOut]:
    """
    Return all customers ordered by name.
    """
    return queries.list_customers(get_engine())


@router.post(
    "/",
    response_model=CommandResult,
    status_code=201,
    responses={409: {"model": CommandResult}},
)
def add_customer(payload: CustomerIn):
    """
    Add a customer. Phone numbers are unique; a duplicate answers 409.
    """
    return command_response(commands.add_customer(get_engine(), payload))


@router.get("/by-phone", response_model=CustomerOut)
def find_customer_by_phone(
    phone: str = Query(..., min_length=1, description="Exact phone number"),
) -> CustomerOut:
    customer = queries.find_customer_by_phone(get_engine(), phone)
    if customer is None:
        raise HTTPException(status_code=404, detail="Customer not found")
    return customer


@router.get("/{customer_id}", response_model=CustomerOut)
def get_customer(customer_id: int) -> CustomerOut:
    """
    Return a single customer by ID.
    """
    customer = queries.get_customer(get_engine(), customer_id)
    if customer is None:
        raise HTTPException(status_code=404, detail="Customer not found")
    return customer
