# app/api/products.py

from typing import List

from fastapi import APIRouter, HTTPException

from app.api.results import command_response
from app.db import commands, queries
from app.db.engine import get_engine
from app.models.products import ProductIn, ProductOut
from app.models.results import CommandResult

router = APIRouter(prefix="/products", tags=["products"])


@router.get("/", response_model=List[ProductOut])
def list_products() -> List[ProductOut]:
    return queries.list_products(get_engine())


@router.post(
    "/",
    response_model=CommandResult,
    status_code=201,
    responses={409: {"model": CommandResult}},
)
def add_product(payload: ProductIn):
    return command_response(commands.add_product(get_engine(), payload))


@router.get("/{product_id}", response_model=ProductOut)
def get_product(product_id: int) -> ProductOut:
    product = queries.get_product(get_engine(), product_id)
    if product is None:
        raise HTTPException(status_code=404, detail="Product not found")
    return product
