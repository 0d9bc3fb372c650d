import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.api.customers import router as customers_router
from app.api.drafts import router as drafts_router
from app.api.invoices import router as invoices_router
from app.api.products import router as products_router
from app.config import get_settings
from app.db.engine import get_engine
from app.db.schema import init_db

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s [%(levelname)s] %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db(get_engine())
    yield


app = FastAPI(
    title=settings.app_title,
    version="0.1.0",
    lifespan=lifespan,
)

@app.get("/health")
def health_check():
    return {"status": "ok"}

app.include_router(customers_router)
app.include_router(products_router)
app.include_router(invoices_router)
app.include_router(drafts_router)
