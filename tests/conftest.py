"""Shared fixtures: every test gets its own SQLite file under tmp_path."""

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import func, select

from app.config import get_settings
from app.db import commands
from app.db.engine import get_engine, reset_engines
from app.db.schema import init_db
from app.models.customers import CustomerIn
from app.models.products import ProductIn


@pytest.fixture
def engine(tmp_path, monkeypatch):
    monkeypatch.setenv("INVOICING_DATABASE_URL", f"sqlite:///{tmp_path / 'test.db'}")
    get_settings.cache_clear()
    reset_engines()

    engine = get_engine()
    init_db(engine)
    yield engine

    engine.dispose()
    reset_engines()
    get_settings.cache_clear()


@pytest.fixture
def client(engine):
    from app.main import app

    with TestClient(app) as c:
        yield c


@pytest.fixture
def customer_id(engine) -> int:
    result = commands.add_customer(
        engine,
        CustomerIn(name="Asha Rao", phone="9800000001", email="asha@example.com"),
    )
    assert result.success
    return result.id


@pytest.fixture
def widget_id(engine) -> int:
    result = commands.add_product(
        engine,
        ProductIn(name="Widget", description="Blue widget", price=Decimal("100"), tax=Decimal("10")),
    )
    assert result.success
    return result.id


@pytest.fixture
def gadget_id(engine) -> int:
    result = commands.add_product(
        engine,
        ProductIn(name="Gadget", price=Decimal("50"), tax=Decimal("0")),
    )
    assert result.success
    return result.id


def count_rows(engine, table) -> int:
    with engine.connect() as conn:
        return conn.execute(select(func.count()).select_from(table)).scalar_one()
