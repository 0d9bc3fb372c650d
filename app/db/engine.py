# app/db/engine.py

from functools import lru_cache
from typing import Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine

from app.config import get_settings


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    # SQLite ships with foreign key enforcement off, per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@lru_cache
def _build_engine(url: str, echo: bool) -> Engine:
    engine = create_engine(url, echo=echo, future=True)
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def get_engine(url: Optional[str] = None) -> Engine:
    settings = get_settings()
    return _build_engine(url or settings.database_url, settings.sql_echo)


def reset_engines() -> None:
    """Forget cached engines so the next call picks up new settings."""
    _build_engine.cache_clear()
