# app/config.py
"""
Runtime configuration, read from INVOICING_* environment variables
(or a local .env file).
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="INVOICING_",
        env_file=".env",
        extra="ignore",
    )

    database_url: str = Field(
        default="sqlite:///invoicing.db",
        description="SQLAlchemy URL of the invoicing store (file in project root)",
    )
    log_level: str = Field(default="INFO", description="Root log level")
    sql_echo: bool = Field(default=False, description="Print SQL in the terminal")
    app_title: str = Field(default="Invoicing API")


@lru_cache
def get_settings() -> Settings:
    return Settings()
