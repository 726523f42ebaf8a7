"""Catalog configuration via pydantic-settings.

Every field can be overridden with a ``CATALOG_``-prefixed environment
variable or a ``.env`` file in the working directory.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Storage
    STORAGE_BACKEND: Literal["json", "sql"] = "json"
    DATA_DIR: Path = Path("data")
    DATABASE_URL: str = "sqlite:///./data/catalog.db"

    # Listing
    DEFAULT_PAGE_SIZE: int = 10

    # Logging
    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: str = "development"

    model_config = SettingsConfigDict(
        env_prefix="CATALOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def products_file(self) -> Path:
        return self.DATA_DIR / "products.json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
