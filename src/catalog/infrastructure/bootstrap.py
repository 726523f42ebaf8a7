"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from contextlib import contextmanager
from functools import lru_cache
from typing import Iterator

from sqlalchemy.orm import Session, sessionmaker

from catalog.domain.repository.product_repository import ProductRepository
from catalog.infrastructure.config import Settings, get_settings
from catalog.infrastructure.persistence.database import (
    create_engine_for,
    create_session_factory,
    init_schema,
)
from catalog.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from catalog.infrastructure.persistence.sql_product_repository import (
    SqlAlchemyProductRepository,
)


@lru_cache
def session_factory(database_url: str) -> sessionmaker[Session]:
    """One engine per database URL, schema created on first use."""
    engine = create_engine_for(database_url)
    init_schema(engine)
    return create_session_factory(engine)


@contextmanager
def product_repository(settings: Settings | None = None) -> Iterator[ProductRepository]:
    """Open a repository (one unit of work) for the configured backend."""
    settings = settings or get_settings()

    if settings.STORAGE_BACKEND == "sql":
        session = session_factory(settings.DATABASE_URL)()
        try:
            yield SqlAlchemyProductRepository(session)
        finally:
            session.close()
    else:
        yield JsonProductRepository(settings.products_file)
