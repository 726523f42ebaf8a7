"""
API Dependencies.
"""

from __future__ import annotations

from typing import Iterator

from catalog.domain.repository.product_repository import ProductRepository
from catalog.infrastructure.bootstrap import product_repository


def get_product_repository() -> Iterator[ProductRepository]:
    """One repository (unit of work) per request."""
    with product_repository() as repo:
        yield repo
