"""Data Transfer Objects — read-only shapes that cross layer boundaries.

DTOs carry data out of the application layer without exposing the
Product aggregate (or its deletion bookkeeping) to callers.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from catalog.domain.model.product import Product


@dataclass(frozen=True)
class ProductDTO:
    """Output: the full projection of a single product."""

    id: str
    code: str
    name: str
    description: str
    price: Decimal
    stock: int
    created_at: datetime
    updated_at: datetime | None

    @staticmethod
    def from_product(product: Product) -> ProductDTO:
        return ProductDTO(
            id=product.id,
            code=product.code,
            name=product.name,
            description=product.description,
            price=product.price.amount,
            stock=product.stock,
            created_at=product.created_at,
            updated_at=product.updated_at,
        )


@dataclass(frozen=True)
class ProductListItemDTO:
    """Output: a compact row in a product listing."""

    code: str
    name: str

    @staticmethod
    def from_product(product: Product) -> ProductListItemDTO:
        return ProductListItemDTO(code=product.code, name=product.name)
