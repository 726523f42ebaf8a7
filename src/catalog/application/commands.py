"""Commands and queries: the inputs a routing layer hands to handlers.

Field values arrive as the caller sent them (untrusted); the Product
aggregate does the validation.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from catalog.application.pagination import DEFAULT_PAGE, DEFAULT_PAGE_SIZE

RawPrice = str | float | int | Decimal
RawStock = int | str


@dataclass(frozen=True)
class CreateProductCommand:
    code: str
    name: str
    description: str | None
    price: RawPrice
    stock: RawStock


@dataclass(frozen=True)
class UpdateProductCommand:
    product_id: str
    name: str
    description: str | None
    price: RawPrice
    stock: RawStock


@dataclass(frozen=True)
class DeleteProductCommand:
    product_id: str


@dataclass(frozen=True)
class AdjustStockCommand:
    product_id: str
    delta: int


@dataclass(frozen=True)
class GetProductQuery:
    product_id: str


@dataclass(frozen=True)
class GetProductsQuery:
    page: int | None = DEFAULT_PAGE
    page_size: int | None = DEFAULT_PAGE_SIZE
