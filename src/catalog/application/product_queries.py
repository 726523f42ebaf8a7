"""Queries over *live* products.

The soft-delete predicate lives here and nowhere else; handlers that
must not see deleted products go through these helpers.
"""

from __future__ import annotations

from catalog.domain.model.product import Product
from catalog.domain.repository.product_repository import ProductQuery, ProductRepository


def live_products(repo: ProductRepository) -> ProductQuery:
    return repo.query().filter_by(is_deleted=False)


def find_live_by_id(repo: ProductRepository, product_id: str) -> Product | None:
    product = repo.get_by_id(product_id)
    if product is None or not product.is_active:
        return None
    return product


def find_live_by_code(repo: ProductRepository, code: str) -> Product | None:
    return live_products(repo).filter_by(code=code).first()
