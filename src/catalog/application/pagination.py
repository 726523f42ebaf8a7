"""Page-window arithmetic shared by listing queries."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Callable, Generic, TypeVar

from catalog.domain.model.product import Product
from catalog.domain.repository.product_repository import ProductQuery

T = TypeVar("T")

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10


@dataclass(frozen=True)
class PaginatedResult(Generic[T]):
    """One page of items plus totals describing the whole collection."""

    items: list[T] = field(default_factory=list)
    total_items: int = 0
    total_pages: int = 0
    page: int = DEFAULT_PAGE
    page_size: int = DEFAULT_PAGE_SIZE


def normalize_window(page: int | None, page_size: int | None) -> tuple[int, int]:
    """Apply defaults and clamp both values to at least 1."""
    page = DEFAULT_PAGE if page is None else max(page, 1)
    page_size = DEFAULT_PAGE_SIZE if page_size is None else max(page_size, 1)
    return page, page_size


def paginate(
    query: ProductQuery,
    page: int | None,
    page_size: int | None,
    project: Callable[[Product], T],
) -> PaginatedResult[T]:
    """Count the full query, then fetch and project a single page.

    Pages past the end yield no items; the totals still describe the
    whole collection.
    """
    page, page_size = normalize_window(page, page_size)
    total_items = query.count()
    total_pages = math.ceil(total_items / page_size)
    window = query.skip((page - 1) * page_size).take(page_size).all()
    return PaginatedResult(
        items=[project(product) for product in window],
        total_items=total_items,
        total_pages=total_pages,
        page=page,
        page_size=page_size,
    )
