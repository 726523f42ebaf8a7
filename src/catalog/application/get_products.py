"""Application service: Get Products use case (paginated query).

Lists live products ordered by code, so the same page always holds
the same products for an unchanged catalog.
"""

from __future__ import annotations

import threading

from catalog.application.cancellation import raise_if_cancelled
from catalog.application.commands import GetProductsQuery
from catalog.application.dto import ProductListItemDTO
from catalog.application.pagination import PaginatedResult, paginate
from catalog.application.product_queries import live_products
from catalog.application.result import ErrorKind, Result
from catalog.domain.exceptions import StoreError
from catalog.domain.repository.product_repository import ProductRepository


class GetProductsHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        query: GetProductsQuery,
        cancel: threading.Event | None = None,
    ) -> Result[PaginatedResult[ProductListItemDTO]]:
        raise_if_cancelled(cancel)
        try:
            page = paginate(
                live_products(self._product_repo).order_by("code"),
                query.page,
                query.page_size,
                ProductListItemDTO.from_product,
            )
        except StoreError as exc:
            return Result.failure(
                f"An error occurred while listing products: {exc}",
                ErrorKind.STORE,
            )
        return Result.success(page)
