"""Application service: Get Product use case (query)."""

from __future__ import annotations

import threading

from catalog.application.cancellation import raise_if_cancelled
from catalog.application.commands import GetProductQuery
from catalog.application.dto import ProductDTO
from catalog.application.product_queries import find_live_by_id
from catalog.application.result import ErrorKind, Result
from catalog.domain.exceptions import StoreError
from catalog.domain.repository.product_repository import ProductRepository


class GetProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        query: GetProductQuery,
        cancel: threading.Event | None = None,
    ) -> Result[ProductDTO]:
        raise_if_cancelled(cancel)
        try:
            product = find_live_by_id(self._product_repo, query.product_id)
        except StoreError as exc:
            return Result.failure(
                f"An error occurred while retrieving the product: {exc}",
                ErrorKind.STORE,
            )

        if product is None:
            return Result.failure(
                f"Product with ID {query.product_id} not found",
                ErrorKind.NOT_FOUND,
            )
        return Result.success(ProductDTO.from_product(product))
