"""Application service: Update Product use case.

Soft-deleted products are treated as absent: updating one reports
"not found" instead of silently editing a row callers can no longer see.
"""

from __future__ import annotations

import threading

import structlog

from catalog.application.cancellation import raise_if_cancelled
from catalog.application.commands import UpdateProductCommand
from catalog.application.product_queries import find_live_by_id
from catalog.application.result import ErrorKind, Result, failure_from
from catalog.application.unit_of_work import rollback_on_error
from catalog.domain.exceptions import DomainException, EntityNotFoundError, StoreError
from catalog.domain.repository.product_repository import ProductRepository

logger = structlog.get_logger(__name__)


class UpdateProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        command: UpdateProductCommand,
        cancel: threading.Event | None = None,
    ) -> Result[None]:
        try:
            with rollback_on_error(self._product_repo):
                raise_if_cancelled(cancel)
                product = find_live_by_id(self._product_repo, command.product_id)
                if product is None:
                    raise EntityNotFoundError(
                        f"Product with ID {command.product_id} not found"
                    )

                product.update(
                    command.name,
                    command.description,
                    command.price,
                    command.stock,
                )

                raise_if_cancelled(cancel)
                self._product_repo.save_changes()
        except StoreError as exc:
            logger.error(
                "product_update_failed", product_id=command.product_id, error=str(exc)
            )
            return Result.failure(
                f"An error occurred while updating the product: {exc}",
                ErrorKind.STORE,
            )
        except DomainException as exc:
            logger.warning(
                "product_update_rejected", product_id=command.product_id, reason=str(exc)
            )
            return failure_from(exc)

        logger.info("product_updated", product_id=command.product_id)
        return Result.success()
