"""Application service: Delete Product use case.

Deletion is soft: the row stays in the store, flagged and timestamped.
A product that is already deleted is indistinguishable from one that
never existed.
"""

from __future__ import annotations

import threading

import structlog

from catalog.application.cancellation import raise_if_cancelled
from catalog.application.commands import DeleteProductCommand
from catalog.application.product_queries import find_live_by_id
from catalog.application.result import ErrorKind, Result, failure_from
from catalog.application.unit_of_work import rollback_on_error
from catalog.domain.exceptions import DomainException, EntityNotFoundError, StoreError
from catalog.domain.repository.product_repository import ProductRepository

logger = structlog.get_logger(__name__)


class DeleteProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        command: DeleteProductCommand,
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

                product.delete()

                raise_if_cancelled(cancel)
                self._product_repo.save_changes()
        except StoreError as exc:
            logger.error(
                "product_delete_failed", product_id=command.product_id, error=str(exc)
            )
            return Result.failure(
                f"An error occurred while deleting the product: {exc}",
                ErrorKind.STORE,
            )
        except DomainException as exc:
            logger.warning(
                "product_delete_rejected", product_id=command.product_id, reason=str(exc)
            )
            return failure_from(exc)

        logger.info("product_deleted", product_id=command.product_id)
        return Result.success()
