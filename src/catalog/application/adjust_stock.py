"""Application service: Adjust Stock use case.

Applies a signed delta to a live product's stock level; the aggregate
refuses any delta that would take stock below zero.
"""

from __future__ import annotations

import threading

import structlog

from catalog.application.cancellation import raise_if_cancelled
from catalog.application.commands import AdjustStockCommand
from catalog.application.product_queries import find_live_by_id
from catalog.application.result import ErrorKind, Result, failure_from
from catalog.application.unit_of_work import rollback_on_error
from catalog.domain.exceptions import DomainException, EntityNotFoundError, StoreError
from catalog.domain.repository.product_repository import ProductRepository

logger = structlog.get_logger(__name__)


class AdjustStockHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        command: AdjustStockCommand,
        cancel: threading.Event | None = None,
    ) -> Result[int]:
        """Adjust stock and return the new stock level."""
        try:
            with rollback_on_error(self._product_repo):
                raise_if_cancelled(cancel)
                product = find_live_by_id(self._product_repo, command.product_id)
                if product is None:
                    raise EntityNotFoundError(
                        f"Product with ID {command.product_id} not found"
                    )

                product.adjust_stock(command.delta)

                raise_if_cancelled(cancel)
                self._product_repo.save_changes()
        except StoreError as exc:
            logger.error(
                "stock_adjust_failed", product_id=command.product_id, error=str(exc)
            )
            return Result.failure(
                f"An error occurred while adjusting stock: {exc}",
                ErrorKind.STORE,
            )
        except DomainException as exc:
            logger.warning(
                "stock_adjust_rejected", product_id=command.product_id, reason=str(exc)
            )
            return failure_from(exc)

        logger.info(
            "stock_adjusted",
            product_id=command.product_id,
            delta=command.delta,
            stock=product.stock,
        )
        return Result.success(product.stock)
