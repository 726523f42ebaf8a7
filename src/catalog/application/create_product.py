"""Application service: Create Product use case.

Validation is delegated to ``Product.create``.  Code uniqueness is
checked here against live products and enforced again by the store at
commit time, since a concurrent writer can slip in between the two.
"""

from __future__ import annotations

import threading

import structlog

from catalog.application.cancellation import raise_if_cancelled
from catalog.application.commands import CreateProductCommand
from catalog.application.product_queries import find_live_by_code
from catalog.application.result import ErrorKind, Result, failure_from
from catalog.application.unit_of_work import rollback_on_error
from catalog.domain.exceptions import (
    DomainException,
    DuplicateCodeError,
    InvariantViolation,
    StoreError,
)
from catalog.domain.model.product import Product
from catalog.domain.repository.product_repository import ProductRepository

logger = structlog.get_logger(__name__)


class CreateProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        command: CreateProductCommand,
        cancel: threading.Event | None = None,
    ) -> Result[str]:
        """Create a product and return its new ID."""
        try:
            with rollback_on_error(self._product_repo):
                raise_if_cancelled(cancel)
                product = Product.create(
                    command.code,
                    command.name,
                    command.description,
                    command.price,
                    command.stock,
                )

                if find_live_by_code(self._product_repo, product.code) is not None:
                    raise InvariantViolation(
                        f"Product with code '{product.code}' already exists"
                    )

                self._product_repo.add(product)
                raise_if_cancelled(cancel)
                self._product_repo.save_changes()
        except DuplicateCodeError as exc:
            logger.warning("product_create_rejected", code=exc.code, reason=str(exc))
            return failure_from(exc)
        except StoreError as exc:
            logger.error("product_create_failed", code=command.code, error=str(exc))
            return Result.failure(
                f"An error occurred while creating the product: {exc}",
                ErrorKind.STORE,
            )
        except DomainException as exc:
            logger.warning("product_create_rejected", code=command.code, reason=str(exc))
            return failure_from(exc)

        logger.info("product_created", product_id=product.id, code=product.code)
        return Result.success(product.id)
