"""Unit-of-work scope used by the write handlers."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from catalog.domain.repository.product_repository import ProductRepository


@contextmanager
def rollback_on_error(repo: ProductRepository) -> Iterator[ProductRepository]:
    """Discard the repository's pending changes if the block raises."""
    try:
        yield repo
    except BaseException:
        repo.rollback()
        raise
