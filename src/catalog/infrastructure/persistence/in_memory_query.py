"""ProductQuery over an in-process collection of products.

Backs the JSON-file repository; the source callable is only invoked
when a terminal method runs, so queries stay lazy.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import fields
from typing import Callable, Iterable

from catalog.domain.model.product import Product
from catalog.domain.model.value_objects import Money
from catalog.domain.repository.product_repository import ProductQuery

_PRODUCT_FIELDS = frozenset(f.name for f in fields(Product))


def _check_field(name: str) -> str:
    if name not in _PRODUCT_FIELDS:
        raise ValueError(f"Unknown product field: {name!r}")
    return name


def _sort_key(field: str) -> Callable[[Product], tuple]:
    def key(product: Product) -> tuple:
        value = getattr(product, field)
        if isinstance(value, Money):
            value = value.amount
        # None sorts first, like NULLS FIRST on ascending SQL order
        return (value is not None, value)

    return key


class InMemoryProductQuery(ProductQuery):

    def __init__(
        self,
        source: Callable[[], Iterable[Product]],
        criteria: tuple[tuple[str, object], ...] = (),
        ordering: tuple[tuple[str, bool], ...] = (),
        offset: int = 0,
        limit: int | None = None,
    ) -> None:
        self._source = source
        self._criteria = criteria
        self._ordering = ordering
        self._offset = offset
        self._limit = limit

    # --- Composition ----------------------------------------------------------

    def filter_by(self, **criteria: object) -> InMemoryProductQuery:
        added = tuple((_check_field(name), value) for name, value in criteria.items())
        return self._copy(criteria=self._criteria + added)

    def order_by(self, field: str, descending: bool = False) -> InMemoryProductQuery:
        return self._copy(ordering=self._ordering + ((_check_field(field), descending),))

    def skip(self, count: int) -> InMemoryProductQuery:
        return self._copy(offset=max(count, 0))

    def take(self, count: int) -> InMemoryProductQuery:
        return self._copy(limit=max(count, 0))

    # --- Terminal operations --------------------------------------------------

    def count(self) -> int:
        return len(self.all())

    def all(self) -> list[Product]:
        matches = [
            product
            for product in self._source()
            if all(getattr(product, name) == value for name, value in self._criteria)
        ]
        # Stable sorts applied last-key-first give multi-key ordering
        for field, descending in reversed(self._ordering):
            matches.sort(key=_sort_key(field), reverse=descending)

        end = None if self._limit is None else self._offset + self._limit
        return matches[self._offset:end]

    # --- Internal helpers -----------------------------------------------------

    def _copy(self, **changes: object) -> InMemoryProductQuery:
        state = {
            "criteria": self._criteria,
            "ordering": self._ordering,
            "offset": self._offset,
            "limit": self._limit,
        }
        state.update(changes)
        return InMemoryProductQuery(self._source, **state)  # type: ignore[arg-type]


def first_duplicate_live_code(products: Iterable[Product]) -> str | None:
    """Return a code shared by two or more non-deleted products, if any."""
    counts = Counter(p.code for p in products if p.is_active)
    for code, seen in counts.items():
        if seen > 1:
            return code
    return None
