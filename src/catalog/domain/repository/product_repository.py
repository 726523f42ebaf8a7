"""Abstract repository for the Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON, SQL, in-memory)
live in the infrastructure layer.

A repository instance is a unit of work: products returned by
``get_by_id`` or by a query are tracked, and every change made to them
(plus any ``add``/``remove``) is written atomically by ``save_changes``.
``rollback`` discards everything pending.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from catalog.domain.model.product import Product


class ProductQuery(ABC):
    """Lazy, composable query over stored products.

    Every method except the terminal ones (``count``, ``all``, ``first``)
    returns a new query; nothing touches the store until a terminal
    method runs.  ``skip``/``take`` set the result window; calling either
    again replaces the previous value.
    """

    @abstractmethod
    def filter_by(self, **criteria: object) -> ProductQuery:
        """Keep products whose attributes equal the given values."""

    @abstractmethod
    def order_by(self, field: str, descending: bool = False) -> ProductQuery:
        """Sort by a product attribute.  Later calls add tie-breakers."""

    @abstractmethod
    def skip(self, count: int) -> ProductQuery:
        """Skip the first ``count`` matching products."""

    @abstractmethod
    def take(self, count: int) -> ProductQuery:
        """Return at most ``count`` products."""

    @abstractmethod
    def count(self) -> int:
        """Number of products in the current window."""

    @abstractmethod
    def all(self) -> list[Product]:
        """Materialize the query."""

    def first(self) -> Product | None:
        results = self.take(1).all()
        return results[0] if results else None


class ProductRepository(ABC):

    @abstractmethod
    def add(self, product: Product) -> None:
        """Stage a new product for insertion."""

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID regardless of state, or None."""

    @abstractmethod
    def remove(self, product: Product) -> None:
        """Stage a product for physical removal."""

    @abstractmethod
    def query(self) -> ProductQuery:
        """Start a new query over committed products."""

    @abstractmethod
    def save_changes(self) -> int:
        """Commit pending changes and return how many products were written.

        Raises StoreError (or DuplicateCodeError) if the store rejects
        the commit; nothing is written in that case.
        """

    @abstractmethod
    def rollback(self) -> None:
        """Discard all pending changes and forget tracked products."""
