"""SQLAlchemy implementation of ProductRepository.

Domain products are mapped to and from ``ProductRecord`` rows; the
ORM rows never leave this module.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable

from sqlalchemy import Select, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from catalog.domain.exceptions import DuplicateCodeError, StoreError
from catalog.domain.model.product import Product
from catalog.domain.model.value_objects import Money
from catalog.domain.repository.product_repository import ProductQuery, ProductRepository
from catalog.infrastructure.persistence.database import ProductRecord
from catalog.infrastructure.persistence.in_memory_query import first_duplicate_live_code

_COLUMNS = frozenset(ProductRecord.__table__.columns.keys())


def _column(field: str):
    if field not in _COLUMNS:
        raise ValueError(f"Unknown product field: {field!r}")
    return getattr(ProductRecord, field)


def _column_value(value: object) -> object:
    return value.amount if isinstance(value, Money) else value


class SqlAlchemyProductQuery(ProductQuery):

    def __init__(
        self,
        session: Session,
        attach: Callable[[ProductRecord], Product],
        statement: Select,
        offset: int = 0,
        limit: int | None = None,
    ) -> None:
        self._session = session
        self._attach = attach
        self._statement = statement
        self._offset = offset
        self._limit = limit

    def filter_by(self, **criteria: object) -> SqlAlchemyProductQuery:
        statement = self._statement
        for field, value in criteria.items():
            statement = statement.where(_column(field) == _column_value(value))
        return self._copy(statement=statement)

    def order_by(self, field: str, descending: bool = False) -> SqlAlchemyProductQuery:
        column = _column(field)
        return self._copy(
            statement=self._statement.order_by(column.desc() if descending else column.asc())
        )

    def skip(self, count: int) -> SqlAlchemyProductQuery:
        return self._copy(offset=max(count, 0))

    def take(self, count: int) -> SqlAlchemyProductQuery:
        return self._copy(limit=max(count, 0))

    def count(self) -> int:
        counting = select(func.count()).select_from(self._windowed().subquery())
        try:
            return self._session.scalar(counting) or 0
        except SQLAlchemyError as exc:
            raise StoreError(str(exc)) from exc

    def all(self) -> list[Product]:
        try:
            records = self._session.scalars(self._windowed()).all()
        except SQLAlchemyError as exc:
            raise StoreError(str(exc)) from exc
        return [self._attach(record) for record in records]

    def _windowed(self) -> Select:
        statement = self._statement
        if self._offset:
            statement = statement.offset(self._offset)
        if self._limit is not None:
            statement = statement.limit(self._limit)
        return statement

    def _copy(self, **changes: object) -> SqlAlchemyProductQuery:
        state = {
            "statement": self._statement,
            "offset": self._offset,
            "limit": self._limit,
        }
        state.update(changes)
        return SqlAlchemyProductQuery(self._session, self._attach, **state)  # type: ignore[arg-type]


class SqlAlchemyProductRepository(ProductRepository):
    """Product repository backed by a single SQLAlchemy session."""

    def __init__(self, session: Session) -> None:
        self._session = session
        self._tracked: dict[str, Product] = {}
        self._added: set[str] = set()
        self._removed: set[str] = set()

    # --- ProductRepository interface ------------------------------------------

    def add(self, product: Product) -> None:
        self._removed.discard(product.id)
        self._tracked[product.id] = product
        self._added.add(product.id)

    def get_by_id(self, product_id: str) -> Product | None:
        if product_id in self._removed:
            return None
        if product_id in self._tracked:
            return self._tracked[product_id]
        try:
            record = self._session.get(ProductRecord, product_id)
        except SQLAlchemyError as exc:
            raise StoreError(str(exc)) from exc
        return None if record is None else self._attach(record)

    def remove(self, product: Product) -> None:
        self._tracked.pop(product.id, None)
        self._added.discard(product.id)
        self._removed.add(product.id)

    def query(self) -> SqlAlchemyProductQuery:
        return SqlAlchemyProductQuery(self._session, self._attach, select(ProductRecord))

    def save_changes(self) -> int:
        session = self._session
        try:
            for pid, product in self._tracked.items():
                if pid in self._added:
                    session.add(_to_record(product))
                    continue
                record = session.get(ProductRecord, pid)
                if record is not None:
                    _copy_to_record(product, record)
            for pid in self._removed:
                record = session.get(ProductRecord, pid)
                if record is not None:
                    session.delete(record)

            written = (
                len(session.new)
                + len(session.deleted)
                + sum(1 for obj in session.dirty if session.is_modified(obj))
            )
            session.commit()
        except IntegrityError as exc:
            session.rollback()
            raise self._translate_integrity_error(exc) from exc
        except SQLAlchemyError as exc:
            session.rollback()
            raise StoreError(str(exc)) from exc

        self._added.clear()
        self._removed.clear()
        return written

    def rollback(self) -> None:
        self._session.rollback()
        self._tracked.clear()
        self._added.clear()
        self._removed.clear()

    # --- Internal helpers -----------------------------------------------------

    def _attach(self, record: ProductRecord) -> Product:
        product = self._tracked.get(record.id)
        if product is None:
            product = _to_domain(record)
            self._tracked[record.id] = product
        return product

    def _translate_integrity_error(self, exc: IntegrityError) -> StoreError:
        """Work out which code collided, falling back to a generic error."""
        live = [p for p in self._tracked.values() if not p.is_deleted]
        duplicate = first_duplicate_live_code(live)
        if duplicate is not None:
            return DuplicateCodeError(duplicate)
        try:
            for product in live:
                clash = self._session.scalar(
                    select(ProductRecord.id).where(
                        ProductRecord.code == product.code,
                        ProductRecord.is_deleted.is_(False),
                        ProductRecord.id != product.id,
                    )
                )
                if clash is not None:
                    return DuplicateCodeError(product.code)
        except SQLAlchemyError:
            return StoreError(str(exc.orig))
        return StoreError(str(exc.orig))


# ---------------------------------------------------------------------------
# Mapping
# ---------------------------------------------------------------------------


def _to_record(product: Product) -> ProductRecord:
    record = ProductRecord(id=product.id)
    _copy_to_record(product, record)
    return record


def _copy_to_record(product: Product, record: ProductRecord) -> None:
    """Assign only the columns whose values changed, so untouched rows stay clean."""
    values = {
        "code": product.code,
        "name": product.name,
        "description": product.description,
        "price": product.price.amount,
        "currency": product.price.currency,
        "stock": product.stock,
        "created_at": product.created_at,
        "updated_at": product.updated_at,
        "is_deleted": product.is_deleted,
        "deleted_at": product.deleted_at,
    }
    for column, value in values.items():
        current = getattr(record, column)
        if isinstance(current, datetime):
            current = _as_utc(current)
        if current != value:
            setattr(record, column, value)


def _to_domain(record: ProductRecord) -> Product:
    return Product(
        id=record.id,
        code=record.code,
        name=record.name,
        description=record.description or "",
        price=Money(record.price, record.currency),
        stock=record.stock,
        created_at=_as_utc(record.created_at),
        updated_at=_as_utc(record.updated_at),
        is_deleted=record.is_deleted,
        deleted_at=_as_utc(record.deleted_at),
    )


def _as_utc(value: datetime | None) -> datetime | None:
    # SQLite hands timestamps back without tzinfo
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
