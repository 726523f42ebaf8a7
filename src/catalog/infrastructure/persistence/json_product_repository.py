"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

import json
from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import Iterator

from catalog.domain.exceptions import DuplicateCodeError, StoreError
from catalog.domain.model.product import Product
from catalog.domain.model.value_objects import Money
from catalog.domain.repository.product_repository import ProductRepository
from catalog.infrastructure.persistence.in_memory_query import (
    InMemoryProductQuery,
    first_duplicate_live_code,
)


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()
        self._tracked: dict[str, Product] = {}
        # Serialized form of each tracked product as it was read
        self._snapshots: dict[str, dict] = {}
        self._removed: set[str] = set()

    # --- ProductRepository interface ------------------------------------------

    def add(self, product: Product) -> None:
        self._removed.discard(product.id)
        self._tracked[product.id] = product

    def get_by_id(self, product_id: str) -> Product | None:
        if product_id in self._removed:
            return None
        if product_id in self._tracked:
            return self._tracked[product_id]
        for raw in self._load_raw():
            if raw["id"] == product_id:
                return self._track(self._to_domain(raw))
        return None

    def remove(self, product: Product) -> None:
        self._tracked.pop(product.id, None)
        self._snapshots.pop(product.id, None)
        self._removed.add(product.id)

    def query(self) -> InMemoryProductQuery:
        return InMemoryProductQuery(self._stored_products)

    def save_changes(self) -> int:
        """Merge pending changes into the file as it is now.

        Only products added or modified through this repository are
        written; rows it merely read keep whatever the file holds, so
        concurrent writers to other products are not overwritten.
        """
        stored = {raw["id"]: raw for raw in self._load_raw()}

        changed = {}
        for pid, product in self._tracked.items():
            raw = self._to_raw(product)
            if self._snapshots.get(pid) != raw:
                changed[pid] = raw

        updated = {pid: raw for pid, raw in stored.items() if pid not in self._removed}
        updated.update(changed)

        duplicate = first_duplicate_live_code(
            self._to_domain(raw) for raw in updated.values()
        )
        if duplicate is not None:
            raise DuplicateCodeError(duplicate)

        written = sum(1 for pid, raw in changed.items() if stored.get(pid) != raw)
        removed = len(stored.keys() - updated.keys())

        self._persist_raw(list(updated.values()))
        self._snapshots.update(changed)
        self._removed.clear()
        return written + removed

    def rollback(self) -> None:
        self._tracked.clear()
        self._snapshots.clear()
        self._removed.clear()

    # --- Tracking -------------------------------------------------------------

    def _track(self, product: Product) -> Product:
        if product.id not in self._tracked:
            self._tracked[product.id] = product
            self._snapshots[product.id] = self._to_raw(product)
        return self._tracked[product.id]

    def _stored_products(self) -> Iterator[Product]:
        for raw in self._load_raw():
            if raw["id"] in self._removed:
                continue
            yield self._tracked.get(raw["id"]) or self._track(self._to_domain(raw))

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(product: Product) -> dict:
        return {
            "id": product.id,
            "code": product.code,
            "name": product.name,
            "description": product.description,
            "price": str(product.price.amount),
            "currency": product.price.currency,
            "stock": product.stock,
            "created_at": product.created_at.isoformat(),
            "updated_at": _iso_or_none(product.updated_at),
            "is_deleted": product.is_deleted,
            "deleted_at": _iso_or_none(product.deleted_at),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        return Product(
            id=raw["id"],
            code=raw["code"],
            name=raw["name"],
            description=raw.get("description", ""),
            price=Money(Decimal(raw["price"]), raw.get("currency", "USD")),
            stock=raw["stock"],
            created_at=datetime.fromisoformat(raw["created_at"]),
            updated_at=_datetime_or_none(raw.get("updated_at")),
            is_deleted=raw.get("is_deleted", False),
            deleted_at=_datetime_or_none(raw.get("deleted_at")),
        )

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        try:
            return json.loads(self._file_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise StoreError(f"Cannot read {self._file_path}: {exc}") from exc

    def _persist_raw(self, records: list[dict]) -> None:
        try:
            self._file_path.write_text(
                json.dumps(records, indent=2) + "\n", encoding="utf-8"
            )
        except OSError as exc:
            raise StoreError(f"Cannot write {self._file_path}: {exc}") from exc

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")


def _iso_or_none(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def _datetime_or_none(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None
