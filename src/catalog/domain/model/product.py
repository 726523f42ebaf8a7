"""Product aggregate.

The Product is the only aggregate in the catalog. It owns its own
validation rules and lifecycle: created, updated or restocked any
number of times, then soft-deleted once. No transition leaves the
deleted state.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal

from catalog.domain.exceptions import InvariantViolation, ValidationError
from catalog.domain.model.value_objects import Money

# ---------------------------------------------------------------------------
# Constants for business rules
# ---------------------------------------------------------------------------
MAX_CODE_LENGTH = 20
MAX_NAME_LENGTH = 50
MAX_DESCRIPTION_LENGTH = 1000
PRICE_DECIMAL_PLACES = 2


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Product:
    """Aggregate root for catalog products.

    Use the ``Product.create()`` factory for new products; it enforces
    all business rules and stamps ``created_at``.  The ``__init__`` is
    intentionally simple so repositories can reconstitute persisted
    products without re-validating them.
    """

    id: str
    code: str
    name: str
    description: str
    price: Money
    stock: int
    created_at: datetime
    updated_at: datetime | None = None
    is_deleted: bool = False
    deleted_at: datetime | None = None

    # --- Factory (used for NEW products only) ---------------------------------

    @staticmethod
    def create(
        code: str,
        name: str,
        description: str | None,
        price: str | float | int | Decimal,
        stock: int | str,
    ) -> Product:
        """Create a new product, failing on the first invalid field.

        Fields are checked in a fixed order: code, name, price, stock,
        then description.
        """
        code = _require_text(code, "Code", MAX_CODE_LENGTH)
        name = _require_text(name, "Name", MAX_NAME_LENGTH)
        amount = _parse_price(price)
        quantity = _parse_stock(stock)
        description = _optional_text(description, "Description", MAX_DESCRIPTION_LENGTH)

        return Product(
            id=str(uuid.uuid4()),
            code=code,
            name=name,
            description=description,
            price=Money(amount),
            stock=quantity,
            created_at=_utcnow(),
        )

    # --- State transitions ----------------------------------------------------

    def update(
        self,
        name: str,
        description: str | None,
        price: str | float | int | Decimal,
        stock: int | str,
    ) -> None:
        """Replace the mutable attributes.  ``code`` never changes.

        All fields are validated before anything is assigned, so a
        failed update leaves the product untouched.
        """
        self._ensure_not_deleted("Cannot update a deleted product")

        name = _require_text(name, "Name", MAX_NAME_LENGTH)
        amount = _parse_price(price)
        quantity = _parse_stock(stock)
        description = _optional_text(description, "Description", MAX_DESCRIPTION_LENGTH)

        self.name = name
        self.description = description
        self.price = Money(amount, self.price.currency)
        self.stock = quantity
        self.updated_at = _utcnow()

    def adjust_stock(self, delta: int) -> None:
        """Add ``delta`` (possibly negative) to the stock level."""
        self._ensure_not_deleted("Cannot adjust stock of a deleted product")
        if isinstance(delta, bool) or not isinstance(delta, int):
            raise ValidationError("Stock adjustment must be a whole number")
        if self.stock + delta < 0:
            raise InvariantViolation("Insufficient stock")
        self.stock += delta
        self.updated_at = _utcnow()

    def delete(self) -> None:
        """Soft-delete: Active -> Deleted.  Irreversible."""
        if self.is_deleted:
            raise InvariantViolation("Product is already deleted")
        self.is_deleted = True
        self.deleted_at = _utcnow()

    # --- Computed properties --------------------------------------------------

    @property
    def is_active(self) -> bool:
        return not self.is_deleted

    # --- Internal helpers -----------------------------------------------------

    def _ensure_not_deleted(self, message: str) -> None:
        if self.is_deleted:
            raise InvariantViolation(message)


def _require_text(value: str, label: str, max_length: int) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{label} cannot be empty")
    if len(value) > max_length:
        raise ValidationError(f"{label} cannot exceed {max_length} characters")
    return value


def _optional_text(value: str | None, label: str, max_length: int) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError(f"{label} must be text")
    if len(value) > max_length:
        raise ValidationError(f"{label} cannot exceed {max_length} characters")
    return value


def _parse_price(raw: str | float | int | Decimal) -> Decimal:
    try:
        amount = Money.parse_amount(raw)
    except ValidationError as exc:
        raise ValidationError(f"Invalid price: {raw!r}") from exc
    if amount < 0:
        raise ValidationError("Price cannot be negative")
    if amount.normalize().as_tuple().exponent < -PRICE_DECIMAL_PLACES:
        raise ValidationError(
            f"Price cannot have more than {PRICE_DECIMAL_PLACES} decimal places"
        )
    return amount


def _parse_stock(raw: int | str) -> int:
    if isinstance(raw, bool):
        raise ValidationError(f"Invalid stock quantity: {raw!r}")
    if isinstance(raw, int):
        quantity = raw
    else:
        try:
            quantity = int(str(raw).strip())
        except ValueError as exc:
            raise ValidationError(f"Invalid stock quantity: {raw!r}") from exc
    if quantity < 0:
        raise ValidationError("Stock cannot be negative")
    return quantity
