"""Uniform outcome type returned by every use-case handler.

Handlers never let expected failures escape as exceptions.  A caller
inspects ``is_success`` / ``is_failure`` and, on failure, maps
``error_kind`` to its own transport (HTTP status, exit code, ...).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

from catalog.domain.exceptions import (
    DomainException,
    DuplicateCodeError,
    EntityNotFoundError,
    InvariantViolation,
    StoreError,
    ValidationError,
)

T = TypeVar("T")


class ErrorKind(Enum):
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    INVARIANT = "invariant"
    STORE = "store"


@dataclass(frozen=True)
class Result(Generic[T]):
    """Success (with an optional value) xor failure (with an error message)."""

    is_success: bool
    value: T | None = None
    error: str | None = None
    error_kind: ErrorKind | None = None

    def __post_init__(self) -> None:
        if self.is_success and (self.error is not None or self.error_kind is not None):
            raise ValueError("A successful result cannot have an error")
        if not self.is_success and not self.error:
            raise ValueError("A failed result must have an error")
        if not self.is_success and self.value is not None:
            raise ValueError("A failed result cannot carry a value")

    @property
    def is_failure(self) -> bool:
        return not self.is_success

    # --- Factories ------------------------------------------------------------

    @staticmethod
    def success(value: T | None = None) -> Result[T]:
        return Result(is_success=True, value=value)

    @staticmethod
    def failure(error: str, kind: ErrorKind = ErrorKind.VALIDATION) -> Result[T]:
        return Result(is_success=False, error=error, error_kind=kind)


def failure_from(exc: DomainException) -> Result:
    """Translate a domain exception into a failed result."""
    if isinstance(exc, ValidationError):
        kind = ErrorKind.VALIDATION
    elif isinstance(exc, EntityNotFoundError):
        kind = ErrorKind.NOT_FOUND
    elif isinstance(exc, (InvariantViolation, DuplicateCodeError)):
        kind = ErrorKind.INVARIANT
    elif isinstance(exc, StoreError):
        kind = ErrorKind.STORE
    else:
        kind = ErrorKind.VALIDATION
    return Result.failure(str(exc), kind)
