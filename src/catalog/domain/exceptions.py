"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the application layer can catch them uniformly and turn them into
failed results.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """Malformed or out-of-range input for a product field."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist (or has been soft-deleted)."""


class InvariantViolation(DomainException):
    """A state-dependent business rule failed on well-formed input."""


class StoreError(DomainException):
    """The persistence layer failed to read or commit changes."""


class DuplicateCodeError(StoreError):
    """The store rejected a write because a live product already uses the code."""

    def __init__(self, code: str) -> None:
        self.code = code
        super().__init__(f"Product with code '{code}' already exists")
