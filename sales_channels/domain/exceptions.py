"""Domain-specific exceptions. Pure domain layer, no infrastructure."""

from enum import Enum


class ErrorType(str, Enum):
    """Stable, caller-distinguishable failure categories."""

    NOT_FOUND = "not_found"
    DUPLICATE_ERROR = "duplicate_error"
    NOT_IMPLEMENTED = "not_implemented"
    INVALID_DATA = "invalid_data"


class DomainError(Exception):
    """Base for all domain-layer errors."""

    type: ErrorType = ErrorType.INVALID_DATA

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class DomainValidationError(DomainError):
    """Raised when domain validation rules are violated (bad id, bad query config)."""

    type = ErrorType.INVALID_DATA


class NotFoundError(DomainError):
    """Raised when no entity matches the requested identifier."""

    type = ErrorType.NOT_FOUND


class DuplicateError(DomainError):
    """Raised when the store reports a uniqueness violation."""

    type = ErrorType.DUPLICATE_ERROR


class NotImplementedOperationError(DomainError):
    """Raised by operations that are declared but not implemented yet."""

    type = ErrorType.NOT_IMPLEMENTED
