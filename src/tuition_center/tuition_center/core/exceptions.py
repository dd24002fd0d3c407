class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a write targets a record that does not exist."""


class StoreError(Exception):
    """Raised when the record store cannot be reached or rejects a call.

    The operation is abandoned; the operator has to re-initiate it.
    """
