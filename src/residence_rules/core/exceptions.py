class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or refers to a missing record."""


class PersistenceError(DomainError):
    """Raised when the backing store fails or is unreachable."""
