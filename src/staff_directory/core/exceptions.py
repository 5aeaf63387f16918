class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a referenced user does not exist."""


class ConflictError(DomainError):
    """Raised when a unique field (email) is already taken."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class StorageError(Exception):
    """Raised when the durable store cannot be read or written."""
