class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    def __init__(self, message: str, *, data=None):
        super().__init__(message)
        self.data = data


class NotFoundError(DomainError):
    """Raised when a referenced entity does not exist."""

    def __init__(self, message: str, *, data=None):
        super().__init__(message)
        self.data = data


class ConflictError(DomainError):
    """Raised on duplicate keys or repeated check-in/check-out."""
