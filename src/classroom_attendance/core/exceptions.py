from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations."""

    kind = "domain"


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    kind = "validation"


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""

    kind = "unauthenticated"


class UnauthenticatedError(AuthenticationError):
    """Raised when a request carries no valid auth token."""


class AuthorizationError(DomainError):
    """Raised when a principal lacks permission for an action."""

    kind = "forbidden"


class NotFoundError(DomainError):
    """Raised when a referenced entity does not exist."""

    kind = "not_found"


class InvalidSessionError(NotFoundError):
    """Raised when attendance targets a class session that does not exist."""

    kind = "invalid_session"


class ConflictError(DomainError):
    """Raised on uniqueness violations (duplicate class name, username)."""

    kind = "conflict"


class StoreError(DomainError):
    """Raised when the underlying persistence layer fails.

    The message shown to callers is generic; ``detail`` keeps the driver message for logs.
    """

    kind = "store"

    def __init__(self, message: str = "Database error", *, detail: Optional[str] = None):
        super().__init__(message)
        self.detail = detail
