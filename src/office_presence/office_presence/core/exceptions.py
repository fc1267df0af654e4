class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when no acting user could be resolved for a request."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class NotFoundError(DomainError):
    """Raised when a target user, record or delegation does not exist."""


class ConflictError(DomainError):
    """Raised when a write would break a uniqueness rule outside the upsert path."""
