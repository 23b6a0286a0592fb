class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a referenced record (employee, salary structure, leave) does not exist."""


class ConflictError(DomainError):
    """Raised when an action collides with existing state (overlap, duplicate mark, already processed)."""


class AuthenticationError(DomainError):
    """Raised when login credentials or bearer tokens are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""
