class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is malformed (blank field, bad range, ...)."""


class NotFoundError(DomainError):
    """Raised when a referenced record id does not exist."""


class ConflictError(DomainError):
    """Raised when an operation would break an invariant of the current state."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""
