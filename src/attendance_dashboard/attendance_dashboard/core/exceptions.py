class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class SaveInProgressError(ValidationError):
    """Raised when the grid is read-only because a write is still in flight."""


class NotFoundError(DomainError):
    """Raised when a referenced row does not exist."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid or the session is gone."""


class AuthorizationError(DomainError):
    """Raised when a principal lacks the capability for an action."""


class BackendError(DomainError):
    """Raised when a query or mutation against the data backend fails."""


class IntegrityGuardError(DomainError):
    """Raised when a delete is refused because dependent rows exist."""

    def __init__(self, message: str, *, count: int):
        super().__init__(message)
        self.count = int(count)
