class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthorizationError(DomainError):
    """Raised when the acting role may not perform an action."""


class NotFoundError(DomainError):
    """Raised when a lookup has no matching record."""


class EmployeeNotFoundError(NotFoundError):
    pass


class PeriodNotFoundError(NotFoundError):
    pass


class InvalidTransitionError(DomainError):
    """Raised when a status change is not part of the period workflow."""


class PeriodLockedError(DomainError):
    """Raised when entries are edited on a period that is not in Draft."""
