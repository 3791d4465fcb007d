class DomainError(Exception):
    """Base exception for business rule violations.

    ``kind`` is the stable, caller-visible name of the failure.
    """

    kind = "DomainError"


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    kind = "ValidationError"


class InvalidCredentials(DomainError):
    """Raised when the phone is unknown or the PIN does not match.

    Both causes share this single exception and message.
    """

    kind = "InvalidCredentials"

    def __init__(self, message: str = "Invalid phone number or PIN"):
        super().__init__(message)


class NotAuthenticated(DomainError):
    """Raised when a bearer token is missing, invalid or expired."""

    kind = "NotAuthenticated"

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message)


class TokenInvalid(NotAuthenticated):
    """Signature mismatch or malformed token."""


class TokenExpired(NotAuthenticated):
    """Token used at or after its expiry instant."""


class AccessDenied(DomainError):
    """Raised when a user lacks permission for an action."""

    kind = "AccessDenied"

    def __init__(self, message: str = "You do not have access to this resource"):
        super().__init__(message)


class AlreadyClockedIn(DomainError):
    kind = "AlreadyClockedIn"

    def __init__(self, message: str = "You are already clocked in"):
        super().__init__(message)


class RecordNotFound(DomainError):
    """Missing record, record owned by someone else, or record already closed."""

    kind = "RecordNotFound"

    def __init__(self, message: str = "No open attendance record found"):
        super().__init__(message)


class InvariantViolation(DomainError):
    """Internal: more than one open record for a user. Indicates a bug."""

    kind = "InvariantViolation"


class Unavailable(DomainError):
    """Raised when a backing resource (database, hashing pool) fails."""

    kind = "Unavailable"

    def __init__(self, message: str = "Service temporarily unavailable"):
        super().__init__(message)
