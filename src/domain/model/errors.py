"""Domain-level exceptions.

Services raise these errors to express business rule violations.
Route handlers catch them and map to appropriate HTTP status codes.
"""


class DomainError(Exception):
    """Base class for all domain errors."""


class NotFoundError(DomainError):
    """Requested entity does not exist."""


class ValidationError(DomainError):
    """Input violates a validation rule.

    ``errors`` maps field name to the list of messages for that field.
    """

    def __init__(self, message: str, errors: dict[str, list[str]] | None = None):
        self.errors = errors or {}
        super().__init__(message)


class PersistenceError(DomainError):
    """A write reached the store but affected no rows."""


class RegistrationError(DomainError):
    """User could not be created.

    ``errors`` is a list of ``{"code": ..., "description": ...}`` items,
    one per failed rule.
    """

    def __init__(self, errors: list[dict[str, str]]):
        self.errors = errors
        super().__init__("; ".join(e["description"] for e in errors))


class InvalidCredentialsError(DomainError):
    """Email/password pair did not authenticate. Deliberately vague."""


class AccountLockedError(DomainError):
    """Account is temporarily locked after repeated failed logins."""
