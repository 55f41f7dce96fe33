"""Domain-level exceptions.

Services raise these errors to express business rule violations.
Route handlers catch them and map to appropriate HTTP status codes.
"""


class DomainError(Exception):
    """Base class for all domain errors."""


class DuplicateError(DomainError):
    """Entity with the same unique key already exists."""


class ValidationError(DomainError):
    """Input violates a business validation rule."""


class AuthenticationError(DomainError):
    """Credentials or bearer token could not be verified."""


class BadUploadError(ValidationError):
    """Uploaded spreadsheet could not be parsed."""


class RepositoryError(DomainError):
    """The backing store failed to complete an operation."""
