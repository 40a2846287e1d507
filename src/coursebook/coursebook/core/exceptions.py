from __future__ import annotations


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when the caller cannot be identified."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class NotFoundError(DomainError):
    """Raised when a record does not exist within the caller's client."""


class PersistenceError(DomainError):
    """Raised when the storage layer fails to read or write a record."""


class ImportAborted(PersistenceError):
    """Raised when a bulk import stops on a storage failure.

    ``created`` holds the users persisted before the failure.
    """

    def __init__(self, message: str, *, created=(), index: int | None = None):
        super().__init__(message)
        self.created = list(created)
        self.index = index
