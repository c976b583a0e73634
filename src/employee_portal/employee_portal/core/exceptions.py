from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations."""

    status_code = 500


class ValidationError(DomainError):
    """Raised when input data is missing, malformed or violates domain rules."""

    status_code = 400


class ReviewerNotFoundError(ValidationError):
    """Raised when a leave reviewer id does not refer to an employee."""


class NotFoundError(DomainError):
    """Raised when no row matches the given id."""

    status_code = 404


class DuplicateKeyError(DomainError):
    """Raised on a unique-constraint violation (duplicate email, id, ...)."""

    status_code = 400


class DanglingReferenceError(DomainError):
    """Raised when a referenced employee does not exist."""

    status_code = 400


class ConflictError(DomainError):
    """Raised when an optimistic-lock version check fails.

    ``current_version`` is the version the row holds now, so the caller can
    refresh and retry.
    """

    status_code = 409

    def __init__(self, message: str, *, current_version: Optional[int] = None):
        super().__init__(message)
        self.current_version = current_version


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""

    status_code = 401


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""

    status_code = 403


class StoreError(DomainError):
    """Raised for any other persistence failure."""

    status_code = 500
