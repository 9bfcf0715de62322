from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations.

    Domain errors are permanent: retrying the same request unchanged fails again.
    """


class ValidationError(DomainError):
    """Raised when input data is malformed or out of range."""

    def __init__(self, message: str, errors: Optional[list[dict]] = None):
        super().__init__(message)
        self.errors = errors or []


class ConflictError(DomainError):
    """Raised when a request conflicts with the stored state."""


class NotFoundError(DomainError):
    """Raised when the addressed record does not exist."""


class AuthenticationError(DomainError):
    """Raised when a credential is missing or invalid."""


class AuthorizationError(DomainError):
    """Raised when the caller lacks permission for an action."""


class InfrastructureError(Exception):
    """Raised when the record store fails (connectivity, timeout, constraints).

    Nothing was committed, so the whole operation is safe to retry.
    """


class DuplicateKeyError(InfrastructureError):
    """A unique key rejected the write."""

    def __init__(self, message: str, key: Optional[str] = None):
        super().__init__(message)
        self.key = key
