"""Domain-level exceptions.

Services raise these errors to express business rule violations.
The API layer maps them to HTTP status codes in registered exception handlers.
"""

from __future__ import annotations

from enum import Enum


class DenyReason(str, Enum):
    """Why the authorization policy refused an action."""
    UNAUTHENTICATED = 'unauthenticated'
    DEACTIVATED = 'deactivated'
    BLOCKED = 'blocked'
    FORBIDDEN = 'forbidden'


class DomainError(Exception):
    """Base class for all domain errors."""


class NotFoundError(DomainError):
    """Requested entity does not exist."""


class DuplicateError(DomainError):
    """Entity with the same unique key already exists."""


class AuthenticationError(DomainError):
    """Caller is not authenticated (missing, malformed, expired or forged token)."""


class InvalidCredentialsError(DomainError):
    """Username/password pair did not authenticate.

    Unknown users and wrong passwords share one message.
    """


_DENY_MESSAGES = {
    DenyReason.UNAUTHENTICATED: "Not authenticated",
    DenyReason.DEACTIVATED: "Account has been deactivated. Contact support.",
    DenyReason.BLOCKED: "Account has been blocked. Contact support.",
    DenyReason.FORBIDDEN: "Access denied. Admin only.",
}


class PermissionDeniedError(DomainError):
    """Caller lacks permission for the requested action."""

    def __init__(self, reason: DenyReason = DenyReason.FORBIDDEN, message: str | None = None):
        self.reason = reason
        super().__init__(message or _DENY_MESSAGES[reason])


class ValidationError(DomainError):
    """Input violates a business validation rule."""

    def __init__(self, message: str, field: str | None = None):
        self.field = field
        super().__init__(message)


class StorageError(DomainError):
    """The backing store failed; the outcome of the operation is unknown."""
