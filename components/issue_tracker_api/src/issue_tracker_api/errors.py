"""Error taxonomy for issue tracker operations."""

from __future__ import annotations

from typing import Any


class IssueTrackerError(Exception):
    """Base exception for everything an operation can resolve with."""

    def __init__(self, message: str, status_code: int | None = None, body: Any = None) -> None:
        self.message = message
        self.status_code = status_code
        self.body = body
        super().__init__(message)


class TransportError(IssueTrackerError):
    """Raised when the tracker could not be reached or answered unexpectedly during login."""


class AuthenticationError(IssueTrackerError):
    """Raised when the session endpoint rejects the credentials."""


class NotFoundError(IssueTrackerError):
    """Raised when the requested issue, project, version or view does not exist."""


class ValidationError(IssueTrackerError):
    """Raised when the tracker rejects the request contents (bad JQL, bad fields)."""


class PermissionDeniedError(IssueTrackerError):
    """Raised when the authenticated user may not perform the operation."""


class UnexpectedStatusError(IssueTrackerError):
    """Raised for any status the operation does not explicitly handle."""


class ResponseDecodeError(IssueTrackerError):
    """Raised when a successful response body is not valid JSON."""
