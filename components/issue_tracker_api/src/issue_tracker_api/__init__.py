"""Issue tracker client contract."""

from issue_tracker_api.client import IssueTrackerClient
from issue_tracker_api.config import ClientConfig
from issue_tracker_api.errors import (
    AuthenticationError,
    IssueTrackerError,
    NotFoundError,
    PermissionDeniedError,
    ResponseDecodeError,
    TransportError,
    UnexpectedStatusError,
    ValidationError,
)
from issue_tracker_api.result import Callback, OperationResult, deliver

__all__ = [
    "AuthenticationError",
    "Callback",
    "ClientConfig",
    "IssueTrackerClient",
    "IssueTrackerError",
    "NotFoundError",
    "OperationResult",
    "PermissionDeniedError",
    "ResponseDecodeError",
    "TransportError",
    "UnexpectedStatusError",
    "ValidationError",
    "deliver",
]
