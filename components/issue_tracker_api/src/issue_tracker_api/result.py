"""Single-shot outcome of an issue tracker operation."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from issue_tracker_api.errors import IssueTrackerError

Callback = Callable[[IssueTrackerError | None, Any], None]


@dataclass(frozen=True)
class OperationResult:
    """Either an error or a value, never both.

    A successful result may still carry ``value=None`` for operations that have
    nothing to return (linking issues, adding an issue to a sprint).
    """

    error: IssueTrackerError | None = None
    value: Any = None

    def __post_init__(self) -> None:
        if self.error is not None and self.value is not None:
            raise ValueError("OperationResult cannot hold both an error and a value")

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Any:
        """Return the value, or raise the error for callers that prefer exceptions."""
        if self.error is not None:
            raise self.error
        return self.value


def deliver(result: OperationResult, callback: Callback | None = None) -> OperationResult:
    """Hand the result to the optional callback exactly once, then return it."""
    if callback is not None:
        callback(result.error, result.value)
    return result
