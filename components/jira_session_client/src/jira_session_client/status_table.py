"""Per-operation classification of HTTP responses."""

from __future__ import annotations

import json
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

import requests

from issue_tracker_api.errors import (
    IssueTrackerError,
    ResponseDecodeError,
    UnexpectedStatusError,
)

#an error message is either fixed text or built from the decoded error body
Message = str | Callable[[Any], str]

_PARSE = object()


@dataclass(frozen=True)
class ErrorRule:
    error: type[IssueTrackerError]
    message: Message
    #prefix the message with the status code ("500: ...")
    with_status: bool = False

    def build(self, status: int, body: Any) -> IssueTrackerError:
        text = self.message(body) if callable(self.message) else self.message
        if self.with_status:
            text = f"{status}: {text}"
        return self.error(text, status_code=status, body=body)


@dataclass(frozen=True)
class StatusTable:
    """Maps the status codes one operation cares about to outcomes.

    Args:
        success:    Status codes that mean the operation worked
        unexpected: Text for any status not listed, prefixed with the code
        errors:     Status code -> ErrorRule for the statuses with a specific meaning
        result:     What a success resolves with. The decoded body by default,
                    None when the response has no meaningful body, or a literal
    """

    success: tuple[int, ...]
    unexpected: str
    errors: Mapping[int, ErrorRule] = field(default_factory=dict)
    result: Any = _PARSE

    def classify(self, response: requests.Response) -> Any:
        """Return the success value for ``response`` or raise the matching error.

        Only the first matching classification applies.
        """
        status = response.status_code
        if status in self.success:
            if self.result is _PARSE:
                return decode_json(response)
            return self.result

        rule = self.errors.get(status)
        if rule is not None:
            raise rule.build(status, error_body(response))
        raise UnexpectedStatusError(f"{status}: {self.unexpected}", status_code=status)


def decode_json(response: requests.Response) -> Any:
    try:
        return response.json()
    except ValueError as exc:
        raise ResponseDecodeError(
            f"{response.status_code}: Response from JIRA is not valid JSON",
            status_code=response.status_code,
            body=response.text,
        ) from exc


def error_body(response: requests.Response) -> Any:
    """Decoded error document, or the raw text when it is not JSON."""
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def dump_body(body: Any) -> str:
    return json.dumps(body) if not isinstance(body, str) else body
