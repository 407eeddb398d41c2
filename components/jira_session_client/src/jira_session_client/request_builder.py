"""Request descriptors for the Jira REST families.

Turns a resource path, a method and the current session cookies into a
RequestSpec, and sends RequestSpecs over a ``requests.Session``. Nothing here
checks the path or the body; the tracker is the judge of those.
"""
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

import requests

from issue_tracker_api.config import ClientConfig
from issue_tracker_api.errors import TransportError

#REST families. "greenhopper" hosts rapid views and sprints
API = "api"
GREENHOPPER = "greenhopper"

_SESSION_PATH = "rest/auth/1/session"


@dataclass(frozen=True)
class RequestSpec:
    """A fully specified HTTP request. Built per call, never reused.

    The body, when present, is always sent as JSON.
    """

    uri: str
    method: str
    headers: dict[str, str] = field(default_factory=dict)
    body: Any = None


class RequestBuilder:
    """
    Args:
        config: Connection settings the URIs are rendered from
    """

    def __init__(self, config: ClientConfig) -> None:
        self._config = config

    def uri(self, path: str, family: str = API) -> str:
        return f"{self._config.base_url}/rest/{family}/{self._config.api_version}/{path.lstrip('/')}"

    def build(
        self,
        path: str,
        method: str,
        *,
        cookies: Sequence[str],
        body: Any = None,
        family: str = API,
    ) -> RequestSpec:
        """Build a request for ``path`` carrying the given session cookies.

        Every request asks for JSON back; a body, when present, is sent as JSON.
        """
        headers = {"Cookie": ";".join(cookies), "Accept": "application/json"}
        if body is not None:
            headers["Content-Type"] = "application/json"
        return RequestSpec(
            uri=self.uri(path, family),
            method=method.upper(),
            headers=headers,
            body=body,
        )

    def login_request(self, username: str, password: str) -> RequestSpec:
        """Build the session exchange, which is unversioned and carries no cookie."""
        return RequestSpec(
            uri=f"{self._config.base_url}/{_SESSION_PATH}",
            method="POST",
            headers={"Accept": "application/json", "Content-Type": "application/json"},
            body={"username": username, "password": password},
        )


def dispatch(http: requests.Session, spec: RequestSpec, timeout: float | None = None) -> requests.Response:
    """Send ``spec`` and return the raw response.

    Raises:
        TransportError: If no response could be obtained at all.
    """
    try:
        return http.request(
            spec.method,
            spec.uri,
            headers=spec.headers,
            json=spec.body,
            timeout=timeout,
        )
    except requests.RequestException as exc:
        raise TransportError(f"Unable to connect to JIRA: {exc}") from exc
