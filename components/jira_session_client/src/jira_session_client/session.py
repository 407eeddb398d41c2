"""Session cookie exchange with the Jira auth endpoint."""

from __future__ import annotations

import logging
import threading

import requests

from issue_tracker_api.config import ClientConfig
from issue_tracker_api.errors import AuthenticationError, IssueTrackerError, TransportError
from issue_tracker_api.result import Callback, OperationResult, deliver
from jira_session_client.request_builder import RequestBuilder, dispatch


def set_cookie_values(response: requests.Response) -> tuple[str, ...]:
    """Every Set-Cookie header value, in the order received."""
    # requests folds repeated headers into one comma joined string, so prefer
    # urllib3's header list when the response came off the wire
    raw_headers = getattr(response.raw, "headers", None)
    if raw_headers is not None and hasattr(raw_headers, "getlist"):
        return tuple(raw_headers.getlist("Set-Cookie"))
    value = response.headers.get("set-cookie")
    return (value,) if value else ()


class SessionManager:
    """Owns the credentials and the in-memory session cookies.

    The cookies are replaced wholesale after each successful login and left
    alone when a login fails. Nothing is persisted.

    Args:
        config: Connection settings and credentials
        http:   Transport shared with the owning client
        logger: Sink for diagnostic lines, scoped to the owning client
    """

    def __init__(self, config: ClientConfig, http: requests.Session, logger: logging.Logger) -> None:
        self._config = config
        self._http = http
        self._log = logger
        self._builder = RequestBuilder(config)
        self._cookies: tuple[str, ...] = ()
        self._lock = threading.Lock()

    @property
    def cookies(self) -> tuple[str, ...]:
        with self._lock:
            return self._cookies

    def authenticate(self) -> tuple[str, ...]:
        """Log in and return the cookies this login produced.

        Raises:
            AuthenticationError: If the credentials are rejected (401).
            TransportError: If the endpoint is unreachable or returns any other non-200 status.
        """
        self._log.info("Attempting to log in to JIRA as %s", self._config.username)
        spec = self._builder.login_request(self._config.username, self._config.password)
        response = dispatch(self._http, spec, self._config.timeout)

        if response.status_code == 401:
            raise AuthenticationError(
                "Failed to log in to JIRA due to authentication error.", status_code=401
            )
        if response.status_code != 200:
            raise TransportError(
                f"{response.status_code}: Unable to connect to JIRA during login.",
                status_code=response.status_code,
            )

        cookies = set_cookie_values(response)
        #last successful login wins when calls overlap
        with self._lock:
            self._cookies = cookies
        self._log.info("Logged in to JIRA successfully.")
        return cookies

    def login(self, *, callback: Callback | None = None) -> OperationResult:
        try:
            result = OperationResult(value=self.authenticate())
        except IssueTrackerError as exc:
            self._log.warning("JIRA login failed: %s", exc)
            result = OperationResult(error=exc)
        return deliver(result, callback)
