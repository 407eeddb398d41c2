"""Unit tests for the SessionManager login exchange."""

import logging
from unittest.mock import MagicMock

import requests

from issue_tracker_api.errors import AuthenticationError, TransportError
from jira_session_client.session import SessionManager, set_cookie_values

from conftest import SESSION_COOKIE, login_ok, make_response


def _manager(config, http):
    return SessionManager(config, http, logging.getLogger("test.session"))


def test_login_stores_cookie_on_200(config, http):
    http.request.return_value = login_ok()
    manager = _manager(config, http)

    result = manager.login()

    assert result.ok
    assert result.value == (SESSION_COOKIE,)
    assert manager.cookies == (SESSION_COOKIE,)


def test_login_posts_credentials(config, http):
    http.request.return_value = login_ok()

    _manager(config, http).login()

    args, kwargs = http.request.call_args
    assert args == ("POST", "http://jira.test:8080/rest/auth/1/session")
    assert kwargs["json"] == {"username": "jdoe", "password": "secret"}


def test_login_without_set_cookie_stores_empty_session(config, http):
    http.request.return_value = make_response(200, {})
    manager = _manager(config, http)

    assert manager.login().ok
    assert manager.cookies == ()


def test_login_401_is_authentication_error_and_keeps_cookies(config, http):
    manager = _manager(config, http)
    http.request.return_value = login_ok()
    manager.login()

    # a later failed login must not clear what the earlier one stored
    http.request.return_value = make_response(401)
    result = manager.login()

    assert isinstance(result.error, AuthenticationError)
    assert str(result.error) == "Failed to log in to JIRA due to authentication error."
    assert manager.cookies == (SESSION_COOKIE,)


def test_login_other_status_is_transport_error_with_code(config, http):
    http.request.return_value = make_response(503)

    result = _manager(config, http).login()

    assert isinstance(result.error, TransportError)
    assert result.error.status_code == 503
    assert str(result.error) == "503: Unable to connect to JIRA during login."


def test_login_connection_failure_is_transport_error(config, http):
    http.request.side_effect = requests.ConnectionError("refused")

    result = _manager(config, http).login()

    assert isinstance(result.error, TransportError)


def test_login_invokes_callback_once(config, http):
    http.request.return_value = make_response(401)
    callback = MagicMock()

    _manager(config, http).login(callback=callback)

    callback.assert_called_once()
    error, value = callback.call_args[0]
    assert isinstance(error, AuthenticationError)
    assert value is None


def test_set_cookie_values_reads_every_raw_header():
    # requests would fold these into one string; the raw header list keeps them apart
    response = make_response(200)
    response.raw = MagicMock()
    response.raw.headers.getlist.return_value = ["a=1; Path=/", "b=2; Path=/"]

    assert set_cookie_values(response) == ("a=1; Path=/", "b=2; Path=/")
    response.raw.headers.getlist.assert_called_once_with("Set-Cookie")
