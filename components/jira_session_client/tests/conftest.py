"""Shared fixtures: a mocked transport and canned responses."""

import json
from unittest.mock import MagicMock

import pytest
import requests

from issue_tracker_api.config import ClientConfig
from jira_session_client.jira_impl import JiraClient

SESSION_COOKIE = "JSESSIONID=6E3487971234567896704A9EB4AE501F; Path=/; HttpOnly"


def make_response(status, body=None, *, text=None, set_cookie=None):
    """Build a real requests.Response without touching the network."""
    response = requests.Response()
    response.status_code = status
    if text is not None:
        response._content = text.encode()
    elif body is not None:
        response._content = json.dumps(body).encode()
    else:
        response._content = b""
    if set_cookie is not None:
        response.headers["Set-Cookie"] = set_cookie
    return response


def login_ok(cookie=SESSION_COOKIE):
    return make_response(200, {"session": {"name": "JSESSIONID"}}, set_cookie=cookie)


@pytest.fixture
def config():
    return ClientConfig(
        host="jira.test",
        username="jdoe",
        password="secret",
        protocol="http",
        port=8080,
        api_version="2",
    )


@pytest.fixture
def http():
    """A requests.Session stand-in; tests queue responses on http.request.side_effect."""
    return MagicMock(spec=requests.Session)


@pytest.fixture
def jira_client(config, http):
    return JiraClient(config, http=http)
