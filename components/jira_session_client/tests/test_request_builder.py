"""Unit tests for ClientConfig URLs, RequestBuilder and dispatch."""

from unittest.mock import MagicMock

import pytest
import requests

from issue_tracker_api.config import ClientConfig
from issue_tracker_api.errors import TransportError
from jira_session_client.request_builder import GREENHOPPER, RequestBuilder, RequestSpec, dispatch

#--------------------------- tests for ClientConfig --------------------------

def test_base_url_includes_port(config):
    assert config.base_url == "http://jira.test:8080"


def test_base_url_tolerates_trailing_colon_and_missing_port():
    config = ClientConfig(host="jira.test", username="u", password="p", protocol="https:")
    assert config.base_url == "https://jira.test"


def test_config_is_immutable(config):
    with pytest.raises(AttributeError):
        config.host = "elsewhere"


def test_config_repr_hides_password(config):
    assert "secret" not in repr(config)

#--------------------------- tests for RequestBuilder --------------------------

def test_build_api_path(config):
    spec = RequestBuilder(config).build("issue/PROJ-1", "get", cookies=["a=1"])

    assert spec.uri == "http://jira.test:8080/rest/api/2/issue/PROJ-1"
    assert spec.method == "GET"
    assert spec.body is None
    assert "Content-Type" not in spec.headers


def test_build_greenhopper_path(config):
    spec = RequestBuilder(config).build("rapidviews/list", "GET", cookies=[], family=GREENHOPPER)

    assert spec.uri == "http://jira.test:8080/rest/greenhopper/2/rapidviews/list"


def test_build_joins_cookies_with_semicolon(config):
    spec = RequestBuilder(config).build("project", "GET", cookies=["a=1", "b=2"])

    assert spec.headers["Cookie"] == "a=1;b=2"


def test_build_marks_body_as_json(config):
    body = {"fields": {"summary": "hello"}}
    spec = RequestBuilder(config).build("issue", "POST", cookies=[], body=body)

    assert spec.body == body
    assert spec.headers["Content-Type"] == "application/json"


def test_login_request_is_unversioned_and_cookieless(config):
    spec = RequestBuilder(config).login_request("jdoe", "secret")

    assert spec.uri == "http://jira.test:8080/rest/auth/1/session"
    assert spec.method == "POST"
    assert spec.body == {"username": "jdoe", "password": "secret"}
    assert "Cookie" not in spec.headers

#--------------------------- tests for dispatch --------------------------

def test_dispatch_sends_json_body():
    http = MagicMock(spec=requests.Session)
    spec = RequestSpec(uri="http://x/rest/api/2/issue", method="POST", headers={"Cookie": "a=1"}, body={"k": 1})

    dispatch(http, spec, timeout=5)

    http.request.assert_called_once_with(
        "POST", "http://x/rest/api/2/issue", headers={"Cookie": "a=1"}, json={"k": 1}, timeout=5
    )


def test_dispatch_wraps_connection_failures():
    http = MagicMock(spec=requests.Session)
    http.request.side_effect = requests.ConnectionError("refused")
    spec = RequestSpec(uri="http://x", method="GET")

    with pytest.raises(TransportError) as exc_info:
        dispatch(http, spec)

    assert "Unable to connect to JIRA" in str(exc_info.value)
