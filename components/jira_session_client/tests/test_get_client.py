"""Tests for building a JiraClient from the environment."""

import pytest

from jira_session_client.jira_impl import JiraClient, get_client

_VARS = [
    "JIRA_HOST",
    "JIRA_USERNAME",
    "JIRA_PASSWORD",
    "JIRA_PROTOCOL",
    "JIRA_PORT",
    "JIRA_API_VERSION",
    "JIRA_TIMEOUT",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in _VARS:
        monkeypatch.delenv(var, raising=False)


def test_get_client_raises_when_env_vars_missing():
    # Assert: Should raise EnvironmentError listing the missing variables
    with pytest.raises(EnvironmentError) as exc_info:
        get_client(interactive=False)

    assert "JIRA_HOST" in str(exc_info.value)
    assert "JIRA_PASSWORD" in str(exc_info.value)


def test_get_client_succeeds_when_env_vars_present(monkeypatch):
    monkeypatch.setenv("JIRA_HOST", "jira.test")
    monkeypatch.setenv("JIRA_USERNAME", "jdoe")
    monkeypatch.setenv("JIRA_PASSWORD", "secret")

    client = get_client(interactive=False)

    assert isinstance(client, JiraClient)
    assert client.config.base_url == "https://jira.test"
    assert client.config.api_version == "2"
    assert client.config.timeout is None


def test_get_client_reads_optional_settings(monkeypatch):
    monkeypatch.setenv("JIRA_HOST", "jira.test")
    monkeypatch.setenv("JIRA_USERNAME", "jdoe")
    monkeypatch.setenv("JIRA_PASSWORD", "secret")
    monkeypatch.setenv("JIRA_PROTOCOL", "http")
    monkeypatch.setenv("JIRA_PORT", "8080")
    monkeypatch.setenv("JIRA_API_VERSION", "latest")
    monkeypatch.setenv("JIRA_TIMEOUT", "2.5")

    config = get_client().config

    assert config.base_url == "http://jira.test:8080"
    assert config.api_version == "latest"
    assert config.timeout == 2.5


def test_get_client_prompts_when_interactive(monkeypatch):
    answers = iter(["jira.test", "jdoe"])
    monkeypatch.setattr("builtins.input", lambda prompt: next(answers))
    monkeypatch.setattr("jira_session_client.jira_impl.getpass", lambda prompt: "secret")

    client = get_client(interactive=True)

    assert client.config.host == "jira.test"
    assert client.config.username == "jdoe"
    assert client.config.password == "secret"


def test_get_client_rejects_non_numeric_timeout(monkeypatch):
    monkeypatch.setenv("JIRA_HOST", "jira.test")
    monkeypatch.setenv("JIRA_USERNAME", "jdoe")
    monkeypatch.setenv("JIRA_PASSWORD", "secret")
    monkeypatch.setenv("JIRA_TIMEOUT", "soon")

    with pytest.raises(EnvironmentError) as exc_info:
        get_client()

    assert "JIRA_TIMEOUT" in str(exc_info.value)
