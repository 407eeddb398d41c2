"""Jira REST client driven by a cookie session."""

from jira_session_client.jira_impl import DEFAULT_SEARCH_FIELDS, JiraClient, get_client, users_issues_jql
from jira_session_client.request_builder import RequestBuilder, RequestSpec
from jira_session_client.session import SessionManager

__all__ = [
    "DEFAULT_SEARCH_FIELDS",
    "JiraClient",
    "RequestBuilder",
    "RequestSpec",
    "SessionManager",
    "get_client",
    "users_issues_jql",
]
