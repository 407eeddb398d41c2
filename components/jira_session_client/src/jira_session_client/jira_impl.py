"""
Authentication
--------------
The client logs in through the cookie session endpoint (rest/auth/1/session)
before every operation and sends the returned cookies on the request that follows.

Credentials are read by get_client():

1. When get_client(interactive = True)
    User is prompted for any required value missing from the environment.
2. When get_client(interactive = False) - Default
        JIRA_HOST         jira.example.com
        JIRA_USERNAME     jdoe
        JIRA_PASSWORD     <password>
    Optional:
        JIRA_PROTOCOL     https (default)
        JIRA_PORT         8080
        JIRA_API_VERSION  2 (default)
        JIRA_TIMEOUT      seconds, transport default when unset

Dependencies:
    uv add requests

"""
#to avoid having to consider forward declarations, the below line must be first line in the file
from __future__ import annotations

import logging
import os
from getpass import getpass
from typing import Any

import requests

from issue_tracker_api.client import IssueTrackerClient
from issue_tracker_api.config import ClientConfig
from issue_tracker_api.errors import (
    IssueTrackerError,
    NotFoundError,
    PermissionDeniedError,
    ResponseDecodeError,
    UnexpectedStatusError,
    ValidationError,
)
from issue_tracker_api.result import Callback, OperationResult, deliver
from jira_session_client.request_builder import API, GREENHOPPER, RequestBuilder, dispatch
from jira_session_client.session import SessionManager
from jira_session_client.status_table import ErrorRule, StatusTable, dump_body

log = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

DEFAULT_SEARCH_FIELDS = ["summary", "status", "assignee", "description"]

_OPEN_STATUSES_JQL = ' AND status in (Open, "In Progress", Reopened)'

_INVALID_URL = ErrorRule(NotFoundError, "Invalid URL")
_INVALID_PROJECT = ErrorRule(NotFoundError, "Invalid project.")

#one table per operation. Statuses not listed fall through to UnexpectedStatusError
_FIND_ISSUE = StatusTable(
    success=(200,),
    errors={404: ErrorRule(NotFoundError, "Invalid issue number.")},
    unexpected="Unable to connect to JIRA during findIssueStatus.",
)
_UNRESOLVED_COUNT = StatusTable(
    success=(200,),
    errors={404: ErrorRule(NotFoundError, "Invalid version.")},
    unexpected="Unable to connect to JIRA during getUnresolvedIssueCount.",
)
_GET_PROJECT = StatusTable(
    success=(200,),
    errors={404: _INVALID_PROJECT},
    unexpected="Unable to connect to JIRA during getProject.",
)
_RAPID_VIEWS = StatusTable(
    success=(200,),
    errors={404: _INVALID_URL},
    unexpected="Unable to connect to JIRA during rapidView search.",
)
_SPRINTS = StatusTable(
    success=(200,),
    errors={404: _INVALID_URL},
    unexpected="Unable to connect to JIRA during sprints search.",
)
_ADD_TO_SPRINT = StatusTable(
    success=(204,),
    errors={404: _INVALID_URL},
    unexpected="Unable to connect to JIRA to add to sprint.",
    result=None,
)
_ISSUE_LINK = StatusTable(
    success=(200,),
    errors={404: _INVALID_PROJECT},
    unexpected="Unable to connect to JIRA during issueLink.",
    result=None,
)
_GET_VERSIONS = StatusTable(
    success=(200,),
    errors={404: _INVALID_PROJECT},
    unexpected="Unable to connect to JIRA during getVersions.",
)
_CREATE_VERSION = StatusTable(
    success=(201,),
    errors={
        404: ErrorRule(
            NotFoundError,
            "Version does not exist or the currently authenticated user does not have permission to view it",
        ),
        403: ErrorRule(
            PermissionDeniedError,
            "The currently authenticated user does not have permission to edit the version",
        ),
    },
    unexpected="Unable to connect to JIRA during createVersion.",
)
_SEARCH = StatusTable(
    success=(200,),
    errors={400: ErrorRule(ValidationError, "Problem with the JQL query")},
    unexpected="Unable to connect to JIRA during search.",
)
_ADD_NEW_ISSUE = StatusTable(
    success=(200, 201),
    #the tracker's own error document is the most useful thing to hand back
    errors={400: ErrorRule(ValidationError, dump_body)},
    unexpected="Unable to connect to JIRA during addNewIssue.",
)
_DELETE_ISSUE = StatusTable(success=(204,), unexpected="Error while deleting", result="Success")
_UPDATE_ISSUE = StatusTable(success=(200,), unexpected="Error while updating", result="Success")
_LIST_TRANSITIONS = StatusTable(
    success=(200,),
    errors={404: ErrorRule(NotFoundError, "Issue not found")},
    unexpected="Error while retrieving transitions",
)
_TRANSITION_ISSUE = StatusTable(success=(204,), unexpected="Error while updating", result="Success")
_LIST_PROJECTS = StatusTable(
    success=(200,),
    errors={500: ErrorRule(UnexpectedStatusError, "Error while retrieving list.", with_status=True)},
    unexpected="Error while retrieving projects",
)
_ADD_WORKLOG = StatusTable(
    success=(201,),
    errors={
        400: ErrorRule(ValidationError, lambda body: "Invalid Fields: " + dump_body(body)),
        403: ErrorRule(PermissionDeniedError, "Insufficient Permissions"),
    },
    unexpected="Error while updating",
    result="Success",
)
_LIST_ISSUE_TYPES = StatusTable(
    success=(200,),
    unexpected="Error while retrieving issue types",
)


def users_issues_jql(username: str, open_only: bool) -> str:
    """JQL for the issues assigned to ``username``, optionally only the open ones."""
    jql = f"assignee = {username}"
    if open_only:
        jql += _OPEN_STATUSES_JQL
    return jql


def _expect(value: Any, kind: type, what: str, status: int) -> Any:
    if not isinstance(value, kind):
        raise ResponseDecodeError(
            f"{status}: Expected {what} in the response from JIRA",
            status_code=status,
            body=value,
        )
    return value


def _field(body: Any, name: str, status: int) -> Any:
    return _expect(body, dict, f"a JSON object holding {name!r}", status).get(name)


def _pick_field(name: str):
    return lambda body, status: _field(body, name, status)


def _matching_view(project_name: str):
    def pick(body: Any, status: int) -> dict:
        wanted = project_name.lower()
        views = _field(body, "views", status) or []
        for view in _expect(views, list, "a list of 'views'", status):
            view = _expect(view, dict, "each rapid view to be an object", status)
            if str(view.get("name", "")).lower() == wanted:
                return view
        raise NotFoundError(f"No rapid view named {project_name!r}.")
    return pick


def _last_sprint(body: Any, status: int) -> dict | None:
    sprints = _expect(_field(body, "sprints", status) or [], list, "a list of 'sprints'", status)
    return sprints[-1] if sprints else None

# ---------------------------------------------------------------------------
# Client implementation
# ---------------------------------------------------------------------------

class JiraClient(IssueTrackerClient):
    """
    Args:
        config: Connection settings and credentials for the Jira instance
        http:   Transport to send requests with. A fresh requests.Session when omitted
        logger: Where diagnostic lines go. Scoped to this client, never swapped globally
    """

    def __init__(
        self,
        config: ClientConfig,
        *,
        http: requests.Session | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._config = config
        self._http = http if http is not None else requests.Session()
        self._log = logger if logger is not None else log
        self._builder = RequestBuilder(config)
        self._session = SessionManager(config, self._http, self._log)

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def cookies(self) -> tuple[str, ...]:
        """Cookies stored by the most recent successful login."""
        return self._session.cookies

    # ------------------------------------------------------------------
    # Internal HTTP helpers
    # ------------------------------------------------------------------

    def _call(
        self,
        name: str,
        method: str,
        path: str,
        table: StatusTable,
        *,
        body: Any = None,
        family: str = API,
        pick=None,
        callback: Callback | None = None,
    ) -> OperationResult:
        """Log in, send one request and resolve it through ``table``.

        Errors raised anywhere along the way end up in the returned result;
        nothing escapes to the caller.
        """
        try:
            #build from the cookies this login returned, not the shared slot
            cookies = self._session.authenticate()
            spec = self._builder.build(path, method, cookies=cookies, body=body, family=family)
            self._log.debug("%s %s", spec.method, spec.uri)
            response = dispatch(self._http, spec, self._config.timeout)
            value = table.classify(response)
            if pick is not None:
                value = pick(value, response.status_code)
            result = OperationResult(value=value)
        except IssueTrackerError as exc:
            self._log.warning("JIRA %s failed: %s", name, exc)
            result = OperationResult(error=exc)
        return deliver(result, callback)

    # ------------------------------------------------------------------
    # IssueTrackerClient contract
    # ------------------------------------------------------------------

    def login(self, *, callback: Callback | None = None) -> OperationResult:
        return self._session.login(callback=callback)

    def find_issue(self, issue_number: str, *, callback: Callback | None = None) -> OperationResult:
        return self._call("findIssue", "GET", f"issue/{issue_number}", _FIND_ISSUE, callback=callback)

    def get_unresolved_issue_count(self, version: str, *, callback: Callback | None = None) -> OperationResult:
        return self._call(
            "getUnresolvedIssueCount",
            "GET",
            f"version/{version}/unresolvedIssueCount",
            _UNRESOLVED_COUNT,
            pick=_pick_field("issuesUnresolvedCount"),
            callback=callback,
        )

    def get_project(self, project: str, *, callback: Callback | None = None) -> OperationResult:
        return self._call("getProject", "GET", f"project/{project}", _GET_PROJECT, callback=callback)

    def find_rapid_view(self, project_name: str, *, callback: Callback | None = None) -> OperationResult:
        """Return the first rapid view whose name matches ``project_name``, ignoring case.

        No match resolves with NotFoundError rather than a success value.
        """
        return self._call(
            "findRapidView",
            "GET",
            "rapidviews/list",
            _RAPID_VIEWS,
            family=GREENHOPPER,
            pick=_matching_view(project_name),
            callback=callback,
        )

    def get_last_sprint_for_rapid_view(
        self, rapid_view_id: int | str, *, callback: Callback | None = None
    ) -> OperationResult:
        return self._call(
            "getLastSprintForRapidView",
            "GET",
            f"sprints/{rapid_view_id}",
            _SPRINTS,
            family=GREENHOPPER,
            pick=_last_sprint,
            callback=callback,
        )

    def add_issue_to_sprint(
        self, issue_id: str, sprint_id: int | str, *, callback: Callback | None = None
    ) -> OperationResult:
        path = f"sprint/{sprint_id}/issues/add"
        self._log.info("Adding %s to sprint: %s", issue_id, self._builder.uri(path, GREENHOPPER))
        return self._call(
            "addIssueToSprint",
            "PUT",
            path,
            _ADD_TO_SPRINT,
            body={"issueKeys": [issue_id]},
            family=GREENHOPPER,
            callback=callback,
        )

    def issue_link(self, link: dict[str, Any], *, callback: Callback | None = None) -> OperationResult:
        return self._call("issueLink", "POST", "issueLink", _ISSUE_LINK, body=link, callback=callback)

    def get_versions(self, project: str, *, callback: Callback | None = None) -> OperationResult:
        return self._call(
            "getVersions", "GET", f"project/{project}/versions", _GET_VERSIONS, callback=callback
        )

    def create_version(self, version: dict[str, Any], *, callback: Callback | None = None) -> OperationResult:
        return self._call("createVersion", "POST", "version", _CREATE_VERSION, body=version, callback=callback)

    def search_jira(
        self,
        search_string: str,
        fields: list[str] | None = None,
        *,
        callback: Callback | None = None,
    ) -> OperationResult:
        """
        Args:
            search_string: JQL, sent as is
            fields:        Fields to return, DEFAULT_SEARCH_FIELDS when None

        Notes on usage:
            Only the first page is requested (startAt 0); the tracker's own page size applies.
        """
        body = {
            "jql": search_string,
            "startAt": 0,
            "fields": list(fields) if fields is not None else list(DEFAULT_SEARCH_FIELDS),
        }
        return self._call("searchJira", "POST", "search", _SEARCH, body=body, callback=callback)

    def get_users_issues(
        self, username: str, open_only: bool, *, callback: Callback | None = None
    ) -> OperationResult:
        return self.search_jira(users_issues_jql(username, open_only), None, callback=callback)

    def add_new_issue(self, issue: dict[str, Any], *, callback: Callback | None = None) -> OperationResult:
        return self._call("addNewIssue", "POST", "issue", _ADD_NEW_ISSUE, body=issue, callback=callback)

    def delete_issue(self, issue_num: str, *, callback: Callback | None = None) -> OperationResult:
        return self._call("deleteIssue", "DELETE", f"issue/{issue_num}", _DELETE_ISSUE, callback=callback)

    def update_issue(
        self, issue_num: str, issue_update: dict[str, Any], *, callback: Callback | None = None
    ) -> OperationResult:
        return self._call(
            "updateIssue", "PUT", f"issue/{issue_num}", _UPDATE_ISSUE, body=issue_update, callback=callback
        )

    def list_transitions(self, issue_id: str, *, callback: Callback | None = None) -> OperationResult:
        return self._call(
            "listTransitions",
            "GET",
            f"issue/{issue_id}/transitions",
            _LIST_TRANSITIONS,
            pick=_pick_field("transitions"),
            callback=callback,
        )

    def transition_issue(
        self, issue_num: str, issue_transition: dict[str, Any], *, callback: Callback | None = None
    ) -> OperationResult:
        return self._call(
            "transitionIssue",
            "POST",
            f"issue/{issue_num}/transitions",
            _TRANSITION_ISSUE,
            body=issue_transition,
            callback=callback,
        )

    def list_projects(self, *, callback: Callback | None = None) -> OperationResult:
        return self._call("listProjects", "GET", "project", _LIST_PROJECTS, callback=callback)

    def add_worklog(
        self, issue_id: str, worklog: dict[str, Any], *, callback: Callback | None = None
    ) -> OperationResult:
        return self._call(
            "addWorklog", "POST", f"issue/{issue_id}/worklog", _ADD_WORKLOG, body=worklog, callback=callback
        )

    def list_issue_types(self, *, callback: Callback | None = None) -> OperationResult:
        return self._call("listIssueTypes", "GET", "issuetype", _LIST_ISSUE_TYPES, callback=callback)


# ---------------------------------------------------------------------------
# Get client
# ---------------------------------------------------------------------------

def get_client(*, interactive: bool = False, logger: logging.Logger | None = None) -> JiraClient:
    """Return a configured JiraClient.

    Reads connection settings from environment variables. If "interactive = True" and
    any required variable is missing, the user will be prompted.

    Environment variables:
        JIRA_HOST:         Hostname of the Jira instance.
        JIRA_USERNAME:     Login name.
        JIRA_PASSWORD:     Password.
        JIRA_PROTOCOL:     'http' or 'https'. Defaults to https.
        JIRA_PORT:         Optional port.
        JIRA_API_VERSION:  REST version segment. Defaults to 2.
        JIRA_TIMEOUT:      Request timeout in seconds.
    """
    host = os.environ.get("JIRA_HOST", "")
    username = os.environ.get("JIRA_USERNAME", "")
    password = os.environ.get("JIRA_PASSWORD", "")

    if interactive:
        if not host:
            host = input("Jira host (e.g. jira.example.com): ").strip()
        if not username:
            username = input("Jira username: ").strip()
        if not password:
            password = getpass("Jira password: ")
    else:
        #collects the missing fields and raises an error alerting to the missing values
        missing = [name for name, val in [
            ("JIRA_HOST", host),
            ("JIRA_USERNAME", username),
            ("JIRA_PASSWORD", password),
        ] if not val]
        if missing:
            raise EnvironmentError(
                f"Missing required environment variables: {', '.join(missing)}. "
                "Set them or call get_client(interactive=True)."
            )

    timeout = os.environ.get("JIRA_TIMEOUT") or None
    if timeout is not None:
        try:
            timeout = float(timeout)
        except ValueError:
            raise EnvironmentError(
                f"JIRA_TIMEOUT must be a number of seconds, got {timeout!r}."
            ) from None
    config = ClientConfig(
        host=host,
        username=username,
        password=password,
        protocol=os.environ.get("JIRA_PROTOCOL") or "https",
        port=os.environ.get("JIRA_PORT") or None,
        api_version=os.environ.get("JIRA_API_VERSION") or "2",
        timeout=timeout,
    )
    return JiraClient(config, logger=logger)
