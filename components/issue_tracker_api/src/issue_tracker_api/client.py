"""Core client contract definitions."""

from abc import ABC, abstractmethod
from typing import Any

from issue_tracker_api.result import Callback, OperationResult

__all__ = ["IssueTrackerClient"]


class IssueTrackerClient(ABC):
    """Tracks issues.

    Every operation resolves to exactly one OperationResult. When a callback is
    passed it is invoked once with (error, value) before the result is returned.
    """

    # ------------------------------------------------------------------
    # Session
    # ------------------------------------------------------------------
    @abstractmethod
    def login(self, *, callback: Callback | None = None) -> OperationResult:
        """Log in and store the session cookies."""
        raise NotImplementedError

    # ------------------------------------------------------------------
    # Issues
    # ------------------------------------------------------------------
    @abstractmethod
    def find_issue(self, issue_number: str, *, callback: Callback | None = None) -> OperationResult:
        """Get an issue."""
        """Args:
            issue_number: The key or id of the issue (e.g. 'PROJ-42')

        Returns:
            The parsed issue JSON, or NotFoundError when no such issue exists

        """
        raise NotImplementedError

    @abstractmethod
    def add_new_issue(self, issue: dict[str, Any], *, callback: Callback | None = None) -> OperationResult:
        """Create an issue."""
        """Args:
            issue: The issue payload, passed through untouched

        Notes on usage: A 400 from the tracker resolves with a ValidationError whose
        ``body`` holds the tracker's error document.

        """
        raise NotImplementedError

    @abstractmethod
    def update_issue(
        self, issue_num: str, issue_update: dict[str, Any], *, callback: Callback | None = None
    ) -> OperationResult:
        """Update an issue, resolving with "Success"."""
        raise NotImplementedError

    @abstractmethod
    def delete_issue(self, issue_num: str, *, callback: Callback | None = None) -> OperationResult:
        """Delete an issue, resolving with "Success"."""
        raise NotImplementedError

    @abstractmethod
    def issue_link(self, link: dict[str, Any], *, callback: Callback | None = None) -> OperationResult:
        """Link two issues."""
        raise NotImplementedError

    @abstractmethod
    def add_worklog(
        self, issue_id: str, worklog: dict[str, Any], *, callback: Callback | None = None
    ) -> OperationResult:
        """Log work against an issue."""
        raise NotImplementedError

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------
    @abstractmethod
    def list_transitions(self, issue_id: str, *, callback: Callback | None = None) -> OperationResult:
        """List the transitions currently available to an issue."""
        raise NotImplementedError

    @abstractmethod
    def transition_issue(
        self, issue_num: str, issue_transition: dict[str, Any], *, callback: Callback | None = None
    ) -> OperationResult:
        """Move an issue through a transition."""
        raise NotImplementedError

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------
    @abstractmethod
    def search_jira(
        self,
        search_string: str,
        fields: list[str] | None = None,
        *,
        callback: Callback | None = None,
    ) -> OperationResult:
        """Run a query."""
        """Args:
            search_string: The query, passed as an opaque string
            fields:        Fields to return. Implementations pick a default set when None

        """
        raise NotImplementedError

    @abstractmethod
    def get_users_issues(
        self, username: str, open_only: bool, *, callback: Callback | None = None
    ) -> OperationResult:
        """Search for the issues assigned to a user, optionally only open ones."""
        raise NotImplementedError

    # ------------------------------------------------------------------
    # Projects, versions and issue types
    # ------------------------------------------------------------------
    @abstractmethod
    def get_project(self, project: str, *, callback: Callback | None = None) -> OperationResult:
        raise NotImplementedError

    @abstractmethod
    def list_projects(self, *, callback: Callback | None = None) -> OperationResult:
        raise NotImplementedError

    @abstractmethod
    def get_versions(self, project: str, *, callback: Callback | None = None) -> OperationResult:
        raise NotImplementedError

    @abstractmethod
    def create_version(self, version: dict[str, Any], *, callback: Callback | None = None) -> OperationResult:
        raise NotImplementedError

    @abstractmethod
    def get_unresolved_issue_count(self, version: str, *, callback: Callback | None = None) -> OperationResult:
        """Return the number of unresolved issues in a version."""
        raise NotImplementedError

    @abstractmethod
    def list_issue_types(self, *, callback: Callback | None = None) -> OperationResult:
        raise NotImplementedError

    # ------------------------------------------------------------------
    # Boards and sprints
    # ------------------------------------------------------------------
    @abstractmethod
    def find_rapid_view(self, project_name: str, *, callback: Callback | None = None) -> OperationResult:
        """Return the first board whose name matches, ignoring case."""
        raise NotImplementedError

    @abstractmethod
    def get_last_sprint_for_rapid_view(
        self, rapid_view_id: int | str, *, callback: Callback | None = None
    ) -> OperationResult:
        """Return the most recent sprint of a board, or None when it has none."""
        raise NotImplementedError

    @abstractmethod
    def add_issue_to_sprint(
        self, issue_id: str, sprint_id: int | str, *, callback: Callback | None = None
    ) -> OperationResult:
        raise NotImplementedError
