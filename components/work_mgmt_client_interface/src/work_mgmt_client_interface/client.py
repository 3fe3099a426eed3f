"""Core client contract definitions and base errors."""

from abc import ABC, abstractmethod

from work_mgmt_client_interface.issue import Issue, IssueType

__all__ = ["IssueTrackerClient", "MalformedResponse", "RemoteRequestFailed"]


class IssueTrackerClient(ABC):
    """Creates issues and records work against them."""

    @abstractmethod
    def create_issue(
        self,
        *, # all arguments must be passed by name: create_issue(project="PROJ", ...)
        project: str,
        summary: str,
        description: str,
        issue_type: IssueType = IssueType.BUG,
        ) -> Issue:
        """Create an issue."""
        """Args:
            project:     Key of the project the issue belongs to
            summary:     Short title for the new issue
            description: Long-form description
            issue_type:  Bug or Task

        Returns:
            The newly created Issue

        Raises:
            RemoteRequestFailed: If the tracker answers with a non-success status
            MalformedResponse:   If the answer does not identify the new issue

        """
        raise NotImplementedError

    @abstractmethod
    def log_time(self, issue_key: str, *, minutes: int, comment: str | None = None) -> None:
        """Log time spent on an issue."""
        """Args:
            issue_key: The unique identifier of the issue
            minutes:   Whole minutes spent, zero or more
            comment:   Optional note stored with the worklog

        Notes on usage: The worklog starts at the moment of the call.

        Raises:
            RemoteRequestFailed: If the tracker answers with a non-success status

        """
        raise NotImplementedError


class RemoteRequestFailed(Exception):
    """Base exception raised when the tracker answers a request with a non-success status."""

    def __init__(self, status: int, body: str, message: str | None = None) -> None:
        self.status = status
        self.body = body
        super().__init__(message or f"Request failed (status: {status}): {body}")


class MalformedResponse(Exception):
    """Base exception raised when a successful answer lacks the expected content."""
