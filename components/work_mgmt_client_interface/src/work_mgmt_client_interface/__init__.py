"""Provider-neutral contract for issue tracker clients."""

from work_mgmt_client_interface.client import IssueTrackerClient, MalformedResponse, RemoteRequestFailed
from work_mgmt_client_interface.command import (
    Command,
    CreateIssueRequest,
    InvalidCommandError,
    LogTimeRequest,
    parse_minutes,
)
from work_mgmt_client_interface.issue import Issue, IssueType, parse_issue_type

__all__ = [
    "Command",
    "CreateIssueRequest",
    "InvalidCommandError",
    "Issue",
    "IssueTrackerClient",
    "IssueType",
    "LogTimeRequest",
    "MalformedResponse",
    "RemoteRequestFailed",
    "parse_issue_type",
    "parse_minutes",
]
