"""Request bodies sent to the Jira Cloud REST API (v3)."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from work_mgmt_client_interface.issue import IssueType

#every created issue gets this priority; it is not exposed as an option
DEFAULT_PRIORITY = "Medium priority (C)"


class PayloadError(TypeError):
    """Raised when a payload is given a value of the wrong type."""


# ---------------------------------------------------------------------------
# ADF builder -  Jira requires description data to be in this format
# ---------------------------------------------------------------------------

def text_to_adf(text: str) -> dict:
    """
    Notes on usage:
        Jira Cloud requires that rich-text fields, such as the issue description and
        the worklog comment, are sent in Atlassian Document Format (ADF), otherwise they
        are rejected. The whole text goes into one paragraph, newlines included.
    """
    if not isinstance(text, str):
        raise PayloadError("Input must be a string")
    return {
        "type": "doc",
        "version": 1,
        "content": [
            {
                "type": "paragraph",
                "content": [{"type": "text", "text": text}],
            }
        ],
    }


def format_started(moment: datetime) -> str:
    """Render a worklog start time as Jira expects it: 2024-05-01T09:30:00.123+0000."""
    moment = moment.astimezone(timezone.utc)
    return f"{moment:%Y-%m-%dT%H:%M:%S}.{moment.microsecond // 1000:03d}+0000"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class IssuePayload:
    """Body of ``POST /rest/api/3/issue``."""

    project: str
    summary: str
    description: str
    issue_type: IssueType

    def to_json(self) -> dict[str, Any]:
        return {
            "fields": {
                "project": {"key": self.project},
                "summary": self.summary,
                "description": text_to_adf(self.description),
                "issuetype": {"name": self.issue_type.display_name},
                "priority": {"name": DEFAULT_PRIORITY},
            }
        }


@dataclass(frozen=True)
class WorklogPayload:
    """Body of ``POST /rest/api/3/issue/{issueKey}/worklog``."""

    minutes: int
    comment: str = ""
    started: datetime = field(default_factory=utcnow)

    @property
    def time_spent_seconds(self) -> int:
        return self.minutes * 60

    def to_json(self) -> dict[str, Any]:
        return {
            "timeSpentSeconds": self.time_spent_seconds,
            #an absent comment is still sent, as an empty text node
            "comment": text_to_adf(self.comment or ""),
            "started": format_started(self.started),
        }
