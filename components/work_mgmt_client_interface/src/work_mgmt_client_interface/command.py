"""Command model - the operations a user can ask the client to perform.

Commands are plain values. They are built by a front end (the command line),
checked with ``validate()`` and handed to an ``IssueTrackerClient``; they never
talk to the network themselves.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from work_mgmt_client_interface.issue import IssueType, parse_issue_type

__all__ = [
    "Command",
    "CreateIssueRequest",
    "InvalidCommandError",
    "LogTimeRequest",
    "parse_minutes",
]


class InvalidCommandError(ValueError):
    """Raised when a command is missing a required value or holds an invalid one."""


def _require(field_name: str, value: str) -> None:
    if not isinstance(value, str) or not value:
        raise InvalidCommandError(f"{field_name} must be a non-empty string")


def parse_minutes(value: str | int) -> int:
    """Convert a minutes argument to a non-negative integer. Zero is allowed."""
    try:
        minutes = int(value)
    except (TypeError, ValueError):
        raise InvalidCommandError(f"minutes must be a whole number, got {value!r}") from None
    if minutes < 0:
        raise InvalidCommandError(f"minutes must not be negative, got {minutes}")
    return minutes


class Command(ABC):
    """Abstract base class for a user-invocable operation."""

    @abstractmethod
    def validate(self) -> None:
        """Raise InvalidCommandError if the command cannot be sent."""
        raise NotImplementedError

    @abstractmethod
    def describe(self) -> str:
        """Return a one-line description of what the command will do."""
        raise NotImplementedError


@dataclass(frozen=True)
class CreateIssueRequest(Command):
    """
    Args:
        project:     Key of the project the issue is created in (e.g. 'PROJ')
        summary:     One-line summary of the issue
        description: Long-form description, sent as a single paragraph
        issue_type:  Bug or Task. Defaults to Bug
    """

    project: str
    summary: str
    description: str
    issue_type: IssueType = IssueType.BUG

    def __post_init__(self) -> None:
        #accept plain strings ("task", "BUG") as well as IssueType members
        object.__setattr__(self, "issue_type", parse_issue_type(self.issue_type))

    def validate(self) -> None:
        _require("project", self.project)
        _require("summary", self.summary)
        _require("description", self.description)

    def describe(self) -> str:
        return f"create {self.issue_type.value.lower()} in {self.project}: {self.summary}"


@dataclass(frozen=True)
class LogTimeRequest(Command):
    """
    Args:
        issue_key: Key of the issue the work is logged against (e.g. 'PROJ-123')
        minutes:   Time spent in whole minutes, zero or more
        comment:   Optional note about the work done
    """

    issue_key: str
    minutes: int
    comment: str | None = None

    def validate(self) -> None:
        _require("issue_key", self.issue_key)
        #bool is an int subclass but never a meaningful duration
        if isinstance(self.minutes, bool) or not isinstance(self.minutes, int):
            raise InvalidCommandError(f"minutes must be a whole number, got {self.minutes!r}")
        if self.minutes < 0:
            raise InvalidCommandError(f"minutes must not be negative, got {self.minutes}")

    def describe(self) -> str:
        return f"log {self.minutes} minutes on {self.issue_key}"
