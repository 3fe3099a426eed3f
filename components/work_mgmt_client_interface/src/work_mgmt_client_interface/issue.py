"""Issue contract - Core issue representation."""

from abc import ABC, abstractmethod
from enum import Enum

__all__ = ["Issue", "IssueType", "parse_issue_type"]


class IssueType(str, Enum):
    BUG = "Bug"
    TASK = "Task"

    @property
    def display_name(self) -> str:
        """Return the name the tracker expects on the wire."""
        return self.value

    def __str__(self) -> str:
        return self.value


#accepted spellings on input, matched after lowercasing
_ISSUE_TYPE_ALIASES: dict[str, IssueType] = {
    "bug": IssueType.BUG,
    "task": IssueType.TASK,
}


def parse_issue_type(value: "str | IssueType") -> IssueType:
    """Return the IssueType for a case-insensitive name such as 'bug', 'BUG' or 'Bug'.

    Raises:
        ValueError: If the name is not a known issue type.
    """
    if isinstance(value, IssueType):
        return value
    issue_type = _ISSUE_TYPE_ALIASES.get(value.lower()) if isinstance(value, str) else None
    if issue_type is None:
        accepted = ", ".join(_ISSUE_TYPE_ALIASES)
        raise ValueError(f"invalid issue type {value!r} (choose from {accepted})")
    return issue_type


class Issue(ABC):
    """Abstract base class representing an issue."""

    @property
    @abstractmethod
    def key(self) -> str:
        """Return the unique issue key (e.g., PROJ-123)."""
        raise NotImplementedError

    @property
    @abstractmethod
    def title(self) -> str:
        """Return the issue summary/title."""
        raise NotImplementedError

    @property
    @abstractmethod
    def issue_type(self) -> IssueType:
        """Return the type the issue was created with."""
        raise NotImplementedError

    @property
    @abstractmethod
    def url(self) -> str:
        """Return the URL a person can open to view the issue."""
        raise NotImplementedError

    #equivalent to Javas .toString()
    def __repr__(self) -> str:
        return f"<Issue key={self.key!r} title={self.title!r} type={self.issue_type}>"
