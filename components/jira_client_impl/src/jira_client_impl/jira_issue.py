"""Jira Issue implementation."""

from work_mgmt_client_interface.issue import Issue, IssueType


# ------------------------------------------------------------------
# Issue implementation
# ------------------------------------------------------------------
class JiraIssue(Issue):
    """Concrete Issue for an issue this client has just created.

    Construct via the module-level ``get_issue()`` factory rather than
    instantiating directly.

    Args:
        issue_key:  The Jira issue key (e.g. 'PROJ-42').
        summary:    The summary the issue was created with.
        issue_type: The type the issue was created with.
        base_url:   The base URL of the Jira instance (e.g. 'https://myorg.atlassian.net').

    """

    def __init__(self, issue_key: str, summary: str, issue_type: IssueType, base_url: str) -> None:
        """Initialize JiraIssue."""
        self._key = issue_key
        self._summary = summary
        self._issue_type = issue_type
        self._base_url = base_url.rstrip("/")

    @property
    def key(self) -> str:
        """Return key."""
        return self._key

    @property
    def title(self) -> str:
        """Return title."""
        #Jira calls "title" a "summary"
        return self._summary

    @property
    def issue_type(self) -> IssueType:
        """Return issue type."""
        return self._issue_type

    @property
    def url(self) -> str:
        """Return the browse URL of the issue."""
        return f"{self._base_url}/browse/{self._key}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, JiraIssue):
            return NotImplemented
        return (self.key, self.title, self.issue_type, self.url) == (
            other.key,
            other.title,
            other.issue_type,
            other.url,
        )

    def __hash__(self) -> int:
        return hash((self._key, self._base_url))


# ---------------------------------------------------------------------------
# Get issue
# ---------------------------------------------------------------------------

def get_issue(issue_key: str, summary: str, issue_type: IssueType, base_url: str = "") -> JiraIssue:
    """Return a JiraIssue for a freshly created Jira issue.

    Args:
        issue_key:  The key Jira assigned (e.g. 'PROJ-42').
        summary:    The summary sent in the creation request.
        issue_type: The type sent in the creation request.
        base_url:   The Jira instance base URL (e.g. 'https://myorg.atlassian.net').

    Returns:
        A JiraIssue instance conforming to the Issue contract.

    """
    return JiraIssue(issue_key, summary, issue_type, base_url)
