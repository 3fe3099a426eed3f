"""
Authentication
--------------
Jira Cloud API tokens are sent with HTTP Basic authentication: the account
user name (usually an email address) as the user and the token as the password.
See ``jira_client_impl.config`` for where the values come from.

Each call makes exactly one request. There are no retries; network failures
(DNS, TLS, refused connections, timeouts) surface as the ``requests`` exception
that caused them.

Dependencies:
    requests
"""
#to avoid having to consider forward declarations, the below line must be first line in the file
from __future__ import annotations

import logging
from typing import Any

import requests
from requests.auth import HTTPBasicAuth

from jira_client_impl.config import JiraConfig, load_config
from jira_client_impl.jira_issue import JiraIssue, get_issue as _make_issue
from jira_client_impl.payloads import IssuePayload, WorklogPayload, utcnow
from work_mgmt_client_interface.client import (
    IssueTrackerClient,
    MalformedResponse as BaseMalformedResponse,
    RemoteRequestFailed as BaseRemoteRequestFailed,
)
from work_mgmt_client_interface.issue import IssueType, parse_issue_type

logger = logging.getLogger(__name__)

#seconds to wait for Jira before giving up on a request
DEFAULT_TIMEOUT = 30.0


class JiraError(Exception):
    """Raised when the Jira API returns an unexpected response."""


class RemoteRequestFailed(JiraError, BaseRemoteRequestFailed):
    """Raised when Jira answers with a non-success status. The body is kept verbatim."""

    def __init__(self, action: str, status: int, body: str, reason: str = "") -> None:
        self.action = action
        self.reason = reason
        status_text = f"{status} {reason}".rstrip()
        BaseRemoteRequestFailed.__init__(
            self, status, body, f"Failed to {action} (status: {status_text}): {body}"
        )


class MalformedResponse(JiraError, BaseMalformedResponse):
    """Raised when Jira reports success but the body is not what the API documents."""


# ---------------------------------------------------------------------------
# Client implementation
# ---------------------------------------------------------------------------

class JiraClient(IssueTrackerClient):
    """
    Args:
        config:  Site and credentials, see ``load_config()``
        session: Optional pre-built requests.Session, mainly for tests
        timeout: Seconds to wait for each request
    """

    _API_PREFIX = "/rest/api/3"

    def __init__(
        self,
        config: JiraConfig,
        session: requests.Session | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._config = config
        self._base_url = config.base_url
        self._timeout = timeout
        self._session = session or requests.Session()
        self._session.auth = HTTPBasicAuth(config.username, config.token)
        self._session.headers.update({"Accept": "application/json", "Content-Type": "application/json"})

    @property
    def config(self) -> JiraConfig:
        return self._config

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> JiraClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Internal HTTP helpers
    # ------------------------------------------------------------------

    def _url(self, path: str) -> str:
        return f"{self._base_url}{self._API_PREFIX}{path}"

    def _post(self, path: str, body: dict, *, action: str) -> requests.Response:
        url = self._url(path)
        logger.debug("POST %s", url)
        response = self._session.post(url, json=body, timeout=self._timeout)
        logger.debug("POST %s -> %s", url, response.status_code)
        self._raise_for_status(response, action)
        return response

    @staticmethod
    def _raise_for_status(response: requests.Response, action: str) -> None:
        #only 2xx is success; a final 3xx means the request was not carried out
        if not 200 <= response.status_code < 300:
            raise RemoteRequestFailed(action, response.status_code, response.text, response.reason or "")

    @staticmethod
    def _read_issue_key(response: requests.Response) -> str:
        try:
            data: Any = response.json()
        except ValueError as exc:
            raise MalformedResponse(f"Response is not valid JSON: {exc}") from exc
        key = data.get("key") if isinstance(data, dict) else None
        if not isinstance(key, str):
            raise MalformedResponse("Response missing 'key' field")
        return key

    # ------------------------------------------------------------------
    # IssueTrackerClient contract
    # ------------------------------------------------------------------

    def create_issue(
        self,
        *,
        project: str,
        summary: str,
        description: str,
        issue_type: IssueType = IssueType.BUG,
        ) -> JiraIssue:
        """Create a new Jira issue and return it as a JiraIssue.

        Raises:
            RemoteRequestFailed: If Jira rejects the request.
            MalformedResponse:   If the response does not carry the new issue key.
        """
        issue_type = parse_issue_type(issue_type)
        payload = IssuePayload(
            project=project,
            summary=summary,
            description=description,
            issue_type=issue_type,
        )

        print(f"Creating a new {issue_type.display_name.lower()} in Jira: {summary}")
        response = self._post("/issue", payload.to_json(), action="create issue")

        issue = _make_issue(self._read_issue_key(response), summary, issue_type, self._base_url)
        logger.info("Created %s in project %s", issue.key, project)

        print(f"Created issue: {issue.url}")
        print(f"Key: {issue.key}")
        print(f"Summary: {issue.title}")
        return issue

    def log_time(self, issue_key: str, *, minutes: int, comment: str | None = None) -> None:
        """Log ``minutes`` of work on ``issue_key``, starting now.

        Only the status code of the response is checked.

        Raises:
            RemoteRequestFailed: If Jira rejects the request.
        """
        payload = WorklogPayload(minutes=minutes, comment=comment or "", started=utcnow())

        print(f"Logging {minutes} minutes for issue {issue_key}")
        self._post(f"/issue/{issue_key}/worklog", payload.to_json(), action="log time")

        logger.info("Logged %d seconds on %s", payload.time_spent_seconds, issue_key)
        print(f"Successfully logged time for issue {issue_key}")


# ---------------------------------------------------------------------------
# Get client
# ---------------------------------------------------------------------------

def get_client(config: JiraConfig | None = None) -> JiraClient:
    """Return a configured JiraClient.

    Reads credentials from environment variables when no configuration is given.

    Environment variables:
        JIRA_DOMAIN:     Host name of the Jira site, without scheme.
        JIRA_API_TOKEN:  API token from Atlassian account settings.
        JIRA_USER:       Atlassian account user name or email.

    Raises:
        MissingConfigurationError: If any of the variables above is absent or empty.
    """
    if config is None:
        config = load_config()
    return JiraClient(config)
