"""Unit tests for JiraClient core methods.

This module contains unit tests for the request building and response handling
of the JiraClient class. The HTTP session is always a mock; no request leaves
the process.
"""

#Run the tests in this file with "python -m pytest components/jira_client_impl/tests/test_core_methods.py -v"

import json
import re
from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest
import requests
from requests.auth import HTTPBasicAuth

from jira_client_impl.config import JiraConfig, MissingConfigurationError
from jira_client_impl.jira_impl import (
    DEFAULT_TIMEOUT,
    JiraClient,
    JiraError,
    MalformedResponse,
    RemoteRequestFailed,
    get_client,
)
from jira_client_impl.jira_issue import JiraIssue
from work_mgmt_client_interface.client import MalformedResponse as BaseMalformedResponse
from work_mgmt_client_interface.client import RemoteRequestFailed as BaseRemoteRequestFailed
from work_mgmt_client_interface.issue import IssueType

FIXED_NOW = datetime(2024, 5, 1, 9, 30, 0, 123456, tzinfo=timezone.utc)


def _response(status: int, body, reason: str = "") -> requests.Response:
    """Build a real requests.Response so .ok, .text and .json() behave as in production."""
    response = requests.Response()
    response.status_code = status
    response.reason = reason
    response.encoding = "utf-8"
    response._content = (body if isinstance(body, str) else json.dumps(body)).encode("utf-8")
    return response


#Fixture for mock tests
@pytest.fixture
def config():
    return JiraConfig(domain="test.atlassian.net", token="dummy_token", username="test@example.com")


@pytest.fixture
def jira_client(config, monkeypatch):
    """Returns a JiraClient whose session is a MagicMock and whose clock is fixed."""
    monkeypatch.setattr("jira_client_impl.jira_impl.utcnow", lambda: FIXED_NOW)
    return JiraClient(config, session=MagicMock())


def _sent(jira_client):
    """Return the (url, json body, kwargs) of the single POST the client made."""
    jira_client._session.post.assert_called_once()
    args, kwargs = jira_client._session.post.call_args
    return args[0], kwargs["json"], kwargs


#--------------------------- tests for construction --------------------------

def test_client_uses_basic_auth_with_user_and_token(config):
    client = JiraClient(config)

    assert isinstance(client._session.auth, HTTPBasicAuth)
    assert client._session.auth.username == "test@example.com"
    assert client._session.auth.password == "dummy_token"
    assert client._session.headers["Content-Type"] == "application/json"
    client.close()


def test_client_context_manager_closes_session(config):
    session = MagicMock()

    with JiraClient(config, session=session) as client:
        assert client.config is config

    session.close.assert_called_once()


#--------------------------- tests for create_issue --------------------------

def test_create_issue_posts_to_issue_endpoint(jira_client):
    # Setup: Jira answers 201 with the new key
    jira_client._session.post.return_value = _response(201, {"id": "10001", "key": "PROJ-42"}, "Created")

    # Act
    jira_client.create_issue(project="PROJ", summary="S", description="D")

    # Assert: one POST against the v3 issue endpoint, with the default timeout
    url, _, kwargs = _sent(jira_client)
    assert url == "https://test.atlassian.net/rest/api/3/issue"
    assert kwargs["timeout"] == DEFAULT_TIMEOUT


def test_create_issue_builds_fields_body(jira_client):
    jira_client._session.post.return_value = _response(201, {"key": "PROJ-42"})

    jira_client.create_issue(project="PROJ", summary="Login page bug", description="Fix the login page")

    _, body, _ = _sent(jira_client)
    assert body == {
        "fields": {
            "project": {"key": "PROJ"},
            "summary": "Login page bug",
            "description": {
                "type": "doc",
                "version": 1,
                "content": [
                    {"type": "paragraph", "content": [{"type": "text", "text": "Fix the login page"}]}
                ],
            },
            "issuetype": {"name": "Bug"},
            "priority": {"name": "Medium priority (C)"},
        }
    }


def test_create_issue_accepts_type_alias_string(jira_client):
    # a plain string such as "TASK" is normalized before it reaches the payload
    jira_client._session.post.return_value = _response(201, {"key": "PROJ-7"})

    issue = jira_client.create_issue(project="PROJ", summary="S", description="D", issue_type="TASK")

    _, body, _ = _sent(jira_client)
    assert body["fields"]["issuetype"] == {"name": "Task"}
    assert issue.issue_type is IssueType.TASK


def test_create_issue_returns_jira_issue(jira_client):
    jira_client._session.post.return_value = _response(201, {"key": "PROJ-42"})

    issue = jira_client.create_issue(project="PROJ", summary="S", description="D")

    assert isinstance(issue, JiraIssue)
    assert issue.key == "PROJ-42"
    assert issue.title == "S"
    assert issue.url == "https://test.atlassian.net/browse/PROJ-42"


def test_create_issue_prints_progress_and_confirmation(jira_client, capsys):
    jira_client._session.post.return_value = _response(201, {"key": "PROJ-42"})

    jira_client.create_issue(project="PROJ", summary="Update docs", description="D", issue_type=IssueType.TASK)

    out = capsys.readouterr().out.splitlines()
    assert out == [
        "Creating a new task in Jira: Update docs",
        "Created issue: https://test.atlassian.net/browse/PROJ-42",
        "Key: PROJ-42",
        "Summary: Update docs",
    ]


def test_create_issue_non_success_raises_remote_request_failed(jira_client, capsys):
    # Setup: Jira rejects the request
    body = '{"errorMessages":["bad"]}'
    jira_client._session.post.return_value = _response(400, body, "Bad Request")

    # Assert: status and body are kept verbatim on the error
    with pytest.raises(RemoteRequestFailed) as exc_info:
        jira_client.create_issue(project="PROJ", summary="S", description="D")

    assert exc_info.value.status == 400
    assert exc_info.value.body == body
    assert "400" in str(exc_info.value)
    assert body in str(exc_info.value)

    # no confirmation after a failure
    assert "Created issue" not in capsys.readouterr().out


def test_remote_request_failed_matches_interface_and_jira_errors(jira_client):
    jira_client._session.post.return_value = _response(500, "oops", "Internal Server Error")

    with pytest.raises(BaseRemoteRequestFailed) as exc_info:
        jira_client.create_issue(project="PROJ", summary="S", description="D")

    assert isinstance(exc_info.value, JiraError)
    assert str(exc_info.value) == "Failed to create issue (status: 500 Internal Server Error): oops"


@pytest.mark.parametrize(
    "body",
    [
        {"id": "10001"},                 # no key at all
        {"key": 42},                     # key is not a string
        {"key": None},
        ["PROJ-42"],                     # not a JSON object
        "<html>gateway</html>",          # not JSON
    ],
)
def test_create_issue_malformed_response(jira_client, body):
    jira_client._session.post.return_value = _response(201, body)

    with pytest.raises(MalformedResponse) as exc_info:
        jira_client.create_issue(project="PROJ", summary="S", description="D")

    assert isinstance(exc_info.value, BaseMalformedResponse)


def test_create_issue_missing_key_message(jira_client):
    jira_client._session.post.return_value = _response(201, {})

    with pytest.raises(MalformedResponse, match="Response missing 'key' field"):
        jira_client.create_issue(project="PROJ", summary="S", description="D")


def test_create_issue_transport_error_is_not_wrapped(jira_client):
    # network failures surface as the original requests exception
    jira_client._session.post.side_effect = requests.ConnectionError("connection refused")

    with pytest.raises(requests.ConnectionError):
        jira_client.create_issue(project="PROJ", summary="S", description="D")


#--------------------------- tests for log_time --------------------------

def test_log_time_posts_to_worklog_endpoint(jira_client):
    jira_client._session.post.return_value = _response(201, {"id": "100"})

    jira_client.log_time("PROJ-1", minutes=90)

    url, _, _ = _sent(jira_client)
    assert url == "https://test.atlassian.net/rest/api/3/issue/PROJ-1/worklog"


def test_log_time_converts_minutes_to_seconds(jira_client):
    jira_client._session.post.return_value = _response(201, {})

    jira_client.log_time("PROJ-1", minutes=90)

    _, body, _ = _sent(jira_client)
    assert body["timeSpentSeconds"] == 5400


def test_log_time_without_comment_sends_empty_text_node(jira_client):
    jira_client._session.post.return_value = _response(201, {})

    jira_client.log_time("PROJ-1", minutes=15)

    _, body, _ = _sent(jira_client)
    assert body["comment"]["content"][0]["content"] == [{"type": "text", "text": ""}]


def test_log_time_body(jira_client):
    jira_client._session.post.return_value = _response(201, {})

    jira_client.log_time("PROJ-1", minutes=30, comment="Code review")

    _, body, _ = _sent(jira_client)
    assert body == {
        "timeSpentSeconds": 1800,
        "comment": {
            "type": "doc",
            "version": 1,
            "content": [{"type": "paragraph", "content": [{"type": "text", "text": "Code review"}]}],
        },
        "started": "2024-05-01T09:30:00.123+0000",
    }


def test_log_time_started_uses_current_time(config):
    # without a fixed clock the timestamp still has millisecond precision and a +0000 offset
    client = JiraClient(config, session=MagicMock())
    client._session.post.return_value = _response(201, {})

    client.log_time("PROJ-1", minutes=0)

    _, body, _ = _sent(client)
    assert re.fullmatch(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}\+0000", body["started"])
    assert body["timeSpentSeconds"] == 0


def test_log_time_prints_progress_and_confirmation(jira_client, capsys):
    jira_client._session.post.return_value = _response(201, {})

    result = jira_client.log_time("PROJ-1", minutes=90)

    assert result is None
    assert capsys.readouterr().out.splitlines() == [
        "Logging 90 minutes for issue PROJ-1",
        "Successfully logged time for issue PROJ-1",
    ]


@pytest.mark.parametrize("status, body", [(200, "{}"), (201, '{"id": "100"}'), (204, "")])
def test_log_time_accepts_any_2xx(jira_client, capsys, status, body):
    # the body is never parsed, only the status code counts
    jira_client._session.post.return_value = _response(status, body)

    jira_client.log_time("PROJ-1", minutes=5)

    assert "Successfully logged time for issue PROJ-1" in capsys.readouterr().out


@pytest.mark.parametrize("status", [300, 304, 400, 500])
def test_log_time_non_2xx_raises_remote_request_failed(jira_client, capsys, status):
    # a final 3xx is not success either: the worklog was never recorded
    jira_client._session.post.return_value = _response(status, "<html>choose</html>")

    with pytest.raises(RemoteRequestFailed) as exc_info:
        jira_client.log_time("PROJ-1", minutes=5)

    assert exc_info.value.status == status
    assert exc_info.value.body == "<html>choose</html>"
    assert "Successfully logged time" not in capsys.readouterr().out


@pytest.mark.parametrize("status", [300, 304, 400, 500])
def test_create_issue_non_2xx_raises_remote_request_failed(jira_client, status):
    # even a body that carries a key is ignored outside 2xx
    jira_client._session.post.return_value = _response(status, {"key": "PROJ-42"})

    with pytest.raises(RemoteRequestFailed) as exc_info:
        jira_client.create_issue(project="PROJ", summary="S", description="D")

    assert exc_info.value.status == status
    assert str(status) in str(exc_info.value)


@pytest.mark.parametrize("status", [200, 201])
def test_create_issue_accepts_2xx(jira_client, status):
    jira_client._session.post.return_value = _response(status, {"key": "PROJ-42"})

    issue = jira_client.create_issue(project="PROJ", summary="S", description="D")

    assert issue.key == "PROJ-42"


def test_log_time_non_success_raises_remote_request_failed(jira_client):
    body = '{"errorMessages":["Issue does not exist or you do not have permission to see it."]}'
    jira_client._session.post.return_value = _response(404, body, "Not Found")

    with pytest.raises(RemoteRequestFailed) as exc_info:
        jira_client.log_time("BAD-1", minutes=10)

    assert exc_info.value.status == 404
    assert str(exc_info.value) == f"Failed to log time (status: 404 Not Found): {body}"


#--------------------------- tests for get_client function --------------------------

def test_get_client_uses_given_config(config):
    client = get_client(config)

    assert isinstance(client, JiraClient)
    assert client.config is config
    client.close()


def test_get_client_reads_environment(monkeypatch):
    monkeypatch.setenv("JIRA_DOMAIN", "env.atlassian.net")
    monkeypatch.setenv("JIRA_API_TOKEN", "env_token")
    monkeypatch.setenv("JIRA_USER", "env@example.com")

    client = get_client()

    assert client.config.base_url == "https://env.atlassian.net"
    client.close()


def test_get_client_raises_when_env_vars_missing(monkeypatch):
    # Setup: Remove all Jira environment variables
    for var in ["JIRA_DOMAIN", "JIRA_API_TOKEN", "JIRA_USER"]:
        monkeypatch.delenv(var, raising=False)

    with pytest.raises(MissingConfigurationError):
        get_client()
