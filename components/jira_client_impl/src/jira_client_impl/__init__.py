"""Jira Cloud implementation of the work management client interface."""

from jira_client_impl.config import JiraConfig, MissingConfigurationError, load_config, load_env_file
from jira_client_impl.jira_impl import (
    JiraClient,
    JiraError,
    MalformedResponse,
    RemoteRequestFailed,
    get_client,
)
from jira_client_impl.jira_issue import JiraIssue

__all__ = [
    "JiraClient",
    "JiraConfig",
    "JiraError",
    "JiraIssue",
    "MalformedResponse",
    "MissingConfigurationError",
    "RemoteRequestFailed",
    "get_client",
    "load_config",
    "load_env_file",
]
