"""
Credentials
-----------
The client needs three values, all read from the environment:

    JIRA_DOMAIN     myorg.atlassian.net   (host name only, no scheme)
    JIRA_API_TOKEN  <token from https://id.atlassian.com/manage-profile/security/api-tokens>
    JIRA_USER       me@example.com

A ``.env`` file in the working directory may provide them. Values already
present in the environment are never overridden by the file.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DOMAIN_VAR = "JIRA_DOMAIN"
TOKEN_VAR = "JIRA_API_TOKEN"
USER_VAR = "JIRA_USER"

REQUIRED_VARS: tuple[str, ...] = (DOMAIN_VAR, TOKEN_VAR, USER_VAR)


class MissingConfigurationError(EnvironmentError):
    """Raised when a required environment variable is absent or empty."""

    def __init__(self, *names: str) -> None:
        self.names = names
        self.name = names[0]
        if len(names) == 1:
            message = f"Environment variable {names[0]} must be set"
        else:
            message = f"Environment variables {', '.join(names)} must be set"
        super().__init__(message)

    def __str__(self) -> str:
        return self.args[0]


@dataclass(frozen=True)
class JiraConfig:
    """Connection settings for one Jira Cloud site."""

    domain: str
    #kept out of repr so the token never ends up in logs or tracebacks
    token: str = field(repr=False)
    username: str

    @property
    def base_url(self) -> str:
        return f"https://{self.domain}"


def load_env_file(path: str | os.PathLike = ".env") -> bool:
    """Merge a local env file into os.environ. Returns False if there was nothing to load."""
    loaded = load_dotenv(path, override=False)
    if loaded:
        logger.debug("Loaded environment from %s", path)
    return loaded


def load_config(environ: Mapping[str, str] | None = None) -> JiraConfig:
    """Return a JiraConfig built from the environment.

    Args:
        environ: Mapping to read from. Defaults to ``os.environ``.

    Raises:
        MissingConfigurationError: If any required variable is absent or empty.
            ``.name`` holds the first missing variable, ``.names`` all of them.
    """
    if environ is None:
        environ = os.environ

    values = {name: environ.get(name, "") for name in REQUIRED_VARS}

    #collects the missing fields so the error can name every one of them
    missing = [name for name in REQUIRED_VARS if not values[name]]
    if missing:
        raise MissingConfigurationError(*missing)

    return JiraConfig(
        domain=values[DOMAIN_VAR],
        token=values[TOKEN_VAR],
        username=values[USER_VAR],
    )
