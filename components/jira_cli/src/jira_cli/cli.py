"""Command-line front end: create Jira issues and log time in a Jira Cloud site.

Usage:
    jira create --project PROJ --summary "Login page bug" --description "Fix the login page"
    jira create -p PROJ -s "Update docs" -d "Describe the new flags" --type task
    jira log-time --issue-key PROJ-123 --minutes 90 --comment "Code review"
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence

import requests

from jira_cli import __version__
from jira_client_impl import JiraClient, MissingConfigurationError, load_config, load_env_file
from work_mgmt_client_interface import (
    Command,
    CreateIssueRequest,
    InvalidCommandError,
    IssueTrackerClient,
    IssueType,
    LogTimeRequest,
    MalformedResponse,
    RemoteRequestFailed,
    parse_issue_type,
    parse_minutes,
)

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1


# ---------------------------------------------------------------------------
# Argument converters - argparse turns ArgumentTypeError into a usage error
# ---------------------------------------------------------------------------

def _issue_type_arg(value: str) -> IssueType:
    try:
        return parse_issue_type(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from None


def _minutes_arg(value: str) -> int:
    try:
        return parse_minutes(value)
    except InvalidCommandError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jira",
        description="Simple CLI to create Jira issues and log work in a Jira Cloud instance.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log HTTP activity to stderr")
    sub = parser.add_subparsers(dest="command", required=True, metavar="COMMAND")

    create = sub.add_parser("create", help="Create a new Jira issue")
    create.add_argument(
        "-p", "--project", required=True,
        help="The key of the Jira project where the issue will be created",
    )
    create.add_argument("-s", "--summary", required=True, help="The summary of the issue")
    create.add_argument("-d", "--description", required=True, help="The detailed description of the issue")
    create.add_argument(
        "-t", "--type", dest="issue_type", type=_issue_type_arg, default=IssueType.BUG,
        metavar="{bug,task}", help="Type of the issue (bug or task, default: bug)",
    )
    create.set_defaults(build=_create_request, subparser=create)

    log_time = sub.add_parser("log-time", help="Log time spent on a Jira issue")
    log_time.add_argument("-i", "--issue-key", required=True, help="The key of the Jira issue to log time for")
    log_time.add_argument("-m", "--minutes", required=True, type=_minutes_arg, help="Time spent in minutes")
    log_time.add_argument("-c", "--comment", help="Optional comment about the work done")
    log_time.set_defaults(build=_log_time_request, subparser=log_time)

    return parser


def _create_request(args: argparse.Namespace) -> CreateIssueRequest:
    return CreateIssueRequest(
        project=args.project,
        summary=args.summary,
        description=args.description,
        issue_type=args.issue_type,
    )


def _log_time_request(args: argparse.Namespace) -> LogTimeRequest:
    return LogTimeRequest(issue_key=args.issue_key, minutes=args.minutes, comment=args.comment)


def parse_command(argv: Sequence[str] | None = None) -> tuple[Command, bool]:
    """Parse argv into a validated Command and the verbose flag.

    Exits with status 2 and a usage message when the arguments are invalid.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    command = args.build(args)
    try:
        command.validate()
    except InvalidCommandError as exc:
        args.subparser.error(str(exc))
    return command, args.verbose


def run_command(client: IssueTrackerClient, command: Command) -> None:
    """Send ``command`` to the matching client operation."""
    if isinstance(command, CreateIssueRequest):
        client.create_issue(
            project=command.project,
            summary=command.summary,
            description=command.description,
            issue_type=command.issue_type,
        )
    elif isinstance(command, LogTimeRequest):
        client.log_time(command.issue_key, minutes=command.minutes, comment=command.comment)
    else:
        raise InvalidCommandError(f"Unsupported command: {command!r}")


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line and return the process exit status."""
    command, verbose = parse_command(argv)
    _configure_logging(verbose)

    load_env_file()
    try:
        config = load_config()
    except MissingConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_FAILURE

    logger.debug("Running %s against %s", command.describe(), config.domain)
    with JiraClient(config) as client:
        try:
            run_command(client, command)
        except (RemoteRequestFailed, MalformedResponse) as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return EXIT_FAILURE
        except requests.RequestException as exc:
            logger.debug("Transport failure", exc_info=True)
            print(f"Error: {exc}", file=sys.stderr)
            return EXIT_FAILURE
    return EXIT_OK
