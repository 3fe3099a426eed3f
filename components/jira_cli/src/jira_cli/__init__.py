"""Command-line client for Jira Cloud."""

__version__ = "0.1.0"
