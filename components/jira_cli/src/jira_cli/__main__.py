import sys

from jira_cli.cli import main

if __name__ == "__main__":
    sys.exit(main())
