#!/usr/bin/env python3
"""
jiralog - list the Jira issues referenced between HEAD and a commit

Walks the current repository from HEAD back to the given commit, collects
the Jira codes mentioned in commit summaries, looks each issue up on the
Jira server and prints one table row per issue.

Usage:
    python list_jira.py --url=URL --auth=USER:TOKEN --commit=SHA [OPTIONS]

Examples:
    python list_jira.py -u https://acme.atlassian.net -a me@acme.io:TOKEN -c 1a2b3c4
    python list_jira.py -u https://jira.local -a bot:secret -c 1a2b3c4 -p ../service
"""

import asyncio
import logging
import sys
from typing import List, Tuple

import click
from rich.console import Console
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from config.settings import settings, export_config
from shared.models import IssueRecord
from services.jira_report.jira_client import JiraClient
from services.jira_report.main import JiraReportService, RepositoryError

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.monitoring.log_level),
    format=settings.monitoring.log_format,
)
logger = logging.getLogger(__name__)

# Column headers and widths (including cell padding)
ISSUE_TABLE_COLUMNS: Tuple[Tuple[str, int], ...] = (
    ("Code", 14),
    ("Status", 18),
    ("Title", 40),
    ("Last Commit", 13),
    ("Developer(s)", 16),
    ("Commits", 9),
    ("Fix Version(s)", 16),
    ("Assignee", 20),
)


def format_commit_date(date) -> str:
    """Format a commit date as e.g. ``Tue 5 Mar`` in local time."""
    local = date.astimezone()
    return f"{local:%a} {local.day} {local:%b}"


class JiraListCLI:
    """CLI interface for the Jira issue report."""

    def __init__(self):
        self.console = Console()
        self.status_console = Console(stderr=True)

    def build_issue_table(self, issues: List[IssueRecord]) -> Table:
        """Build the report table, one row per issue."""
        table = Table(show_header=True, header_style="bold magenta")
        for header, width in ISSUE_TABLE_COLUMNS:
            table.add_column(header, width=width - 2, overflow="fold")

        for issue in issues:
            table.add_row(
                escape(issue.code),
                escape(issue.status),
                escape(issue.title),
                format_commit_date(issue.last_commit_date),
                escape(issue.developers),
                str(issue.commits),
                escape(issue.fix_versions),
                escape(issue.assignee),
            )
        return table

    def display_issue_table(self, issues: List[IssueRecord]):
        """Print the report table to standard output."""
        self.console.print(self.build_issue_table(issues))

    def display_error_message(self, error: str):
        """Print a single-line error message to standard output."""
        self.console.print(f"[red]{escape(error)}[/red]")

    async def list_jira_async(
        self, url: str, username: str, password: str, commit_hash: str, repo_path: str
    ) -> List[IssueRecord]:
        """Run the report pipeline against the configured Jira server."""
        async with JiraClient.from_url(url, username, password) as client:
            service = JiraReportService(client)
            with Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                console=self.status_console,
                transient=True,
            ) as progress:
                progress.add_task("Collecting Jira issues...", total=None)
                return await service.list_jira(commit_hash, repo_path)


def split_auth(ctx, param, value: str) -> Tuple[str, str]:
    """Split ``user:token`` on the first colon."""
    username, separator, password = value.partition(":")
    if not separator:
        raise click.BadParameter("expected <username>:<token>")
    return username, password


def validate_url(ctx, param, value: str) -> str:
    """Require a ``<protocol>://<host>`` URL."""
    protocol, separator, host = value.partition("://")
    if not separator or not protocol or not host:
        raise click.BadParameter("expected <protocol>://<host>")
    return value


# CLI instance
cli = JiraListCLI()


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    '--url', '-u',
    required=True,
    callback=validate_url,
    help='Host URL of the Jira instance'
)
@click.option(
    '--auth', '-a',
    required=True,
    callback=split_auth,
    help='Jira username and access token as user:token'
)
@click.option(
    '--commit', '-c',
    'commit_hash',
    required=True,
    help='SHA hash of the last commit to log to'
)
@click.option(
    '--repo-path', '-p',
    default=settings.git.repo_path,
    show_default=True,
    help='Path to the Git repository'
)
@click.option(
    '--verbose', '-v',
    is_flag=True,
    help='Enable verbose output'
)
@click.version_option(version=settings.version, prog_name=settings.app_name)
def list_jira(url: str, auth: Tuple[str, str], commit_hash: str, repo_path: str, verbose: bool):
    """Retrieve the list of Jiras to the specified commit hash."""
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
        logger.debug(f"Configuration: {export_config()}")

    username, password = auth

    try:
        issues = asyncio.run(
            cli.list_jira_async(url, username, password, commit_hash, repo_path)
        )
    except RepositoryError as e:
        cli.display_error_message(str(e))
        sys.exit(1)
    except Exception as e:
        logger.error(f"Unexpected error: {e}")
        cli.display_error_message(str(e))
        sys.exit(1)

    cli.display_issue_table(issues)


if __name__ == "__main__":
    list_jira()
