"""
Data models for the jiralog report pipeline.

This module provides:
- The commit record produced by the git traversal
- Issue metadata fetched from the Jira server
- The aggregated per-issue record rendered in the report
"""

from datetime import datetime
from typing import List, Dict, Any

from pydantic import BaseModel, Field

NO_FIX_VERSION = "No Fix Version"
UNASSIGNED = "Unassigned"


class Commit(BaseModel):
    """A single commit walked from the repository history."""

    date: datetime = Field(..., description="Commit timestamp")
    author: str = Field(..., description="Author name")
    summary: str = Field(default="", description="First line of the commit message")

    model_config = {"frozen": True}


class IssueMetadata(BaseModel):
    """Metadata for one issue as reported by the Jira server."""

    title: str = Field(..., description="Issue summary")
    status: str = Field(..., description="Workflow status name")
    fix_versions: str = Field(default=NO_FIX_VERSION, description="Comma-joined fix versions")
    assignee: str = Field(default=UNASSIGNED, description="Assignee display name")

    @classmethod
    def from_issue(cls, issue: Dict[str, Any]) -> "IssueMetadata":
        """Build metadata from a raw ``/rest/api/2/issue`` payload."""
        fields = issue["fields"]
        fix_versions = ", ".join(fv["name"] for fv in fields.get("fixVersions") or [])
        assignee = fields.get("assignee")
        return cls(
            title=fields["summary"],
            status=fields["status"]["name"],
            fix_versions=fix_versions or NO_FIX_VERSION,
            assignee=assignee["displayName"] if assignee else UNASSIGNED,
        )


class IssueRecord(BaseModel):
    """Aggregated report row: commit statistics merged with issue metadata."""

    code: str = Field(..., description="Issue code, e.g. ABC-123")
    status: str
    title: str
    last_commit_date: datetime = Field(..., description="Most recent commit date")
    developers: str = Field(..., description="Comma-joined distinct commit authors")
    commits: int = Field(..., ge=1, description="Number of commits referencing the issue")
    fix_versions: str = NO_FIX_VERSION
    assignee: str = UNASSIGNED

    @classmethod
    def from_commits(
        cls, code: str, commits: List[Commit], metadata: IssueMetadata
    ) -> "IssueRecord":
        """
        Merge a code's commit group with its fetched metadata.

        Commits are ordered most recent first; the first entry provides the
        last commit date and authors are deduplicated in that order.
        """
        if not commits:
            raise ValueError(f"No commits reference {code}")
        ordered = sorted(commits, key=lambda commit: commit.date, reverse=True)
        developers = list(dict.fromkeys(commit.author for commit in ordered))
        return cls(
            code=code,
            last_commit_date=ordered[0].date,
            developers=", ".join(developers),
            commits=len(commits),
            **metadata.model_dump(),
        )


__all__ = [
    'NO_FIX_VERSION', 'UNASSIGNED',
    'Commit', 'IssueMetadata', 'IssueRecord',
]
