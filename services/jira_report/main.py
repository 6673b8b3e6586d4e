"""
Jira report service for jiralog.

This service:
- Walks a repository's history from HEAD back to a target commit
- Groups the walked commits by the Jira codes in their summaries
- Fetches metadata for every referenced issue concurrently
- Merges commit statistics and metadata into report records
"""

import asyncio
import logging
from typing import Dict, List, Optional

from git import Repo, GitCommandError, InvalidGitRepositoryError, NoSuchPathError
from git.exc import BadName, BadObject

from config.settings import settings
from shared.codes import filter_missing_codes, map_commits_to_codes
from shared.models import Commit, IssueMetadata, IssueRecord
from services.jira_report.jira_client import JiraClient

logger = logging.getLogger(__name__)


class RepositoryError(ValueError):
    """The repository is missing, invalid or has no commits to report on."""


class JiraReportService:
    """Core report pipeline: git history in, aggregated issue records out."""

    def __init__(self, client: JiraClient):
        self.client = client

    def walk_commits(self, commit_hash: str, repo_path: str = ".") -> List[Commit]:
        """Walk from HEAD until the target commit, which is not included."""
        try:
            repo = Repo(repo_path)
        except NoSuchPathError:
            raise RepositoryError(f"Repository path does not exist: {repo_path}")
        except InvalidGitRepositoryError:
            raise RepositoryError(f"Invalid Git repository: {repo_path}")

        rev = commit_hash.strip()
        try:
            # Raises on unknown or ambiguous abbreviations
            target = repo.commit(rev) if rev else None
        except (BadName, BadObject, GitCommandError, ValueError) as e:
            logger.debug(f"Could not resolve {commit_hash}: {e}")
            target = None
        if target is None:
            raise RepositoryError(f"Commit not found in repository: {commit_hash}")

        walked = []
        reached = False
        try:
            for commit in repo.iter_commits(settings.git.head_ref):
                if commit.hexsha == target.hexsha:
                    reached = True
                    break
                walked.append(commit)
        except (GitCommandError, ValueError) as e:
            # Unborn HEAD in an empty repository
            logger.debug(f"Git walk failed: {e}")
            walked = []
            reached = True

        if not reached:
            raise RepositoryError(f"Commit {commit_hash} is not reachable from HEAD")
        if not walked:
            raise RepositoryError("Current repo does not exist or contains no commits")

        return [
            Commit(
                date=commit.committed_datetime,
                author=commit.author.name,
                summary=commit.summary,
            )
            for commit in walked
        ]

    async def get_commits_until(self, commit_hash: str, repo_path: str = ".") -> List[Commit]:
        """Get the commits from HEAD back to ``commit_hash`` without blocking the loop."""
        commits = await asyncio.to_thread(self.walk_commits, commit_hash, repo_path)
        logger.info(f"Walked {len(commits)} commits in {repo_path}")
        return commits

    async def fetch_issue_metadata(self, code: str) -> Optional[IssueMetadata]:
        """Fetch metadata for ``code``; any failure resolves to ``None``."""
        try:
            issue = await self.client.find_issue(code)
            return IssueMetadata.from_issue(issue)
        except Exception as e:
            logger.debug(f"Metadata fetch for {code} failed: {e!r}")
            return None

    async def aggregate_issue_metadata(
        self, code_map: Dict[str, List[Commit]]
    ) -> List[IssueRecord]:
        """
        Fetch metadata for every code and merge it with the code's commits.

        All lookups run concurrently and are joined before any record is
        built. Records follow the key order of ``code_map``; codes whose
        lookup failed are left out.
        """
        codes = list(code_map)
        results = await asyncio.gather(*(self.fetch_issue_metadata(code) for code in codes))

        issues: List[IssueRecord] = []
        failed: List[str] = []
        for code, metadata in zip(codes, results):
            if metadata is None:
                failed.append(code)
                continue
            issues.append(IssueRecord.from_commits(code, code_map[code], metadata))

        if failed:
            logger.warning(f"No metadata for {len(failed)} issue(s): {', '.join(failed)}")
        return issues

    async def list_jira(self, commit_hash: str, repo_path: str = ".") -> List[IssueRecord]:
        """Build the issue report for the commits from HEAD back to ``commit_hash``."""
        commits = await self.get_commits_until(commit_hash, repo_path)
        code_map = map_commits_to_codes(filter_missing_codes(commits))
        logger.info(f"Found {len(code_map)} distinct issue codes")
        return await self.aggregate_issue_metadata(code_map)
