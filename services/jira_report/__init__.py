"""
Jira report service for jiralog.

This service is responsible for:
- Walking git history from HEAD back to a target commit
- Extracting Jira codes from commit summaries
- Fetching issue metadata from a Jira server
- Aggregating per-issue commit statistics
"""

__version__ = "1.0.0"
__author__ = "jiralog maintainers"
__description__ = "Jira issue report built from git history"
