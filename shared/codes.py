"""
Issue code extraction from commit summaries.

A code is a run of word characters, a hyphen and one or more digits
(``ABC-123``). Codes are uppercased and never validated against the tracker.
"""

import re
from typing import Dict, Iterable, List, Optional

from shared.models import Commit

ISSUE_CODE_PATTERN = re.compile(r"\w+-\d+", re.ASCII)


def extract_codes(summary: Optional[str]) -> List[str]:
    """Return every code referenced in ``summary``, uppercased, in order."""
    if not summary:
        return []
    return [match.upper() for match in ISSUE_CODE_PATTERN.findall(summary)]


def filter_missing_codes(commits: Iterable[Commit]) -> List[Commit]:
    """Keep only commits whose summary references at least one code."""
    return [
        commit for commit in commits
        if commit.summary and ISSUE_CODE_PATTERN.search(commit.summary)
    ]


def map_commits_to_codes(commits: Iterable[Commit]) -> Dict[str, List[Commit]]:
    """
    Group commits by the codes referenced in their summaries.

    Keys keep the order in which codes are first encountered. A commit
    referencing the same code twice is appended to that group twice.
    """
    code_map: Dict[str, List[Commit]] = {}
    for commit in commits:
        for code in extract_codes(commit.summary):
            code_map.setdefault(code, []).append(commit)
    return code_map
