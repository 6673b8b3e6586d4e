"""
Unit tests for Jira code extraction.

Covers filtering commits without codes and grouping commits by code.
"""

import pytest
from datetime import datetime, timezone, timedelta

from shared.models import Commit
from shared.codes import extract_codes, filter_missing_codes, map_commits_to_codes


def make_commit(summary: str, author: str = "Alice", day: int = 1) -> Commit:
    return Commit(
        date=datetime(2024, 3, day, 12, 0, tzinfo=timezone.utc),
        author=author,
        summary=summary,
    )


class TestExtractCodes:
    """Test cases for extract_codes."""

    def test_single_code(self):
        assert extract_codes("fix ABC-1") == ["ABC-1"]

    def test_codes_are_uppercased(self):
        assert extract_codes("abc-12: tidy up") == ["ABC-12"]

    def test_multiple_codes_in_order(self):
        assert extract_codes("ABC-1 rework, see DEF-2") == ["ABC-1", "DEF-2"]

    def test_repeated_code_is_reported_each_time(self):
        assert extract_codes("ABC-1 fixes ABC-1 and DEF-2") == ["ABC-1", "ABC-1", "DEF-2"]

    @pytest.mark.parametrize("summary", ["", None, "Merge branch 'main'", "bump to v2", "ABC-", "-12"])
    def test_no_code(self, summary):
        assert extract_codes(summary) == []

    def test_word_characters_include_digits_and_underscores(self):
        assert extract_codes("PROJ_2-7 follow-up") == ["PROJ_2-7"]


class TestFilterMissingCodes:
    """Test cases for filter_missing_codes."""

    def test_commits_without_codes_are_dropped(self):
        commits = [
            make_commit("Merge branch 'main'"),
            make_commit("fix ABC-1"),
            make_commit("chore: format"),
            make_commit("DEF-2 tests"),
        ]

        result = filter_missing_codes(commits)

        assert [c.summary for c in result] == ["fix ABC-1", "DEF-2 tests"]

    def test_consecutive_matching_commits_are_all_kept(self):
        commits = [make_commit(f"ABC-{n} change") for n in range(1, 6)]

        assert filter_missing_codes(commits) == commits

    def test_empty_input(self):
        assert filter_missing_codes([]) == []


class TestMapCommitsToCodes:
    """Test cases for map_commits_to_codes."""

    def test_groups_commits_by_code(self):
        first = make_commit("fix ABC-1", author="A", day=1)
        second = make_commit("ABC-1 rework, see DEF-2", author="B", day=2)

        code_map = map_commits_to_codes([first, second])

        assert list(code_map) == ["ABC-1", "DEF-2"]
        assert code_map["ABC-1"] == [first, second]
        assert code_map["DEF-2"] == [second]

    def test_key_order_is_first_encounter(self):
        commits = [
            make_commit("XYZ-9 first"),
            make_commit("abc-1 second"),
            make_commit("XYZ-9 third"),
        ]

        assert list(map_commits_to_codes(commits)) == ["XYZ-9", "ABC-1"]

    def test_mixed_case_references_share_a_group(self):
        lower = make_commit("abc-1 lower")
        upper = make_commit("ABC-1 upper")

        assert map_commits_to_codes([lower, upper]) == {"ABC-1": [lower, upper]}

    def test_repeated_reference_appends_commit_twice(self):
        commit = make_commit("ABC-1 fixes ABC-1 and DEF-2")

        code_map = map_commits_to_codes([commit])

        assert code_map["ABC-1"] == [commit, commit]
        assert code_map["DEF-2"] == [commit]

    def test_commit_without_code_contributes_nothing(self):
        merge = make_commit("Merge branch 'main'")
        fix = make_commit("fix ABC-1")

        code_map = map_commits_to_codes([merge, fix])

        assert all(merge not in group for group in code_map.values())

    def test_grouping_is_idempotent(self):
        base = datetime(2024, 3, 1, tzinfo=timezone.utc)
        commits = [
            Commit(date=base + timedelta(hours=n), author=f"dev{n % 3}", summary=f"ABC-{n % 4} and DEF-{n}")
            for n in range(10)
        ]

        first = map_commits_to_codes(filter_missing_codes(commits))
        second = map_commits_to_codes(filter_missing_codes(commits))

        assert first == second
        assert list(first) == list(second)
