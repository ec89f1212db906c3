"""Tests for next_tag.branches."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

from next_tag.branches import is_release_branch, resolve_branch, split_list
from next_tag.errors import ConfigurationError

from conftest import FakeRepository


@patch("next_tag.branches.info", MagicMock())
class TestResolveBranch:
    """Tests for resolve_branch()."""

    def test_uses_event_ref(self) -> None:
        """The triggering ref names the branch."""
        repo = FakeRepository(branches={"main": "abc123"})

        branch = resolve_branch(repo, None, "refs/heads/main")

        assert branch.sha == "abc123"
        assert branch.name == "main"

    def test_keeps_nested_branch_name(self) -> None:
        """The full name after refs/heads/ is kept."""
        repo = FakeRepository(branches={"feature/x": "def456"})

        branch = resolve_branch(repo, None, "refs/heads/feature/x")

        assert branch.name == "feature/x"

    def test_forced_branch_wins(self) -> None:
        """A forced branch overrides the triggering ref."""
        repo = FakeRepository(branches={"main": "abc123", "release": "fff000"})

        branch = resolve_branch(repo, "release", "refs/heads/main")

        assert branch.sha == "fff000"

    def test_unknown_forced_branch(self) -> None:
        """A forced branch that does not exist is rejected."""
        repo = FakeRepository(branches={"main": "abc123"})

        with pytest.raises(ConfigurationError, match="unknown branch provided"):
            resolve_branch(repo, "nope", "refs/heads/main")

    def test_missing_event_branch(self) -> None:
        """A triggering branch that does not exist is rejected."""
        repo = FakeRepository()

        with pytest.raises(ConfigurationError, match="failed to load branch gone"):
            resolve_branch(repo, None, "refs/heads/gone")

    def test_no_ref_at_all(self) -> None:
        """Without a branch or ref there is nothing to tag."""
        with pytest.raises(ConfigurationError):
            resolve_branch(FakeRepository(), None, "")


class TestIsReleaseBranch:
    """Tests for is_release_branch()."""

    def test_single_pattern(self) -> None:
        """One pattern naming the branch matches."""
        assert is_release_branch("main", "main")

    def test_any_pattern_matches(self) -> None:
        """Any pattern in the list may match."""
        assert is_release_branch("release/1.x", "main, ^release/")

    def test_no_match(self) -> None:
        """Branches matching no pattern are not release branches."""
        assert not is_release_branch("feature/x", "main,^release/")

    def test_patterns_are_searched(self) -> None:
        """Patterns match anywhere unless anchored."""
        assert is_release_branch("main-next", "main")
        assert not is_release_branch("main-next", "^main$")

    def test_blank_patterns_match_nothing(self) -> None:
        """Blank entries never match."""
        assert not is_release_branch("main", "")
        assert not is_release_branch("main", " , ")

    def test_invalid_pattern(self) -> None:
        """A broken regex is a configuration error."""
        with pytest.raises(ConfigurationError, match="invalid release-branch pattern"):
            is_release_branch("main", "(")


def test_split_list_strips_and_drops_blanks() -> None:
    """split_list() trims entries and drops blanks."""
    assert split_list(" a, b ,,c ") == ["a", "b", "c"]
