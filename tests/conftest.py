"""Shared test fixtures."""

from __future__ import annotations

import os
from collections.abc import Callable, Iterator
from typing import Any

import pytest

from next_tag.config import Settings
from next_tag.errors import RemoteError
from next_tag.models import BranchRef, Commit, Issue, Tag


class FakeRepository:
    """In-memory stand-in for GitHubRepository.

    Records every write and how far the commit history was consumed.
    """

    def __init__(
        self,
        branches: dict[str, str] | None = None,
        tags: list[Tag] | None = None,
        commits: list[Commit] | None = None,
        issues: dict[int, list[str]] | None = None,
    ) -> None:
        self.branches = dict(branches or {})
        self.tags = list(tags or [])
        self.commits = list(commits or [])
        self.issues = dict(issues or {})
        self.created: list[tuple[str, str]] = []
        self.commits_fetched = 0
        self.issue_lookups: list[int] = []

    def list_tags(self) -> list[Tag]:
        return list(self.tags)

    def find_branch(self, branch: str) -> BranchRef | None:
        sha = self.branches.get(branch)
        if sha is None:
            return None
        return BranchRef(ref=f"refs/heads/{branch}", sha=sha)

    def create_ref(self, ref: str, sha: str) -> None:
        """Record the ref; like GitHub, refuse one that already exists."""
        name = ref.removeprefix("refs/tags/")
        if ref.startswith("refs/tags/") and any(tag.name == name for tag in self.tags):
            raise RemoteError("Reference already exists")
        self.created.append((ref, sha))
        if ref.startswith("refs/tags/"):
            self.tags.append(Tag(name=name, sha=sha))

    def iter_commits(self, sha: str) -> Iterator[Commit]:
        for commit in self.commits:
            self.commits_fetched += 1
            yield commit

    def get_issue(self, number: int) -> Issue:
        self.issue_lookups.append(number)
        return Issue(number=number, labels=self.issues.get(number, []))


def make_commits(*messages: str, stop_sha: str | None = None) -> list[Commit]:
    """Build newest-first commits c0, c1, ...; optionally end at ``stop_sha``."""
    commits = [Commit(sha=f"c{i}", message=message) for i, message in enumerate(messages)]
    if stop_sha is not None:
        commits.append(Commit(sha=stop_sha, message="released"))
    return commits


@pytest.fixture(autouse=True)
def clean_actions_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the host's GitHub Actions variables out of every test."""
    for key in list(os.environ):
        if key.startswith("INPUT_") or key in (
            "GITHUB_OUTPUT",
            "GITHUB_REPOSITORY",
            "GITHUB_REF",
        ):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def fake_repo() -> Callable[..., FakeRepository]:
    """Factory for FakeRepository instances."""
    return FakeRepository


@pytest.fixture
def commits() -> Callable[..., list[Commit]]:
    """Factory for newest-first commit lists."""
    return make_commits


@pytest.fixture
def settings() -> Callable[..., Settings]:
    """Factory for Settings with test credentials filled in."""

    def _make(**overrides: Any) -> Settings:
        values: dict[str, Any] = {
            "token": "test-token",
            "repository": "octo/widgets",
            "event_ref": "refs/heads/main",
        }
        values.update(overrides)
        return Settings.model_validate(values)

    return _make
