"""Capability interfaces for reading and writing repository state.

The pipeline, classifier and resolvers depend only on these protocols.
``next_tag.github.GitHubRepository`` implements all of them over the GitHub
API; tests use in-memory fakes.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Protocol

from .models import BranchRef, Commit, Issue, Tag


class TagRepository(Protocol):
    def list_tags(self) -> list[Tag]:
        """Return every tag in the repository, valid semver or not."""
        ...


class RefRepository(Protocol):
    def find_branch(self, branch: str) -> BranchRef | None:
        """Return the ref for ``branch``, or None if it does not exist."""
        ...

    def create_ref(self, ref: str, sha: str) -> None:
        """Create a fully qualified ref (e.g. "refs/tags/v1.0.0") at ``sha``."""
        ...


class CommitRepository(Protocol):
    def iter_commits(self, sha: str) -> Iterator[Commit]:
        """Yield commits reachable from ``sha``, newest first.

        Implementations fetch lazily so a consumer that stops early does not
        pay for older history.
        """
        ...


class IssueRepository(Protocol):
    def get_issue(self, number: int) -> Issue:
        ...
