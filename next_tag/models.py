"""Data models for next-tag.

These Pydantic models represent the repository state read during a run and
the result of the run. Nothing here outlives a single invocation.
"""

from __future__ import annotations

from enum import IntEnum

from pydantic import BaseModel, Field

BRANCH_REF_PREFIX = "refs/heads/"


class ReleaseBump(IntEnum):
    """Bump level suggested by commit history, ordered by precedence."""

    NONE = 0
    PATCH = 1
    MINOR = 2
    MAJOR = 3

    @property
    def level(self) -> str:
        """Lowercase name as used by inputs and outputs (e.g. "minor")."""
        return self.name.lower()


class Tag(BaseModel):
    """A repository tag.

    Attributes:
        name: Tag name exactly as stored (e.g. "v1.2.0").
        sha: Commit the tag points to.
    """

    name: str
    sha: str


class BranchRef(BaseModel):
    """A branch reference and its head commit.

    Attributes:
        ref: Fully qualified ref (e.g. "refs/heads/feature/x").
        sha: Head commit of the branch.
    """

    ref: str
    sha: str

    @property
    def name(self) -> str:
        """Branch name without the refs/heads/ prefix."""
        return self.ref.removeprefix(BRANCH_REF_PREFIX)


class Commit(BaseModel):
    sha: str
    message: str


class Issue(BaseModel):
    """An issue and the names of its labels."""

    number: int
    labels: list[str] = Field(default_factory=list)


class TagResult(BaseModel):
    """Outcome of a tagging run.

    Attributes:
        branch: Branch the tag was computed for.
        sha: Commit the new tag points (or would point) to.
        previous_tag: Latest existing tag, or "0.0.0" when there is none.
        new_tag: Full tag name, prefix included.
        new_version: Version without prefix; empty for a custom tag that is
            not a semantic version.
        bump: Classification found in the commit history.
        created: Whether the ref was actually written.
    """

    branch: str
    sha: str
    previous_tag: str
    new_tag: str
    new_version: str
    bump: ReleaseBump = ReleaseBump.NONE
    created: bool = False
