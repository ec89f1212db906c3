"""Branch resolution and release-branch matching."""

from __future__ import annotations

import re

from .errors import ConfigurationError
from .models import BRANCH_REF_PREFIX, BranchRef
from .repository import RefRepository
from .shell import info


def resolve_branch(refs: RefRepository, force_branch: str | None, event_ref: str) -> BranchRef:
    """Find the branch to tag and its head commit.

    Args:
        refs: Ref lookup.
        force_branch: Branch that overrides the triggering ref, if any.
        event_ref: Ref that triggered the run (e.g. "refs/heads/main").

    Raises:
        ConfigurationError: If the branch does not exist.
    """
    if force_branch:
        info(f"check forced branch {force_branch}")
        branch = refs.find_branch(force_branch)
        if branch is None:
            raise ConfigurationError(f"unknown branch provided: {force_branch}")
        return branch

    name = event_ref.removeprefix(BRANCH_REF_PREFIX)
    if not name:
        raise ConfigurationError("no branch given and no triggering ref to derive one from")
    info(f"load branch {name} from ref {event_ref}")
    branch = refs.find_branch(name)
    if branch is None:
        raise ConfigurationError(f"failed to load branch {name}")
    return branch


def split_list(value: str) -> list[str]:
    """Split a comma separated setting, dropping blank entries."""
    return [item.strip() for item in value.split(",") if item.strip()]


def is_release_branch(branch: str, patterns: str) -> bool:
    """Check ``branch`` against comma separated regular expressions.

    Patterns are searched, not anchored: "main" also matches "main-next".
    Use "^main$" for an exact match.

    Raises:
        ConfigurationError: If a pattern is not a valid regular expression.
    """
    for pattern in split_list(patterns):
        try:
            if re.search(pattern, branch):
                return True
        except re.error as exc:
            raise ConfigurationError(f"invalid release-branch pattern {pattern!r}: {exc}") from exc
    return False
