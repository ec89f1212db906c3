"""Commit message classification.

Scans commits newest-first back to the last release and decides how big the
next release should be. Markers, first match per message wins:

- ``#wip``: ignore the commit entirely
- ``#major``: major release, stop scanning
- ``#minor``: minor release
- ``#patch``: patch release
- ``fix #123`` / ``fixes #123``: patch release, or minor if issue 123
  carries one of the enhancement labels

The running result only ever moves up: once minor, later patch markers and
fixes are not even looked at.
"""

from __future__ import annotations

import re
from collections.abc import Collection, Iterable
from enum import Enum
from itertools import accumulate, takewhile

from .models import Commit, ReleaseBump
from .repository import IssueRepository
from .shell import info

WIP_PATTERN = re.compile(r"#wip\b")
MAJOR_PATTERN = re.compile(r"#major\b")
MINOR_PATTERN = re.compile(r"#minor\b")
PATCH_PATTERN = re.compile(r"#patch\b")
FIX_PATTERN = re.compile(r"fix(?:es)? #\d+")
FIX_ISSUE_PATTERN = re.compile(r"fix(?:es)? #(\d+)\b")

DEFAULT_ISSUE_LABELS = ("enhancement",)


class Marker(Enum):
    WIP = "wip"
    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"
    FIX = "fix"


def scan_message(message: str) -> Marker | None:
    """Return the highest precedence marker in a commit message."""
    if WIP_PATTERN.search(message):
        return Marker.WIP
    if MAJOR_PATTERN.search(message):
        return Marker.MAJOR
    if MINOR_PATTERN.search(message):
        return Marker.MINOR
    if PATCH_PATTERN.search(message):
        return Marker.PATCH
    if FIX_PATTERN.search(message):
        return Marker.FIX
    return None


def fixed_issue(message: str) -> int | None:
    """Extract the issue number from a fix reference, if it is usable."""
    match = FIX_ISSUE_PATTERN.search(message)
    if match is None:
        return None
    number = int(match.group(1))
    return number if number > 0 else None


def issue_bump(
    issues: IssueRepository, number: int, enhancement_labels: Collection[str]
) -> ReleaseBump:
    """Classify a fixed issue: minor for enhancements, patch otherwise."""
    info(f"check issue {number} for minor labels")
    issue = issues.get_issue(number)
    for label in issue.labels:
        if label in enhancement_labels:
            info(f"issue {number} is an enhancement ({label})")
            return ReleaseBump.MINOR
    return ReleaseBump.PATCH


def next_bump(
    current: ReleaseBump,
    message: str,
    issues: IssueRepository,
    enhancement_labels: Collection[str],
) -> ReleaseBump:
    """Fold one commit message into the running classification."""
    marker = scan_message(message)
    if marker is None or marker is Marker.WIP:
        return current
    if marker is Marker.MAJOR:
        return ReleaseBump.MAJOR
    if marker is Marker.MINOR:
        return max(current, ReleaseBump.MINOR)
    if current >= ReleaseBump.MINOR:
        return current
    if marker is Marker.PATCH:
        return ReleaseBump.PATCH

    number = fixed_issue(message)
    if number is None:
        return current
    return max(current, issue_bump(issues, number, enhancement_labels))


def classify_commits(
    commits: Iterable[Commit],
    stop_sha: str | None,
    issues: IssueRepository,
    enhancement_labels: Collection[str] = DEFAULT_ISSUE_LABELS,
) -> ReleaseBump:
    """Classify the commits made since the last release.

    Folds ``next_bump`` over the commits and stops at the first MAJOR, since
    nothing older can raise it further.

    Args:
        commits: Commits newest-first. Consumed lazily; nothing after the
            stop point is pulled.
        stop_sha: Commit of the latest main tag. It and everything older is
            already released and is not examined.
        issues: Issue lookup for fix references.
        enhancement_labels: Label names that turn a fix into a minor release.

    Returns:
        The highest bump found, or NONE.
    """
    unreleased = takewhile(lambda commit: commit.sha != stop_sha, commits)
    running = accumulate(
        unreleased,
        lambda bump, commit: next_bump(bump, commit.message, issues, enhancement_labels),
        initial=ReleaseBump.NONE,
    )

    bump = ReleaseBump.NONE
    for bump in running:
        if bump is ReleaseBump.MAJOR:
            info("found major marker, stop")
            break
    return bump
