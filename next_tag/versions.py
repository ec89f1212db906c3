"""Version parsing and bumping utilities.

Handles conversion between tag names and semver objects, full release bumps,
and branch-tagged prerelease bumps (e.g., "1.2.0" → "1.2.1-feature.x.0").
"""

from __future__ import annotations

import re

import semver

from .models import ReleaseBump

_INVALID_IDENTIFIER_CHARS = re.compile(r"[^0-9A-Za-z-]")


def clean_version(name: str, prefix: str = "v") -> semver.Version | None:
    """Parse a tag name into a semver.Version, or None if it is not one.

    Strips surrounding whitespace, the configured tag prefix, then any
    leading "v" or "=" characters:
    - "v1.2.3" → 1.2.3
    - "release-1.2.3" with prefix "release-" → 1.2.3
    - "=v1.2.3-rc.1" → 1.2.3-rc.1
    - "latest" → None
    """
    text = name.strip()
    if prefix and text.startswith(prefix):
        text = text[len(prefix) :]
    text = text.lstrip("=v")
    try:
        return semver.Version.parse(text)
    except ValueError:
        return None


def prerelease_identifier(branch: str) -> str:
    """Turn a branch name into dot separated prerelease identifiers.

    Prerelease identifiers may only hold alphanumerics and hyphens, and
    numeric ones may not have leading zeros.

    Examples:
        "feature/x" → "feature.x"
        "fix/JIRA_12" → "fix.JIRA-12"
        "release/007" → "release.7"
    """
    parts: list[str] = []
    for segment in branch.split("/"):
        segment = _INVALID_IDENTIFIER_CHARS.sub("-", segment)
        if not segment:
            continue
        if segment.isdigit():
            segment = str(int(segment))
        parts.append(segment)
    return ".".join(parts) or "branch"


def bump_prerelease(version: semver.Version, identifier: str) -> semver.Version:
    """Increment the prerelease counter for ``identifier``.

    - "1.2.1-feature.x.3" with "feature.x" → "1.2.1-feature.x.4"
    - "1.2.1-rc.1" with "feature.x" → "1.2.1-feature.x.0"
    - "1.2.0" with "feature.x" → "1.2.1-feature.x.0"
    """
    if version.prerelease:
        head, _, counter = version.prerelease.rpartition(".")
        if head == identifier and counter.isdigit():
            return version.replace(prerelease=f"{identifier}.{int(counter) + 1}", build=None)
        return version.replace(prerelease=f"{identifier}.0", build=None)
    return version.bump_patch().replace(prerelease=f"{identifier}.0")


def bump_version(version: semver.Version, level: str) -> semver.Version:
    """Apply a major, minor or patch increment.

    Lower components reset and any prerelease is dropped. A prerelease of the
    target version is promoted rather than skipped ("1.3.0-rc.1" minor →
    "1.3.0").
    """
    if level not in ("major", "minor", "patch"):
        raise ValueError(f"Unknown bump level: {level!r}")
    return version.next_version(level)


def compute_next_version(
    current: semver.Version,
    level: str,
    bump: ReleaseBump,
    branch: str,
    release: bool,
) -> semver.Version:
    """Pick the next version for a branch.

    Args:
        current: Version of the latest existing tag (0.0.0 if none).
        level: Configured bump level used when the history has no opinion.
        bump: Classification found in the commit history.
        branch: Branch being tagged.
        release: Whether ``branch`` matches a release-branch pattern.

    Returns:
        A prerelease bump tagged with the branch name on ordinary branches;
        a full bump on release branches, where a commit classification
        overrides ``level``.
    """
    if not release:
        return bump_prerelease(current, prerelease_identifier(branch))
    if bump is not ReleaseBump.NONE:
        level = bump.level
    return bump_version(current, level)
