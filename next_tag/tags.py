"""Tag resolution: which existing tags matter for the next version."""

from __future__ import annotations

from collections.abc import Iterable

import semver

from .models import Tag
from .versions import clean_version


def versioned_tags(tags: Iterable[Tag], prefix: str = "v") -> list[tuple[semver.Version, Tag]]:
    """Pair every tag that parses as a semantic version with its version.

    Sorted ascending by semver precedence, not by name. The sort is stable,
    so tags sharing a version keep their listing order.
    """
    pairs = []
    for tag in tags:
        version = clean_version(tag.name, prefix)
        if version is not None:
            pairs.append((version, tag))
    pairs.sort(key=lambda pair: pair[0])
    return pairs


def latest_tag(tags: Iterable[Tag], prefix: str = "v") -> Tag | None:
    """Return the highest semver tag, prereleases included."""
    pairs = versioned_tags(tags, prefix)
    return pairs[-1][1] if pairs else None


def latest_main_tag(tags: Iterable[Tag], prefix: str = "v") -> Tag | None:
    """Return the highest semver tag without a prerelease component."""
    pairs = [pair for pair in versioned_tags(tags, prefix) if not pair[0].prerelease]
    return pairs[-1][1] if pairs else None


def tag_exists(tags: Iterable[Tag], name: str) -> bool:
    """Check for an exact tag name, whether or not it is a valid version."""
    return any(tag.name == name for tag in tags)
