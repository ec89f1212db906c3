"""Tagging pipeline: branch → tags → commits → version → tag.

This module orchestrates a next-tag run:
1. Refuse an explicit tag that already exists
2. Resolve the branch to tag and its head commit
3. Find the latest tag and the latest non-prerelease tag
4. Classify commits since the latest non-prerelease tag
5. Compute the next version (full bump on release branches, prerelease
   bump tagged with the branch name elsewhere)
6. Publish outputs and create the tag unless this is a dry run

Every step depends on the one before, so the run is strictly sequential.
Any failure aborts the run before the tag is written.
"""

from __future__ import annotations

from typing import Protocol

import semver

from .branches import is_release_branch, resolve_branch
from .classify import classify_commits
from .config import Settings
from .errors import ConflictError
from .models import ReleaseBump, TagResult
from .repository import CommitRepository, IssueRepository, RefRepository, TagRepository
from .shell import info, set_output, step
from .tags import latest_main_tag, latest_tag, tag_exists
from .versions import clean_version, compute_next_version

NO_VERSION = "0.0.0"


class Repository(TagRepository, RefRepository, CommitRepository, IssueRepository, Protocol):
    """Everything a run reads from and writes to."""


def plan_custom_tag(repo: Repository, settings: Settings) -> TagResult:
    """Use the explicit tag verbatim after checking it is new."""
    custom = settings.tag or ""
    step(f"Checking custom tag {custom}")
    tags = repo.list_tags()
    if tag_exists(tags, custom):
        raise ConflictError(f"tag already exists {custom}")

    branch = resolve_branch(repo, settings.branch, settings.event_ref)
    info(f"active branch is {branch.name} at {branch.sha[:7]}")

    previous = latest_tag(tags, settings.tag_prefix)
    version = clean_version(custom, settings.tag_prefix)
    return TagResult(
        branch=branch.name,
        sha=branch.sha,
        previous_tag=previous.name if previous else NO_VERSION,
        new_tag=custom,
        new_version=str(version) if version is not None else "",
    )


def plan_next_tag(repo: Repository, settings: Settings) -> TagResult:
    """Compute the next tag from tag history and commit messages.

    Raises:
        ConfigurationError: If the branch cannot be resolved.
        ConflictError: If the latest tag already points at the branch head.
    """
    step("Resolving branch")
    branch = resolve_branch(repo, settings.branch, settings.event_ref)
    info(f"active branch is {branch.name} at {branch.sha[:7]}")

    step("Finding latest tags")
    tags = repo.list_tags()
    latest = latest_tag(tags, settings.tag_prefix)
    latest_main = latest_main_tag(tags, settings.tag_prefix)
    info(f"latest: {latest.name if latest else '<none>'}")
    info(f"latest main: {latest_main.name if latest_main else '<none>'}")

    if latest and latest.sha == branch.sha:
        raise ConflictError("no new commits, avoid tagging")

    previous = latest.name if latest else NO_VERSION
    current = clean_version(previous, settings.tag_prefix)
    if current is None:
        current = semver.Version(0, 0, 0)

    step("Classifying commits")
    bump = classify_commits(
        repo.iter_commits(branch.sha),
        latest_main.sha if latest_main else None,
        repo,
        settings.issue_labels,
    )
    info(f"commit messages suggest: {bump.level}")

    step("Computing next version")
    release = is_release_branch(branch.name, settings.release_branch)
    if release:
        info(f"{branch.name} is a release branch")
        if bump is not ReleaseBump.NONE:
            info(f"commit messages force bump level to {bump.level}")
    next_version = compute_next_version(current, settings.bump, bump, branch.name, release)
    info(f"{previous} → {next_version}")

    return TagResult(
        branch=branch.name,
        sha=branch.sha,
        previous_tag=previous,
        new_tag=f"{settings.tag_prefix}{next_version}",
        new_version=str(next_version),
        bump=bump,
    )


def publish_outputs(result: TagResult) -> None:
    step("Setting outputs")
    set_output("tag", result.previous_tag)
    set_output("new-tag", result.new_tag)
    set_output("new-version", result.new_version)
    set_output("bump", result.bump.level)


def create_tag(repo: RefRepository, result: TagResult) -> None:
    """Create refs/tags/<new tag> at the resolved commit."""
    step("Creating tag")
    ref = f"refs/tags/{result.new_tag}"
    repo.create_ref(ref, result.sha)
    info(f"{ref} → {result.sha[:7]}")


def run_tagging(repo: Repository, settings: Settings) -> TagResult:
    """Execute a full tagging run.

    Args:
        repo: Repository access (see next_tag.repository).
        settings: Validated run settings.

    Returns:
        The computed result; ``created`` tells whether the tag was written.
    """
    if settings.tag:
        result = plan_custom_tag(repo, settings)
    else:
        result = plan_next_tag(repo, settings)

    publish_outputs(result)

    if settings.dry_run:
        step("Dry run, not creating a tag")
        return result

    create_tag(repo, result)
    return result.model_copy(update={"created": True})
