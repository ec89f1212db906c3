"""CLI entry point for next-tag."""

from __future__ import annotations

import click

from .config import load_settings
from .errors import NextTagError
from .github import GitHubRepository
from .pipeline import run_tagging
from .shell import fatal


@click.group()
@click.version_option(package_name="next-tag")
def cli() -> None:
    """Compute and create the next semantic-version tag from commit history."""


@cli.command()
@click.option("--token", envvar="INPUT_GITHUB-TOKEN", help="GitHub token (required).")
@click.option(
    "--repo",
    "repository",
    envvar="GITHUB_REPOSITORY",
    help="Repository as owner/name.",
)
@click.option(
    "--ref",
    "event_ref",
    envvar="GITHUB_REF",
    help="Triggering ref, e.g. refs/heads/main.",
)
@click.option(
    "--dry-run",
    envvar="INPUT_DRY-RUN",
    help='"true" computes everything but creates no tag.',
)
@click.option(
    "--bump",
    envvar="INPUT_BUMP",
    help="Release-branch increment when commits carry no marker: major, minor or patch.",
)
@click.option("--branch", envvar="INPUT_BRANCH", help="Tag this branch instead of the triggering ref.")
@click.option(
    "--release-branch",
    envvar="INPUT_RELEASE-BRANCH",
    help="Comma separated regular expressions naming release branches.",
)
@click.option("--with-v", envvar="INPUT_WITH-V", help='"false" drops the v prefix.')
@click.option("--tag", envvar="INPUT_TAG", help="Explicit tag name; skips version computation.")
@click.option(
    "--issue-labels",
    envvar="INPUT_ISSUE-LABELS",
    help="Comma separated labels that make a fixed issue a minor release.",
)
@click.option(
    "--history-limit",
    envvar="INPUT_HISTORY-LIMIT",
    help="Maximum number of commits to scan.",
)
def run(**options: str | None) -> None:
    """Run the tagging pipeline (usually called from CI)."""
    try:
        settings = load_settings(options)
        repo = GitHubRepository(settings.repository, settings.token, settings.history_limit)
        result = run_tagging(repo, settings)
    except NextTagError as exc:
        fatal(exc.message)
        return
    except Exception as exc:
        # Unexpected payloads and bugs still end as a reported failure
        fatal(f"{type(exc).__name__}: {exc}")
        return

    if result.created:
        click.echo(f"\n✓ Created {result.new_tag}")
    else:
        click.echo(f"\n✓ Would create {result.new_tag}")
