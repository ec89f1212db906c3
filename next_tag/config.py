"""Run configuration.

Settings come from, in order of precedence: command line options,
environment variables (GitHub Actions ``INPUT_*`` variables, bound by the
CLI), the ``[tool.next-tag]`` table of pyproject.toml, then defaults.
Actions passes unset inputs as empty strings, so empty values fall through
to the next source.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, ValidationError, field_validator

from .branches import split_list
from .classify import DEFAULT_ISSUE_LABELS
from .errors import ConfigurationError
from .toml import load_tool_settings

REPOSITORY_PATTERN = re.compile(r"^[\w.-]+/[\w.-]+$")


class Settings(BaseModel):
    """Validated settings for one tagging run.

    Attributes:
        token: GitHub token authorizing API calls.
        repository: Target repository as "owner/name".
        event_ref: Ref that triggered the run (e.g. "refs/heads/main").
        dry_run: Compute and publish outputs but create no tag.
        bump: Increment used on release branches when commits have no marker.
        branch: Branch to tag instead of the triggering ref.
        release_branch: Comma separated regular expressions naming release
            branches.
        with_v: Prefix generated tags with "v".
        tag: Explicit tag name that bypasses version computation.
        issue_labels: Labels that turn a fixed issue into a minor release.
        history_limit: Maximum number of commits to scan.
    """

    token: str
    repository: str
    event_ref: str = ""
    dry_run: bool = False
    bump: Literal["major", "minor", "patch"] = "minor"
    branch: str | None = None
    release_branch: str = "main"
    with_v: bool = True
    tag: str | None = None
    issue_labels: list[str] = Field(default_factory=lambda: list(DEFAULT_ISSUE_LABELS))
    history_limit: int = Field(default=100, gt=0)

    @field_validator("repository")
    @classmethod
    def _check_repository(cls, value: str) -> str:
        if not REPOSITORY_PATTERN.match(value):
            raise ValueError(f"expected owner/name, got {value!r}")
        return value

    @field_validator("release_branch")
    @classmethod
    def _check_release_patterns(cls, value: str) -> str:
        for pattern in split_list(value):
            try:
                re.compile(pattern)
            except re.error as exc:
                raise ValueError(f"invalid pattern {pattern!r}: {exc}") from exc
        return value

    @field_validator("dry_run", mode="before")
    @classmethod
    def _parse_dry_run(cls, value: Any) -> Any:
        # Only the literal "true" enables a dry run
        if isinstance(value, str):
            return value.strip().lower() == "true"
        return value

    @field_validator("with_v", mode="before")
    @classmethod
    def _parse_with_v(cls, value: Any) -> Any:
        # Anything but "false" keeps the prefix
        if isinstance(value, str):
            return value.strip().lower() != "false"
        return value

    @field_validator("bump", mode="before")
    @classmethod
    def _normalize_bump(cls, value: Any) -> Any:
        return value.strip().lower() if isinstance(value, str) else value

    @field_validator("issue_labels", mode="before")
    @classmethod
    def _parse_labels(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = split_list(value)
        return value or list(DEFAULT_ISSUE_LABELS)

    @property
    def tag_prefix(self) -> str:
        return "v" if self.with_v else ""


def _is_set(value: Any) -> bool:
    return value is not None and not (isinstance(value, str) and not value.strip())


def load_settings(options: dict[str, Any], root: Path | None = None) -> Settings:
    """Merge option values over pyproject.toml defaults and validate.

    Args:
        options: Values from the command line / environment, keyed by
            Settings field name. None or blank means "not given".
        root: Directory holding pyproject.toml. Defaults to the working
            directory.

    Raises:
        ConfigurationError: If the token is missing or a value is invalid.
    """
    if not _is_set(options.get("token")):
        raise ConfigurationError("Input required and not supplied: github-token")
    if not _is_set(options.get("repository")):
        raise ConfigurationError("No repository given. Set GITHUB_REPOSITORY or pass --repo.")

    merged = load_tool_settings(root or Path.cwd())
    merged.update({key: value for key, value in options.items() if _is_set(value)})

    try:
        return Settings.model_validate(merged)
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        raise ConfigurationError(f"Invalid configuration: {problems}") from exc
