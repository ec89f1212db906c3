"""TOML reading utilities.

Reads optional defaults from a ``[tool.next-tag]`` table in pyproject.toml so
a repository can pin its release-branch patterns and labels next to its code.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import tomlkit
from tomlkit.exceptions import ParseError

from .errors import ConfigurationError

TOOL_TABLE = "next-tag"

# Repository-wide settings only; token, branch, tag and dry-run stay per run
FILE_KEYS = ("bump", "release-branch", "with-v", "issue-labels", "history-limit")


def load_pyproject(path: Path) -> tomlkit.TOMLDocument:
    """Load and parse a pyproject.toml file."""
    try:
        return tomlkit.parse(path.read_text())
    except ParseError as exc:
        raise ConfigurationError(f"Cannot parse {path}: {exc}") from exc


def get_tool_settings(doc: tomlkit.TOMLDocument) -> dict[str, Any]:
    """Extract the supported keys of [tool.next-tag] as plain Python values.

    Keys are normalized to snake_case (e.g. "release-branch" →
    "release_branch"). Unknown keys are ignored.
    """
    table = doc.get("tool", {}).get(TOOL_TABLE, {})
    settings: dict[str, Any] = {}
    for key in FILE_KEYS:
        if key in table:
            value = table[key]
            settings[key.replace("-", "_")] = value.unwrap() if hasattr(value, "unwrap") else value
    return settings


def load_tool_settings(root: Path) -> dict[str, Any]:
    """Read [tool.next-tag] from ``root``/pyproject.toml, if the file exists."""
    pyproject = root / "pyproject.toml"
    if not pyproject.is_file():
        return {}
    return get_tool_settings(load_pyproject(pyproject))
