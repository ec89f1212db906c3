"""Shell and gh utilities.

Provides a thin wrapper around the GitHub CLI for REST calls, plus output
formatting helpers and GitHub Actions step outputs.
"""

from __future__ import annotations

import os
import subprocess
import sys

from .errors import RemoteError


def gh(*args: str, token: str) -> str:
    """Run a gh command and return stdout.

    The token is handed to gh through GH_TOKEN so it never shows up in the
    process arguments.

    Args:
        *args: Arguments to pass to gh (e.g., "api", "repos/o/r/tags").
        token: GitHub token authorizing the call.

    Returns:
        Stripped stdout from the gh command.

    Raises:
        RemoteError: If gh exits non-zero or cannot be started.
    """
    env = {**os.environ, "GH_TOKEN": token}
    try:
        result = subprocess.run(
            ["gh", *args], capture_output=True, text=True, check=True, env=env
        )
    except FileNotFoundError as exc:
        raise RemoteError("gh not found. Install the GitHub CLI.") from exc
    except subprocess.CalledProcessError as exc:
        stderr = (exc.stderr or "").strip()
        raise RemoteError(
            f"gh {' '.join(args)} failed: {stderr or f'exit code {exc.returncode}'}",
            stderr=stderr,
        ) from exc
    return result.stdout.strip()


def step(msg: str) -> None:
    """Print a visually distinct step header.

    Used to separate the phases of a tagging run in the job log.
    """
    print(f"\n{'─' * 60}\n{msg}\n{'─' * 60}")


def info(msg: str) -> None:
    """Print an indented progress line."""
    print(f"  {msg}")


def set_output(name: str, value: str) -> None:
    """Publish a step output.

    Appends ``name=value`` to the file named by GITHUB_OUTPUT when running
    inside GitHub Actions, and always echoes it to the log.
    """
    output_path = os.environ.get("GITHUB_OUTPUT")
    if output_path:
        with open(output_path, "a") as fh:
            fh.write(f"{name}={value}\n")
    print(f"  output {name}={value}")


def fatal(msg: str) -> None:
    """Report a failed run and exit with code 1.

    The ``::error::`` prefix turns the message into a workflow annotation.
    """
    print(f"::error::{msg}", file=sys.stderr)
    sys.exit(1)
