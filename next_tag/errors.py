"""Exceptions raised by a tagging run.

Every failure carries a human-readable message; the CLI reports it as the
run's failure reason.
"""

from __future__ import annotations


class NextTagError(Exception):
    """Base class for all next-tag failures."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ConfigurationError(NextTagError):
    """Invalid or missing settings, or a branch that does not exist."""


class ConflictError(NextTagError):
    """The tag to create already exists or there is nothing new to tag."""


class RemoteError(NextTagError):
    """A GitHub API call failed."""

    def __init__(self, message: str, stderr: str = "") -> None:
        super().__init__(message)
        self.stderr = stderr
