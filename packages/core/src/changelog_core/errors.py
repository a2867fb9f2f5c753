"""Error hierarchy for changelog generation.

Every error is fatal: the CLI maps any ChangelogError to a single error line
and exit status 1. Nothing in the core retries or recovers.
"""

from __future__ import annotations


class ChangelogError(Exception):
    """Base exception for changelog generation errors."""


class ExternalToolError(ChangelogError):
    """Raised when a git invocation fails or returns unusable output."""


class ParseError(ChangelogError):
    """Raised when the git log or remote URL does not have the expected shape."""


class OutputError(ChangelogError):
    """Raised when the changelog file cannot be written."""
