"""Abstract version-control interface.

The parser and renderer never touch subprocess mechanics. They consume the
text returned by a VersionControlClient, so tests can feed canned log output
through a fake client and the git implementation stays swappable.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class VersionControlClient(ABC):
    """Read-only access to the three pieces of history a changelog needs."""

    @abstractmethod
    def fetch_tagged_merge_log(self) -> str:
        """Return the merge-commit log across all tags, newest first.

        Each commit renders as ``body*subject*decoration*date``.
        """

    @abstractmethod
    def fetch_remote_url(self) -> str:
        """Return the configured URL of the upstream remote."""

    @abstractmethod
    def fetch_first_commit(self) -> str:
        """Return the hash of the oldest commit reachable from HEAD."""
