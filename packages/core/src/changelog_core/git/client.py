"""GitClient — VersionControlClient backed by the local git binary."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from changelog_core.errors import ExternalToolError
from changelog_core.git.base import VersionControlClient

logger = logging.getLogger(__name__)

FIELD_SEPARATOR = "*"

# body, subject, ref decoration, committer date (YYYY-MM-DD)
LOG_FORMAT = FIELD_SEPARATOR.join(["%b", "%s", "%d", "%cs"])


class GitClient(VersionControlClient):
    """Runs git in ``cwd`` (the current directory by default)."""

    def __init__(self, cwd: str | Path | None = None, remote: str = "origin", git_binary: str = "git"):
        self.cwd = Path(cwd) if cwd is not None else None
        self.remote = remote
        self.git_binary = git_binary

    def fetch_tagged_merge_log(self) -> str:
        return self._run(
            "log",
            "--tags",
            "--merges",
            f"--pretty=format:{LOG_FORMAT}",
            "--abbrev-commit",
        )

    def fetch_remote_url(self) -> str:
        url = self._run("remote", "get-url", self.remote).strip()
        if not url:
            raise ExternalToolError(f"git returned no URL for remote {self.remote!r}.")
        return url

    def fetch_first_commit(self) -> str:
        # Several roots are possible (merged histories); the last one listed is the oldest.
        roots = self._run("rev-list", "--max-parents=0", "HEAD").split()
        if not roots:
            raise ExternalToolError("git rev-list returned no root commit.")
        return roots[-1]

    def _run(self, *args: str) -> str:
        cmd = [self.git_binary, *args]
        logger.debug("Running %s", " ".join(cmd))
        try:
            result = subprocess.run(
                cmd,
                cwd=self.cwd,
                capture_output=True,
                text=True,
            )
        except FileNotFoundError as exc:
            raise ExternalToolError(f"{self.git_binary!r} is not installed or not in PATH.") from exc

        if result.returncode != 0:
            stderr = (result.stderr or "").strip()
            raise ExternalToolError(
                f"Command {' '.join(cmd)!r} failed with code {result.returncode}: {stderr}"
            )
        return result.stdout
