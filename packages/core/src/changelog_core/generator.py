"""Changelog generation pipeline: extract → parse → render → write."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from changelog_core.git.base import VersionControlClient
from changelog_core.git.remote import resolve_repository_url
from changelog_core.parser import parse_log
from changelog_core.renderer import render_markdown, write_changelog

logger = logging.getLogger(__name__)


@dataclass
class ChangelogResult:
    """What generate_changelog wrote, for the CLI summary line."""

    path: Path
    repository_url: str
    tag_count: int
    entry_count: int


def _repository_url(client: VersionControlClient, config: dict) -> str:
    explicit = config.get("repository_url")
    if explicit:
        return explicit.rstrip("/")
    return resolve_repository_url(client.fetch_remote_url())


def generate_changelog(client: VersionControlClient, config: dict) -> ChangelogResult:
    """Build the changelog from ``client`` history and write it to ``config["output"]``.

    Nothing is written unless every step succeeds.

    Raises:
        ChangelogError: On any git, parsing, or output failure.
    """
    raw_log = client.fetch_tagged_merge_log()
    index = parse_log(raw_log)
    logger.debug("Tag index: %s", json.dumps(index.to_dict()))

    first_commit = client.fetch_first_commit()
    base_url = _repository_url(client, config)

    content = render_markdown(index, first_commit, base_url, title=config.get("title", "Changelog"))
    path = write_changelog(config.get("output", "CHANGELOG.md"), content)

    return ChangelogResult(
        path=path,
        repository_url=base_url,
        tag_count=len(index),
        entry_count=index.entry_count,
    )
