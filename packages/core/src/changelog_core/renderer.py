"""Markdown rendering and atomic output for the changelog."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

from changelog_core.errors import OutputError
from changelog_core.models import LogEntry, Tag, TagIndex

logger = logging.getLogger(__name__)

# mkstemp creates 0600 files; a fresh changelog should be readable like any tracked file.
_DEFAULT_MODE = 0o644


def _render_entry(entry: LogEntry, base_url: str) -> str:
    return f"- {entry.message} [\\#{entry.pr_number}]({base_url}/pull/{entry.pr_number})\n"


def _render_tag(tag: Tag, compare_from: str, base_url: str) -> str:
    parts = [
        f"## [{tag.name}]({base_url}/tree/{tag.name}) ({tag.date})\n\n",
        f"[Full Changelog]({base_url}/compare/{compare_from}...{tag.name})\n\n",
    ]
    if tag.entries:
        parts.extend(_render_entry(entry, base_url) for entry in tag.entries)
        parts.append("\n")
    return "".join(parts)


def render_markdown(index: TagIndex, first_commit: str, base_url: str, title: str = "Changelog") -> str:
    """Render the changelog, newest tag first.

    Each tag links its full diff against the next older tag; the oldest tag
    is compared against the repository's first commit.
    """
    base_url = base_url.rstrip("/")
    sections = [f"# {title}\n\n"]
    for position, name in enumerate(index.names):
        older = index.names[position + 1] if position + 1 < len(index.names) else first_commit
        sections.append(_render_tag(index.tags[name], older, base_url))
    return "".join(sections)


def write_changelog(path: str | Path, content: str) -> Path:
    """Write ``content`` to ``path`` atomically.

    The text goes to a temporary file in the same directory first, so a failed
    write never truncates an existing changelog.
    """
    target = Path(path)
    try:
        mode = target.stat().st_mode & 0o777 if target.exists() else _DEFAULT_MODE
        fd, tmp_path = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=target.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as fh:
                fh.write(content)
            os.chmod(tmp_path, mode)
            os.replace(tmp_path, target)
        finally:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
    except OSError as exc:
        raise OutputError(f"Could not write changelog file {str(target)!r}: {exc}") from exc

    logger.debug("Wrote %d bytes to %s", len(content.encode("utf-8")), target)
    return target
