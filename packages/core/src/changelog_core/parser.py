"""Parse the tagged merge log into a TagIndex.

Input is the output of ``git log --tags --merges`` rendered as
``body*subject*decoration*date`` per commit, newest first. The log must start
at a tagged commit: every merge is attributed to the closest tag above it.
"""

from __future__ import annotations

import logging
import re

from changelog_core.errors import ParseError
from changelog_core.git.client import FIELD_SEPARATOR
from changelog_core.models import LogEntry, TagIndex

logger = logging.getLogger(__name__)

_MAX_FIELDS = 6
_REQUIRED_FIELDS = 4

_TAG_RE = re.compile(r"tag: (v?[0-9.]+)")
_PR_MERGE_RE = re.compile(r"Merge pull request #([0-9]+)")
_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def split_fields(line: str) -> list[str]:
    """Split a log line on the field separator, keeping at most six fields."""
    return line.split(FIELD_SEPARATOR, _MAX_FIELDS - 1)


def find_tag(decoration: str) -> str | None:
    """Return the first version tag named in a ref decoration, if any."""
    match = _TAG_RE.search(decoration)
    return match.group(1).strip() if match else None


def find_pr_number(subject: str) -> str | None:
    """Return the pull request number from a GitHub merge subject, if any."""
    match = _PR_MERGE_RE.search(subject)
    return match.group(1) if match else None


def is_commit_header(fields: list[str]) -> bool:
    """Return True if split fields carry a commit subject, decoration and %cs date.

    Body lines can contain the separator too (Markdown bold, arithmetic), so the
    field count alone does not identify a header.
    """
    if len(fields) < _REQUIRED_FIELDS or not _DATE_RE.match(fields[3].strip()):
        return False
    decoration = fields[2].strip()
    if not decoration or (decoration.startswith("(") and decoration.endswith(")")):
        return True
    return find_tag(decoration) is not None


def _header_fields(line: str) -> list[str] | None:
    fields = split_fields(line)
    if is_commit_header(fields):
        return fields
    # The last body line shares the header line when the body has no trailing
    # newline; separators inside it shift the left split, so retry from the right.
    fields = line.rsplit(FIELD_SEPARATOR, _REQUIRED_FIELDS - 1)
    return fields if is_commit_header(fields) else None


def _first_line(body_lines: list[str]) -> str:
    for line in body_lines:
        if line.strip():
            return line.strip()
    return ""


def parse_log(raw_log: str) -> TagIndex:
    """Build the TagIndex for a raw tagged merge log.

    Lines that are not commit headers (see is_commit_header) are continuation
    lines of a multi-line commit body; they are prepended to the body of the
    next header line.

    Raises:
        ParseError: If a merge commit appears before any tagged commit.
    """
    index = TagIndex()
    current_tag = None
    pending_body: list[str] = []

    for line in raw_log.splitlines():
        logger.debug("log line: %s", line)
        fields = _header_fields(line)

        if fields is None:
            if line.strip() or pending_body:
                pending_body.append(line)
            continue

        body_lines = pending_body + [fields[0]]
        pending_body = []
        date = fields[3].strip()

        tag_name = find_tag(fields[2])
        if tag_name is None and current_tag is None:
            raise ParseError(f"Commit not after a tag: {line.strip()!r}")

        if tag_name is not None:
            current_tag = index.add_tag(tag_name, date)

        pr_number = find_pr_number(fields[1])
        if pr_number is None:
            continue

        message = _first_line(body_lines) or fields[1].strip()
        current_tag.entries.append(LogEntry(date=date, message=message, pr_number=pr_number))

    if pending_body:
        logger.debug("Discarding %d trailing body line(s) with no commit header.", len(pending_body))

    logger.debug("Parsed %d tag(s) with %d entries.", len(index), index.entry_count)
    return index
