"""Changelog data models.

Built once by the log parser, read once by the renderer.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field


@dataclass(frozen=True)
class LogEntry:
    """A single pull-request merge listed under a release."""

    date: str  # committer date as printed by git (YYYY-MM-DD)
    message: str
    pr_number: str


@dataclass
class Tag:
    """A release tag and the pull-request merges that belong to it."""

    name: str
    date: str
    entries: list[LogEntry] = field(default_factory=list)


@dataclass
class TagIndex:
    """Tag names in first-seen order (newest first) plus their records.

    Every name in ``names`` has a matching entry in ``tags``.
    """

    names: list[str] = field(default_factory=list)
    tags: dict[str, Tag] = field(default_factory=dict)

    def add_tag(self, name: str, date: str) -> Tag:
        """Register a tag, returning the existing record if it was already seen."""
        tag = self.tags.get(name)
        if tag is None:
            tag = Tag(name=name, date=date)
            self.tags[name] = tag
            self.names.append(name)
        return tag

    def __iter__(self):
        return (self.tags[name] for name in self.names)

    def __len__(self) -> int:
        return len(self.names)

    @property
    def entry_count(self) -> int:
        return sum(len(tag.entries) for tag in self)

    def to_dict(self) -> dict:
        return {"names": list(self.names), "tags": {name: asdict(tag) for name, tag in self.tags.items()}}
