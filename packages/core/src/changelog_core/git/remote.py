from __future__ import annotations

import re

from changelog_core.errors import ParseError

GITHUB_BASE_URL = "https://github.com"

# https://github.com/org/repo.git, git@github.com:org/repo.git, ssh://git@github.com/org/repo.git
_GITHUB_REMOTE_RE = re.compile(
    r"^(?:https://github\.com/|git@github\.com:|ssh://git@github\.com/)"
    r"(?P<slug>[^/\s]+/[^/\s]+?)(?:\.git)?/?$"
)


def resolve_repository_url(remote_url: str) -> str:
    """Rewrite an HTTPS or SSH GitHub remote into ``https://github.com/<org>/<repo>``."""
    match = _GITHUB_REMOTE_RE.match(remote_url.strip())
    if not match:
        raise ParseError(f"Unrecognised GitHub remote URL: {remote_url.strip()!r}")
    return f"{GITHUB_BASE_URL}/{match.group('slug')}"
