from __future__ import annotations

import click


class ChangelogUsageError(click.UsageError):
    """Usage error that exits with status 1 instead of click's default 2."""

    exit_code = 1
