"""generate command — write the changelog for the repository in the current directory."""

from __future__ import annotations

import logging
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape

from changelog_cli.errors import ChangelogUsageError
from changelog_core.errors import ChangelogError
from changelog_core.generator import generate_changelog
from changelog_core.git.client import GitClient

console = Console()
logger = logging.getLogger(__name__)


@click.command("generate")
@click.pass_context
def generate_cmd(ctx):
    """Write CHANGELOG.md from the tagged merge history.

    Must run from the repository root. Every merge commit is listed under the
    closest release tag above it, linked to its pull request on GitHub.
    """
    from changelog_core.config import load_config

    config = ctx.obj.get("config") if ctx.obj else None
    if config is None:
        config = load_config()

    if not Path(".git").exists():
        raise ChangelogUsageError("Unable to find git folder", ctx=ctx)

    client = GitClient(remote=config.get("remote", "origin"))

    try:
        result = generate_changelog(client, config)
    except ChangelogError as exc:
        logger.error("%s", exc)
        logger.debug("Changelog generation failed.", exc_info=True)
        raise click.ClickException(str(exc)) from exc

    console.print(
        f"[green]Wrote {escape(str(result.path))}[/green] "
        f"({result.tag_count} tags, {result.entry_count} pull requests)"
    )
