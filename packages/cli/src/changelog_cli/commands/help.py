"""help command — print the one-line usage."""

from __future__ import annotations

import click


@click.command("help")
def help_cmd():
    """Show how to run the generator."""
    from changelog_cli.cli import PROG_NAME

    click.echo(f"> {PROG_NAME} generate")
