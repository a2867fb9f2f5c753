"""CLI entry point for changelog-generator.

Commands:
  generate (-g)  — write CHANGELOG.md from the tagged merge history
  help (-h)      — print usage
"""

from __future__ import annotations

import logging

import click
import yaml
from rich.console import Console
from rich.logging import RichHandler

from changelog_cli.commands.generate import generate_cmd
from changelog_cli.commands.help import help_cmd
from changelog_cli.errors import ChangelogUsageError

PROG_NAME = "changelog-generator"

COMMAND_ALIASES = {
    "-g": "generate",
    "-h": "help",
}


class AliasedGroup(click.Group):
    """Group that accepts short flag aliases in place of the command name.

    Unknown commands exit with status 1 like every other usage error.
    """

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        if args and args[0] in COMMAND_ALIASES:
            args = [COMMAND_ALIASES[args[0]], *args[1:]]
        return super().parse_args(ctx, args)

    def resolve_command(self, ctx: click.Context, args: list[str]):
        if self.get_command(ctx, args[0]) is None:
            raise ChangelogUsageError(f"Unsupported command: {args[0]!r}", ctx=ctx)
        return super().resolve_command(ctx, args)


def _configure_logging(level_name: str) -> None:
    level = logging.getLevelName(str(level_name).upper())
    if not isinstance(level, int):
        raise ChangelogUsageError(f"Invalid log_level in configuration: {level_name!r}")
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


@click.group(
    PROG_NAME,
    cls=AliasedGroup,
    invoke_without_command=True,
    context_settings={"ignore_unknown_options": True},
)
@click.pass_context
def main(ctx: click.Context):
    """Generate a Markdown changelog from tagged GitHub pull-request merges."""
    from changelog_core.config import load_config

    if ctx.invoked_subcommand is None:
        raise ChangelogUsageError("Missing mandatory parameters", ctx=ctx)

    if ctx.invoked_subcommand == "help":
        return

    ctx.ensure_object(dict)

    try:
        config = load_config()
    except yaml.YAMLError as exc:
        raise click.ClickException(f"Could not read configuration: {exc}") from exc

    _configure_logging(config.get("log_level", "WARNING"))
    ctx.obj["config"] = config


main.add_command(generate_cmd)
main.add_command(help_cmd)
