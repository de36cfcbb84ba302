# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import sys

import click

from xzip_lib.archive.cli import archive
from xzip_lib.core.click_format import GNUHelpColorsGroup
from xzip_lib.media.cli import wait

__version__ = "0.1.0"

# support both --help and -h
_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


@click.group(
    cls=GNUHelpColorsGroup,
    help_options_color="bright_blue",
    invoke_without_command=True,
    context_settings=_CONTEXT_SETTINGS,
)
@click.option(
    "--version",
    is_flag=True,
    help="Print the current version of xzip and exit.",
)
@click.pass_context
def cli(ctx: click.Context, version: bool):
    """
    Run any xzip command.

    xzip compresses a directory into a ZIP archive while printing colored progress,
    optionally waiting for removable media and saving the progress log as an image.
    """
    if version:
        print(__version__)
        sys.exit(0)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        sys.exit(0)


cli.add_command(archive)
cli.add_command(wait)
