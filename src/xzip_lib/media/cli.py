# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import sys
from pathlib import Path
from typing import NoReturn

import click

from xzip_lib.core.click_format import GNUHelpColorsCommand
from xzip_lib.core.config import CFG
from xzip_lib.core.error import XZError
from xzip_lib.core.logger import get_logger

from .gate import MediaGate

logger = get_logger(__name__, show_time=True)


@click.command(
    short_help="Wait until removable media are mounted.",
    help=f"""Wait until removable media are mounted.

`{CFG.binary_name} wait` checks the mount directory every few seconds and returns
as soon as the directory contains at least one entry.

By default, the mount directory is '{CFG.media.mount_path}' and it is checked every {CFG.media.interval} seconds.""",
    cls=GNUHelpColorsCommand,
    help_options_color="bright_blue",
)
@click.option(
    "--mount",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory under which removable media are mounted.",
)
@click.option(
    "--interval",
    type=click.FloatRange(min=0),
    default=None,
    help="Time in seconds between successive checks of the mount directory.",
)
@click.option(
    "--timeout",
    type=click.FloatRange(min=0),
    default=None,
    help="Give up after this many seconds. Wait indefinitely if not specified.",
)
def wait(
    mount: Path | None, interval: float | None, timeout: float | None
) -> NoReturn:
    """
    Wait until removable media are mounted.
    """
    try:
        gate = MediaGate(mount, interval)
        logger.info(f"Waiting for media in '{gate.mount_path}'.")
        gate.wait(timeout)
        logger.info("Media detected.")
        sys.exit(0)
    except XZError as e:
        logger.error(e)
        sys.exit(e.exit_code)
    except Exception as e:
        logger.critical(e, exc_info=True, stack_info=True)
        sys.exit(CFG.exit_codes.unexpected_error)
