# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import signal
import sys
from pathlib import Path
from threading import Event
from typing import NoReturn

import click
from click_option_group import optgroup

from xzip_lib.core.click_format import GNUHelpColorsCommand
from xzip_lib.core.common import yes_or_no_prompt
from xzip_lib.core.config import CFG
from xzip_lib.core.error import XZCancelledError, XZError
from xzip_lib.core.logger import get_logger
from xzip_lib.journal import Journal
from xzip_lib.media import MediaGate
from xzip_lib.render import LAYOUTS, LogImageRenderer

from .archiver import Archiver
from .events import ArchiveRequest, ArchiveResult
from .observers import Broadcast, Throttle

logger = get_logger(__name__)


@click.command(
    short_help="Compress a directory into a ZIP archive.",
    help=f"""Compress a directory into a ZIP archive.

{click.style("SOURCE", fg="green")}   The directory to compress. Optional.

If SOURCE is not specified, `{CFG.binary_name} archive` compresses '{CFG.defaults.source_dir}'.
Every regular file below SOURCE is stored under its path relative to SOURCE.
By default, the first file that cannot be read stops the run and symbolic links are skipped.

The progress can additionally be saved as a PNG image using the `--image` option.
When `--wait-for-media` is used, the run only starts after removable media are mounted.
When `--confirm` is used, you are asked for confirmation before the run starts.""",
    cls=GNUHelpColorsCommand,
    help_options_color="bright_blue",
)
@click.argument(
    "source",
    type=click.Path(path_type=Path),
    metavar=click.style("SOURCE", fg="green"),
    required=False,
    default=None,
)
@optgroup.group(f"{click.style('Archive settings', fg='yellow')}")
@optgroup.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help=f"Path to the archive to create. Defaults to '{CFG.defaults.destination}'.",
)
@optgroup.option(
    "--compression",
    type=click.Choice(["deflate", "stored"]),
    default=None,
    help=f"Compression method of the archive entries. Defaults to '{CFG.archiver.compression}'.",
)
@optgroup.option(
    "--keep-going",
    is_flag=True,
    help="Continue with the remaining files when a file cannot be archived.",
)
@optgroup.option(
    "--follow-symlinks",
    is_flag=True,
    help="Archive the targets of symbolic links instead of skipping the links.",
)
@optgroup.option(
    "--delay",
    type=click.FloatRange(min=0),
    default=0.0,
    help="Time in seconds to wait before archiving each file.",
)
@optgroup.group(f"{click.style('Log image', fg='yellow')}")
@optgroup.option(
    "--image",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Save the progress log as a PNG image to this path.",
)
@optgroup.option(
    "--image-layout",
    type=click.Choice(LAYOUTS),
    default=None,
    help=f"Layout of the log image. Defaults to '{CFG.renderer.layout}'.",
)
@optgroup.group(f"{click.style('Preconditions', fg='yellow')}")
@optgroup.option(
    "--wait-for-media",
    is_flag=True,
    help="Wait until removable media are mounted before starting.",
)
@optgroup.option(
    "--mount",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help=f"Directory under which removable media are mounted. Defaults to '{CFG.media.mount_path}'.",
)
@optgroup.option(
    "--confirm",
    is_flag=True,
    help="Ask for confirmation before starting.",
)
def archive(
    source: Path | None,
    output: Path | None,
    compression: str | None,
    keep_going: bool,
    follow_symlinks: bool,
    delay: float,
    image: Path | None,
    image_layout: str | None,
    wait_for_media: bool,
    mount: Path | None,
    confirm: bool,
) -> NoReturn:
    """
    Compress a directory into a ZIP archive.
    """
    journal = Journal()
    try:
        if wait_for_media:
            _wait_for_media(journal, mount)

        if confirm and not yes_or_no_prompt("Do you want to start the backup?"):
            journal.err("Operation aborted.")
            sys.exit(0)

        request = ArchiveRequest(
            source or Path(CFG.defaults.source_dir),
            output or Path(CFG.defaults.destination),
        )
        result = _archive_directory(
            request,
            journal,
            delay,
            compression=compression,
            follow_symlinks=follow_symlinks or None,
            fail_fast=False if keep_going else None,
        )
        exit_code = _report(journal, request, result)
    except XZError as e:
        journal.err(str(e))
        exit_code = e.exit_code
    except Exception as e:
        logger.critical(e, exc_info=True, stack_info=True)
        sys.exit(CFG.exit_codes.unexpected_error)

    if image:
        _save_image(journal, image, image_layout)

    sys.exit(exit_code)


def _wait_for_media(journal: Journal, mount: Path | None) -> None:
    """
    Block until removable media are mounted.
    """
    gate = MediaGate(mount)
    journal.info(f"Waiting for media in '{gate.mount_path}'...")
    gate.wait()
    journal.ok("Media detected.")


def _archive_directory(
    request: ArchiveRequest,
    journal: Journal,
    delay: float,
    **options,
) -> ArchiveResult:
    """
    Run the Archiver with the journal as its observer.

    Pressing Ctrl+C during the run stops it after the entry currently being written.

    Args:
        request (ArchiveRequest): The directory to archive and the archive to create.
        journal (Journal): Journal receiving the progress events.
        delay (float): Time in seconds to wait before archiving each file.
        **options: Additional options for the Archiver.

    Returns:
        ArchiveResult: The outcome of the run.

    Raises:
        XZNotFoundError: If the source directory does not exist.
        XZCreateError: If the archive cannot be created.
    """
    observer = Broadcast(journal)
    if delay > 0:
        observer.add(Throttle(delay))

    cancel = Event()
    archiver = Archiver(request, observer, cancel=cancel, **options)

    journal.info(f"Compressing '{request.source_root}'...")
    previous = signal.signal(signal.SIGINT, lambda *_: cancel.set())
    try:
        return archiver.archive()
    finally:
        signal.signal(signal.SIGINT, previous)


def _report(journal: Journal, request: ArchiveRequest, result: ArchiveResult) -> int:
    """
    Print the outcome of the run and return the corresponding exit code.
    """
    if result.ok:
        journal.ok(
            f"All files saved in '{request.destination}' ({result.entries_written} entries)."
        )
        return 0

    # with --keep-going, the run may be cancelled after some entries already failed
    cancelled = [e for e in result.errors if isinstance(e, XZCancelledError)]
    failures = [e for e in result.errors if not isinstance(e, XZCancelledError)]

    if failures:
        journal.err(
            f"Archiving failed with {len(failures)} error(s). "
            f"{result.entries_written} entries written to '{request.destination}'."
        )
    if cancelled:
        journal.err(str(cancelled[0]))
        return cancelled[0].exit_code
    return failures[0].exit_code


def _save_image(journal: Journal, image: Path, layout: str | None) -> None:
    """
    Render the journal into an image. Failures are reported but not raised.
    """
    try:
        LogImageRenderer(layout=layout).render(journal.lines, image)
        journal.ok(f"Log image saved in '{image}'.")
    except XZError as e:
        journal.err(str(e))
