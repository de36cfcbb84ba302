# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import os
import zipfile
from collections.abc import Iterator
from pathlib import Path
from threading import Event

from xzip_lib.core.common import to_archive_name
from xzip_lib.core.config import CFG
from xzip_lib.core.error import (
    XZCancelledError,
    XZCreateError,
    XZError,
    XZIOError,
    XZNotFoundError,
)
from xzip_lib.core.logger import get_logger

from .events import (
    ArchiveEntry,
    ArchiveRequest,
    ArchiveResult,
    Phase,
    ProgressEvent,
    ProgressObserver,
)

logger = get_logger(__name__)

_COMPRESSION_METHODS = {
    "deflate": zipfile.ZIP_DEFLATED,
    "stored": zipfile.ZIP_STORED,
}


class Archiver:
    """
    Packs every regular file of a directory tree into a ZIP archive.
    """

    def __init__(
        self,
        request: ArchiveRequest,
        on_progress: ProgressObserver | None = None,
        compression: str | None = None,
        compress_level: int | None = None,
        follow_symlinks: bool | None = None,
        fail_fast: bool | None = None,
        cancel: Event | None = None,
    ):
        """
        Initialize the Archiver.

        Options that are not provided are taken from the `archiver` section of the configuration.

        Args:
            request (ArchiveRequest): The directory to archive and the archive to create.
            on_progress (ProgressObserver | None): Callable receiving a `ProgressEvent`
                for every processed entry.
            compression (str | None): Compression method of the entries ('deflate' or 'stored').
            compress_level (int | None): Compression level used with 'deflate'.
            follow_symlinks (bool | None): Whether to follow symbolic links or skip them.
            fail_fast (bool | None): Whether to stop the walk at the first failed entry.
            cancel (Event | None): Event that stops the run when set. Checked between entries.

        Raises:
            XZError: If the compression method is not supported.
        """
        self._request = request
        self._on_progress = on_progress
        self._cancel = cancel

        method = compression or CFG.archiver.compression
        if method not in _COMPRESSION_METHODS:
            raise XZError(
                f"Unsupported compression method '{method}'. Supported methods: {', '.join(_COMPRESSION_METHODS)}."
            )
        self._compression = _COMPRESSION_METHODS[method]
        self._compress_level = (
            compress_level
            if compress_level is not None
            else CFG.archiver.compress_level
        )
        self._follow_symlinks = (
            follow_symlinks
            if follow_symlinks is not None
            else CFG.archiver.follow_symlinks
        )
        self._fail_fast = fail_fast if fail_fast is not None else CFG.archiver.fail_fast

    def archive(self) -> ArchiveResult:
        """
        Write all regular files below the source directory into the destination archive.

        Entries are named by their path relative to the source directory and
        are written in lexical walk order. Directories are traversed but do not
        produce entries of their own. The archive is finalized on every exit path,
        so a run that stops early still leaves a readable archive.

        Failures of individual entries are not raised. They are reported to the observer
        and collected in the returned result. Unless the Archiver is configured
        to continue after failures, the first failure stops the walk.

        Returns:
            ArchiveResult: Number of written entries and the encountered failures.

        Raises:
            XZNotFoundError: If the source directory does not exist or is not a directory.
            XZCreateError: If the destination archive cannot be created.
        """
        source = self._request.source_root
        self._ensureSource()

        result = ArchiveResult()
        with self._openArchive() as zf:
            destination = self._identity(self._request.destination)
            logger.debug(f"Archiving '{source}' into '{self._request.destination}'.")

            for path, walk_error in self._walk(source, {self._identity(source)}):
                if self._cancel and self._cancel.is_set():
                    logger.debug("Archiving cancelled.")
                    result.errors.append(
                        XZCancelledError(
                            f"Archiving cancelled after writing {result.entries_written} entries."
                        )
                    )
                    break

                # only the source directory itself can fail with its own path
                entry = ArchiveEntry(
                    "." if path == source else to_archive_name(path, source)
                )

                if walk_error:
                    error = XZIOError(path, walk_error)
                    self._emit(entry, Phase.FAILED, error)
                    result.errors.append(error)
                    if self._fail_fast:
                        break
                    continue

                try:
                    stat = path.stat()
                except OSError as e:
                    error = XZIOError(path, e)
                    self._emit(entry, Phase.FAILED, error)
                    result.errors.append(error)
                    if self._fail_fast:
                        break
                    continue

                # never pack the archive into itself
                if (stat.st_dev, stat.st_ino) == destination:
                    logger.debug(f"Skipping the archive itself ('{path}').")
                    continue

                entry = ArchiveEntry(entry.relative_path, stat.st_size)
                self._emit(entry, Phase.STARTED)
                try:
                    self._writeEntry(zf, path, entry.relative_path)
                # ValueError: entry name that cannot be encoded in the archive
                except (OSError, ValueError) as e:
                    error = XZIOError(path, e)
                    self._emit(entry, Phase.FAILED, error)
                    result.errors.append(error)
                    if self._fail_fast:
                        break
                    continue

                result.entries_written += 1
                self._emit(entry, Phase.COMPLETED)

        logger.debug(
            f"Archived {result.entries_written} entries with {len(result.errors)} errors."
        )
        return result

    def _ensureSource(self) -> None:
        """
        Check that the source directory exists.

        Raises:
            XZNotFoundError: If the source directory does not exist or is not a directory.
        """
        source = self._request.source_root
        if not source.exists():
            raise XZNotFoundError(f"Source directory '{source}' does not exist.")
        if not source.is_dir():
            raise XZNotFoundError(f"Source '{source}' is not a directory.")

    def _openArchive(self) -> zipfile.ZipFile:
        """
        Create (or truncate) the destination archive.

        Raises:
            XZCreateError: If the archive cannot be opened for writing.
        """
        destination = self._request.destination
        try:
            return zipfile.ZipFile(
                destination,
                "w",
                compression=self._compression,
                compresslevel=self._compress_level,
                strict_timestamps=False,
            )
        except OSError as e:
            raise XZCreateError(
                f"Could not create archive '{destination}': {e}."
            ) from e

    def _walk(
        self, directory: Path, ancestors: set[tuple[int, int]]
    ) -> Iterator[tuple[Path, OSError | None]]:
        """
        Recursively enumerate files below `directory` in lexical order.

        Args:
            directory (Path): The directory to enumerate.
            ancestors (set[tuple[int, int]]): Device and inode numbers of `directory`
                and all directories above it. Used to detect loops of symbolic links.

        Yields:
            tuple[Path, OSError | None]: Path to a regular file and None, or path
                to an entry that could not be inspected and the error.
        """
        try:
            with os.scandir(directory) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError as e:
            yield directory, e
            return

        for item in entries:
            path = Path(item.path)
            try:
                if item.is_symlink() and not self._follow_symlinks:
                    logger.warning(f"Skipping symbolic link '{path}'.")
                    continue

                if item.is_dir():
                    stat = item.stat()
                    key = (stat.st_dev, stat.st_ino)
                    if key in ancestors:
                        logger.warning(f"Skipping '{path}': symbolic link loop.")
                        continue
                    yield from self._walk(path, ancestors | {key})
                    continue

                is_file = item.is_file()
            except OSError as e:
                yield path, e
                continue

            if is_file:
                yield path, None
            else:
                logger.warning(f"Skipping '{path}': not a regular file.")

    def _writeEntry(self, zf: zipfile.ZipFile, path: Path, name: str) -> None:
        """
        Stream the content of a source file into a new archive entry.

        Raises:
            OSError: If the file cannot be read or the entry cannot be written.
            ValueError: If the name contains characters that cannot be stored in the archive.
        """
        zf.write(path, name)

    def _emit(self, entry: ArchiveEntry, phase: Phase, error: XZError | None = None):
        logger.debug(f"Entry '{entry.relative_path}' {phase}.")
        if self._on_progress:
            self._on_progress(ProgressEvent(entry, phase, error))

    @staticmethod
    def _identity(path: Path) -> tuple[int, int] | None:
        """Return the device and inode numbers of a path or None if it cannot be inspected."""
        try:
            stat = path.stat()
        except OSError:
            return None
        return (stat.st_dev, stat.st_ino)
