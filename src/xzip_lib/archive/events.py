# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Data types describing an archiving run.

An `ArchiveRequest` names the directory to archive and the archive to create.
While the run is in progress, the Archiver reports every processed file
(`ArchiveEntry`) to an observer as a `ProgressEvent`. The outcome of the run
is summarized by an `ArchiveResult`.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from xzip_lib.core.error import XZError


@dataclass(frozen=True)
class ArchiveRequest:
    """Directory to archive and the path of the archive to create."""

    source_root: Path
    destination: Path


@dataclass(frozen=True)
class ArchiveEntry:
    """
    A single file processed during the walk.

    Attributes:
        relative_path (str): Forward-slash separated path relative to the source root.
        size_bytes (int): Size of the source file in bytes.
    """

    relative_path: str
    size_bytes: int = 0


class Phase(Enum):
    """Stage of processing an archive entry."""

    STARTED = 1
    COMPLETED = 2
    FAILED = 3

    def __str__(self):
        return self.name.lower()


@dataclass(frozen=True)
class ProgressEvent:
    """Notification about the start, completion, or failure of processing one entry."""

    entry: ArchiveEntry
    phase: Phase
    error: XZError | None = None


@dataclass
class ArchiveResult:
    """
    Outcome of an archiving run.

    Attributes:
        entries_written (int): Number of entries written into the archive.
        errors (list[XZError]): All failures encountered, in the order they occurred.
            Contains at most one item unless the run continued after failures.
    """

    entries_written: int = 0
    errors: list[XZError] = field(default_factory=list)

    @property
    def first_error(self) -> XZError | None:
        """The first failure of the run or None if the run succeeded."""
        return self.errors[0] if self.errors else None

    @property
    def ok(self) -> bool:
        return not self.errors

    def raiseFirstError(self) -> None:
        """
        Raise the first failure of the run, if any.

        Raises:
            XZError: The first failure encountered.
        """
        if self.first_error:
            raise self.first_error


# Callable receiving progress events.
ProgressObserver = Callable[[ProgressEvent], None]
