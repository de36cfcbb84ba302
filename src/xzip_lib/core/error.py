# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Exception types used throughout xzip.

This module defines the xzip-specific exceptions: a common recoverable error
and its specializations for a missing source directory, an archive that cannot
be created, I/O failures during the walk, and cancelled runs. Each exception
carries an associated exit code used by xzip commands to report failures
consistently.
"""

import os
from pathlib import Path

from .config import CFG


class XZError(Exception):
    """Common exception type for all recoverable xzip errors."""

    exit_code = CFG.exit_codes.default


class XZNotFoundError(XZError):
    """Raised when the directory to archive does not exist or is not a directory."""

    pass


class XZCreateError(XZError):
    """Raised when the destination archive cannot be opened for writing."""

    pass


class XZIOError(XZError):
    """
    Raised when a source file or directory cannot be read
    or an archive entry cannot be written.

    Attributes:
        path (Path): The path that could not be processed.
        cause (BaseException | None): The underlying error.
    """

    def __init__(self, path: Path, cause: BaseException | None = None):
        self.path = path
        self.cause = cause
        # names that are not valid UTF-8 are shown with escaped bytes
        shown = os.fsencode(path).decode("utf-8", "backslashreplace")
        reason = f": {cause}" if cause else ""
        super().__init__(f"Could not archive '{shown}'{reason}.")


class XZCancelledError(XZError):
    """Raised when an archiving run is cancelled before all entries were written."""

    exit_code = CFG.exit_codes.cancelled
