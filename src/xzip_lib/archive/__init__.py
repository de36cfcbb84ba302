# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Packing directories into ZIP archives.

This module provides the `Archiver` class, which walks a directory tree and
writes every regular file into a ZIP archive under its relative path,
together with the data types describing a run and small observers that
can be composed around it.
"""

from .archiver import Archiver
from .events import (
    ArchiveEntry,
    ArchiveRequest,
    ArchiveResult,
    Phase,
    ProgressEvent,
    ProgressObserver,
)
from .observers import Broadcast, Throttle

__all__ = [
    "Archiver",
    "ArchiveEntry",
    "ArchiveRequest",
    "ArchiveResult",
    "Broadcast",
    "Phase",
    "ProgressEvent",
    "ProgressObserver",
    "Throttle",
]
