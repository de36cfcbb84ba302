# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Core implementation of the xzip command-line tool.

This package provides the internal logic behind xzip: the Archiver packing
a directory tree into a ZIP archive, the journal printing colored progress,
the renderer saving the progress as an image, and the gate waiting for
removable media. All xzip CLI commands ultimately delegate to the
functionality implemented here.
"""

from .xzip import __version__, cli

__all__ = [
    "__version__",
    "cli",
    "archive",
    "core",
    "journal",
    "media",
    "render",
]
