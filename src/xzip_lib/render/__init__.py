# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Rendering of the progress journal into an image.

This module provides the `LogImageRenderer` class, which saves the lines
collected by a `Journal` as a PNG snapshot, colored by severity.
"""

from .renderer import LAYOUTS, LogImageRenderer

__all__ = [
    "LAYOUTS",
    "LogImageRenderer",
]
