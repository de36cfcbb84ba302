# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Waiting for removable media.

This module provides the `MediaGate` class, which polls a mount directory
until a device appears in it.
"""

from .gate import MediaGate

__all__ = [
    "MediaGate",
]
