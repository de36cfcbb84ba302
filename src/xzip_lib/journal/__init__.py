# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Colored progress output.

This module provides the `Journal` class, which prints informational, success,
and error lines in distinct colors and keeps the most recent lines so that they
can be rendered into an image after the run.
"""

from .journal import Journal, LogLine, Severity

__all__ = [
    "Journal",
    "LogLine",
    "Severity",
]
