# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
General utility functions for the xzip library.

This module provides the yes/no prompt and archive entry naming,
and formats sizes and file names for printing.
"""

import os
from pathlib import Path

import readchar
from rich.live import Live
from rich.text import Text

from .error import XZError


_SIZE_UNITS = ["B", "kB", "MB", "GB", "TB"]


def yes_or_no_prompt(prompt: str) -> bool:
    """
    Display an interactive yes/no prompt to the user and return the selection.

    The prompt highlights the pressed key ('y' in green for yes, 'N' in red for no)
    and defaults to 'No' if the user presses any key other than 'y'.

    Args:
        prompt (str): The text to display as the question.

    Returns:
        bool: True if the user selects 'yes' (presses 'y'), False otherwise.
    """
    prompt = f"   {prompt} "
    text = (
        Text("PROMPT", style="magenta")
        + Text(prompt, style="default")
        + Text("[y/N]", style="bold default")
    )

    with Live(text, refresh_per_second=1) as live:
        key = readchar.readkey().lower()

        # highlight the pressed key
        if key == "y":
            choice = (
                Text("[", style="bold default")
                + Text("y", style="bold green")
                + Text("/N]", style="bold default")
            )
        else:
            choice = (
                Text("[y/", style="bold default")
                + Text("N", style="bold red")
                + Text("]", style="bold default")
            )

        live.update(
            Text("PROMPT", style="magenta") + Text(prompt, style="default") + choice
        )

    return key == "y"


def to_archive_name(file: Path, root: Path) -> str:
    """
    Convert a path located inside `root` into the name of an archive entry.

    The name is relative to `root`, uses forward slashes regardless of the platform,
    and never contains '..' segments. The paths are compared component-wise
    without resolving them, so symbolic links keep the name under which they were found.

    Args:
        file (Path): Path to a file inside `root`.
        root (Path): The directory against which the name is constructed.

    Returns:
        str: The forward-slash separated name of the entry.

    Raises:
        XZError: If `file` is not located within `root`.
    """
    file_parts = file.parts
    root_parts = root.parts

    # file must start with the root path
    if file_parts[: len(root_parts)] != root_parts or len(file_parts) == len(
        root_parts
    ):
        raise XZError(f"Item '{file}' is not in directory '{root}'.")

    relative = file_parts[len(root_parts) :]
    if ".." in relative:
        raise XZError(f"Item '{file}' escapes directory '{root}'.")

    return "/".join(relative)


def format_size(size: int) -> str:
    """
    Format a number of bytes as a human-readable string.

    Args:
        size (int): Number of bytes.

    Returns:
        str: The size using the largest unit that keeps the value at least 1 (e.g., '1.5 kB').
    """
    value = float(size)
    for unit in _SIZE_UNITS:
        if value < 1024 or unit == _SIZE_UNITS[-1]:
            break
        value /= 1024

    if unit == "B":
        return f"{size} B"
    return f"{value:.1f} {unit}"


def printable_name(name: str) -> str:
    """
    Return `name` with every byte that is not valid UTF-8 shown as an escape sequence.

    File names on POSIX systems may contain arbitrary bytes, which Python represents
    using surrogate characters. Such characters cannot be written to the terminal.

    Args:
        name (str): Name of a file or an archive entry.

    Returns:
        str: The name, safe to print (e.g., 'b\\xff.txt').
    """
    return os.fsencode(name).decode("utf-8", "backslashreplace")
