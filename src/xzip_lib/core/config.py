# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Configuration system for xzip.

This module defines dataclasses representing all configurable aspects of xzip,
including environment variables, archiver behavior, journal styles, log-image
rendering, removable-media polling, default paths, and exit codes.

The `Config` class loads user configuration from a TOML file (if available)
and provides a globally accessible `CFG` instance.
"""

import os
import tomllib
from dataclasses import dataclass, field, fields, is_dataclass
from pathlib import Path
from typing import Any, Self


@dataclass
class EnvironmentVariables:
    """Environment variable names used by xzip."""

    # Enables xzip debug mode.
    debug_mode: str = "XZIP_DEBUG"
    # Explicit path to the xzip configuration file.
    config: str = "XZIP_CONFIG"


@dataclass
class ArchiverSettings:
    """Settings for Archiver operations."""

    # Compression method of the archive entries ('deflate' or 'stored').
    compression: str = "deflate"
    # Compression level used with 'deflate' (0-9).
    compress_level: int = 6
    # Follow symbolic links instead of skipping them.
    follow_symlinks: bool = False
    # Stop the walk at the first failed entry.
    fail_fast: bool = True


@dataclass
class JournalSettings:
    """Settings for the progress journal."""

    # Maximal number of lines kept for the log image. If not set, all lines are kept.
    max_lines: int | None = 30
    # Prefix of informational lines.
    info_prefix: str = "[INFO] "
    # Prefix of success lines.
    ok_prefix: str = "[OK]   "
    # Prefix of error lines.
    err_prefix: str = "[ERR]  "
    # Style used for informational lines.
    info_style: str = "yellow"
    # Style used for success lines.
    ok_style: str = "green"
    # Style used for error lines.
    err_style: str = "red"


@dataclass
class RendererSettings:
    """Settings for the log-image renderer."""

    # Layout of the image ('text' or 'bars').
    layout: str = "text"
    # Width of the image in pixels.
    width: int = 800
    # Height of the image in pixels. Only used by the 'text' layout.
    height: int = 600
    # Distance (in pixels) between the border of the image and the first line.
    padding: int = 10
    # Height (in pixels) of a single line.
    row_height: int = 20
    # Path to the TrueType font used by the 'text' layout.
    font_path: str = "/usr/share/fonts/truetype/dejavu/DejaVuSansMono.ttf"
    # Size of the font used by the 'text' layout.
    font_size: int = 16
    # RGB color of informational lines.
    info_color: tuple[int, int, int] = (255, 255, 0)
    # RGB color of success lines.
    ok_color: tuple[int, int, int] = (0, 255, 0)
    # RGB color of error lines.
    err_color: tuple[int, int, int] = (255, 0, 0)


@dataclass
class MediaSettings:
    """Settings for the removable-media gate."""

    # Directory under which removable media are mounted.
    mount_path: str = "/media"
    # Interval (in seconds) between successive checks of the mount directory.
    interval: float = 2.0


@dataclass
class DefaultPaths:
    """Paths used when none are provided on the command line."""

    # Directory to archive.
    source_dir: str = "x-tool"
    # Archive to create.
    destination: str = "data.zip"


@dataclass
class DateFormats:
    """Date and time format strings."""

    # Standard date format used by xzip.
    standard: str = "%Y-%m-%d %H:%M:%S"


@dataclass
class ExitCodes:
    """Exit codes used for various errors."""

    # Default error code for failures of xzip commands.
    default: int = 91
    # Returned when the archiving run is cancelled.
    cancelled: int = 92
    # Returned on an unexpected or unhandled error.
    unexpected_error: int = 99


@dataclass
class Config:
    """Main configuration for xzip."""

    env_vars: EnvironmentVariables = field(default_factory=EnvironmentVariables)
    archiver: ArchiverSettings = field(default_factory=ArchiverSettings)
    journal: JournalSettings = field(default_factory=JournalSettings)
    renderer: RendererSettings = field(default_factory=RendererSettings)
    media: MediaSettings = field(default_factory=MediaSettings)
    defaults: DefaultPaths = field(default_factory=DefaultPaths)
    date_formats: DateFormats = field(default_factory=DateFormats)
    exit_codes: ExitCodes = field(default_factory=ExitCodes)

    # Name of the xzip binary.
    binary_name: str = "xzip"

    @classmethod
    def load(cls, config_path: Path | None = None) -> Self:
        """
        Load configuration from TOML file or use defaults.

        Args:
            config_path: Explicit path to config file. If None, searches standard locations.

        Returns:
            Config instance with loaded or default values.
        """
        if config_path is None:
            config_path = Config._get_config_path()

        try:
            if config_path and config_path.exists():
                with config_path.open("rb") as f:
                    config_data = tomllib.load(f)
                return _dict_to_dataclass(cls, config_data)
        except Exception as e:
            raise ValueError(f"Could not read xzip config '{config_path}': {e}.")

        # no config found - use defaults
        return cls()

    @staticmethod
    def _get_config_path() -> Path | None:
        """
        Search for config file in standard locations (XDG compliant).
        Returns the first existing config file, or None.
        """
        config_locations: list[Path | None] = [
            # 1. Explicit environment variable (highest priority)
            Path(env_path)
            if (env_path := os.getenv(EnvironmentVariables.config))
            else None,
            # 2. Current working directory (for development/override)
            Path.cwd() / "xzip_config.toml",
            # 3. XDG config home (standard user config location)
            Path(os.getenv("XDG_CONFIG_HOME", Path.home() / ".config"))
            / "xzip"
            / "config.toml",
        ]

        for path in config_locations:
            if path and path.is_file():
                return path

        return None


def _dict_to_dataclass(cls, data: dict[str, Any]):
    """
    Recursively convert a dictionary to a dataclass instance.
    Handles nested dataclasses properly.
    """
    if not is_dataclass(cls):
        return data

    field_values = {}
    for field_info in fields(cls):
        field_name = field_info.name
        field_type = field_info.type

        if field_name in data:
            value = data[field_name]
            if is_dataclass(field_type) and isinstance(value, dict):
                field_values[field_name] = _dict_to_dataclass(field_type, value)
            elif isinstance(value, list) and isinstance(
                getattr(cls, field_name, None), tuple
            ):
                # TOML has no tuples, colors are read as arrays
                field_values[field_name] = tuple(value)
            else:
                field_values[field_name] = value

    return cls(**field_values)


# Global configuration for xzip.
CFG = Config.load()
