# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

from .config import CFG


def get_logger(name: str, show_time: bool = False) -> logging.Logger:
    """
    Return the logger `name` writing xzip diagnostics to stderr.

    Progress lines of the journal are printed to stdout, while warnings about
    skipped files, command failures and debug traces go through this logger,
    so the two never mix.

    Calling the function again for the same name replaces the handler attached
    by the previous call instead of adding another one, so every message
    is printed exactly once and the latest `show_time` applies.

    Setting the `XZIP_DEBUG` environment variable enables debug messages and timestamps.

    Args:
        name (str): Name of the logger, usually `__name__` of the calling module.
        show_time (bool): Whether to prefix the messages with the current time.

    Returns:
        logging.Logger: The configured logger.
    """
    logger = logging.getLogger(name)

    debug_mode = _debug_mode()
    level = logging.DEBUG if debug_mode else logging.INFO
    logger.setLevel(level)

    for handler in [h for h in logger.handlers if isinstance(h, RichHandler)]:
        logger.removeHandler(handler)

    logger.addHandler(_make_handler(level, show_time or debug_mode))
    logger.propagate = False

    return logger


def _debug_mode() -> bool:
    return os.environ.get(CFG.env_vars.debug_mode) is not None


def _make_handler(level: int, show_time: bool) -> RichHandler:
    handler = RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=True,
        show_path=False,
        show_level=True,
        show_time=show_time,
        log_time_format=CFG.date_formats.standard,
        tracebacks_width=None,
        tracebacks_code_width=None,
    )
    handler.setLevel(level)
    return handler
