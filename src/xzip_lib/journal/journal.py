# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from collections import deque
from dataclasses import dataclass
from enum import Enum

from rich.console import Console
from rich.text import Text

from xzip_lib.archive.events import Phase, ProgressEvent
from xzip_lib.core.common import format_size, printable_name
from xzip_lib.core.config import CFG


class Severity(Enum):
    """Severity of a journal line."""

    INFO = 1
    OK = 2
    ERR = 3

    @property
    def prefix(self) -> str:
        """Prefix printed in front of lines of this severity."""
        match self:
            case Severity.INFO:
                return CFG.journal.info_prefix
            case Severity.OK:
                return CFG.journal.ok_prefix
            case Severity.ERR:
                return CFG.journal.err_prefix

    @property
    def style(self) -> str:
        """Rich style used for lines of this severity."""
        match self:
            case Severity.INFO:
                return CFG.journal.info_style
            case Severity.OK:
                return CFG.journal.ok_style
            case Severity.ERR:
                return CFG.journal.err_style


@dataclass(frozen=True)
class LogLine:
    """A single line recorded by the journal."""

    severity: Severity
    message: str

    def __str__(self) -> str:
        return f"{self.severity.prefix}{self.message}"


class Journal:
    """
    Prints colored progress lines and keeps them for later use.

    A Journal can be passed to the Archiver as its progress observer.
    Messages from other sources can be added using `info`, `ok`, and `err`.
    Only the last `max_lines` lines are kept.
    """

    def __init__(
        self,
        console: Console | None = None,
        max_lines: int | None = CFG.journal.max_lines,
    ):
        """
        Initialize the Journal.

        Args:
            console (Console | None): Console to print the lines to. Defaults to standard output.
            max_lines (int | None): Maximal number of kept lines. If None, all lines are kept.
        """
        self._console = console or Console()
        self._lines: deque[LogLine] = deque(maxlen=max_lines)

    @property
    def lines(self) -> list[LogLine]:
        """The kept lines, oldest first."""
        return list(self._lines)

    def info(self, message: str) -> None:
        self._add(Severity.INFO, message)

    def ok(self, message: str) -> None:
        self._add(Severity.OK, message)

    def err(self, message: str) -> None:
        self._add(Severity.ERR, message)

    def __call__(self, event: ProgressEvent) -> None:
        """
        Record a progress event reported by the Archiver.
        """
        path = printable_name(event.entry.relative_path)
        match event.phase:
            case Phase.STARTED:
                self.info(
                    f"Compressing: {path} ({format_size(event.entry.size_bytes)})"
                )
            case Phase.COMPLETED:
                self.ok(f"{path} done")
            case Phase.FAILED:
                self.err(str(event.error) if event.error else f"{path} failed")

    def _add(self, severity: Severity, message: str) -> None:
        line = LogLine(severity, message)
        self._lines.append(line)
        self._console.print(
            Text(str(line), style=severity.style), highlight=False, soft_wrap=True
        )
