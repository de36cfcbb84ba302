# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import io
from pathlib import Path

from rich.console import Console

from xzip_lib.archive.events import ArchiveEntry, Phase, ProgressEvent
from xzip_lib.core.config import CFG
from xzip_lib.core.error import XZIOError
from xzip_lib.journal import Journal, LogLine, Severity


def _make_journal(**kwargs) -> tuple[Journal, io.StringIO]:
    buf = io.StringIO()
    console = Console(file=buf, force_terminal=False, width=200)
    return Journal(console, **kwargs), buf


def test_log_line_str_uses_prefix():
    assert str(LogLine(Severity.INFO, "hello")) == f"{CFG.journal.info_prefix}hello"
    assert str(LogLine(Severity.OK, "done")) == f"{CFG.journal.ok_prefix}done"
    assert str(LogLine(Severity.ERR, "boom")) == f"{CFG.journal.err_prefix}boom"


def test_severity_styles_are_distinct():
    styles = {severity.style for severity in Severity}
    assert len(styles) == 3


def test_journal_prints_and_records_lines():
    journal, buf = _make_journal()

    journal.info("Starting")
    journal.ok("Finished")
    journal.err("Failed")

    output = buf.getvalue().splitlines()
    assert output == ["[INFO] Starting", "[OK]   Finished", "[ERR]  Failed"]
    assert [line.severity for line in journal.lines] == [
        Severity.INFO,
        Severity.OK,
        Severity.ERR,
    ]
    assert [line.message for line in journal.lines] == [
        "Starting",
        "Finished",
        "Failed",
    ]


def test_journal_keeps_only_last_lines():
    journal, _ = _make_journal(max_lines=3)

    for i in range(10):
        journal.info(f"line {i}")

    assert [line.message for line in journal.lines] == ["line 7", "line 8", "line 9"]


def test_journal_unbounded():
    journal, _ = _make_journal(max_lines=None)

    for i in range(100):
        journal.info(f"line {i}")

    assert len(journal.lines) == 100


def test_journal_lines_is_a_copy():
    journal, _ = _make_journal()
    journal.info("a")

    journal.lines.clear()

    assert len(journal.lines) == 1


def test_journal_records_progress_events():
    journal, buf = _make_journal()
    entry = ArchiveEntry("sub/b.txt", 2048)
    error = XZIOError(Path("src/sub/b.txt"), PermissionError("Permission denied"))

    journal(ProgressEvent(entry, Phase.STARTED))
    journal(ProgressEvent(entry, Phase.COMPLETED))
    journal(ProgressEvent(entry, Phase.FAILED, error))

    assert [str(line) for line in journal.lines] == [
        "[INFO] Compressing: sub/b.txt (2.0 kB)",
        "[OK]   sub/b.txt done",
        "[ERR]  Could not archive 'src/sub/b.txt': Permission denied.",
    ]
    assert "Compressing: sub/b.txt" in buf.getvalue()


def test_journal_failed_event_without_error():
    journal, _ = _make_journal()

    journal(ProgressEvent(ArchiveEntry("a.txt"), Phase.FAILED))

    assert journal.lines[0].message == "a.txt failed"
