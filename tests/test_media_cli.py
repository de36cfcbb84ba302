# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from unittest.mock import patch

from click.testing import CliRunner

from xzip_lib.core.config import CFG
from xzip_lib.core.error import XZError
from xzip_lib.media.cli import wait


def test_wait_command_media_present(tmp_path):
    (tmp_path / "USB_DRIVE").mkdir()

    result = CliRunner().invoke(wait, ["--mount", str(tmp_path)])

    assert result.exit_code == 0


def test_wait_command_passes_options_to_gate(tmp_path):
    with patch("xzip_lib.media.cli.MediaGate") as mock_gate:
        result = CliRunner().invoke(
            wait,
            ["--mount", str(tmp_path), "--interval", "0.5", "--timeout", "10"],
        )

    assert result.exit_code == 0
    mock_gate.assert_called_once_with(tmp_path, 0.5)
    mock_gate.return_value.wait.assert_called_once_with(10.0)


def test_wait_command_defaults(tmp_path):
    with patch("xzip_lib.media.cli.MediaGate") as mock_gate:
        CliRunner().invoke(wait, [])

    mock_gate.assert_called_once_with(None, None)
    mock_gate.return_value.wait.assert_called_once_with(None)


def test_wait_command_timeout(tmp_path):
    with (
        patch("xzip_lib.media.cli.MediaGate") as mock_gate,
        patch("xzip_lib.media.cli.logger.error") as mock_error,
    ):
        mock_gate.return_value.wait.side_effect = XZError("No media mounted")
        result = CliRunner().invoke(wait, ["--mount", str(tmp_path), "--timeout", "1"])

    assert result.exit_code == CFG.exit_codes.default
    mock_error.assert_called_once()


def test_wait_command_unexpected_error(tmp_path):
    with (
        patch("xzip_lib.media.cli.MediaGate", side_effect=RuntimeError("boom")),
        patch("xzip_lib.media.cli.logger.critical") as mock_critical,
    ):
        result = CliRunner().invoke(wait, [])

    assert result.exit_code == CFG.exit_codes.unexpected_error
    mock_critical.assert_called_once()


def test_wait_command_rejects_negative_interval():
    result = CliRunner().invoke(wait, ["--interval", "-1"])
    assert result.exit_code == 2
