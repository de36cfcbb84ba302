# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from dataclasses import replace
from unittest.mock import patch

import pytest
from PIL import Image

from xzip_lib.core.config import CFG
from xzip_lib.core.error import XZError
from xzip_lib.journal import LogLine, Severity
from xzip_lib.render import LogImageRenderer

LINES = [
    LogLine(Severity.INFO, "Compressing: a.txt"),
    LogLine(Severity.OK, "a.txt done"),
    LogLine(Severity.ERR, "Could not archive 'b.txt'."),
]


def _settings(**kwargs):
    # missing font exercises the fallback to the default font
    return replace(CFG.renderer, font_path="/nonexistent/font.ttf", **kwargs)


def test_renderer_unsupported_layout_raises():
    with pytest.raises(XZError, match="Unsupported image layout"):
        LogImageRenderer(layout="spiral")


def test_renderer_layout_argument_overrides_settings():
    renderer = LogImageRenderer(_settings(layout="text"), layout="bars")
    assert renderer._layout == "bars"


def test_renderer_text_layout_has_fixed_size(tmp_path):
    output = tmp_path / "log.png"

    LogImageRenderer(_settings(), layout="text").render(LINES, output)

    with Image.open(output) as image:
        assert image.format == "PNG"
        assert image.size == (CFG.renderer.width, CFG.renderer.height)
        # background stays black
        assert image.convert("RGB").getpixel((image.width - 1, image.height - 1)) == (
            0,
            0,
            0,
        )


def test_renderer_text_layout_uses_severity_colors():
    renderer = LogImageRenderer(_settings(), layout="text")
    lines = LINES + [LogLine(Severity.INFO, "Finished")]

    with patch("xzip_lib.render.renderer.ImageDraw.Draw") as mock_draw:
        renderer._renderText(lines)

    calls = mock_draw.return_value.text.call_args_list
    assert [call.args[1] for call in calls] == [str(line) for line in lines]
    assert [call.kwargs["fill"] for call in calls] == [
        tuple(CFG.renderer.info_color),
        tuple(CFG.renderer.ok_color),
        tuple(CFG.renderer.err_color),
        tuple(CFG.renderer.info_color),
    ]
    assert [call.args[0] for call in calls] == [(10, 10), (10, 30), (10, 50), (10, 70)]


def test_renderer_text_layout_drops_lines_that_do_not_fit():
    settings = _settings(height=100, padding=10, row_height=20)
    renderer = LogImageRenderer(settings, layout="text")
    lines = [LogLine(Severity.INFO, f"line {i}") for i in range(50)]

    with patch("xzip_lib.render.renderer.ImageDraw.Draw") as mock_draw:
        renderer._renderText(lines)

    # rows start at 10, 30, 50, 70 and 90; the row after that leaves the canvas
    assert mock_draw.return_value.text.call_count == 5


def test_renderer_bars_layout_grows_with_lines(tmp_path):
    output = tmp_path / "log.png"
    settings = _settings(row_height=20, width=200, padding=10)

    LogImageRenderer(settings, layout="bars").render(LINES, output)

    with Image.open(output) as image:
        image = image.convert("RGB")
        assert image.size == (200, 20 * len(LINES) + 40)
        assert image.getpixel((0, 0)) == (255, 255, 255)
        assert image.getpixel((100, 20)) == tuple(settings.info_color)
        assert image.getpixel((100, 40)) == tuple(settings.ok_color)
        assert image.getpixel((100, 60)) == tuple(settings.err_color)
        # bars leave the padding empty
        assert image.getpixel((5, 20)) == (255, 255, 255)


def test_renderer_bars_layout_empty_journal(tmp_path):
    output = tmp_path / "log.png"

    LogImageRenderer(_settings(), layout="bars").render([], output)

    with Image.open(output) as image:
        assert image.size == (CFG.renderer.width, 2 * CFG.renderer.row_height)


def test_renderer_font_fallback_logs_warning():
    renderer = LogImageRenderer(_settings())

    with patch("xzip_lib.render.renderer.logger.warning") as mock_warning:
        font = renderer._loadFont()

    assert font is not None
    mock_warning.assert_called_once()
    assert "Using the default font" in mock_warning.call_args.args[0]


def test_renderer_unwritable_output_raises(tmp_path):
    output = tmp_path / "missing" / "log.png"

    with pytest.raises(XZError, match="Could not save log image"):
        LogImageRenderer(_settings()).render(LINES, output)
