# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from collections.abc import Sequence
from pathlib import Path

from PIL import Image, ImageDraw, ImageFont

from xzip_lib.core.config import CFG, RendererSettings
from xzip_lib.core.error import XZError
from xzip_lib.core.logger import get_logger
from xzip_lib.journal import LogLine, Severity

logger = get_logger(__name__)

LAYOUTS = ("text", "bars")


class LogImageRenderer:
    """
    Renders journal lines into a PNG image.

    Two layouts are supported:
        - 'text': lines are written as colored text onto a black canvas of fixed size;
          lines that do not fit are dropped.
        - 'bars': every line is drawn as a colored bar onto a white canvas
          that grows with the number of lines.
    """

    def __init__(
        self, settings: RendererSettings | None = None, layout: str | None = None
    ):
        """
        Initialize the renderer.

        Args:
            settings (RendererSettings | None): Rendering settings. Defaults to the global configuration.
            layout (str | None): Layout of the image. Overrides the layout from `settings`.

        Raises:
            XZError: If the layout is not supported.
        """
        self._settings = settings or CFG.renderer
        self._layout = layout or self._settings.layout
        if self._layout not in LAYOUTS:
            raise XZError(
                f"Unsupported image layout '{self._layout}'. Supported layouts: {', '.join(LAYOUTS)}."
            )

    def render(self, lines: Sequence[LogLine], output: Path) -> None:
        """
        Render the lines and save the image as PNG.

        Args:
            lines (Sequence[LogLine]): Lines to render, oldest first.
            output (Path): Path to the image to create.

        Raises:
            XZError: If the image cannot be written.
        """
        if self._layout == "text":
            image = self._renderText(lines)
        else:
            image = self._renderBars(lines)

        logger.debug(
            f"Saving {len(lines)} lines as a {image.width}x{image.height} image to '{output}'."
        )
        try:
            image.save(output, format="PNG")
        except (OSError, ValueError) as e:
            raise XZError(f"Could not save log image '{output}': {e}.") from e

    def _renderText(self, lines: Sequence[LogLine]) -> Image.Image:
        s = self._settings
        image = Image.new("RGB", (s.width, s.height), (0, 0, 0))
        draw = ImageDraw.Draw(image)
        font = self._loadFont()

        y = s.padding
        for line in lines:
            draw.text(
                (s.padding, y),
                str(line),
                fill=self._color(line.severity, (255, 255, 255)),
                font=font,
            )
            y += s.row_height
            if y > s.height - s.padding:
                break

        return image

    def _renderBars(self, lines: Sequence[LogLine]) -> Image.Image:
        s = self._settings
        image = Image.new(
            "RGB", (s.width, s.row_height * len(lines) + 2 * s.row_height), (255, 255, 255)
        )
        draw = ImageDraw.Draw(image)

        y = s.row_height
        for line in lines:
            draw.line(
                [(s.padding, y), (s.width - s.padding - 1, y)],
                fill=self._color(line.severity, (0, 0, 0)),
            )
            y += s.row_height

        return image

    def _loadFont(self) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
        """
        Load the configured TrueType font, falling back to the default Pillow font.
        """
        try:
            return ImageFont.truetype(self._settings.font_path, self._settings.font_size)
        except OSError as e:
            logger.warning(
                f"Could not load font '{self._settings.font_path}': {e}. Using the default font."
            )
            return ImageFont.load_default()

    def _color(
        self, severity: Severity, default: tuple[int, int, int]
    ) -> tuple[int, int, int]:
        match severity:
            case Severity.INFO:
                return tuple(self._settings.info_color)
            case Severity.OK:
                return tuple(self._settings.ok_color)
            case Severity.ERR:
                return tuple(self._settings.err_color)
            case _:
                return default
