"""
PNG export encoder.

Rasterizes the currently displayed SVG diagram onto a padded, light
background and encodes it as PNG for download.

Dependencies: cairosvg, Pillow, fastapi.concurrency
System role: Diagram export
"""

import io
import logging
import os
import tempfile

import cairosvg
from fastapi.concurrency import run_in_threadpool
from PIL import Image

from visualizer.core.exceptions import EncodeError

logger = logging.getLogger(__name__)

EXPORT_FILENAME = "mermaid-diagram.png"
EXPORT_MEDIA_TYPE = "image/png"
DEFAULT_MARGIN = 20
DEFAULT_BACKGROUND = "#FAFAFA"

NOTHING_TO_EXPORT = "There is no valid diagram to download."
DECODE_FAILED = "Could not load the SVG into an image."
CANVAS_FAILED = "Could not create a canvas element to render the image."


class ExportEncoder:
    """Encode vector markup to PNG bytes."""

    def __init__(
        self,
        margin: int = DEFAULT_MARGIN,
        background: str = DEFAULT_BACKGROUND,
        filename: str = EXPORT_FILENAME,
    ) -> None:
        """
        Initialize export encoder.

        Args:
            margin: Padding added on every side of the image
            background: Fill color of the padded surface
            filename: Download file name
        """
        self.margin = margin
        self.background = background
        self.filename = filename

    async def encode(self, markup: str) -> bytes:
        """
        Encode SVG markup to PNG.

        The markup is staged as a temporary SVG resource, decoded off the
        event loop, then drawn onto a surface sized to the image plus the
        margin on every side. The temporary resource is always removed.

        Args:
            markup: SVG markup of the rendered diagram

        Returns:
            bytes: PNG file content

        Raises:
            EncodeError: Empty markup, undecodable SVG, or surface creation failure
        """
        if not markup or not markup.strip():
            raise EncodeError(NOTHING_TO_EXPORT, title="Cannot Download")

        fd, resource_path = tempfile.mkstemp(prefix="mermaid-export-", suffix=".svg")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(markup)
            return await run_in_threadpool(self._rasterize, resource_path)
        finally:
            os.unlink(resource_path)

    def _rasterize(self, resource_path: str) -> bytes:
        try:
            png = cairosvg.svg2png(url=resource_path)
            image = Image.open(io.BytesIO(png))
            image.load()
        except Exception as e:
            logger.warning(f"{__name__}:_rasterize - decode failed: {type(e).__name__}: {e}")
            raise EncodeError(DECODE_FAILED) from e

        with image:
            width, height = image.size
            try:
                canvas = Image.new(
                    "RGB",
                    (width + 2 * self.margin, height + 2 * self.margin),
                    self.background,
                )
            except (ValueError, MemoryError) as e:
                logger.warning(f"{__name__}:_rasterize - canvas failed: {type(e).__name__}: {e}")
                raise EncodeError(CANVAS_FAILED) from e

            rgba = image.convert("RGBA")
            canvas.paste(rgba, (self.margin, self.margin), rgba)

        buffer = io.BytesIO()
        canvas.save(buffer, format="PNG")
        logger.info(
            f"{__name__}:_rasterize - exported {canvas.width}x{canvas.height} png, "
            f"bytes={buffer.tell()}"
        )
        return buffer.getvalue()
