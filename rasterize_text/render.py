# this_file: rasterize_text/render.py
"""
Single entry point from text to RGBA pixels, plus PNG output.
"""

from __future__ import annotations

import logging
import unicodedata
from pathlib import Path

import numpy as np
from PIL import Image

from .color import Color
from .compositor import composite, new_canvas
from .constants import DEFAULT_FONT_SIZE, HEIGHT_MODE_INK
from .font import Font
from .layout import plan_layout

logger = logging.getLogger(__name__)


def rasterize(
    text: str,
    font: Font,
    size: float = DEFAULT_FONT_SIZE,
    color: Color | None = None,
    *,
    height_mode: str = HEIGHT_MODE_INK,
) -> np.ndarray:
    """
    Rasterize a single line of text.

    Args:
        text: Text to render, normalized to NFC before layout
        font: Font from Font.from_path or Font.from_bytes
        size: Font size in pixels
        color: Text color, opaque black when omitted
        height_mode: "ink" (default) or "metrics", see plan_layout

    Returns:
        uint8 array of shape (height, width, 4) holding RGBA pixels. Empty
        or all-whitespace text gives a (0, 0, 4) array in "ink" mode.
    """
    color = color or Color()
    normalized = unicodedata.normalize("NFC", text)
    plan = plan_layout(normalized, font, size, height_mode=height_mode)
    canvas = new_canvas(plan.width, plan.height)
    return composite(plan.glyphs, color, canvas)


def to_image(canvas: np.ndarray) -> Image.Image:
    """Wrap a canvas as a Pillow RGBA image."""
    # (height, width, 4) uint8 maps to RGBA
    return Image.fromarray(np.ascontiguousarray(canvas, dtype=np.uint8))


def save_png(canvas: np.ndarray, output_path: Path | str) -> Path:
    """
    Write a canvas to a PNG file.

    Raises:
        ValueError: If the canvas has no pixels, which PNG cannot encode
        OSError: If the file cannot be written
    """
    output_path = Path(output_path)
    height, width = canvas.shape[:2]
    if width == 0 or height == 0:
        raise ValueError(f"Cannot write an empty {width}x{height} image to {output_path}")

    to_image(canvas).save(output_path, format="PNG")
    logger.info("Wrote %dx%d image to %s", width, height, output_path)
    return output_path
