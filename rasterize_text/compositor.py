# this_file: rasterize_text/compositor.py
"""
Compositing of glyph coverage into an RGBA canvas.
"""

from __future__ import annotations

import logging
from typing import Iterable

import numpy as np

from .color import Color
from .constants import RGBA_CHANNELS
from .font import PositionedGlyph

logger = logging.getLogger(__name__)


def new_canvas(width: int, height: int) -> np.ndarray:
    """Allocate a fully transparent (height, width, 4) uint8 canvas."""
    return np.zeros((height, width, RGBA_CHANNELS), dtype=np.uint8)


def glyph_pixels(coverage: np.ndarray, color: Color) -> np.ndarray:
    """
    Scale every color channel by coverage.

    Products are truncated toward zero, not rounded, so a coverage of 0.5
    on a 255 channel gives 127.
    """
    channels = np.array(color.channels, dtype=np.float32)
    return (coverage[..., np.newaxis].astype(np.float32) * channels).astype(np.uint8)


def composite(glyphs: Iterable[PositionedGlyph], color: Color, canvas: np.ndarray) -> np.ndarray:
    """
    Paint glyphs into canvas in the order given.

    A glyph whose pixel box starts left of (or above) the canvas origin is
    drawn from column (or row) 0 instead of being shifted with the rest of
    the line. A pixel is only written while it still holds (0, 0, 0, 0), so
    where glyphs overlap the earlier glyph keeps the pixel.

    Args:
        glyphs: Positioned glyphs in layout order
        color: Text color
        canvas: (height, width, 4) uint8 array, modified in place

    Returns:
        The same canvas
    """
    for glyph in glyphs:
        box = glyph.pixel_box
        if box is None:
            continue
        logger.debug("Glyph %d, %s", glyph.glyph_id, box)

        coverage = glyph.coverage()
        pixels = glyph_pixels(coverage, color)
        left = box.min_x if box.min_x >= 0 else 0
        top = box.min_y if box.min_y >= 0 else 0
        rows, cols = coverage.shape
        region = canvas[top:top + rows, left:left + cols]
        if region.shape[:2] != (rows, cols):
            raise ValueError(
                f"Glyph {glyph.glyph_id} at {box} does not fit a "
                f"{canvas.shape[1]}x{canvas.shape[0]} canvas"
            )

        # First writer wins: overlapping glyphs do not repaint a pixel.
        # Kept deliberately in place of alpha blending.
        untouched = ~region.any(axis=-1)
        region[untouched] = pixels[untouched]

    return canvas
