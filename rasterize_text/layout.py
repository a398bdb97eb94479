# this_file: rasterize_text/layout.py
"""
Horizontal layout planning and canvas extents.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

import numpy as np

from .constants import HEIGHT_MODE_INK, HEIGHT_MODE_METRICS, HEIGHT_MODES, TRACE
from .font import Font, PixelBox, PositionedGlyph, VMetrics

logger = logging.getLogger(__name__)


@dataclass
class Extents:
    """
    Extremes of all glyph pixel boxes in a layout.

    Starts at (0, 0, 0, 0), so min_x and min_y only go negative when ink
    reaches left of the pen origin or above the top of the line.
    """

    min_x: int = 0
    max_x: int = 0
    min_y: int = 0
    max_y: int = 0

    def include(self, box: PixelBox) -> None:
        self.min_x = min(self.min_x, box.min_x)
        self.max_x = max(self.max_x, box.max_x)
        self.min_y = min(self.min_y, box.min_y)
        self.max_y = max(self.max_y, box.max_y)

    @property
    def width(self) -> int:
        return self.max_x - self.min_x

    @property
    def height(self) -> int:
        return self.max_y - self.min_y


@dataclass(frozen=True)
class LayoutPlan:
    """Glyphs in layout order plus the canvas size they need."""

    glyphs: tuple[PositionedGlyph, ...]
    extents: Extents
    metrics: VMetrics
    width: int
    height: int


def plan_layout(
    text: str,
    font: Font,
    size: float,
    height_mode: str = HEIGHT_MODE_INK,
) -> LayoutPlan:
    """
    Lay out one line of text and measure the canvas it needs.

    The pen starts at (0, ascent), so a glyph reaching the ascent line
    lands at y >= 0. The canvas width is max_x - min_x over all glyph pixel
    boxes, which includes any overhang left of the origin (a leading "T"
    often starts at x = -1 or -2).

    Args:
        text: Normalized text to lay out
        font: Font to lay out with
        size: Pixel size, must be positive and finite
        height_mode: "ink" for max_y - min_y, "metrics" to reserve at least
            ceil(ascent - descent) rows

    Returns:
        LayoutPlan with the glyphs, extents, metrics and canvas size

    Raises:
        ValueError: If size is not positive and finite, or height_mode is unknown
    """
    if not math.isfinite(size) or size <= 0:
        raise ValueError(f"Font size must be positive and finite, got {size!r}")
    if height_mode not in HEIGHT_MODES:
        raise ValueError(f"Unknown height mode {height_mode!r}, expected one of {HEIGHT_MODES}")

    logger.debug("Font Size (pixels): %s", size)
    metrics = font.v_metrics(size)
    logger.debug("Font Metrics: %s", metrics)

    glyphs = tuple(font.layout(text, size, origin=(0.0, metrics.ascent)))

    extents = Extents()
    for glyph in glyphs:
        logger.log(TRACE, "Glyph: %s", glyph)
        if glyph.pixel_box is not None:
            extents.include(glyph.pixel_box)

    logger.debug("Minimum x coordinate: %d", extents.min_x)
    logger.debug("Maximum x coordinate: %d", extents.max_x)
    logger.debug("Minimum y coordinate: %d", extents.min_y)
    logger.debug("Maximum y coordinate: %d", extents.max_y)

    width = extents.width
    height = extents.height
    if height_mode == HEIGHT_MODE_METRICS:
        metrics_height = math.ceil(float(np.float32(metrics.ascent - metrics.descent)))
        height = max(height, metrics_height)

    logger.debug("Image Width: %d", width)
    logger.debug("Image Height: %d", height)

    return LayoutPlan(
        glyphs=glyphs,
        extents=extents,
        metrics=metrics,
        width=width,
        height=height,
    )
