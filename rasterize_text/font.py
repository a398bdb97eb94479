# this_file: rasterize_text/font.py
"""
TrueType font handle backed by FreeType.

Font wraps a freetype.Face and exposes the small surface the rasterizer
needs: vertical metrics, horizontal layout with legacy kerning, pixel
bounding boxes and per-glyph coverage. All layout arithmetic is carried out
in 32-bit floats so that pixel boxes land on the same integer grid as the
reference renderer.
"""

from __future__ import annotations

import io
import logging
import os
import threading
from ctypes import byref
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator

import freetype
import numpy as np
from freetype.raw import FT_Get_Kerning, FT_Matrix, FT_Vector

logger = logging.getLogger(__name__)

# Outline loading: design units, no grid fitting, no embedded strikes
UNSCALED_LOAD_FLAGS = freetype.FT_LOAD_NO_SCALE | freetype.FT_LOAD_NO_BITMAP

# Coverage rendering: anti-aliased, unhinted, outlines only
COVERAGE_LOAD_FLAGS = freetype.FT_LOAD_RENDER | freetype.FT_LOAD_NO_HINTING | freetype.FT_LOAD_NO_BITMAP

# 16.16 fixed-point identity
_IDENTITY = (0x10000, 0, 0, 0x10000)


class FontError(RuntimeError):
    """Raised when a font cannot be loaded."""


class FontFileReadError(FontError):
    """Raised when the font file itself cannot be read."""

    def __init__(self, path: Path | str):
        self.path = Path(path)
        try:
            cwd = os.getcwd()
        except OSError:
            cwd = ""
        super().__init__(
            f"Failed to read the font file: {str(self.path)!r}.\n"
            f"Note: The current working directory is: {cwd!r}"
        )


class FontBytesParseError(FontError):
    """Raised when bytes are not a font FreeType can open."""

    def __init__(self, message: str = "Failed to read font bytes."):
        super().__init__(message)


@dataclass(frozen=True)
class VMetrics:
    """Vertical metrics at a given scale, y up from the baseline."""

    ascent: np.float32
    descent: np.float32
    line_gap: np.float32


@dataclass(frozen=True)
class PixelBox:
    """Integer pixel rectangle, min inclusive and max exclusive, y down."""

    min_x: int
    min_y: int
    max_x: int
    max_y: int

    @property
    def width(self) -> int:
        return self.max_x - self.min_x

    @property
    def height(self) -> int:
        return self.max_y - self.min_y


@dataclass(frozen=True)
class PositionedGlyph:
    """
    A glyph placed on the canvas by Font.layout.

    position is the pen position (x, y) in canvas space with y pointing
    down. pixel_box is None for glyphs without outline points, such as the
    space character.
    """

    glyph_id: int
    position: tuple[np.float32, np.float32]
    scale: np.float32
    pixel_box: PixelBox | None
    font: Font = field(repr=False, compare=False)

    def coverage(self) -> np.ndarray:
        """
        Rasterize this glyph.

        Returns:
            float32 array of shape (box height, box width) with values in
            [0, 1], indexed [y, x] relative to pixel_box.
        """
        return self.font.render_coverage(self)

    def draw(self) -> Iterator[tuple[int, int, float]]:
        """Yield (x, y, v) for every pixel of the bounding box, row by row."""
        for y, row in enumerate(self.coverage()):
            for x, value in enumerate(row):
                yield x, y, float(value)


class Font:
    """
    A TrueType font opened by FreeType.

    Use Font.from_path or Font.from_bytes rather than the constructor. The
    face is only touched while holding a per-font lock, so one Font can be
    shared between threads.
    """

    def __init__(self, face: freetype.Face):
        self._face = face
        self._lock = threading.RLock()

    @classmethod
    def from_path(cls, path: Path | str) -> Font:
        """
        Read a font file.

        Args:
            path: Path to a TrueType (.ttf) file

        Raises:
            FontFileReadError: If the file cannot be read
            FontBytesParseError: If the file is not a usable font
        """
        try:
            data = Path(path).read_bytes()
        except OSError as exc:
            raise FontFileReadError(path) from exc
        logger.debug("Read %d font bytes from %s", len(data), path)
        return cls.from_bytes(data)

    @classmethod
    def from_bytes(cls, data: bytes) -> Font:
        """
        Open a font from raw TrueType bytes.

        Raises:
            FontBytesParseError: If FreeType cannot open the data
        """
        if not data:
            raise FontBytesParseError()
        try:
            face = freetype.Face(io.BytesIO(bytes(data)))
        except freetype.FT_Exception as exc:
            raise FontBytesParseError() from exc
        return cls(face)

    def __repr__(self) -> str:
        family = self._face.family_name
        if isinstance(family, bytes):
            family = family.decode("utf-8", "replace")
        return f"Font({family!r}, glyphs={self._face.num_glyphs})"

    @property
    def units_per_em(self) -> int:
        return self._face.units_per_EM

    def scale_for_pixel_height(self, size: float) -> np.float32:
        """Scale factor mapping the ascender-to-descender extent onto size pixels."""
        extent = np.float32(self._face.ascender) - np.float32(self._face.descender)
        return np.float32(size) / extent

    def v_metrics(self, size: float) -> VMetrics:
        scale = self.scale_for_pixel_height(size)
        line_gap = self._face.height - (self._face.ascender - self._face.descender)
        return VMetrics(
            ascent=np.float32(self._face.ascender) * scale,
            descent=np.float32(self._face.descender) * scale,
            line_gap=np.float32(line_gap) * scale,
        )

    def glyph_id(self, char: str) -> int:
        """Glyph index for a character, 0 (.notdef) when the font lacks it."""
        with self._lock:
            return self._face.get_char_index(char)

    def pair_kerning(self, size: float, left: int, right: int) -> np.float32:
        """Scaled kerning between two glyph ids from the font's kern table."""
        scale = self.scale_for_pixel_height(size)
        with self._lock:
            return self._kerning(left, right) * scale

    def layout(
        self,
        text: str,
        size: float,
        origin: tuple[float, float] = (0.0, 0.0),
    ) -> list[PositionedGlyph]:
        """
        Lay out text on a single horizontal line.

        One glyph is produced per code point. Kerning between consecutive
        glyphs is added to the caret before a glyph is placed, and the caret
        then moves by the glyph's advance width.

        Args:
            text: Text to lay out, already normalized
            size: Pixel size, see scale_for_pixel_height
            origin: Pen origin (x, y) of the first glyph, y down

        Returns:
            Positioned glyphs in text order
        """
        scale = self.scale_for_pixel_height(size)
        start_x, start_y = np.float32(origin[0]), np.float32(origin[1])
        caret = np.float32(0.0)
        previous: int | None = None
        glyphs = []

        with self._lock:
            for char in text:
                glyph_id = self._face.get_char_index(char)
                if previous is not None:
                    caret = caret + self._kerning(previous, glyph_id) * scale
                advance, cbox = self._load_unscaled(glyph_id)
                position = (start_x + caret, start_y)
                glyphs.append(
                    PositionedGlyph(
                        glyph_id=glyph_id,
                        position=position,
                        scale=scale,
                        pixel_box=_pixel_box(cbox, scale, position),
                        font=self,
                    )
                )
                caret = caret + np.float32(advance) * scale
                previous = glyph_id

        return glyphs

    def render_coverage(self, glyph: PositionedGlyph) -> np.ndarray:
        """Coverage of a positioned glyph over its pixel box, see PositionedGlyph.coverage."""
        box = glyph.pixel_box
        if box is None:
            return np.zeros((0, 0), dtype=np.float32)

        x, y = glyph.position
        x_trunc, y_trunc = int(x), int(y)
        x_fract = float(x - np.float32(x_trunc))
        y_fract = float(y - np.float32(y_trunc))
        ppem = float(glyph.scale) * self.units_per_em

        with self._lock:
            face = self._face
            face.set_char_size(height=max(1, int(round(ppem * 64))))
            # FreeType is y up, the canvas is y down
            face.set_transform(
                FT_Matrix(*_IDENTITY),
                FT_Vector(int(round(x_fract * 64)), int(round(-y_fract * 64))),
            )
            try:
                face.load_glyph(glyph.glyph_id, COVERAGE_LOAD_FLAGS)
                slot = face.glyph
                bitmap = slot.bitmap
                rows, width, pitch = bitmap.rows, bitmap.width, bitmap.pitch
                if rows and width:
                    pixels = np.array(bitmap.buffer, dtype=np.uint8).reshape(rows, pitch)[:, :width]
                else:
                    pixels = np.zeros((0, 0), dtype=np.uint8)
                left, top = slot.bitmap_left, slot.bitmap_top
            finally:
                face.set_transform(FT_Matrix(*_IDENTITY), FT_Vector(0, 0))

        coverage = np.zeros((box.height, box.width), dtype=np.float32)
        # Bitmap origin relative to the pixel box
        ox = x_trunc + left - box.min_x
        oy = y_trunc - top - box.min_y

        x1, y1 = max(0, ox), max(0, oy)
        x2 = min(box.width, ox + pixels.shape[1])
        y2 = min(box.height, oy + pixels.shape[0])
        if x2 > x1 and y2 > y1:
            region = pixels[y1 - oy:y2 - oy, x1 - ox:x2 - ox].astype(np.float32)
            coverage[y1:y2, x1:x2] = region / np.float32(255.0)

        return coverage

    def _kerning(self, left: int, right: int) -> np.float32:
        if not self._face.has_kerning:
            return np.float32(0.0)
        kerning = FT_Vector(0, 0)
        error = FT_Get_Kerning(
            self._face._FT_Face, left, right, freetype.FT_KERNING_UNSCALED, byref(kerning)
        )
        if error:
            raise freetype.FT_Exception(error)
        return np.float32(kerning.x)

    def _load_unscaled(self, glyph_id: int) -> tuple[int, tuple[int, int, int, int] | None]:
        """Advance width and outline control box of a glyph, in design units."""
        self._face.load_glyph(glyph_id, UNSCALED_LOAD_FLAGS)
        slot = self._face.glyph
        advance = slot.metrics.horiAdvance
        outline = slot.outline
        if outline.n_points == 0:
            return advance, None
        cbox = outline.get_cbox()
        return advance, (cbox.xMin, cbox.yMin, cbox.xMax, cbox.yMax)


def _pixel_box(
    cbox: tuple[int, int, int, int] | None,
    scale: np.float32,
    position: tuple[np.float32, np.float32],
) -> PixelBox | None:
    if cbox is None:
        return None
    x_min, y_min, x_max, y_max = cbox
    x, y = position
    # Integer and fractional parts of the pen position, truncating toward zero
    x_trunc, y_trunc = int(x), int(y)
    x_fract = x - np.float32(x_trunc)
    y_fract = y - np.float32(y_trunc)
    return PixelBox(
        min_x=int(np.floor(np.float32(x_min) * scale + x_fract)) + x_trunc,
        min_y=int(np.floor(np.float32(-y_max) * scale + y_fract)) + y_trunc,
        max_x=int(np.ceil(np.float32(x_max) * scale + x_fract)) + x_trunc,
        max_y=int(np.ceil(np.float32(-y_min) * scale + y_fract)) + y_trunc,
    )
