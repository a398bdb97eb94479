"""
Rasterize a single line of Unicode text to RGBA pixels.

This package lays out text with a TrueType font opened by FreeType,
measures the smallest canvas that holds the ink, and paints glyph coverage
into a transparent RGBA numpy array. The rasterize-text command writes the
result to a PNG file.

```python
from rasterize_text import EN_FONT, Color, Font, rasterize, save_png

font = Font.from_bytes(EN_FONT)
canvas = rasterize("This is a test, we love Unicode ÅΩ!", font, 50.0, Color(255, 0, 0, 255))
assert canvas.shape == (45, 740, 4)
save_png(canvas, "rasterize_en.png")
```
"""

from __future__ import annotations

__version__ = "0.1.0"

from .color import (
    Color,
    ColorChannelParseError,
    ColorChannelRangeError,
    ColorError,
    ColorFieldCountError,
    format_color,
    parse_color,
)
from .compositor import composite, glyph_pixels, new_canvas
from .constants import DEFAULT_FONT_SIZE, HEIGHT_MODE_INK, HEIGHT_MODE_METRICS
from .font import (
    Font,
    FontBytesParseError,
    FontError,
    FontFileReadError,
    PixelBox,
    PositionedGlyph,
    VMetrics,
)
from . import fonts as _fonts
from .layout import Extents, LayoutPlan, plan_layout
from .render import rasterize, save_png, to_image
from .verbosity import Verbosity

__all__ = [
    "Color",
    "ColorError",
    "ColorChannelParseError",
    "ColorChannelRangeError",
    "ColorFieldCountError",
    "parse_color",
    "format_color",
    "Font",
    "FontError",
    "FontFileReadError",
    "FontBytesParseError",
    "PixelBox",
    "PositionedGlyph",
    "VMetrics",
    "Extents",
    "LayoutPlan",
    "plan_layout",
    "composite",
    "glyph_pixels",
    "new_canvas",
    "rasterize",
    "to_image",
    "save_png",
    "EN_FONT",
    "EN_BOLD_FONT",
    "Verbosity",
    "DEFAULT_FONT_SIZE",
    "HEIGHT_MODE_INK",
    "HEIGHT_MODE_METRICS",
    "__version__",
]


def __getattr__(name: str):
    # Bundled font bytes are only read when first asked for
    if name in _fonts.BUNDLED_FONTS:
        return getattr(_fonts, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
