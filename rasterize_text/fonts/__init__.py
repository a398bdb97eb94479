# this_file: rasterize_text/fonts/__init__.py
"""
Fonts bundled with the package, so callers without a font file still get
output. See LICENSE in this directory for the DejaVu terms.

EN_FONT and EN_BOLD_FONT are read from disk on first access.
"""

from functools import lru_cache
from importlib.resources import files

# Exported name -> file in this directory
BUNDLED_FONTS = {
    "EN_FONT": "DejaVuSans.ttf",
    "EN_BOLD_FONT": "DejaVuSans-Bold.ttf",
}


@lru_cache(maxsize=None)
def load_bundled(filename: str) -> bytes:
    """Raw bytes of a font file shipped in this package."""
    return files(__name__).joinpath(filename).read_bytes()


def __getattr__(name: str) -> bytes:
    if name in BUNDLED_FONTS:
        return load_bundled(BUNDLED_FONTS[name])
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = ["EN_FONT", "EN_BOLD_FONT", "load_bundled"]
