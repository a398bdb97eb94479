# this_file: tests/conftest.py

"""Shared fixtures for rasterize_text tests."""

import logging
from pathlib import Path
from unittest.mock import MagicMock

import numpy as np
import pytest

from rasterize_text import EN_BOLD_FONT, EN_FONT, Font, PixelBox, PositionedGlyph
from rasterize_text.constants import LOG_LEVEL_ENV


@pytest.fixture(scope="session")
def font():
    """The bundled DejaVu Sans."""
    return Font.from_bytes(EN_FONT)


@pytest.fixture(scope="session")
def bold_font():
    """The bundled DejaVu Sans Bold."""
    return Font.from_bytes(EN_BOLD_FONT)


@pytest.fixture
def fonts_dir():
    """Directory for optional test fonts that are not bundled."""
    return Path(__file__).resolve().parent / "fonts"


@pytest.fixture
def korean_font_path(fonts_dir):
    """Path to NotoSansKR, skipping the test when it is not checked out."""
    path = fonts_dir / "NotoSansKR.ttf"
    if not path.exists():
        pytest.skip("NotoSansKR.ttf not available in tests/fonts")
    return path


@pytest.fixture(autouse=True)
def restore_logging(monkeypatch):
    """Undo root logger changes made by configure_logging."""
    monkeypatch.delenv(LOG_LEVEL_ENV, raising=False)
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def make_glyph():
    """Factory for stand-in PositionedGlyphs with fixed coverage.

    box is (min_x, min_y, max_x, max_y) or None.
    """

    def factory(box, coverage, glyph_id=1):
        glyph = MagicMock(spec=PositionedGlyph)
        glyph.glyph_id = glyph_id
        glyph.pixel_box = None if box is None else PixelBox(*box)
        glyph.coverage.return_value = np.asarray(coverage, dtype=np.float32)
        return glyph

    return factory
