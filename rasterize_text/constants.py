# this_file: rasterize_text/constants.py
"""
Rasterization constants shared across modules.
"""

# Default text size (pixels from the font's ascent line to its descent line)
DEFAULT_FONT_SIZE = 50.0

# Default text color as (R, G, B, A): opaque black
DEFAULT_COLOR = (0, 0, 0, 255)

# Every canvas pixel starts fully transparent black
DEFAULT_PIXEL = (0, 0, 0, 0)

# Number of channels in a canvas pixel
RGBA_CHANNELS = 4

# Canvas height policies
# "ink" sizes the canvas to the glyph pixels actually laid out,
# "metrics" reserves at least ceil(ascent - descent) rows.
HEIGHT_MODE_INK = "ink"
HEIGHT_MODE_METRICS = "metrics"
HEIGHT_MODES = (HEIGHT_MODE_INK, HEIGHT_MODE_METRICS)

# Logging level below DEBUG used for per-glyph output
TRACE = 5

# Environment variable that overrides the CLI verbosity
LOG_LEVEL_ENV = "LOGLEVEL"
