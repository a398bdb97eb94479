# this_file: rasterize_text/cli.py
"""
rasterize-text command line interface.

Renders one line of text to a PNG file using click for argument parsing.
"""

import logging
import math
import sys
from pathlib import Path
from typing import Optional

import click

from . import __version__, fonts
from .color import Color, ColorError
from .constants import DEFAULT_FONT_SIZE, HEIGHT_MODE_INK, HEIGHT_MODES
from .font import Font
from .render import rasterize, save_png
from .verbosity import Verbosity, configure_logging

logger = logging.getLogger(__name__)


class ColorParamType(click.ParamType):
    """Click parameter accepting a space delimited "R G B A" color."""

    name = "R G B A"

    def convert(self, value, param, ctx):
        if isinstance(value, Color):
            return value
        try:
            return Color.parse(value)
        except ColorError as e:
            self.fail(str(e), param, ctx)


COLOR = ColorParamType()


@click.command(
    name="rasterize-text",
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.version_option(version=__version__, prog_name="rasterize-text")
@click.option("-t", "--text", required=True, help="Single-line of text to render.")
@click.option(
    "-o",
    "--output",
    required=True,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output PNG file path.",
)
@click.option(
    "-c",
    "--color",
    type=COLOR,
    default=str(Color()),
    show_default=True,
    help="Text color as a space delimited RGBA value.",
)
@click.option("-s", "--size", type=float, default=DEFAULT_FONT_SIZE, show_default=True, help="Text size in pixels.")
@click.option(
    "-f",
    "--font",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Path to a ttf font file. If no file is provided, DejaVu Sans is used.",
)
@click.option("-b", "--bold", is_flag=True, help="Use DejaVu Sans Bold when no font file is provided.")
@click.option(
    "-v",
    "--verbosity",
    type=click.Choice([v.value for v in Verbosity]),
    default=Verbosity.INFO.value,
    show_default=True,
    help="Set the logging verbosity level.",
)
@click.option(
    "--height-mode",
    type=click.Choice(HEIGHT_MODES),
    default=HEIGHT_MODE_INK,
    show_default=True,
    help="Size the image to the ink (ink) or to at least the font's ascent-to-descent height (metrics).",
)
def cli(
    text: str,
    output: Path,
    color: Color,
    size: float,
    font: Optional[Path],
    bold: bool,
    verbosity: str,
    height_mode: str,
):
    """Rasterize a single line of text to a PNG image."""
    configure_logging(verbosity)

    if not math.isfinite(size) or size <= 0:
        raise click.BadParameter("must be a positive, finite number", param_hint="'-s' / '--size'")

    if font is not None:
        logger.info("Loading font from %s", font)
        loaded = Font.from_path(font)
    else:
        logger.info("Using bundled DejaVu Sans%s", " Bold" if bold else "")
        loaded = Font.from_bytes(fonts.EN_BOLD_FONT if bold else fonts.EN_FONT)

    logger.debug("Text: %r, size: %s, color: %s", text, size, color)
    canvas = rasterize(text, loaded, size, color, height_mode=height_mode)
    save_png(canvas, output)


def format_error(error: BaseException) -> str:
    """Render an exception and its causes, outermost first."""
    lines = [f"Error: {error}"]
    cause = error.__cause__ or error.__context__
    while cause is not None:
        lines.append(f"Caused by: {cause}")
        cause = cause.__cause__ or cause.__context__
    return "\n".join(lines)


def main():
    """Main CLI entry point"""
    try:
        cli(standalone_mode=False)
    except click.exceptions.Abort:
        click.echo("\nInterrupted", err=True)
        sys.exit(130)
    except click.ClickException as e:
        e.show()
        sys.exit(e.exit_code)
    except KeyboardInterrupt:
        click.echo("\nInterrupted", err=True)
        sys.exit(130)
    except Exception as e:
        click.echo(format_error(e), err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
