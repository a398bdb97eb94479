# this_file: rasterize_text/color.py
"""
RGBA text color and its space-delimited textual form.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from .constants import DEFAULT_COLOR

# Decimal digits with an optional leading plus, nothing else
_CHANNEL_PATTERN = re.compile(r"\+?[0-9]+")

_CHANNEL_NAMES = ("r", "g", "b", "a")


class ColorError(ValueError):
    """Raised when a color cannot be built or parsed."""


class ColorChannelParseError(ColorError):
    """Raised when one space-delimited field is not a 0..=255 integer."""

    def __init__(self, original: str, field: str):
        self.original = original
        self.field = field
        super().__init__(f"Failed to parse value {field!r} to RGBA color in: {original!r}")


class ColorFieldCountError(ColorError):
    """Raised when a color string does not hold exactly four fields."""

    def __init__(self, values: list[int]):
        self.values = list(values)
        super().__init__(
            "Failed to parse RGBA because of an incorrect number of values "
            f"(expected 4): {self.values}."
        )


class ColorChannelRangeError(ColorError):
    """Raised when a Color is constructed with a channel outside 0..=255."""

    def __init__(self, channel: str, value: object):
        self.channel = channel
        self.value = value
        super().__init__(f"Color channel {channel} must be an integer in 0..=255, got {value!r}")


@dataclass(frozen=True)
class Color:
    """
    An RGBA color with four 8-bit channels.

    The textual form is "R G B A", four decimal integers separated by
    single spaces.
    """

    r: int = DEFAULT_COLOR[0]
    g: int = DEFAULT_COLOR[1]
    b: int = DEFAULT_COLOR[2]
    a: int = DEFAULT_COLOR[3]

    def __post_init__(self):
        for name in _CHANNEL_NAMES:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= 255:
                raise ColorChannelRangeError(name, value)

    @property
    def channels(self) -> tuple[int, int, int, int]:
        return (self.r, self.g, self.b, self.a)

    @classmethod
    def parse(cls, color: str) -> Color:
        """
        Parse a color from its "R G B A" textual form.

        Args:
            color: Four decimal integers separated by single spaces

        Returns:
            The parsed Color

        Raises:
            ColorChannelParseError: If a field is not an integer in 0..=255
            ColorFieldCountError: If there are not exactly four fields
        """
        values = [_parse_channel(field, color) for field in color.split(" ")]
        if len(values) != 4:
            raise ColorFieldCountError(values)
        return cls(*values)

    def __str__(self) -> str:
        return f"{self.r} {self.g} {self.b} {self.a}"


def _parse_channel(field: str, original: str) -> int:
    try:
        if not _CHANNEL_PATTERN.fullmatch(field):
            raise ValueError(f"invalid digit found in {field!r}")
        value = int(field)
        if value > 255:
            raise ValueError(f"number too large to fit in an 8-bit channel: {field!r}")
    except ValueError as exc:
        raise ColorChannelParseError(original, field) from exc
    return value


def parse_color(color: str) -> Color:
    """Parse "R G B A" into a Color."""
    return Color.parse(color)


def format_color(color: Color) -> str:
    """Format a Color as "R G B A"."""
    return str(color)
