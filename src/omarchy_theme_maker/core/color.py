"""Color representation for theme color literals."""

from __future__ import annotations

import string
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar

HEX_DIGITS = frozenset(string.hexdigits)


class ColorFormat(Enum):
    """Textual family a color literal is written in."""
    HEX3 = "hex3"    # #rgb
    HEX6 = "hex6"    # #rrggbb
    HEX8 = "hex8"    # #rrggbbaa
    RGB = "rgb"      # rgb(r, g, b)
    RGBA = "rgba"    # rgba(r, g, b, a)


@dataclass(frozen=True)
class Rgba:
    """
    Resolved color with 8-bit channels.

    Alpha is straight (unpremultiplied); 255 is fully opaque.
    """
    r: int
    g: int
    b: int
    a: int = 255

    BLACK: ClassVar["Rgba"]
    WHITE: ClassVar["Rgba"]

    @classmethod
    def from_rgb(cls, r: int, g: int, b: int) -> "Rgba":
        """Create an opaque color from RGB values."""
        if not all(0 <= c <= 255 for c in (r, g, b)):
            raise ValueError(f"RGB values must be 0-255, got ({r}, {g}, {b})")
        return cls(r, g, b)

    @classmethod
    def from_gray(cls, level: int) -> "Rgba":
        """Create an opaque gray."""
        return cls.from_rgb(level, level, level)

    def with_alpha(self, a: int) -> "Rgba":
        """Return a copy with a different alpha channel."""
        return Rgba(self.r, self.g, self.b, a)

    def to_tuple(self) -> tuple[int, int, int, int]:
        return (self.r, self.g, self.b, self.a)

    @property
    def rgb(self) -> tuple[int, int, int]:
        return (self.r, self.g, self.b)


Rgba.BLACK = Rgba(0, 0, 0)
Rgba.WHITE = Rgba(255, 255, 255)


# Fallback accent colors for extensions without a configured color
DEFAULT_EXT_COLORS: tuple[Rgba, ...] = (
    Rgba(255, 107, 107),
    Rgba(78, 205, 196),
    Rgba(255, 230, 109),
    Rgba(26, 83, 92),
    Rgba(255, 159, 67),
    Rgba(84, 160, 255),
    Rgba(95, 39, 205),
    Rgba(29, 209, 161),
    Rgba(255, 159, 243),
    Rgba(34, 166, 179),
    Rgba(244, 180, 26),
    Rgba(163, 152, 173),
    Rgba(206, 147, 216),
    Rgba(129, 236, 182),
    Rgba(250, 177, 133),
    Rgba(127, 143, 166),
)


def get_contrast_color(color: Rgba) -> Rgba:
    """Pick black or white text for legibility on top of ``color``."""
    brightness = (color.r + color.g + color.b) // 3
    if brightness > 128:
        return Rgba.BLACK
    return Rgba.WHITE


def get_default_ext_color(name: str) -> Rgba:
    """Stable accent color for a file name's extension."""
    ext = name.rsplit('.', 1)[-1].lower()
    total = sum(ext.encode('utf-8'))
    return DEFAULT_EXT_COLORS[total % len(DEFAULT_EXT_COLORS)]


def parse_hex_color(text: str) -> Rgba | None:
    """
    Parse ``#rgb``, ``#rrggbb`` or ``#rrggbbaa`` into a color.

    Returns None for any other length or for non-hex digits.
    """
    digits = text.lstrip('#')
    if not all(ch in HEX_DIGITS for ch in digits):
        return None
    try:
        if len(digits) == 3:
            r, g, b = (int(ch * 2, 16) for ch in digits)
            return Rgba(r, g, b)
        if len(digits) == 6:
            return Rgba(int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))
        if len(digits) == 8:
            return Rgba(
                int(digits[0:2], 16),
                int(digits[2:4], 16),
                int(digits[4:6], 16),
                int(digits[6:8], 16),
            )
    except ValueError:
        return None
    return None
