"""Color literal scanner for free-form theme text."""

from __future__ import annotations

import re
from typing import Iterator

from omarchy_theme_maker.core.color import Rgba, parse_hex_color
from omarchy_theme_maker.core.literal import DetectedColor, make_color_id


def _parse_channel(text: str) -> int:
    """Parse a decimal channel as an unsigned byte; anything else is 0."""
    value = int(text)
    return value if value <= 255 else 0


def _parse_alpha(text: str | None) -> int:
    """Scale a 0.0-1.0 alpha fraction to a byte, truncating."""
    if text is None:
        return 255
    try:
        fraction = float(text)
    except ValueError:
        return 255
    return max(0, min(255, int(fraction * 255.0)))


class ColorScanner:
    """
    Finds hex and rgb/rgba color literals in text.

    Lines are split on ``\\n``. Within each line all hex literals are
    reported left to right, followed by all rgb/rgba literals left to right.
    Scanning never fails: text that does not match is simply skipped.
    """

    # '#' + 3, 6 or 8 hex digits; the trailing boundary rejects longer runs
    HEX_PATTERN = re.compile(r'#([0-9a-fA-F]{3}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})\b')

    # rgb(r, g, b) / rgba(r, g, b, a)
    RGB_PATTERN = re.compile(
        r'rgba?\s*\(\s*([0-9]+)\s*,\s*([0-9]+)\s*,\s*([0-9]+)\s*(?:,\s*([0-9.]+))?\s*\)'
    )

    def scan(self, content: str) -> list[DetectedColor]:
        """Return every literal in ``content``."""
        return list(self.iter_colors(content))

    def iter_colors(self, content: str) -> Iterator[DetectedColor]:
        """Yield literals in line order, hex before rgb within a line."""
        for line_idx, line in enumerate(content.split('\n')):
            yield from self.scan_line(line, line_idx)

    def scan_line(self, line: str, line_idx: int = 0) -> Iterator[DetectedColor]:
        """Yield the literals on a single line."""
        for match in self.HEX_PATTERN.finditer(line):
            color = parse_hex_color(match.group(0))
            if color is None:
                continue
            yield self._detected(line_idx, match, color)

        for match in self.RGB_PATTERN.finditer(line):
            r, g, b, alpha = match.groups()
            color = Rgba(
                _parse_channel(r),
                _parse_channel(g),
                _parse_channel(b),
                _parse_alpha(alpha),
            )
            yield self._detected(line_idx, match, color)

    @staticmethod
    def _detected(line_idx: int, match: re.Match[str], color: Rgba) -> DetectedColor:
        return DetectedColor(
            id=make_color_id(line_idx, match.start()),
            value=color,
            line=line_idx,
            start_col=match.start(),
            end_col=match.end(),
            hex_text=match.group(0),
        )


def detect_colors_in_content(content: str) -> list[DetectedColor]:
    """Scan ``content`` for color literals."""
    return ColorScanner().scan(content)
