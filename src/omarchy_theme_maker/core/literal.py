"""DetectedColor - one color literal found in a text buffer."""

from __future__ import annotations

from dataclasses import dataclass

from omarchy_theme_maker.core.color import Rgba


def make_color_id(line: int, start_col: int) -> str:
    """Build the scan-local id for a literal at ``line``/``start_col``."""
    return f"{line}_{start_col}"


def parse_color_id(color_id: str) -> tuple[int, int] | None:
    """Split an id back into ``(line, start_col)``; None if malformed."""
    parts = color_id.split('_')
    if len(parts) < 2:
        return None
    try:
        line, col = int(parts[0]), int(parts[1])
    except ValueError:
        return None
    if line < 0 or col < 0:
        return None
    return line, col


@dataclass(frozen=True)
class DetectedColor:
    """
    A color literal located in a text buffer.

    Columns are string indices into the line, half-open ``[start_col, end_col)``.
    The id is only meaningful for the scan that produced it; every edit
    re-scans the buffer and issues fresh ids.
    """
    id: str
    value: Rgba
    line: int
    start_col: int
    end_col: int
    hex_text: str

    @property
    def span(self) -> tuple[int, int]:
        return (self.start_col, self.end_col)
