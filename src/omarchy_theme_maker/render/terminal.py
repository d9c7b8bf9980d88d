"""Render a scanned file for the terminal with its color literals painted."""

from __future__ import annotations

from typing import Mapping, Sequence

from rich.color import Color as RichColor
from rich.style import Style
from rich.table import Table
from rich.text import Text

from omarchy_theme_maker.codec.formats import detect_color_format
from omarchy_theme_maker.core.color import Rgba, get_contrast_color
from omarchy_theme_maker.core.literal import DetectedColor

LINE_NUMBER_STYLE = Style(color="grey50")
DEFAULT_TEXT_STYLE = Style(color=RichColor.from_rgb(204, 204, 204))


def to_rich_color(color: Rgba) -> RichColor:
    return RichColor.from_rgb(color.r, color.g, color.b)


def swatch_style(color: Rgba) -> Style:
    """Literal drawn on its own color with a readable foreground."""
    return Style(
        color=to_rich_color(get_contrast_color(color)),
        bgcolor=to_rich_color(color),
    )


class ColorTextRenderer:
    """
    Render file content as line-numbered rich Text.

    Each detected literal is shown on its resolved color. Literals that
    were edited in this session are prefixed with ``*``.
    """

    def __init__(self, line_numbers: bool = True):
        self.line_numbers = line_numbers

    def render(
        self,
        content: str,
        detected: Sequence[DetectedColor],
        modified: Mapping[str, str] | None = None,
    ) -> Text:
        modified = modified or {}
        by_line: dict[int, list[DetectedColor]] = {}
        for color in detected:
            by_line.setdefault(color.line, []).append(color)

        lines = content.split('\n')
        # A trailing newline does not start a visible line
        if len(lines) > 1 and lines[-1] == '':
            lines.pop()
        width = len(str(len(lines)))

        text = Text()
        for line_idx, line in enumerate(lines):
            if line_idx:
                text.append('\n')
            if self.line_numbers:
                text.append(f"{line_idx + 1:>{width}} ", style=LINE_NUMBER_STYLE)
            self._render_line(text, line.rstrip('\r'), by_line.get(line_idx, []), modified)
        return text

    def _render_line(
        self,
        text: Text,
        line: str,
        colors: list[DetectedColor],
        modified: Mapping[str, str],
    ) -> None:
        last_end = 0
        # Hex and rgb matches are reported separately; paint them in column order
        for color in sorted(colors, key=lambda c: c.start_col):
            if color.start_col < last_end:
                continue
            if color.start_col > last_end:
                text.append(line[last_end:color.start_col], style=DEFAULT_TEXT_STYLE)
            label = color.hex_text
            if color.id in modified:
                label = f"*{label}"
            text.append(label, style=swatch_style(color.value))
            last_end = color.end_col
        if last_end < len(line):
            text.append(line[last_end:], style=DEFAULT_TEXT_STYLE)


def render_color_table(
    detected: Sequence[DetectedColor],
    modified: Mapping[str, str] | None = None,
    title: str | None = None,
) -> Table:
    """Tabulate detected literals: id, position, literal, format, swatch."""
    modified = modified or {}
    table = Table(title=title)
    table.add_column("ID", style="bold")
    table.add_column("Line", justify="right")
    table.add_column("Col", justify="right")
    table.add_column("Literal")
    table.add_column("Format")
    table.add_column("RGBA", justify="right")
    table.add_column("Swatch")

    for color in detected:
        literal = color.hex_text
        if color.id in modified:
            literal = f"*{literal}"
        table.add_row(
            color.id,
            str(color.line + 1),
            str(color.start_col),
            literal,
            detect_color_format(color.hex_text).name,
            ", ".join(str(c) for c in color.value.to_tuple()),
            Text("      ", style=swatch_style(color.value)),
        )
    return table
