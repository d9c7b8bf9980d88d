"""Classify color literals and render colors back into the same family."""

from __future__ import annotations

from omarchy_theme_maker.core.color import ColorFormat, Rgba


def detect_color_format(text: str) -> ColorFormat:
    """
    Classify how a literal is written.

    ``rgba...`` -> RGBA, ``rgb...`` -> RGB, ``#`` + 3 chars -> HEX3,
    ``#`` + 8 chars -> HEX8; every other ``#`` form and any unrecognised
    text -> HEX6.
    """
    text = text.strip()
    if text.startswith('rgba'):
        return ColorFormat.RGBA
    if text.startswith('rgb'):
        return ColorFormat.RGB
    if text.startswith('#'):
        digits = len(text) - 1
        if digits == 3:
            return ColorFormat.HEX3
        if digits == 8:
            return ColorFormat.HEX8
        return ColorFormat.HEX6
    return ColorFormat.HEX6


def _alpha_text(alpha: int) -> str:
    """Shortest text for ``alpha / 255`` that reads back as the same byte."""
    text = repr(alpha / 255.0)
    if text.endswith('.0'):
        text = text[:-2]
    return text


def color_to_format(color: Rgba, fmt: ColorFormat) -> str:
    """
    Serialize ``color`` as a literal of family ``fmt``.

    HEX3 divides each channel by 17 and writes the quotients as decimal
    numbers, so (255, 0, 0) becomes ``#1500`` rather than ``#f00``.
    """
    if fmt == ColorFormat.HEX3:
        return f"#{color.r // 17}{color.g // 17}{color.b // 17}"
    if fmt == ColorFormat.HEX6:
        return f"#{color.r:02x}{color.g:02x}{color.b:02x}"
    if fmt == ColorFormat.HEX8:
        return f"#{color.r:02x}{color.g:02x}{color.b:02x}{color.a:02x}"
    if fmt == ColorFormat.RGB:
        return f"rgb({color.r}, {color.g}, {color.b})"
    # RGBA
    return f"rgba({color.r}, {color.g}, {color.b}, {_alpha_text(color.a)})"
