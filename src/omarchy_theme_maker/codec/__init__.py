"""Scanning and serialization of color literals."""

from omarchy_theme_maker.codec.scanner import ColorScanner, detect_colors_in_content
from omarchy_theme_maker.codec.formats import color_to_format, detect_color_format

__all__ = [
    "ColorScanner",
    "detect_colors_in_content",
    "color_to_format",
    "detect_color_format",
]
