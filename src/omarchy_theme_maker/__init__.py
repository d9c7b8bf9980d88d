"""
omarchy-theme-maker: edit the colors of Omarchy themes

Find every hex and rgb/rgba color in a theme's config files and change
them without disturbing anything else in the file.

Quick Start:
    >>> import omarchy_theme_maker as otm
    >>> colors = otm.detect_colors_in_content("color = #fff;")
    >>> colors[0].hex_text, colors[0].start_col
    ('#fff', 8)
    >>> otm.apply_color_change("color = #fff;", 0, 8, "#fff", "#000")
    'color = #000;'

Features:
    - Scan free-form text for #rgb, #rrggbb, #rrggbbaa, rgb() and rgba()
    - Re-serialize edited colors in the literal's original format
    - Patch literals in place, preserving every other character
    - Browse a themes directory, save in place or as a copy
    - Command line interface: ``omarchy-theme-maker --help``
"""

__version__ = "0.1.0"

# Core types
from omarchy_theme_maker.core.color import ColorFormat, Rgba
from omarchy_theme_maker.core.literal import DetectedColor

# Scanning and formats
from omarchy_theme_maker.codec.scanner import ColorScanner, detect_colors_in_content
from omarchy_theme_maker.codec.formats import color_to_format, detect_color_format

# Editing
from omarchy_theme_maker.edit.patch import apply_color_change, rebuild_from_original
from omarchy_theme_maker.edit.session import ThemeSession, SortMode

# Settings
from omarchy_theme_maker.config.settings import AppConfig, load_config, save_config

__all__ = [
    # Version
    "__version__",
    # Core types
    "ColorFormat",
    "Rgba",
    "DetectedColor",
    # Scanning
    "ColorScanner",
    "detect_colors_in_content",
    "color_to_format",
    "detect_color_format",
    # Editing
    "apply_color_change",
    "rebuild_from_original",
    "ThemeSession",
    "SortMode",
    # Settings
    "AppConfig",
    "load_config",
    "save_config",
]
