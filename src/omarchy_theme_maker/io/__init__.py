"""File access for theme directories."""

from omarchy_theme_maker.io.provider import (
    ThemeProvider,
    expand_tilde,
    get_extension,
    scan_theme_files,
    scan_themes_dir,
)

__all__ = [
    "ThemeProvider",
    "expand_tilde",
    "get_extension",
    "scan_theme_files",
    "scan_themes_dir",
]
