"""Core data structures for theme color literals."""

from omarchy_theme_maker.core.color import ColorFormat, Rgba
from omarchy_theme_maker.core.literal import DetectedColor

__all__ = ["ColorFormat", "Rgba", "DetectedColor"]
