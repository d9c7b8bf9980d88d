"""Renderers for showing scanned files."""

from omarchy_theme_maker.render.terminal import ColorTextRenderer, render_color_table

__all__ = ["ColorTextRenderer", "render_color_table"]
