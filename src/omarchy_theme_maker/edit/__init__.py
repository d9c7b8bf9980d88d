"""Edit module - patching color literals and the editing session."""

from omarchy_theme_maker.edit.patch import (
    RebuildResult,
    apply_color_change,
    apply_detected_change,
    rebuild_from_original,
)
from omarchy_theme_maker.edit.session import (
    ColorEditTarget,
    ExtensionConfig,
    SortMode,
    ThemeSession,
)

__all__ = [
    "RebuildResult",
    "apply_color_change",
    "apply_detected_change",
    "rebuild_from_original",
    "ColorEditTarget",
    "ExtensionConfig",
    "SortMode",
    "ThemeSession",
]
