"""Application settings."""

from omarchy_theme_maker.config.settings import (
    AppConfig,
    ExtensionSetting,
    GeneralConfig,
    color_from_hex,
    color_to_hex,
    load_config,
    save_config,
)

__all__ = [
    "AppConfig",
    "ExtensionSetting",
    "GeneralConfig",
    "color_from_hex",
    "color_to_hex",
    "load_config",
    "save_config",
]
