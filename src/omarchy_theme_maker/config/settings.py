"""Persistent application settings stored as TOML."""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Iterable

import tomli_w

from omarchy_theme_maker.core.color import HEX_DIGITS, Rgba
from omarchy_theme_maker.errors import ConfigError, IoFailure

logger = logging.getLogger(__name__)

APP_NAME = "omarchy-theme-maker"
CONFIG_FILE_NAME = "config.toml"
PACKAGE_DIR = Path(__file__).resolve().parent.parent


def default_themes_path() -> str:
    return str(Path.home() / ".config" / "omarchy" / "themes")


@dataclass
class ExtensionSetting:
    enabled: bool = True
    color: str = "#808080"


@dataclass
class GeneralConfig:
    themes_path: str = field(default_factory=default_themes_path)
    save_prefix: str = "new-"


def get_default_extensions() -> dict[str, ExtensionSetting]:
    return {
        ".css": ExtensionSetting(True, "#2646dc"),
        ".toml": ExtensionSetting(True, "#ff9f43"),
        ".theme": ExtensionSetting(True, "#5f27cd"),
        ".conf": ExtensionSetting(True, "#1dd1a1"),
        ".lua": ExtensionSetting(True, "#22a6b3"),
        ".json": ExtensionSetting(True, "#f4b426"),
        ".yaml": ExtensionSetting(True, "#4ecdcd"),
        ".ini": ExtensionSetting(True, "#ff9ff3"),
    }


@dataclass
class AppConfig:
    general: GeneralConfig = field(default_factory=GeneralConfig)
    extensions: dict[str, ExtensionSetting] = field(default_factory=get_default_extensions)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "AppConfig":
        """Build a config, ignoring unknown keys and defaulting missing ones."""

        def merge_dataclass(dataclass_type, values):
            base = dataclass_type()
            if not isinstance(values, dict):
                return base
            for key, value in values.items():
                if hasattr(base, key):
                    setattr(base, key, value)
            return base

        instance = cls()
        if "general" in payload:
            instance.general = merge_dataclass(GeneralConfig, payload["general"])
        extensions = payload.get("extensions")
        if isinstance(extensions, dict):
            instance.extensions = {
                ext: merge_dataclass(ExtensionSetting, setting)
                for ext, setting in extensions.items()
            }
        return instance


def get_config_dir() -> Path:
    """``$XDG_CONFIG_HOME/omarchy-theme-maker`` (``~/.config`` by default)."""
    base = os.environ.get("XDG_CONFIG_HOME")
    root = Path(base) if base else Path.home() / ".config"
    return root / APP_NAME


def config_search_paths() -> list[Path]:
    """Locations checked for a config file, in priority order."""
    return [
        get_config_dir() / CONFIG_FILE_NAME,
        PACKAGE_DIR / CONFIG_FILE_NAME,
    ]


def load_config(search_paths: Iterable[Path] | None = None) -> tuple[AppConfig, str | None]:
    """
    Load the first readable config file.

    Returns the config and the path it came from, or the defaults and
    None if no usable file exists.
    """
    for path in search_paths if search_paths is not None else config_search_paths():
        path = Path(path)
        if not path.exists():
            continue
        try:
            payload = tomllib.loads(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as exc:
            # Keep looking; a broken file is not fatal
            logger.warning("Ignoring unreadable config %s: %s", path, exc)
            continue
        logger.debug("Loaded config from %s", path)
        return AppConfig.from_dict(payload), str(path)

    return AppConfig(), None


def save_config(config: AppConfig, config_dir: Path | None = None) -> Path:
    """Write ``config.toml`` into ``config_dir`` and return its path."""
    config_dir = config_dir or get_config_dir()
    path = config_dir / CONFIG_FILE_NAME
    try:
        content = tomli_w.dumps(config.to_dict())
    except TypeError as exc:
        raise ConfigError(f"Cannot serialize config: {exc}") from exc
    try:
        config_dir.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise IoFailure(path, exc) from exc
    return path


def _hex_byte(text: str) -> int:
    if len(text) != 2 or not all(ch in HEX_DIGITS for ch in text):
        return 0
    return int(text, 16)


def color_from_hex(hex_text: str) -> Rgba:
    """
    Resolve a ``#rrggbb`` or ``#rgb`` accent color.

    Bad digit pairs resolve to 0; any other length resolves to mid gray.
    """
    digits = hex_text.lstrip('#')
    if len(digits) == 6:
        return Rgba(_hex_byte(digits[0:2]), _hex_byte(digits[2:4]), _hex_byte(digits[4:6]))
    if len(digits) == 3:
        return Rgba(*(_hex_byte(ch * 2) for ch in digits))
    return Rgba.from_gray(128)


def color_to_hex(color: Rgba) -> str:
    return f"#{color.r:02x}{color.g:02x}{color.b:02x}"
