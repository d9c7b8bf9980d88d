"""ThemeSession - the single owner of all editing state.

A session walks the user's theme directory: pick a theme, pick one of its
files, scan the file for color literals, edit them, and persist the result
either in place or as a copy of the theme.

Attributes worth knowing about:
    file_content: The text of the open file. Only the patch engine
        changes it, and every change is followed by a full re-scan.
    detected_colors: Literals from the latest scan. Their ids are only
        valid until the next edit.
    modified_colors: color id -> new literal text for the open file.
    file_cache: Text of every file in the selected theme. Edits to the
        open file are written through so whole-theme saves include them.
    error_message: The most recent user-facing failure, or None.

Example:
    session = ThemeSession.from_config()
    session.load_themes()
    session.select_theme("tokyo-night")
    session.select_file("waybar.css")
    session.start_color_edit_by_id("3_14")
    session.update_color(Rgba(255, 0, 0))
    session.save_file()
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, auto
from pathlib import Path

from omarchy_theme_maker.codec.formats import color_to_format, detect_color_format
from omarchy_theme_maker.codec.scanner import detect_colors_in_content
from omarchy_theme_maker.config.settings import (
    AppConfig,
    ExtensionSetting,
    GeneralConfig,
    color_from_hex,
    color_to_hex,
    load_config,
    save_config,
)
from omarchy_theme_maker.core.color import ColorFormat, Rgba, get_default_ext_color
from omarchy_theme_maker.core.literal import DetectedColor
from omarchy_theme_maker.edit.patch import (
    RebuildResult,
    apply_color_change,
    rebuild_from_original,
)
from omarchy_theme_maker.errors import (
    IoFailure,
    NoSelectionError,
    PatchError,
    ThemeMakerError,
)
from omarchy_theme_maker.io.provider import ThemeProvider, expand_tilde, get_extension

logger = logging.getLogger(__name__)

BACKGROUNDS_DIR = "backgrounds"


class SortMode(Enum):
    """Ordering for the theme and file lists."""
    NAME = auto()         # Case-insensitive name
    COLOR = auto()        # Grouped by extension (shown in extension colors)
    LAST_OPENED = auto()  # Most recently opened first


@dataclass
class ExtensionConfig:
    """Whether files with an extension are scanned, and their accent color."""
    enabled: bool
    color: Rgba


@dataclass
class ColorEditTarget:
    """An edit in progress: the literal the user picked and how it is written."""
    color_id: str
    file_name: str
    original_value: Rgba
    hex_text: str
    original_format: ColorFormat


def sort_entries(names: list[str], mode: SortMode, last_opened: dict[str, int]) -> None:
    """Sort ``names`` in place. The sort is stable."""
    if mode == SortMode.NAME:
        names.sort(key=str.lower)
    elif mode == SortMode.COLOR:
        names.sort(key=get_extension)
    else:
        names.sort(key=lambda name: last_opened.get(name, 0), reverse=True)


class ThemeSession:
    """Session state for browsing themes and editing their colors."""

    def __init__(
        self,
        config: AppConfig | None = None,
        config_source: str | None = None,
        provider: ThemeProvider | None = None,
        config_dir: Path | None = None,
    ) -> None:
        config = config or AppConfig()
        self.provider = provider or ThemeProvider()
        self.config_source = config_source
        self.config_dir = config_dir

        self.themes_path = config.general.themes_path
        self.themes_path_backup = self.themes_path
        self.save_prefix = config.general.save_prefix
        self.save_prefix_backup = self.save_prefix
        self.show_settings = False

        self.enabled_extensions: dict[str, ExtensionConfig] = {
            ext: ExtensionConfig(setting.enabled, color_from_hex(setting.color))
            for ext, setting in config.extensions.items()
        }

        self.theme_names: list[str] = []
        self.selected_theme_index: int | None = None
        self.theme_files: list[str] = []
        self.selected_file_index: int | None = None
        self.error_message: str | None = None

        self.theme_sort_mode = SortMode.LAST_OPENED
        self.file_sort_mode = SortMode.LAST_OPENED
        self.theme_last_opened: dict[str, int] = {}
        self.file_last_opened: dict[str, int] = {}
        self.open_counter = 0

        self.file_content = ""
        self.file_cache: dict[str, str] = {}
        self.detected_colors: list[DetectedColor] = []
        self.selected_color_id: str | None = None

        self.color_edit_target: ColorEditTarget | None = None
        self.modified_colors: dict[str, str] = {}
        self.has_unsaved_changes = False

    @classmethod
    def from_config(cls, provider: ThemeProvider | None = None) -> ThemeSession:
        """Create a session from the config file (or defaults)."""
        config, source = load_config()
        return cls(config, config_source=source, provider=provider)

    # ------------------------------------------------------------------ Paths
    @property
    def themes_root(self) -> Path:
        return expand_tilde(self.themes_path)

    @property
    def selected_theme(self) -> str | None:
        if self.selected_theme_index is None:
            return None
        if 0 <= self.selected_theme_index < len(self.theme_names):
            return self.theme_names[self.selected_theme_index]
        return None

    @property
    def selected_file(self) -> str | None:
        if self.selected_file_index is None:
            return None
        if 0 <= self.selected_file_index < len(self.theme_files):
            return self.theme_files[self.selected_file_index]
        return None

    @property
    def theme_path(self) -> Path | None:
        theme = self.selected_theme
        return self.themes_root / theme if theme is not None else None

    @property
    def file_path(self) -> Path | None:
        theme_path, file_name = self.theme_path, self.selected_file
        if theme_path is None or file_name is None:
            return None
        return theme_path / file_name

    def extension_color(self, file_name: str) -> Rgba:
        """Configured accent color for a file, or a stable fallback."""
        config = self.enabled_extensions.get(f".{get_extension(file_name)}")
        if config is not None:
            return config.color
        return get_default_ext_color(file_name)

    def _set_error(self, message: str) -> None:
        logger.debug("Error: %s", message)
        self.error_message = message

    def _clear_file(self) -> None:
        self.file_content = ""
        self.detected_colors = []
        self.selected_color_id = None
        self.color_edit_target = None
        self.modified_colors.clear()

    # ------------------------------------------------------------------ Themes
    def load_themes(self) -> None:
        """List theme directories and reset every selection."""
        self.error_message = None
        logger.debug("load_themes() with themes_path: %s", self.themes_path)
        self.theme_names = self.provider.list_themes(self.themes_path)
        logger.debug("Found %d themes", len(self.theme_names))
        sort_entries(self.theme_names, self.theme_sort_mode, self.theme_last_opened)

        if not self.theme_names:
            if not self.themes_root.exists():
                self._set_error(f"Path does not exist: {self.themes_path}")
            else:
                self._set_error("No theme folders found in this directory")

        self.selected_theme_index = None
        self.theme_files = []
        self.file_cache.clear()
        self.selected_file_index = None
        self._clear_file()

    def select_theme(self, theme: str | int) -> bool:
        """Select a theme by name or list index and load its files."""
        index = self._resolve(theme, self.theme_names)
        if index is None:
            self._set_error(f"Theme not found: {theme}")
            return False
        self.selected_theme_index = index
        self.load_theme_files()
        return True

    def load_theme_files(self) -> None:
        """List the selected theme's files and preload them into the cache."""
        self.error_message = None
        self._clear_file()
        self.file_cache.clear()

        theme_name = self.selected_theme
        theme_path = self.theme_path
        if theme_name is None or theme_path is None:
            return

        self.open_counter += 1
        self.theme_last_opened[theme_name] = self.open_counter

        logger.debug("Scanning theme directory: %s", theme_path)
        self.theme_files = self.provider.list_files(theme_path)
        logger.debug("Found %d files in theme", len(self.theme_files))

        for file_name in self.theme_files:
            try:
                content = self.provider.read(theme_path / file_name)
            except IoFailure as exc:
                logger.debug("Not caching %s: %s", file_name, exc)
                continue
            self.file_cache[file_name] = content
            logger.debug("Cached %s (%d chars)", file_name, len(content))

        sort_entries(self.theme_files, self.file_sort_mode, self.file_last_opened)

        if not self.theme_files:
            self._set_error(f"No config files found in {theme_name}")

        self.selected_file_index = None

    # ------------------------------------------------------------------ Files
    def select_file(self, file: str | int) -> bool:
        """Select a file by name or list index and scan it."""
        index = self._resolve(file, self.theme_files)
        if index is None:
            self._set_error(f"File not found: {file}")
            return False
        if index != self.selected_file_index:
            self.modified_colors.clear()
        self.selected_file_index = index
        self.open_counter += 1
        self.file_last_opened[self.theme_files[index]] = self.open_counter
        self.load_file_content()
        return True

    def load_file_content(self) -> None:
        """Copy the selected file into the buffer and scan it for colors."""
        self.error_message = None
        self.file_content = ""
        self.detected_colors = []

        file_name = self.selected_file
        if self.selected_theme is None or file_name is None:
            return

        ext = get_extension(file_name)
        config = self.enabled_extensions.get(f".{ext}")
        if config is None or not config.enabled:
            self._set_error(f"Color parsing disabled for .{ext}")
            return

        content = self.file_cache.get(file_name)
        if content is None:
            logger.debug("File NOT in cache: %s", file_name)
            self._set_error(f"File not in cache: {file_name}")
            return

        logger.debug("Loading from cache: %s (%d chars)", file_name, len(content))
        self.file_content = content
        self.detected_colors = detect_colors_in_content(self.file_content)

    @staticmethod
    def _resolve(key: str | int, names: list[str]) -> int | None:
        if isinstance(key, int):
            return key if 0 <= key < len(names) else None
        try:
            return names.index(key)
        except ValueError:
            return None

    # ------------------------------------------------------------------ Sorting
    def sort_themes(self, mode: SortMode) -> None:
        self.theme_sort_mode = mode
        selected = self.selected_theme
        sort_entries(self.theme_names, mode, self.theme_last_opened)
        if selected is not None:
            self.selected_theme_index = self.theme_names.index(selected)

    def sort_files(self, mode: SortMode) -> None:
        self.file_sort_mode = mode
        selected = self.selected_file
        sort_entries(self.theme_files, mode, self.file_last_opened)
        if selected is not None:
            self.selected_file_index = self.theme_files.index(selected)

    # ------------------------------------------------------------------ Settings
    def enter_settings(self) -> None:
        self.themes_path_backup = self.themes_path
        self.save_prefix_backup = self.save_prefix
        self.show_settings = True

    def settings_ok(self) -> bool:
        """Persist the current settings and reload the theme list.

        Returns False (with the error slot set) if the config could not be
        written.
        """
        self.show_settings = False
        self.load_themes()
        try:
            path = save_config(self.to_config(), self.config_dir)
        except ThemeMakerError as exc:
            self._set_error(f"Failed to save config: {exc}")
            return False
        self.config_source = str(path)
        return True

    def settings_cancel(self) -> None:
        self.themes_path = self.themes_path_backup
        self.save_prefix = self.save_prefix_backup
        self.show_settings = False

    def to_config(self) -> AppConfig:
        return AppConfig(
            general=GeneralConfig(themes_path=self.themes_path, save_prefix=self.save_prefix),
            extensions={
                ext: ExtensionSetting(enabled=cfg.enabled, color=color_to_hex(cfg.color))
                for ext, cfg in self.enabled_extensions.items()
            },
        )

    # ------------------------------------------------------------------ Editing
    def find_color(self, color_id: str) -> DetectedColor | None:
        return next((c for c in self.detected_colors if c.id == color_id), None)

    def start_color_edit(
        self,
        color_id: str,
        file_name: str,
        original_value: Rgba,
        hex_text: str,
    ) -> ColorEditTarget:
        original_format = detect_color_format(hex_text)
        logger.debug("Color format detected: %s from %r", original_format.name, hex_text)
        self.selected_color_id = color_id
        self.color_edit_target = ColorEditTarget(
            color_id=color_id,
            file_name=file_name,
            original_value=original_value,
            hex_text=hex_text,
            original_format=original_format,
        )
        return self.color_edit_target

    def start_color_edit_by_id(self, color_id: str) -> ColorEditTarget | None:
        """Begin editing a literal from the current scan."""
        color = self.find_color(color_id)
        if color is None:
            self._set_error(f"No color with id {color_id}")
            return None
        return self.start_color_edit(
            color.id, self.selected_file or "", color.value, color.hex_text
        )

    def close_color_edit(self) -> None:
        self.color_edit_target = None

    def update_color(self, new_color: Rgba) -> str | None:
        """
        Confirm the pending edit with ``new_color``.

        The color is written in the literal's original format, patched into
        the buffer and the buffer is re-scanned. Returns the new literal
        text, or None when there was nothing to apply.
        """
        target = self.color_edit_target
        if target is None:
            return None

        new_formatted = color_to_format(new_color, target.original_format)
        logger.debug(
            "Changing color %s -> %s (format: %s)",
            target.hex_text, new_formatted, target.original_format.name,
        )

        applied = self.apply_color_change(target.color_id, target.hex_text, new_formatted)
        self.color_edit_target = None
        if not applied:
            return None

        self.modified_colors[target.color_id] = new_formatted
        self.has_unsaved_changes = True
        self.detected_colors = detect_colors_in_content(self.file_content)
        return new_formatted

    def apply_color_change(self, color_id: str, old_hex: str, new_hex: str) -> bool:
        """
        Patch one literal in the buffer.

        On failure the buffer is left as it was and the error slot is set.
        Returns True if the buffer changed.
        """
        color = self.find_color(color_id)
        if color is None:
            self._set_error(f"No color with id {color_id}")
            return False
        try:
            self.file_content = apply_color_change(
                self.file_content, color.line, color.start_col, old_hex, new_hex
            )
        except PatchError as exc:
            logger.warning("Color change for %s not applied: %s", color_id, exc)
            self._set_error(f"Could not apply color change: {exc}")
            return False

        file_name = self.selected_file
        if file_name is not None:
            self.file_cache[file_name] = self.file_content
        return True

    def rebuild_file_content(self) -> RebuildResult | None:
        """
        Rebuild the buffer from the file on disk plus ``modified_colors``.

        Positions are recomputed against the pristine text instead of
        trusting columns from earlier edits.
        """
        path = self.file_path
        if path is None:
            return None
        try:
            original = self.provider.read(path)
        except IoFailure as exc:
            self._set_error(str(exc))
            return None

        result = rebuild_from_original(original, self.modified_colors, self.detected_colors)
        if result.skipped:
            self._set_error(
                f"{len(result.skipped)} color edit(s) could not be re-applied"
            )
        self.file_content = result.content
        self.file_cache[self.selected_file] = result.content
        self.detected_colors = detect_colors_in_content(result.content)
        return result

    # ------------------------------------------------------------------ Saving
    def save_file(self) -> Path:
        """Write the buffer back to the open file."""
        path = self.file_path
        if path is None:
            raise NoSelectionError("No file selected")
        self.provider.write(path, self.file_content)
        self.modified_colors.clear()
        self.has_unsaved_changes = False
        logger.debug("Saved %s", path)
        return path

    def save_as_new(self) -> Path:
        """
        Save the selected theme as ``<save_prefix><theme>``.

        Copies the theme's backgrounds folder and writes every cached file.
        """
        theme_name, theme_path = self.selected_theme, self.theme_path
        if theme_name is None or theme_path is None:
            raise NoSelectionError("No theme selected")

        new_theme_path = self.provider.make_dirs(
            self.themes_root / f"{self.save_prefix}{theme_name}"
        )

        backgrounds = theme_path / BACKGROUNDS_DIR
        if backgrounds.is_dir():
            self.provider.copy_tree(backgrounds, new_theme_path / BACKGROUNDS_DIR)
            logger.debug("Copied backgrounds folder")

        for file_name, content in self.file_cache.items():
            self.provider.write(new_theme_path / file_name, content)

        logger.debug("Saved new theme: %s", new_theme_path)
        self.has_unsaved_changes = False
        self.load_themes()
        return new_theme_path

    def overwrite_theme(self) -> Path:
        """Write every cached file back into the selected theme."""
        theme_path = self.theme_path
        if theme_path is None:
            raise NoSelectionError("No theme selected")
        if not theme_path.exists():
            raise ThemeMakerError(f"Theme folder does not exist: {theme_path}")

        for file_name, content in self.file_cache.items():
            self.provider.write(theme_path / file_name, content)

        logger.debug("Overwrote theme: %s", theme_path)
        self.modified_colors.clear()
        self.has_unsaved_changes = False
        return theme_path
