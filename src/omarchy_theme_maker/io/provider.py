"""Theme directory access: listing themes and files, reading and writing."""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path

from omarchy_theme_maker.errors import IoFailure

logger = logging.getLogger(__name__)

# Binary assets that live next to config files in a theme
IGNORED_SUFFIXES = ('.png', '.jpg')


def expand_tilde(path: str | Path) -> Path:
    """Expand a leading ``~`` using ``$HOME``."""
    text = str(path)
    if text.startswith('~'):
        home = os.environ.get('HOME')
        if home:
            return Path(home) / text[1:].lstrip('/')
    return Path(text)


def get_extension(name: str) -> str:
    """Lowercase text after the last dot (the whole name if there is none)."""
    return name.rsplit('.', 1)[-1].lower()


def _list_entries(path: Path) -> list[Path]:
    try:
        return list(path.iterdir())
    except OSError as exc:
        logger.debug("Cannot list %s: %s", path, exc)
        return []


def scan_themes_dir(path: str | Path) -> list[str]:
    """Names of the non-hidden directories inside ``path``."""
    expanded = expand_tilde(path)
    if not expanded.exists():
        return []
    return [
        entry.name
        for entry in _list_entries(expanded)
        if entry.is_dir() and not entry.name.startswith('.')
    ]


def scan_theme_files(theme_path: str | Path) -> list[str]:
    """Names of the non-hidden, non-image files inside a theme directory."""
    expanded = expand_tilde(theme_path)
    if not expanded.exists():
        return []
    return [
        entry.name
        for entry in _list_entries(expanded)
        if entry.is_file()
        and not entry.name.startswith('.')
        and not entry.name.endswith(IGNORED_SUFFIXES)
    ]


def copy_dir_all(src: str | Path, dst: str | Path) -> None:
    """Recursively copy ``src`` into ``dst``, creating ``dst`` as needed."""
    src, dst = Path(src), Path(dst)
    try:
        shutil.copytree(src, dst, dirs_exist_ok=True)
    except (OSError, shutil.Error) as exc:
        raise IoFailure(src, exc) from exc


class ThemeProvider:
    """
    Reads and writes theme files.

    Every failure is raised as IoFailure so callers deal with a single
    error type at the file boundary.
    """

    def __init__(self, encoding: str = "utf-8") -> None:
        self.encoding = encoding

    def list_themes(self, themes_path: str | Path) -> list[str]:
        return scan_themes_dir(themes_path)

    def list_files(self, theme_path: str | Path) -> list[str]:
        return scan_theme_files(theme_path)

    def read(self, path: str | Path) -> str:
        """Read a text file. Newlines are returned exactly as stored."""
        path = expand_tilde(path)
        try:
            with open(path, 'r', encoding=self.encoding, newline='') as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as exc:
            raise IoFailure(path, exc) from exc

    def write(self, path: str | Path, text: str) -> None:
        """Write a text file without newline translation."""
        path = expand_tilde(path)
        try:
            with open(path, 'w', encoding=self.encoding, newline='') as f:
                f.write(text)
        except OSError as exc:
            raise IoFailure(path, exc) from exc

    def make_dirs(self, path: str | Path) -> Path:
        path = expand_tilde(path)
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise IoFailure(path, exc) from exc
        return path

    def copy_tree(self, src: str | Path, dst: str | Path) -> None:
        copy_dir_all(expand_tilde(src), expand_tilde(dst))
