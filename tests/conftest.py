"""Pytest configuration: a throwaway themes directory and isolated config."""

from pathlib import Path

import pytest

from omarchy_theme_maker.config.settings import AppConfig, GeneralConfig
from omarchy_theme_maker.edit.session import ThemeSession


WAYBAR_CSS = (
    "/* bar */\n"
    "@define-color bg #1a1b26;\n"
    "@define-color fg #c0caf5;\n"
    "window { border: 1px solid rgba(122, 162, 247, 0.5); }\n"
)

ALACRITTY_TOML = (
    "[colors.primary]\n"
    "background = \"#1a1b26\"\n"
    "foreground = '#fff'\n"
)

BTOP_THEME = 'theme[main_bg]="#1e1e2e"\n'


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the config directory at a temporary location for every test."""
    xdg = tmp_path / "xdg"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(xdg))
    return xdg / "omarchy-theme-maker"


@pytest.fixture
def themes_dir(tmp_path: Path) -> Path:
    """
    A themes directory with two themes:

    tokyo-night/ waybar.css, alacritty.toml, notes.md, preview.png,
                 .hidden, backgrounds/1.jpg
    catppuccin/  btop.theme
    .git/        (hidden, not a theme)
    """
    root = tmp_path / "themes"

    tokyo = root / "tokyo-night"
    (tokyo / "backgrounds").mkdir(parents=True)
    (tokyo / "waybar.css").write_text(WAYBAR_CSS, encoding="utf-8")
    (tokyo / "alacritty.toml").write_text(ALACRITTY_TOML, encoding="utf-8")
    (tokyo / "notes.md").write_text("accent #ff0000\n", encoding="utf-8")
    (tokyo / "preview.png").write_bytes(b"\x89PNG\r\n")
    (tokyo / ".hidden").write_text("#000000\n", encoding="utf-8")
    (tokyo / "backgrounds" / "1.jpg").write_bytes(b"\xff\xd8\xff")

    catppuccin = root / "catppuccin"
    catppuccin.mkdir()
    (catppuccin / "btop.theme").write_text(BTOP_THEME, encoding="utf-8")

    (root / ".git").mkdir()
    return root


@pytest.fixture
def session(themes_dir: Path, isolated_config: Path) -> ThemeSession:
    """A session pointed at ``themes_dir`` with themes already listed."""
    config = AppConfig(general=GeneralConfig(themes_path=str(themes_dir)))
    session = ThemeSession(config, config_dir=isolated_config)
    session.load_themes()
    return session


@pytest.fixture
def waybar(session: ThemeSession) -> ThemeSession:
    """Session with tokyo-night/waybar.css open."""
    assert session.select_theme("tokyo-night")
    assert session.select_file("waybar.css")
    return session
