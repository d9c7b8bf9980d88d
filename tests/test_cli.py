"""Tests for the command line interface."""

from pathlib import Path

import pytest
from typer.testing import CliRunner

from omarchy_theme_maker.cli.app import create_app, parse_color_argument
from omarchy_theme_maker.config.settings import load_config
from omarchy_theme_maker.core.color import Rgba

from conftest import WAYBAR_CSS

runner = CliRunner()


@pytest.fixture
def app(monkeypatch: pytest.MonkeyPatch):
    # Wide enough that rich never wraps table cells or paths
    monkeypatch.setenv("COLUMNS", "200")
    return create_app()


def invoke(app, themes_dir: Path, *args: str):
    return runner.invoke(app, ["--themes-path", str(themes_dir), *args])


class TestParseColorArgument:
    """Colors given on the command line."""

    def test_literals(self) -> None:
        assert parse_color_argument("#ff0000") == Rgba(255, 0, 0)
        assert parse_color_argument(" rgb(1, 2, 3) ") == Rgba(1, 2, 3)
        assert parse_color_argument("rgba(1, 2, 3, 0)") == Rgba(1, 2, 3, 0)

    @pytest.mark.parametrize("text", ["red", "#ff00", "x #fff", "#fff;"])
    def test_rejects(self, text: str) -> None:
        assert parse_color_argument(text) is None


class TestListing:
    """themes / files / colors."""

    def test_help(self, app) -> None:
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0, result.output
        assert "themes" in result.output

    def test_themes(self, app, themes_dir: Path) -> None:
        result = invoke(app, themes_dir, "themes")
        assert result.exit_code == 0
        assert result.output.index("catppuccin") < result.output.index("tokyo-night")
        assert ".git" not in result.output

    def test_themes_missing_dir(self, app, tmp_path: Path) -> None:
        result = invoke(app, tmp_path / "missing", "themes")
        assert result.exit_code == 1
        assert "Path does not exist" in result.output

    def test_files(self, app, themes_dir: Path) -> None:
        result = invoke(app, themes_dir, "files", "tokyo-night")
        assert result.exit_code == 0
        names = [line.strip() for line in result.output.splitlines()[1:]]
        assert names == ["alacritty.toml", "notes.md", "waybar.css"]

    def test_files_by_color(self, app, themes_dir: Path) -> None:
        result = invoke(app, themes_dir, "files", "tokyo-night", "--sort", "color")
        assert result.exit_code == 0
        names = [line.strip() for line in result.output.splitlines()[1:]]
        assert names == ["waybar.css", "notes.md", "alacritty.toml"]

    def test_unknown_theme(self, app, themes_dir: Path) -> None:
        result = invoke(app, themes_dir, "files", "gruvbox")
        assert result.exit_code == 1
        assert "Theme not found: gruvbox" in result.output

    def test_colors(self, app, themes_dir: Path) -> None:
        result = invoke(app, themes_dir, "colors", "tokyo-night", "waybar.css")
        assert result.exit_code == 0
        assert "@define-color bg #1a1b26;" in result.output

    def test_colors_table(self, app, themes_dir: Path) -> None:
        result = invoke(app, themes_dir, "colors", "tokyo-night", "waybar.css", "--table")
        assert result.exit_code == 0
        for color_id in ("1_17", "2_17", "3_27"):
            assert color_id in result.output
        assert "RGBA" in result.output

    def test_colors_disabled_extension(self, app, themes_dir: Path) -> None:
        result = invoke(app, themes_dir, "colors", "tokyo-night", "notes.md")
        assert result.exit_code == 1
        assert "Color parsing disabled for .md" in result.output


class TestSetColor:
    """The set command."""

    def test_saves_in_place(self, app, themes_dir: Path) -> None:
        result = invoke(app, themes_dir, "set", "tokyo-night", "waybar.css", "1_17", "#ff0000")
        assert result.exit_code == 0, result.output
        assert "#1a1b26 → #ff0000 (HEX6)" in result.output
        saved = (themes_dir / "tokyo-night" / "waybar.css").read_text(encoding="utf-8")
        assert saved == WAYBAR_CSS.replace("bg #1a1b26", "bg #ff0000")

    def test_keeps_rgba_format(self, app, themes_dir: Path) -> None:
        result = invoke(app, themes_dir, "set", "tokyo-night", "waybar.css", "3_27", "#000000")
        assert result.exit_code == 0, result.output
        saved = (themes_dir / "tokyo-night" / "waybar.css").read_text(encoding="utf-8")
        assert "rgba(0, 0, 0, 1)" in saved

    def test_dry_run(self, app, themes_dir: Path) -> None:
        result = invoke(
            app, themes_dir, "set", "tokyo-night", "waybar.css", "1_17", "rgb(0, 0, 255)", "-n",
        )
        assert result.exit_code == 0, result.output
        assert "*#0000ff" in result.output
        saved = (themes_dir / "tokyo-night" / "waybar.css").read_text(encoding="utf-8")
        assert saved == WAYBAR_CSS

    def test_save_as(self, app, themes_dir: Path) -> None:
        result = invoke(
            app, themes_dir, "set", "tokyo-night", "waybar.css", "2_17", "#ffffff", "--save-as",
        )
        assert result.exit_code == 0, result.output
        copy = themes_dir / "new-tokyo-night"
        assert "fg #ffffff" in (copy / "waybar.css").read_text(encoding="utf-8")
        assert (copy / "backgrounds" / "1.jpg").exists()
        assert (themes_dir / "tokyo-night" / "waybar.css").read_text(encoding="utf-8") == WAYBAR_CSS

    def test_overwrite(self, app, themes_dir: Path) -> None:
        result = invoke(
            app, themes_dir, "set", "tokyo-night", "alacritty.toml", "1_14", "#000000", "--overwrite",
        )
        assert result.exit_code == 0, result.output
        saved = (themes_dir / "tokyo-night" / "alacritty.toml").read_text(encoding="utf-8")
        assert 'background = "#000000"' in saved

    def test_bad_color(self, app, themes_dir: Path) -> None:
        result = invoke(app, themes_dir, "set", "tokyo-night", "waybar.css", "1_17", "blue")
        assert result.exit_code == 1
        assert "Not a color literal: blue" in result.output

    def test_unknown_id(self, app, themes_dir: Path) -> None:
        result = invoke(app, themes_dir, "set", "tokyo-night", "waybar.css", "9_9", "#000")
        assert result.exit_code == 1
        assert "No color with id 9_9" in result.output


class TestConfigCommand:
    """The config command."""

    def test_show_defaults(self, app) -> None:
        result = runner.invoke(app, ["config"])
        assert result.exit_code == 0, result.output
        assert "Config loaded from: defaults" in result.output
        assert ".css" in result.output
        assert "new-" in result.output

    def test_change_and_persist(self, app, isolated_config: Path) -> None:
        result = runner.invoke(app, ["config", "--save-prefix", "copy-", "--disable", "lua"])
        assert result.exit_code == 0, result.output

        config, source = load_config([isolated_config / "config.toml"])
        assert source is not None
        assert config.general.save_prefix == "copy-"
        assert config.extensions[".lua"].enabled is False
        assert config.extensions[".css"].enabled is True

    def test_clear_save_prefix(self, app, isolated_config: Path) -> None:
        result = runner.invoke(app, ["config", "--save-prefix", ""])
        assert result.exit_code == 0, result.output

        config, _ = load_config([isolated_config / "config.toml"])
        assert config.general.save_prefix == ""

    def test_themes_path_is_used(self, app, themes_dir: Path) -> None:
        result = runner.invoke(app, ["config", "--set-themes-path", str(themes_dir)])
        assert result.exit_code == 0, result.output
        result = runner.invoke(app, ["themes"])
        assert result.exit_code == 0, result.output
        assert "tokyo-night" in result.output

    def test_unknown_extension(self, app) -> None:
        result = runner.invoke(app, ["config", "--enable", ".xyz"])
        assert result.exit_code == 1
        assert "Unknown extension: .xyz" in result.output
