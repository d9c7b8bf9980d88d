"""Tests for the TOML settings layer."""

from pathlib import Path

import pytest

from omarchy_theme_maker.config.settings import (
    AppConfig,
    ExtensionSetting,
    color_from_hex,
    color_to_hex,
    config_search_paths,
    get_config_dir,
    load_config,
    save_config,
)
from omarchy_theme_maker.core.color import Rgba
from omarchy_theme_maker.errors import IoFailure


class TestAccentColors:
    """Accent color parsing for extension settings."""

    @pytest.mark.parametrize("text,expected", [
        ("#2646dc", Rgba(38, 70, 220)),
        ("2646dc", Rgba(38, 70, 220)),
        ("#abc", Rgba(0xaa, 0xbb, 0xcc)),
        ("#zz0000", Rgba(0, 0, 0)),
        ("#12345", Rgba(128, 128, 128)),
        ("", Rgba(128, 128, 128)),
    ])
    def test_color_from_hex(self, text: str, expected: Rgba) -> None:
        assert color_from_hex(text) == expected

    def test_color_to_hex(self) -> None:
        assert color_to_hex(Rgba(255, 159, 67)) == "#ff9f43"
        assert color_to_hex(Rgba(0, 0, 0, 10)) == "#000000"


class TestAppConfig:
    """Defaults and dictionary merging."""

    def test_defaults(self) -> None:
        config = AppConfig()
        assert config.general.save_prefix == "new-"
        assert config.general.themes_path.endswith(str(Path(".config") / "omarchy" / "themes"))
        assert set(config.extensions) == {
            ".css", ".toml", ".theme", ".conf", ".lua", ".json", ".yaml", ".ini",
        }
        assert all(setting.enabled for setting in config.extensions.values())

    def test_from_dict_merges_general(self) -> None:
        config = AppConfig.from_dict({"general": {"save_prefix": "my-", "bogus": 1}})
        assert config.general.save_prefix == "my-"
        assert not hasattr(config.general, "bogus")
        assert ".css" in config.extensions

    def test_from_dict_replaces_extensions(self) -> None:
        config = AppConfig.from_dict({"extensions": {".css": {"enabled": False}}})
        assert config.extensions == {".css": ExtensionSetting(enabled=False, color="#808080")}

    def test_from_dict_ignores_wrong_shapes(self) -> None:
        config = AppConfig.from_dict({"general": "nope", "extensions": []})
        assert config == AppConfig()

    def test_to_dict(self) -> None:
        payload = AppConfig().to_dict()
        assert payload["general"]["save_prefix"] == "new-"
        assert payload["extensions"][".toml"] == {"enabled": True, "color": "#ff9f43"}


class TestLoadSave:
    """Reading and writing config.toml."""

    def test_config_dir_follows_xdg(self, isolated_config: Path) -> None:
        assert get_config_dir() == isolated_config
        assert config_search_paths()[0] == isolated_config / "config.toml"

    def test_no_file_gives_defaults(self, tmp_path: Path) -> None:
        config, source = load_config([tmp_path / "missing.toml"])
        assert config == AppConfig()
        assert source is None

    def test_round_trip(self, tmp_path: Path) -> None:
        config = AppConfig()
        config.general.save_prefix = "copy-"
        config.extensions[".ini"].enabled = False
        path = save_config(config, tmp_path / "cfg")

        assert path == tmp_path / "cfg" / "config.toml"
        loaded, source = load_config([path])
        assert loaded == config
        assert source == str(path)

    def test_default_location(self, isolated_config: Path) -> None:
        path = save_config(AppConfig())
        assert path == isolated_config / "config.toml"
        _, source = load_config()
        assert source == str(path)

    def test_broken_file_is_skipped(self, tmp_path: Path) -> None:
        broken = tmp_path / "broken.toml"
        broken.write_text("[general\nsave_prefix = ", encoding="utf-8")
        good = save_config(AppConfig.from_dict({"general": {"save_prefix": "ok-"}}), tmp_path / "good")

        config, source = load_config([broken, good])
        assert source == str(good)
        assert config.general.save_prefix == "ok-"

    def test_partial_file(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text('[general]\nthemes_path = "/srv/themes"\n', encoding="utf-8")
        config, _ = load_config([path])
        assert config.general.themes_path == "/srv/themes"
        assert config.general.save_prefix == "new-"

    def test_unwritable_location(self, tmp_path: Path) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("", encoding="utf-8")
        with pytest.raises(IoFailure):
            save_config(AppConfig(), blocker)
