"""Tests for settings schemas and the configuration manager."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from webplayer.core.config_defaults import create_default_config_files, get_config_template
from webplayer.core.config_manager import ConfigManager
from webplayer.core.config_schemas import (
    APISettings,
    AppSettings,
    LoggingSettings,
    NetworkSettings,
    SearchSettings,
)
from webplayer.core.exceptions import ConfigurationError


class TestSchemas:
    def test_defaults(self) -> None:
        settings = AppSettings()

        assert settings.search.quiet_period_ms == 500
        assert settings.search.quiet_period == 0.5
        assert settings.search.suggestion_limit == 5
        assert settings.storage.recent_urls_limit == 10
        assert settings.api.hianime_base_url == "https://hi-animeapi.onrender.com/api/v1"
        assert settings.api.weeb_base_url == "https://weebapi.onrender.com"

    def test_browser_headers(self) -> None:
        headers = NetworkSettings().headers()

        assert set(headers) == {"User-Agent", "Accept", "Accept-Language"}
        assert "Mozilla/5.0" in headers["User-Agent"]

    def test_base_url_trailing_slash_stripped(self) -> None:
        assert APISettings(weeb_base_url="https://weeb.example/").weeb_base_url == "https://weeb.example"

    def test_base_url_requires_scheme(self) -> None:
        with pytest.raises(ValidationError):
            APISettings(hianime_base_url="hi-anime.example")

    def test_unknown_default_source(self) -> None:
        with pytest.raises(ValidationError):
            SearchSettings(default_source="scrape")

    @pytest.mark.parametrize(
        ("size", "expected"),
        [("10MB", 10 * 1024 ** 2), ("512kb", 512 * 1024), ("1GB", 1024 ** 3), ("100B", 100)],
    )
    def test_log_size_parsing(self, size: str, expected: int) -> None:
        assert LoggingSettings(max_size=size).max_bytes == expected


class TestConfigManager:
    def test_creates_default_file(self, tmp_path: Path) -> None:
        manager = ConfigManager(tmp_path)

        assert manager.settings_file.exists()
        assert manager.settings == AppSettings()

    def test_update_and_get_setting(self, tmp_path: Path) -> None:
        manager = ConfigManager(tmp_path)
        manager.update_setting("search.quiet_period_ms", 250)

        assert manager.get_setting("search.quiet_period_ms") == 250
        assert ConfigManager(tmp_path).settings.search.quiet_period_ms == 250

    def test_invalid_value_rejected(self, tmp_path: Path) -> None:
        manager = ConfigManager(tmp_path)

        with pytest.raises(ConfigurationError):
            manager.update_setting("search.quiet_period_ms", -1)
        assert manager.settings.search.quiet_period_ms == 500

    def test_invalid_path_rejected(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError):
            ConfigManager(tmp_path).update_setting("search.nope", 1)

    def test_get_setting_default(self, tmp_path: Path) -> None:
        assert ConfigManager(tmp_path).get_setting("ui.missing", "fallback") == "fallback"

    def test_corrupted_file_backed_up(self, tmp_path: Path) -> None:
        (tmp_path / "settings.json").write_text("{broken", encoding="utf-8")

        manager = ConfigManager(tmp_path)

        assert manager.settings == AppSettings()
        assert (tmp_path / "settings.json.backup").exists()

    def test_reload_picks_up_external_edit(self, tmp_path: Path) -> None:
        manager = ConfigManager(tmp_path)
        data = json.loads(manager.settings_file.read_text(encoding="utf-8"))
        data["search"]["suggestion_limit"] = 8
        manager.settings_file.write_text(json.dumps(data), encoding="utf-8")

        manager.reload_configuration()

        assert manager.settings.search.suggestion_limit == 8

    def test_reset_to_defaults(self, tmp_path: Path) -> None:
        manager = ConfigManager(tmp_path)
        manager.update_setting("ui.color_theme", "dark")
        manager.reset_to_defaults()

        assert manager.settings.ui.color_theme == "default"


class TestDefaults:
    def test_create_default_config_files(self, tmp_path: Path) -> None:
        config_dir = tmp_path / "config"
        create_default_config_files(config_dir)

        data = json.loads((config_dir / "settings.json").read_text(encoding="utf-8"))
        assert data == get_config_template()

    def test_existing_file_untouched(self, tmp_path: Path) -> None:
        settings_file = tmp_path / "settings.json"
        settings_file.write_text('{"ui": {"color_theme": "light"}}', encoding="utf-8")

        create_default_config_files(tmp_path)

        assert json.loads(settings_file.read_text(encoding="utf-8")) == {"ui": {"color_theme": "light"}}
