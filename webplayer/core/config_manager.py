"""
Configuration Manager - JSON-based settings management.

This module provides centralized configuration management for WebPlayer,
handling user preferences with validation, corrupted-file recovery and
default value management.
"""

import json
import logging
from pathlib import Path
from typing import Any, Optional, Union
from threading import Lock

from pydantic import ValidationError

from webplayer.core.config_schemas import AppSettings
from webplayer.core.exceptions import ConfigurationError


logger = logging.getLogger(__name__)


class ConfigManager:
    """
    Loads, validates and persists ``settings.json``.

    Every read and write goes through a lock, and every change is validated
    against ``AppSettings`` before it is written back.
    """

    SETTINGS_FILENAME = "settings.json"

    def __init__(self, config_dir: Optional[Union[str, Path]] = None):
        """
        Initialize configuration manager.

        Args:
            config_dir: Directory holding ``settings.json``; ``./config``
                when omitted. Created if missing.
        """
        self.config_dir = Path(config_dir or "config")
        self.config_dir.mkdir(parents=True, exist_ok=True)

        self._settings_file = self.config_dir / self.SETTINGS_FILENAME
        self._lock = Lock()
        self._settings: Optional[AppSettings] = None

        self._load_configurations()

    @property
    def settings_file(self) -> Path:
        return self._settings_file

    def _load_configurations(self) -> None:
        try:
            self._settings = self._read_settings()
        except OSError as e:
            logger.error(f"Cannot read {self._settings_file}: {e}")
            raise ConfigurationError(f"Configuration loading failed: {e}", str(self._settings_file))
        logger.info(f"Configuration loaded from {self._settings_file}")

    def _read_settings(self) -> AppSettings:
        """Read settings, replacing a missing or corrupted file with defaults."""
        if not self._settings_file.exists():
            logger.info("No settings file yet, writing defaults")
            return self._write_defaults()

        try:
            raw = json.loads(self._settings_file.read_text(encoding='utf-8'))
            return AppSettings.model_validate(raw)
        except (json.JSONDecodeError, ValidationError) as e:
            backup_path = self._settings_file.with_suffix('.json.backup')
            self._settings_file.replace(backup_path)
            logger.warning(f"Unusable settings moved to {backup_path}, falling back to defaults: {e}")
            return self._write_defaults()

    def _write_defaults(self) -> AppSettings:
        settings = AppSettings()
        self._write_settings(settings)
        return settings

    def _write_settings(self, settings: AppSettings) -> None:
        """Write settings through a temporary file that replaces the original."""
        temp_file = self._settings_file.with_suffix('.tmp')
        try:
            temp_file.write_text(
                json.dumps(settings.model_dump(), indent=2, ensure_ascii=False),
                encoding='utf-8'
            )
            temp_file.replace(self._settings_file)
        except OSError as e:
            temp_file.unlink(missing_ok=True)
            raise ConfigurationError(f"Failed to save settings: {e}", str(self._settings_file))
        logger.debug(f"Settings written to {self._settings_file}")

    @property
    def settings(self) -> AppSettings:
        """Current validated settings."""
        with self._lock:
            if self._settings is None:
                self._settings = self._read_settings()
            return self._settings

    def update_setting(self, key_path: str, value: Any) -> None:
        """
        Change one setting addressed in dot notation.

        Args:
            key_path: Path such as ``search.quiet_period_ms``
            value: New value, validated together with all other settings

        Raises:
            ConfigurationError: If the path names no setting or the value
                does not validate
        """
        with self._lock:
            if self._settings is None:
                raise ConfigurationError("Settings not loaded")

            data = self._settings.model_dump()
            *parents, leaf = key_path.split('.')

            section: Any = data
            for key in parents:
                section = section.get(key) if isinstance(section, dict) else None
            if not isinstance(section, dict) or leaf not in section:
                raise ConfigurationError(f"Invalid setting path: {key_path}")

            section[leaf] = value

            try:
                updated = AppSettings.model_validate(data)
            except ValidationError as e:
                raise ConfigurationError(f"Invalid value for {key_path}", details=str(e))

            self._write_settings(updated)
            self._settings = updated
            logger.info(f"{key_path} set to {value!r}")

    def get_setting(self, key_path: str, default: Any = None) -> Any:
        """
        Look up one setting in dot notation.

        Returns:
            The value, or ``default`` when the path names nothing
        """
        with self._lock:
            if self._settings is None:
                return default

            value: Any = self._settings.model_dump()
            for key in key_path.split('.'):
                if not isinstance(value, dict) or key not in value:
                    return default
                value = value[key]
            return value

    def reload_configuration(self) -> None:
        """Discard cached settings and read the file again."""
        with self._lock:
            self._settings = None
        self._load_configurations()

    def reset_to_defaults(self) -> None:
        """Overwrite the settings file with default values."""
        with self._lock:
            logger.warning("Resetting configuration to defaults")
            self._settings = self._write_defaults()


__all__ = ["ConfigManager"]
