"""
Application settings and configuration.

This module provides centralized access to application settings with automatic
persistence to disk. Settings are stored as JSON in a platform-specific location:

- Windows: %APPDATA%/LocalLow/peopledb/settings.json
- macOS: ~/Library/Application Support/peopledb/settings.json
- Linux: ~/.config/peopledb/settings.json

Set PEOPLEDB_DATA_DIR to use another directory.

Example:
    from peopledb.config.settings import get_settings, get_settings_manager

    settings = get_settings()
    print(settings.theme)

    # Update settings (auto-saves)
    manager = get_settings_manager()
    manager.update(theme="light_blue", window_width=1000)

    # Remember a file (auto-saves)
    manager.add_recent_file("/path/to/people.csv")
"""

import json
import logging
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Optional

from ..infrastructure.paths import get_settings_file_path


@dataclass
class AppSettings:
    """Application-wide settings."""

    # Logging settings
    log_level: int = logging.INFO
    log_to_file: bool = True
    log_file_path: Optional[Path] = None  # None = log.txt in the data directory

    # UI settings
    window_width: int = 900
    window_height: int = 600
    theme: str = "dark_teal.xml"  # any qt_material theme file name

    # Files
    last_file: Optional[str] = None
    recent_files: list[str] = field(default_factory=list)
    max_recent_items: int = 10


def _parse_log_level(value) -> Optional[int]:
    """
    Convert a stored log level to its numeric value.

    Args:
        value: A number such as 20, or a level name such as 'DEBUG'.

    Returns:
        The numeric level, or None if the value names no level.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        level = logging.getLevelName(value.strip().upper())
        if isinstance(level, int):
            return level
    return None


class SettingsManager:
    """
    Manages loading and saving application settings.
    """

    def __init__(self, config_file: Optional[Path] = None):
        """
        Initialize the settings manager.

        Args:
            config_file: Path to configuration file. If None, uses default location.
        """
        if config_file is None:
            config_file = get_settings_file_path()

        self.config_file = Path(config_file)
        self._settings = AppSettings()
        self._logger = logging.getLogger(__name__)

    def load(self) -> AppSettings:
        """
        Load settings from configuration file.

        Unreadable or malformed files are logged and the defaults are kept.

        Returns:
            The loaded settings object.
        """
        if not self.config_file.exists():
            self._logger.info(f"Settings file not found at {self.config_file}, using defaults")
            return self._settings

        try:
            with open(self.config_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            self._logger.error(f"Failed to parse settings file: {e}. Using defaults.")
            return self._settings
        except OSError as e:
            self._logger.error(f"Failed to load settings: {e}. Using defaults.")
            return self._settings

        if not isinstance(data, dict):
            self._logger.error("Settings file does not contain an object. Using defaults.")
            return self._settings

        if data.get('log_file_path'):
            data['log_file_path'] = Path(data['log_file_path'])

        if 'log_level' in data:
            level = _parse_log_level(data['log_level'])
            if level is None:
                self._logger.warning(f"Ignoring invalid log level in settings: {data['log_level']!r}")
                del data['log_level']
            else:
                data['log_level'] = level

        for key, value in data.items():
            if hasattr(self._settings, key):
                setattr(self._settings, key, value)
            else:
                self._logger.debug(f"Ignoring unknown setting in file: {key}")

        self._logger.info(f"Settings loaded from {self.config_file}")
        return self._settings

    def save(self, settings: Optional[AppSettings] = None) -> None:
        """
        Save settings to configuration file.

        Failures are logged, not raised: losing preferences must not stop the app.

        Args:
            settings: Settings object to save. If None, saves current settings.
        """
        if settings is not None:
            self._settings = settings

        try:
            self.config_file.parent.mkdir(parents=True, exist_ok=True)

            data = asdict(self._settings)
            if data.get('log_file_path'):
                data['log_file_path'] = str(Path(data['log_file_path'])).replace('\\', '/')

            # Atomic write: write to temp file, then rename
            temp_file = self.config_file.with_suffix('.tmp')
            with open(temp_file, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2, ensure_ascii=False)

            temp_file.replace(self.config_file)

            self._logger.info(f"Settings saved to {self.config_file}")

        except (OSError, TypeError) as e:
            self._logger.error(f"Failed to save settings: {e}")

    def get(self) -> AppSettings:
        """
        Get the current settings.

        Returns:
            The current settings object.
        """
        return self._settings

    def update(self, **kwargs) -> None:
        """
        Update specific settings and auto-save.

        Args:
            **kwargs: Setting names and values to update.
        """
        for key, value in kwargs.items():
            if hasattr(self._settings, key):
                setattr(self._settings, key, value)
            else:
                self._logger.warning(f"Ignoring unknown setting: {key}")

        self.save()

    def add_recent_file(self, path: str) -> None:
        """
        Put a file at the front of the recent files list and make it the last file.

        Args:
            path: Path to the people file.
        """
        normalized_path = str(Path(path)).replace('\\', '/')

        recent = [p for p in self._settings.recent_files if p != normalized_path]
        recent.insert(0, normalized_path)
        self._settings.recent_files = recent[:self._settings.max_recent_items]
        self._settings.last_file = normalized_path

        self.save()

    def reset_to_defaults(self) -> None:
        """Reset all settings to their default values and save."""
        self._settings = AppSettings()
        self.save()


# Global settings instance
_settings_manager: Optional[SettingsManager] = None


def get_settings_manager() -> SettingsManager:
    """
    Get the shared settings manager, loading it on first use.

    Returns:
        The global SettingsManager.
    """
    global _settings_manager
    if _settings_manager is None:
        _settings_manager = SettingsManager()
        _settings_manager.load()
    return _settings_manager


def get_settings() -> AppSettings:
    """
    Get the current application settings.

    Returns:
        The current AppSettings object.
    """
    return get_settings_manager().get()
