"""
Path utilities and constants.

This module provides helper functions for working with paths in the application.
"""

import os
import platform
from pathlib import Path

APP_NAME = "peopledb"

# Overrides the platform data directory (tests, portable installs)
DATA_DIR_ENV_VAR = "PEOPLEDB_DATA_DIR"


def get_persistent_data_directory() -> Path:
    """
    Get the persistent data directory for the application (cross-platform).

    Returns:
        Path to the persistent data directory.

    Platform-specific locations:
        - Windows: %APPDATA%/LocalLow/peopledb
        - macOS: ~/Library/Application Support/peopledb
        - Linux: ~/.config/peopledb

    The PEOPLEDB_DATA_DIR environment variable takes precedence on all platforms.
    """
    override = os.environ.get(DATA_DIR_ENV_VAR)
    if override:
        data_dir = Path(override).expanduser()
    else:
        system = platform.system()

        if system == "Windows":
            base = Path.home() / "AppData" / "LocalLow"
        elif system == "Darwin":
            base = Path.home() / "Library" / "Application Support"
        else:
            base = Path.home() / ".config"

        data_dir = base / APP_NAME

    data_dir.mkdir(parents=True, exist_ok=True)

    return data_dir


def get_settings_file_path() -> Path:
    """
    Get the path to the settings file.

    Returns:
        Path to the settings.json file.
    """
    return get_persistent_data_directory() / "settings.json"


def get_log_file_path() -> Path:
    """
    Get the path to the main log file.

    Returns:
        Path to the log.txt file.
    """
    return get_persistent_data_directory() / "log.txt"


def get_old_log_file_path() -> Path:
    """
    Get the path to the old log file.

    Returns:
        Path to the log.old.txt file.
    """
    return get_persistent_data_directory() / "log.old.txt"


def get_default_database_path() -> Path:
    """Suggested location for a new people file."""
    return get_persistent_data_directory() / "people.csv"
