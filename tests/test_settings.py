"""
Tests for the SettingsManager persistence behaviour.

These tests verify that settings are saved and loaded correctly and that the
global settings manager uses the persistent data directory when no custom
config_file is provided.
"""
from __future__ import annotations

from pathlib import Path
import json
import logging

import pytest


def test_save_and_load(tmp_path: Path):
    from peopledb.config.settings import SettingsManager

    config_file = tmp_path / "settings.json"

    # Create a manager with a custom file path
    manager = SettingsManager(config_file=config_file)
    manager.load()

    # Update and add recent files (auto-saves)
    manager.update(theme="light_blue.xml", window_width=1400, window_height=900)
    manager.add_recent_file("/path/to/people1.csv")
    manager.add_recent_file("/path/to/people2.csv")

    # File should be created
    assert config_file.exists()

    # Load again using a new manager instance to verify persistence
    new_manager = SettingsManager(config_file=config_file)
    new_manager.load()
    settings = new_manager.get()

    assert settings.theme == "light_blue.xml"
    assert settings.window_width == 1400
    assert settings.window_height == 900
    assert settings.recent_files == ["/path/to/people2.csv", "/path/to/people1.csv"]
    assert settings.last_file == "/path/to/people2.csv"

    # Check contents on disk match expectations
    with open(config_file, "r", encoding="utf-8") as f:
        data = json.load(f)

    assert data["theme"] == "light_blue.xml"
    assert data["window_width"] == 1400
    assert data["window_height"] == 900


def test_recent_files_are_deduplicated_and_trimmed(tmp_path: Path):
    from peopledb.config.settings import SettingsManager

    manager = SettingsManager(config_file=tmp_path / "settings.json")
    manager.update(max_recent_items=3)

    for name in ["a.csv", "b.csv", "c.csv", "a.csv", "d.csv"]:
        manager.add_recent_file(f"/data/{name}")

    assert manager.get().recent_files == ["/data/d.csv", "/data/a.csv", "/data/c.csv"]


def test_malformed_file_keeps_defaults(tmp_path: Path):
    from peopledb.config.settings import AppSettings, SettingsManager

    config_file = tmp_path / "settings.json"
    config_file.write_text("{not json", encoding="utf-8")

    settings = SettingsManager(config_file=config_file).load()

    assert settings == AppSettings()


def test_unknown_keys_are_ignored(tmp_path: Path):
    from peopledb.config.settings import SettingsManager

    config_file = tmp_path / "settings.json"
    config_file.write_text(json.dumps({"theme": "dark_amber.xml", "bogus": 1}), encoding="utf-8")

    settings = SettingsManager(config_file=config_file).load()

    assert settings.theme == "dark_amber.xml"
    assert not hasattr(settings, "bogus")


def test_reset_to_defaults(tmp_path: Path):
    from peopledb.config.settings import AppSettings, SettingsManager

    manager = SettingsManager(config_file=tmp_path / "settings.json")
    manager.update(window_width=1234)
    manager.reset_to_defaults()

    assert manager.get() == AppSettings()
    assert json.loads((tmp_path / "settings.json").read_text(encoding="utf-8"))["window_width"] == 900


def test_get_settings_manager_uses_default_path(isolated_data_dir: Path):
    import peopledb.config.settings as settings_mod

    # Ensure we start with a fresh global manager
    settings_mod._settings_manager = None

    manager = settings_mod.get_settings_manager()
    assert manager.config_file.parent == isolated_data_dir
    assert manager.config_file.name == "settings.json"
    assert settings_mod.get_settings_manager() is manager

    manager.update(theme="light_cyan.xml")
    assert manager.config_file.exists()

    # Cleanup the global manager for subsequent tests
    settings_mod._settings_manager = None


@pytest.mark.parametrize("theme", ["dark_teal.xml", "light_blue.xml"])
def test_theme_is_stored_verbatim(tmp_path: Path, theme: str):
    from peopledb.config.settings import SettingsManager

    manager = SettingsManager(config_file=tmp_path / "settings.json")
    manager.update(theme=theme)

    assert SettingsManager(config_file=tmp_path / "settings.json").load().theme == theme


@pytest.mark.parametrize("stored, expected", [("DEBUG", logging.DEBUG), ("warning", logging.WARNING), (10, 10)])
def test_log_level_names_are_converted(tmp_path: Path, stored, expected: int):
    from peopledb.config.settings import SettingsManager

    config_file = tmp_path / "settings.json"
    config_file.write_text(json.dumps({"log_level": stored}), encoding="utf-8")

    assert SettingsManager(config_file=config_file).load().log_level == expected


@pytest.mark.parametrize("stored", ["loud", True, None, [20]])
def test_invalid_log_level_keeps_default(tmp_path: Path, stored):
    from peopledb.config.settings import SettingsManager

    config_file = tmp_path / "settings.json"
    config_file.write_text(json.dumps({"log_level": stored, "theme": "dark_amber.xml"}), encoding="utf-8")

    settings = SettingsManager(config_file=config_file).load()

    assert settings.log_level == logging.INFO
    assert settings.theme == "dark_amber.xml"


def test_log_level_name_reaches_logging_setup(tmp_path: Path):
    from peopledb.config.settings import SettingsManager
    from peopledb.infrastructure.logging_config import setup_logging

    config_file = tmp_path / "settings.json"
    config_file.write_text(json.dumps({"log_level": "DEBUG"}), encoding="utf-8")
    settings = SettingsManager(config_file=config_file).load()

    setup_logging(level=settings.log_level, log_to_file=False)

    assert logging.getLogger().level == logging.DEBUG
