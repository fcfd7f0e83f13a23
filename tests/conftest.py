"""
Pytest configuration and shared fixtures.

This file contains pytest configuration and reusable test fixtures.
"""

import logging
from datetime import date
from pathlib import Path
from typing import Generator

import pytest

import peopledb.config.settings as settings_mod
from peopledb.core.models import PersonFields
from peopledb.core.store import PeopleStore
from peopledb.infrastructure.paths import DATA_DIR_ENV_VAR


SAMPLE_CSV = (
    "id,first_name,last_name,date_of_birth,favorite_sport\n"
    "1,John,Smith,1960-10-10,football\n"
    "2,Jane,Doe,1985-03-22,water_polo\n"
    "3,\"Anne, Marie\",O'Neil,2000-02-29,other\n"
)


@pytest.fixture(autouse=True)
def isolated_data_dir(tmp_path: Path, monkeypatch) -> Generator[Path, None, None]:
    """
    Point settings, logs and default files at a temporary directory.

    Also drops the global settings manager and any logging handlers a test
    installed, so nothing leaks between tests.
    """
    data_dir = tmp_path / "appdata"
    monkeypatch.setenv(DATA_DIR_ENV_VAR, str(data_dir))
    settings_mod._settings_manager = None

    root = logging.getLogger()
    level = root.level

    yield data_dir

    # Handlers installed by setup_logging(); pytest's own are subclasses
    for handler in list(root.handlers):
        if type(handler) in (logging.StreamHandler, logging.FileHandler):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
    settings_mod._settings_manager = None


@pytest.fixture
def today() -> date:
    """Fixed reference date for future-date checks and ages."""
    return date(2024, 6, 1)


@pytest.fixture
def csv_path(tmp_path: Path) -> Path:
    """Path of a people file that does not exist yet."""
    return tmp_path / "people.csv"


@pytest.fixture
def sample_csv(csv_path: Path) -> Path:
    """
    Create a people file with three records.

    Returns:
        Path to the file.
    """
    csv_path.write_bytes(SAMPLE_CSV.encode("utf-8"))
    return csv_path


@pytest.fixture
def sample_store(sample_csv: Path, today: date) -> PeopleStore:
    """Store loaded from sample_csv."""
    return PeopleStore.load(sample_csv, today=today)


@pytest.fixture
def john() -> PersonFields:
    """Valid fields for a new person."""
    return PersonFields(
        first_name="John",
        last_name="Smith",
        date_of_birth="1960-10-10",
        favorite_sport="football",
    )
