"""Pytest configuration and fixtures for slash-activity tests."""

import logging
import os
from collections.abc import Iterator
from pathlib import Path

import pytest

from slash_activity.constants import PACKAGE_LOGGER_NAME
from slash_activity.store import ActivityStore


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Drop SLASH_ACTIVITY_* variables so settings start from defaults."""
    for key in list(os.environ):
        if key.startswith("SLASH_ACTIVITY_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture(autouse=True)
def reset_package_logger() -> Iterator[None]:
    """Restore the package logger after tests that configure logging."""
    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    saved = (package_logger.level, package_logger.propagate, package_logger.handlers[:])
    yield
    for handler in package_logger.handlers[:]:
        if handler not in saved[2]:
            handler.close()
    package_logger.setLevel(saved[0])
    package_logger.propagate = saved[1]
    package_logger.handlers[:] = saved[2]


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    """Database location inside a not-yet-existing directory."""
    return tmp_path / "data" / "activity.db"


@pytest.fixture
def store(db_path: Path) -> Iterator[ActivityStore]:
    """Create an ActivityStore with a real temp SQLite database."""
    activity_store = ActivityStore(db_path)
    yield activity_store
    activity_store.close()
