"""Shared pytest configuration for cadence_lite tests."""

import logging
from collections.abc import Generator
from typing import Any
from zoneinfo import ZoneInfo

import pytest

from cadence_lite.lite_logging import PACKAGE_LOGGERS


def pytest_configure(config: Any) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Fast unit tests")
    config.addinivalue_line("markers", "critical_path: Core functionality tests")


@pytest.fixture
def pacific() -> ZoneInfo:
    """Deterministic DST-observing zone so tests do not depend on the host zone."""
    return ZoneInfo("America/Los_Angeles")


@pytest.fixture
def utc() -> ZoneInfo:
    return ZoneInfo("UTC")


@pytest.fixture(autouse=True)
def clean_test_environment(monkeypatch: Any) -> Generator[None, Any, None]:
    """Clear CADENCE_* environment overrides so host settings cannot leak into tests."""
    for key in (
        "CADENCE_DEFAULT_TIMEZONE",
        "CADENCE_WINDOW_YEARS",
        "CADENCE_MAX_OCCURRENCES",
        "CADENCE_LOG_LEVEL",
        "CADENCE_DEBUG",
    ):
        monkeypatch.delenv(key, raising=False)
    yield


@pytest.fixture(autouse=True)
def restore_logging_levels() -> Generator[None, Any, None]:
    """Restore logger levels changed by configure_lite_logging()."""
    root = logging.getLogger()
    saved_root = root.level
    saved = {name: logging.getLogger(name).level for name in PACKAGE_LOGGERS}
    yield
    root.setLevel(saved_root)
    for name, level in saved.items():
        logging.getLogger(name).setLevel(level)
