"""
Global pytest configuration for MyApp

Provides shared fixtures (settings, app client, throwaway SQLite databases)
and enforces Python version requirements.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import pytest
import structlog
from fastapi.testclient import TestClient

from myapp.config import Settings
from myapp.server import create_app

_MIN_PY_VERSION = (3, 11)


def _verify_python_version() -> str:
    """Return the interpreter version string or exit if <3.11."""
    version_info = sys.version_info
    version_str = ".".join(map(str, version_info[:3]))
    if version_info < _MIN_PY_VERSION:
        pytest.exit(
            f"ERROR: pytest must run on Python 3.11+ (detected {version_str}).",
            returncode=1,
        )
    return version_str


def pytest_report_header(config: pytest.Config) -> str:
    version_str = _verify_python_version()
    return f"Python interpreter verified for pytest: {version_str}"


def pytest_configure(config: pytest.Config) -> None:
    """Register project markers to prevent unknown marker warnings."""
    markers = {
        "unit": "Unit tests that should execute quickly.",
        "integration": "Integration tests hitting multiple components.",
    }
    for name, description in markers.items():
        config.addinivalue_line("markers", f"{name}: {description}")


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers installed by entrypoints so later tests don't write to closed streams."""
    yield
    logging.getLogger().handlers.clear()
    structlog.reset_defaults()


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def app(settings: Settings):
    return create_app(settings)


@pytest.fixture
def client(app) -> TestClient:
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"Authorization": "Bearer test-access-token"}


@pytest.fixture
def database_url(tmp_path: Path) -> str:
    """URL of an empty SQLite database file private to the test."""
    return f"sqlite:///{tmp_path / 'myapp.db'}"


@pytest.fixture
def unreachable_database_url(tmp_path: Path) -> str:
    """SQLite URL whose parent directory does not exist, so connecting fails."""
    return f"sqlite:///{tmp_path / 'missing' / 'nested' / 'myapp.db'}"
