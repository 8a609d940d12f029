"""
Pytest configuration and shared fixtures for logkit tests.
"""

import io
import json
import os
import tempfile
from pathlib import Path
from typing import List

import pytest
from freezegun import freeze_time

from logkit.logging import LoggingManager, logging_manager


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        yield Path(tmp_dir)


@pytest.fixture
def log_file(temp_dir):
    """Path of a not-yet-existing log file inside a nested directory."""
    return temp_dir / "nested" / "app.log"


@pytest.fixture
def console_stream():
    """In-memory stream standing in for stdout."""
    return io.StringIO()


@pytest.fixture
def manager():
    """A private logger slot, so tests never touch the default one."""
    slot = LoggingManager()
    yield slot
    if slot.handle is not None:
        slot.handle.close()


@pytest.fixture(autouse=True)
def reset_default_manager():
    """Leave the process-wide slot empty after every test."""
    yield
    if logging_manager.handle is not None:
        logging_manager.handle.close()
    logging_manager.reset()


@pytest.fixture
def clean_environment(monkeypatch):
    """Remove LOGKIT_* variables for the duration of a test."""
    for key in list(os.environ):
        if key.startswith("LOGKIT_"):
            monkeypatch.delenv(key)
    yield monkeypatch


@pytest.fixture
def frozen_time():
    """Freeze the clock at a fixed UTC instant."""
    with freeze_time("2024-03-05 14:07:09.123456") as frozen:
        yield frozen


@pytest.fixture
def read_json_lines():
    """Parser for JSON-lines log files."""

    def read(path: Path) -> List[dict]:
        with open(path, encoding="utf-8") as f:
            return [json.loads(line) for line in f if line.strip()]

    return read


# Test markers
def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")
    config.addinivalue_line("markers", "slow: Slow tests")
