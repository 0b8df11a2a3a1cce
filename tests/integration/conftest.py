"""
Shared fixtures for integration tests.

Runs the real application lifespan against a CSV file and log directory
in a temporary location, with console email delivery.
"""

from collections.abc import Generator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from src.api.main import app
from src.config.settings import get_settings


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    return tmp_path


@pytest.fixture
def client(
    data_dir: Path, monkeypatch: pytest.MonkeyPatch, restore_logging: None
) -> Generator[TestClient, None, None]:
    """Test client with lifespan started against temporary storage."""
    monkeypatch.setenv("REGISTRATIONS_FILE", str(data_dir / "data" / "registrations.csv"))
    monkeypatch.setenv("LOG_DIR", str(data_dir / "logs"))
    monkeypatch.setenv("EMAIL_BACKEND", "console")
    monkeypatch.setenv("ENVIRONMENT", "test")
    monkeypatch.delenv("EMAIL_USER", raising=False)
    monkeypatch.delenv("EMAIL_PASS", raising=False)
    get_settings.cache_clear()
    with TestClient(app) as test_client:
        yield test_client
    get_settings.cache_clear()
