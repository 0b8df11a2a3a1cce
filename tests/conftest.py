"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- Valid registration payloads and records
- CSV stores in temporary directories
- Recording notification senders and an inline executor
"""

import logging
from collections.abc import Callable, Generator
from datetime import datetime
from pathlib import Path
from typing import Any

import pytest

from src.adapters.repository.csv_log import CsvRegistrationStore
from src.config.logging_config import REGISTRATIONS_LOGGER
from src.domain.ports import RegistrationRecord
from tests.doubles import InlineExecutor, RecordingNotifier


@pytest.fixture
def valid_payload() -> dict[str, Any]:
    """A submission that passes every schema rule."""
    return {
        "name": "Ada Lovelace",
        "studentEmail": "ADA@example.com",
        "parentEmail": "p@example.com",
        "school": "Lyceum",
        "grade": 11,
        "age": 16,
        "country": "UK",
    }


@pytest.fixture
def make_record() -> Callable[..., RegistrationRecord]:
    """Factory for stored-record instances with overridable fields."""

    def _make(**overrides: Any) -> RegistrationRecord:
        fields: dict[str, Any] = {
            "id": "3f1c2a9e-0b7d-4c55-9a61-2f1e8d7c6b5a",
            "created_at": datetime(2025, 8, 1, 9, 30, 0),
            "name": "Ada Lovelace",
            "student_email": "ada@example.com",
            "parent_email": "p@example.com",
            "school": "Lyceum",
            "grade": 11,
            "age": 16,
            "country": "UK",
            "experience": "",
            "motivation": "",
        }
        fields.update(overrides)
        return RegistrationRecord(**fields)

    return _make


@pytest.fixture
def csv_path(tmp_path: Path) -> Path:
    """Location for a registrations file that does not exist yet."""
    return tmp_path / "data" / "registrations.csv"


@pytest.fixture
def store(csv_path: Path) -> CsvRegistrationStore:
    """Empty CSV store in a temporary directory."""
    return CsvRegistrationStore.open(csv_path)


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def inline_executor() -> InlineExecutor:
    return InlineExecutor()


@pytest.fixture
def restore_logging() -> Generator[None, None, None]:
    """Put root and registration handlers back after setup_logging runs."""
    root = logging.getLogger()
    registrations = logging.getLogger(REGISTRATIONS_LOGGER)
    saved = [
        (root, list(root.handlers), root.level),
        (registrations, list(registrations.handlers), registrations.level),
    ]
    yield
    for logger, handlers, level in saved:
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            if handler not in handlers:
                handler.close()
        for handler in handlers:
            logger.addHandler(handler)
        logger.setLevel(level)
