"""Unit tests for duplicate detection."""

from collections.abc import Callable
from unittest.mock import Mock

import pytest

from src.domain.dedup import DuplicateChecker, normalize_email
from src.domain.exceptions import StorageError
from src.domain.ports import RegistrationRecord


class TestNormalizeEmail:
    """Tests for email normalization."""

    def test_strips_whitespace(self) -> None:
        assert normalize_email("  user@example.com  ") == "user@example.com"

    def test_lowercases(self) -> None:
        assert normalize_email("USER@EXAMPLE.COM") == "user@example.com"

    def test_idempotent(self) -> None:
        once = normalize_email(" User@Example.COM ")
        assert normalize_email(once) == once


class TestDuplicateChecker:
    """Tests for DuplicateChecker.is_registered."""

    def test_empty_store_has_no_duplicates(self) -> None:
        store = Mock()
        store.scan_all.return_value = iter([])

        assert DuplicateChecker(store).is_registered("ada@example.com") is False

    def test_match_ignores_case(self, make_record: Callable[..., RegistrationRecord]) -> None:
        """Stored and candidate emails are compared case-insensitively."""
        store = Mock()
        store.scan_all.return_value = iter([make_record(student_email="Ada@Example.com")])

        assert DuplicateChecker(store).is_registered(" ADA@example.COM") is True

    def test_parent_email_not_considered(
        self, make_record: Callable[..., RegistrationRecord]
    ) -> None:
        """Only the student email participates in uniqueness."""
        store = Mock()
        store.scan_all.return_value = iter([make_record(parent_email="shared@example.com")])

        assert DuplicateChecker(store).is_registered("shared@example.com") is False

    def test_storage_error_propagates(self) -> None:
        store = Mock()
        store.scan_all.side_effect = StorageError("Failed to read registrations")

        with pytest.raises(StorageError):
            DuplicateChecker(store).is_registered("ada@example.com")
