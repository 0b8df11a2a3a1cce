"""
Unit tests for domain ports and exceptions.

Tests verify:
- Record and result value types behave as documented
- Adapters satisfy the port interfaces structurally
- Exceptions are properly structured
- Domain purity (zero framework imports)
"""

import dataclasses
import json
import subprocess
from collections.abc import Callable
from datetime import datetime
from enum import Enum

import pytest

from src.adapters.repository.csv_log import CsvRegistrationStore
from src.adapters.smtp.console import ConsoleNotificationSender
from src.adapters.smtp.mailer import SmtpConfig, SmtpNotificationSender
from src.adapters.validation.schema import SchemaValidator
from src.domain.exceptions import (
    EmailAlreadyRegistered,
    FieldError,
    NotificationError,
    OperatorNotificationError,
    RegistrationError,
    StorageError,
    SubmissionInvalid,
)
from src.domain.ports import (
    NotificationSender,
    RegistrationRecord,
    RegistrationResult,
    RegistrationState,
    RegistrationStore,
    RegistrationSubmission,
    SubmissionValidator,
)


class TestRegistrationStateEnum:
    """Tests for RegistrationState enum."""

    def test_registration_state_is_str_enum(self) -> None:
        """RegistrationState uses str mixin for JSON serialization."""
        assert issubclass(RegistrationState, Enum)
        assert issubclass(RegistrationState, str)
        assert json.dumps(RegistrationState.DONE) == '"done"'

    def test_pipeline_states(self) -> None:
        assert [state.value for state in RegistrationState] == [
            "received",
            "validated",
            "dedup_checked",
            "stored",
            "notified",
            "done",
            "aborted",
        ]


class TestRecordTypes:
    """Tests for submission, record and result value types."""

    def test_record_from_submission_copies_fields(self) -> None:
        submission = RegistrationSubmission(
            name="Ada Lovelace",
            student_email="ada@example.com",
            parent_email="p@example.com",
            school="Lyceum",
            grade=11,
            age=16,
            country="UK",
            motivation="Stars",
        )
        created_at = datetime(2025, 8, 1, 9, 30)

        record = RegistrationRecord.from_submission(submission, id="abc", created_at=created_at)

        assert record.id == "abc"
        assert record.created_at == created_at
        assert record.student_email == "ada@example.com"
        assert record.motivation == "Stars"
        assert record.experience == ""

    def test_record_is_immutable(self, make_record: Callable[..., RegistrationRecord]) -> None:
        record = make_record()

        with pytest.raises(dataclasses.FrozenInstanceError):
            record.student_email = "other@example.com"  # type: ignore[misc]

    def test_result_warning_mirrors_email_sent(
        self, make_record: Callable[..., RegistrationRecord]
    ) -> None:
        assert RegistrationResult(record=make_record(), email_sent=False).email_warning is True
        assert RegistrationResult(record=make_record(), email_sent=True).email_warning is False


class TestProtocols:
    """Adapters satisfy ports via structural subtyping."""

    def test_schema_validator_matches_port(self) -> None:
        validator: SubmissionValidator = SchemaValidator()
        assert callable(validator.validate)

    def test_csv_store_matches_port(self, store: CsvRegistrationStore) -> None:
        port: RegistrationStore = store
        assert callable(port.append)
        assert callable(port.scan_all)

    @pytest.mark.parametrize(
        "sender",
        [
            ConsoleNotificationSender(),
            SmtpNotificationSender(SmtpConfig(username=None, password=None)),
        ],
    )
    def test_senders_match_port(self, sender: NotificationSender) -> None:
        assert callable(sender.send_confirmation)
        assert callable(sender.send_operator_notice)


class TestDomainExceptions:
    """Tests for domain exceptions."""

    @pytest.mark.parametrize(
        "exc_type",
        [SubmissionInvalid, EmailAlreadyRegistered, StorageError, NotificationError],
    )
    def test_inherits_registration_error(self, exc_type: type[Exception]) -> None:
        assert issubclass(exc_type, RegistrationError)

    def test_operator_error_is_notification_error(self) -> None:
        """Operator failures can be handled as any notification failure."""
        assert issubclass(OperatorNotificationError, NotificationError)

    def test_submission_invalid_carries_errors(self) -> None:
        errors = [FieldError("grade", "Grade must be between 9 and 12")]

        exc = SubmissionInvalid(errors)

        assert exc.errors == errors
        assert str(exc) == "Invalid fields: grade"


class TestDomainPurity:
    """Tests for domain purity - zero framework imports."""

    @pytest.mark.parametrize(
        "pattern",
        ["from fastapi", "import fastapi", "from pydantic", "import pydantic", "jinja2", "smtplib"],
    )
    def test_no_framework_imports_in_domain(self, pattern: str) -> None:
        """Domain layer imports none of the adapter libraries."""
        result = subprocess.run(
            ["grep", "-r", pattern, "src/domain/"],
            capture_output=True,
            text=True,
        )
        assert result.returncode != 0, f"Framework import found: {result.stdout}"
