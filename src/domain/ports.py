"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the records flowing through the registration pipeline
and the interfaces (ports) that the domain requires from infrastructure.
Adapters implement these protocols.
"""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Protocol


class RegistrationState(str, Enum):
    """
    Registration pipeline states.

    State Transitions (forward-only):
    - RECEIVED -> VALIDATED -> DEDUP_CHECKED -> STORED -> NOTIFIED -> DONE

    Terminal States:
    - DONE: Record stored, confirmation attempted (possibly with warning)
    - ABORTED: Reached from RECEIVED (invalid submission), DEDUP_CHECKED
      (duplicate email) or a failed append. Nothing was stored.
    """

    RECEIVED = "received"
    VALIDATED = "validated"
    DEDUP_CHECKED = "dedup_checked"
    STORED = "stored"
    NOTIFIED = "notified"
    DONE = "done"
    ABORTED = "aborted"


@dataclass(frozen=True)
class RegistrationSubmission:
    """Validated and normalized submission, not yet stored."""

    name: str
    student_email: str
    parent_email: str
    school: str
    grade: int
    age: int
    country: str
    experience: str = ""
    motivation: str = ""


@dataclass(frozen=True)
class RegistrationRecord:
    """Durable, immutable representation of one accepted submission."""

    id: str
    created_at: datetime
    name: str
    student_email: str
    parent_email: str
    school: str
    grade: int
    age: int
    country: str
    experience: str = ""
    motivation: str = ""

    @classmethod
    def from_submission(
        cls, submission: RegistrationSubmission, id: str, created_at: datetime
    ) -> "RegistrationRecord":
        return cls(
            id=id,
            created_at=created_at,
            name=submission.name,
            student_email=submission.student_email,
            parent_email=submission.parent_email,
            school=submission.school,
            grade=submission.grade,
            age=submission.age,
            country=submission.country,
            experience=submission.experience,
            motivation=submission.motivation,
        )


@dataclass(frozen=True)
class RegistrationResult:
    """Outcome of a registration that reached the DONE state."""

    record: RegistrationRecord
    email_sent: bool
    state: RegistrationState = RegistrationState.DONE

    @property
    def email_warning(self) -> bool:
        """True when the record is stored but no confirmation went out."""
        return not self.email_sent


class SubmissionValidator(Protocol):
    """Port interface for submission schema validation."""

    def validate(self, raw: Mapping[str, Any]) -> RegistrationSubmission:
        """
        Validate and normalize an untyped submission.

        Args:
            raw: Submitted fields keyed by their external names

        Returns:
            Normalized submission (trimmed strings, lowercased emails)

        Raises:
            SubmissionInvalid: Carrying every violated field, never just the first
        """
        ...


class RegistrationStore(Protocol):
    """Port interface for append-only registration persistence."""

    def append(self, record: RegistrationRecord) -> None:
        """
        Durably append one record.

        Raises:
            StorageError: If the record could not be written
        """
        ...

    def scan_all(self) -> Iterator[RegistrationRecord]:
        """
        Lazily yield every stored record from the beginning.

        A store that has never been written to yields nothing.

        Raises:
            StorageError: If stored records cannot be read
        """
        ...


class NotificationSender(Protocol):
    """Port interface for email delivery."""

    def send_confirmation(self, record: RegistrationRecord) -> None:
        """
        Send the confirmation email to the student, copying the parent.

        Raises:
            NotificationError: On any delivery failure
        """
        ...

    def send_operator_notice(self, record: RegistrationRecord) -> None:
        """
        Send a registration summary to the operator mailbox.

        Raises:
            OperatorNotificationError: On any delivery failure
        """
        ...
