"""
Domain layer - Pure business logic with zero framework imports.

This package contains the core business logic for the competition
registration pipeline. It defines its own port interfaces for infrastructure
abstraction, ensuring true hexagonal architecture decoupling.
"""

from .dedup import DuplicateChecker, normalize_email
from .exceptions import (
    EmailAlreadyRegistered,
    FieldError,
    NotificationError,
    OperatorNotificationError,
    RegistrationError,
    StorageError,
    SubmissionInvalid,
)
from .ports import (
    NotificationSender,
    RegistrationRecord,
    RegistrationResult,
    RegistrationState,
    RegistrationStore,
    RegistrationSubmission,
    SubmissionValidator,
)
from .registration import RegistrationService
from .statistics import RegistrationStats, summarize

__all__ = [
    "DuplicateChecker",
    "EmailAlreadyRegistered",
    "FieldError",
    "NotificationError",
    "NotificationSender",
    "OperatorNotificationError",
    "RegistrationError",
    "RegistrationRecord",
    "RegistrationResult",
    "RegistrationService",
    "RegistrationState",
    "RegistrationStats",
    "RegistrationStore",
    "RegistrationSubmission",
    "StorageError",
    "SubmissionInvalid",
    "SubmissionValidator",
    "normalize_email",
    "summarize",
]
