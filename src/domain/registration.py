"""
Registration domain service - Registration pipeline implementation.

This module contains the core business logic for competition registration:
the write pipeline that validates a submission, rejects duplicates,
durably appends the record, and dispatches notifications.

Registration Pipeline (Forward-Only Transitions)
================================================

    RECEIVED -> VALIDATED -> DEDUP_CHECKED -> STORED -> NOTIFIED -> DONE

Aborts (nothing stored):
    RECEIVED      -> ABORTED   (validation failure, SubmissionInvalid)
    DEDUP_CHECKED -> ABORTED   (email already registered, EmailAlreadyRegistered)
    DEDUP_CHECKED -> ABORTED   (append failed, StorageError)

Persistence always precedes notification. A lost record is unrecoverable
while a lost confirmation email is not, so notification failures only set
a warning on an otherwise successful result.

Concurrency: the duplicate check and the append run under one lock shared
by every request handled by this service, so two concurrent submissions
for the same email store exactly one record within a process.
"""

import logging
import threading
import uuid
from collections.abc import Callable
from concurrent.futures import Executor, ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from .dedup import DuplicateChecker
from .exceptions import (
    EmailAlreadyRegistered,
    NotificationError,
    OperatorNotificationError,
    StorageError,
)
from .ports import (
    NotificationSender,
    RegistrationRecord,
    RegistrationResult,
    RegistrationState,
    RegistrationStore,
    SubmissionValidator,
)

logger = logging.getLogger(__name__)
registrations_logger = logging.getLogger("registrations")


def _now() -> datetime:
    return datetime.now().replace(microsecond=0)


def _new_id() -> str:
    return str(uuid.uuid4())


@dataclass
class RegistrationService:
    """
    Domain service for competition registration.

    Orchestrates the registration pipeline: schema validation,
    duplicate check, durable append, and notification dispatch.
    """

    validator: SubmissionValidator
    store: RegistrationStore
    notifier: NotificationSender
    clock: Callable[[], datetime] = _now
    id_factory: Callable[[], str] = _new_id
    notice_executor: Executor = field(
        default_factory=lambda: ThreadPoolExecutor(
            max_workers=2, thread_name_prefix="operator-notice"
        )
    )
    _claim_lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)

    def register(self, raw: Any) -> RegistrationResult:
        """
        Run one submission through the registration pipeline.

        Args:
            raw: Untyped submission, normally a mapping keyed by external field names

        Returns:
            RegistrationResult in the DONE state; email_warning is set when
            the confirmation email could not be sent

        Raises:
            SubmissionInvalid: If any field violates its constraints
            EmailAlreadyRegistered: If the student email is already stored
            StorageError: If the record could not be appended
        """
        state = RegistrationState.RECEIVED
        try:
            submission = self.validator.validate(raw)
            state = RegistrationState.VALIDATED

            with self._claim_lock:
                if DuplicateChecker(self.store).is_registered(submission.student_email):
                    state = RegistrationState.DEDUP_CHECKED
                    raise EmailAlreadyRegistered(submission.student_email)
                state = RegistrationState.DEDUP_CHECKED

                record = RegistrationRecord.from_submission(
                    submission, id=self.id_factory(), created_at=self.clock()
                )
                self.store.append(record)
            state = RegistrationState.STORED
        except StorageError:
            logger.exception("Registration aborted at %s: storage failure", state.value)
            raise
        except Exception:
            logger.info("Registration aborted at %s", state.value)
            raise

        registrations_logger.info(
            "Registration: %s (%s) from %s",
            record.name,
            record.student_email,
            record.country,
        )

        email_sent = self._send_confirmation(record)

        try:
            self.notice_executor.submit(self._send_operator_notice, record)
        except RuntimeError:
            logger.warning("Operator notice skipped for %s: service is shutting down", record.id)

        return RegistrationResult(
            record=record, email_sent=email_sent, state=RegistrationState.DONE
        )

    def close(self) -> None:
        """Stop accepting operator notices and wait for pending ones."""
        self.notice_executor.shutdown(wait=True)

    def _send_confirmation(self, record: RegistrationRecord) -> bool:
        try:
            self.notifier.send_confirmation(record)
        except NotificationError as e:
            logger.error("Confirmation email failed for registration %s: %s", record.id, e)
            return False
        except Exception:
            # Record is already stored
            logger.exception("Unexpected error sending confirmation for %s", record.id)
            return False
        logger.info("Confirmation email sent to %s", record.student_email)
        return True

    def _send_operator_notice(self, record: RegistrationRecord) -> None:
        # Runs detached from the request; failures are only logged.
        try:
            self.notifier.send_operator_notice(record)
        except OperatorNotificationError as e:
            logger.warning("Operator notice failed for registration %s: %s", record.id, e)
        except Exception:
            logger.exception("Unexpected error sending operator notice for %s", record.id)
        else:
            logger.info("Operator notice sent for registration %s", record.id)
