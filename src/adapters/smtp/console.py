"""
Console email sender adapter - Implements NotificationSender protocol.

This module provides a console-based implementation of the domain's
notification port, logging the messages it would send for local development.
"""

import logging
from dataclasses import dataclass, field

from src.adapters.smtp.rendering import (
    CompetitionDetails,
    render_confirmation,
    render_operator_notice,
)
from src.domain.ports import RegistrationRecord

logger = logging.getLogger(__name__)


@dataclass
class ConsoleNotificationSender:
    """
    Implements NotificationSender protocol via console logging.

    Uses structural subtyping - no explicit inheritance from Protocol.
    For demo/development purposes - logs messages instead of sending them.
    """

    competition: CompetitionDetails = field(default_factory=CompetitionDetails)

    def send_confirmation(self, record: RegistrationRecord) -> None:
        """
        Log the confirmation email (simulates email delivery).

        Logged at INFO level so it is visible alongside the server logs.

        Args:
            record: Stored registration
        """
        content = render_confirmation(record, self.competition)
        logger.info(
            "[CONFIRMATION] To: %s Cc: %s Subject: %s Registration: %s",
            record.student_email,
            record.parent_email,
            content.subject,
            record.id,
        )
        logger.debug("[CONFIRMATION] Body:\n%s", content.text)

    def send_operator_notice(self, record: RegistrationRecord) -> None:
        """
        Log the operator notice (simulates email delivery).

        Args:
            record: Stored registration
        """
        content = render_operator_notice(record, self.competition)
        logger.info("[OPERATOR] Subject: %s", content.subject)
        logger.debug("[OPERATOR] Body:\n%s", content.text)
