"""
SMTP email sender adapter - Implements NotificationSender protocol.

This module delivers registration emails through an authenticated SMTP
relay (Gmail by default). Every connection carries an explicit timeout so a
slow relay cannot stall a registration request indefinitely.

Missing credentials mean notifications are disabled: sends fail fast with
NotificationError and no network connection is attempted.
"""

import logging
import smtplib
import ssl
from dataclasses import dataclass, field
from email.message import EmailMessage
from email.utils import formataddr

from src.adapters.smtp.rendering import (
    CompetitionDetails,
    EmailContent,
    render_confirmation,
    render_operator_notice,
)
from src.domain.exceptions import NotificationError, OperatorNotificationError
from src.domain.ports import RegistrationRecord

logger = logging.getLogger(__name__)


@dataclass
class SmtpConfig:
    """Connection settings for the SMTP relay."""

    username: str | None
    password: str | None
    host: str = "smtp.gmail.com"
    port: int = 465
    timeout: float = 10.0
    operator_email: str | None = None

    @property
    def configured(self) -> bool:
        return bool(self.username and self.password)


@dataclass
class SmtpNotificationSender:
    """
    Implements NotificationSender protocol via smtplib.

    Uses structural subtyping - no explicit inheritance from Protocol.
    Port 465 uses implicit TLS; any other port upgrades with STARTTLS.
    """

    config: SmtpConfig
    competition: CompetitionDetails = field(default_factory=CompetitionDetails)

    def send_confirmation(self, record: RegistrationRecord) -> None:
        """
        Email the confirmation to the student, copying the parent/guardian.

        Args:
            record: Stored registration

        Raises:
            NotificationError: If credentials are missing or delivery fails
        """
        content = render_confirmation(record, self.competition)
        message = self._build_message(
            content,
            sender_name=f"{self.competition.short_name} Team",
            to=record.student_email,
            cc=record.parent_email,
        )
        try:
            self._deliver(message)
        except NotificationError:
            raise
        except (smtplib.SMTPException, OSError) as e:
            raise NotificationError(f"Confirmation email failed: {e}") from e
        logger.info(f"Email sent successfully to {record.student_email}")

    def send_operator_notice(self, record: RegistrationRecord) -> None:
        """
        Email a summary of the registration to the operator mailbox.

        The operator mailbox defaults to the sending account.

        Args:
            record: Stored registration

        Raises:
            OperatorNotificationError: If credentials are missing or delivery fails
        """
        recipient = self.config.operator_email or self.config.username
        if not self.config.configured or not recipient:
            raise OperatorNotificationError("Email service not configured")

        content = render_operator_notice(record, self.competition)
        message = self._build_message(
            content,
            sender_name=f"{self.competition.short_name} System",
            to=recipient,
        )
        try:
            self._deliver(message)
        except (smtplib.SMTPException, OSError) as e:
            raise OperatorNotificationError(f"Operator notice failed: {e}") from e
        logger.info("Notification email sent to operator")

    def _build_message(
        self, content: EmailContent, sender_name: str, to: str, cc: str | None = None
    ) -> EmailMessage:
        message = EmailMessage()
        message["Subject"] = content.subject
        message["From"] = formataddr((sender_name, self.config.username or ""))
        message["To"] = to
        if cc:
            message["Cc"] = cc
        message.set_content(content.text)
        message.add_alternative(content.html, subtype="html")
        return message

    def _deliver(self, message: EmailMessage) -> None:
        if not self.config.configured:
            raise NotificationError("Email service not configured")

        context = ssl.create_default_context()
        if self.config.port == 465:
            with smtplib.SMTP_SSL(
                self.config.host,
                self.config.port,
                timeout=self.config.timeout,
                context=context,
            ) as smtp:
                smtp.login(self.config.username, self.config.password)
                smtp.send_message(message)
        else:
            with smtplib.SMTP(
                self.config.host, self.config.port, timeout=self.config.timeout
            ) as smtp:
                smtp.starttls(context=context)
                smtp.login(self.config.username, self.config.password)
                smtp.send_message(message)
