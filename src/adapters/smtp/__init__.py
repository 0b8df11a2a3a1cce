"""Email sender adapters - Notification delivery implementations."""

from .console import ConsoleNotificationSender
from .mailer import SmtpConfig, SmtpNotificationSender
from .rendering import CompetitionDetails

__all__ = [
    "CompetitionDetails",
    "ConsoleNotificationSender",
    "SmtpConfig",
    "SmtpNotificationSender",
]
