"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for injecting
domain services and infrastructure adapters into routes,
plus the factories that wire them together at startup.
"""

from fastapi import Request

from src.adapters.repository.csv_log import CsvRegistrationStore
from src.adapters.smtp.console import ConsoleNotificationSender
from src.adapters.smtp.mailer import SmtpConfig, SmtpNotificationSender
from src.adapters.smtp.rendering import CompetitionDetails
from src.adapters.validation.schema import SchemaValidator
from src.config.settings import Settings
from src.domain.ports import NotificationSender, RegistrationStore
from src.domain.registration import RegistrationService


def create_notification_sender(settings: Settings) -> NotificationSender:
    """Build the email sender selected by ``settings.email_backend``."""
    competition = CompetitionDetails(
        name=settings.competition_name,
        short_name=settings.competition_short_name,
        date=settings.competition_date,
        time=settings.competition_time,
        contact_email=settings.competition_contact_email,
    )
    if settings.email_backend == "console":
        return ConsoleNotificationSender(competition=competition)

    config = SmtpConfig(
        username=settings.email_user,
        password=settings.email_pass,
        host=settings.smtp_host,
        port=settings.smtp_port,
        timeout=settings.smtp_timeout_seconds,
        operator_email=settings.operator_email,
    )
    return SmtpNotificationSender(config=config, competition=competition)


def create_registration_service(settings: Settings, store: CsvRegistrationStore) -> RegistrationService:
    """
    Create registration service with injected dependencies.

    Wires together the schema validator, store and email sender.
    """
    return RegistrationService(
        validator=SchemaValidator(),
        store=store,
        notifier=create_notification_sender(settings),
    )


def get_store(request: Request) -> RegistrationStore:
    """
    Get the registration store from app state.

    The store is opened during app lifespan startup and stored in app.state.
    """
    return request.app.state.store


def get_registration_service(request: Request) -> RegistrationService:
    """
    Get the registration service from app state.

    A single instance serves every request so that its duplicate-check
    lock covers all concurrent submissions.
    """
    return request.app.state.registration_service
