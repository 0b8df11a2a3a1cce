"""
Domain exceptions - Semantic error types for registration.

This module defines domain-specific exceptions that communicate
business rule violations without leaking infrastructure details.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class FieldError:
    """A single field-level validation failure."""

    field: str
    message: str


class RegistrationError(Exception):
    """Base class for registration domain errors."""

    pass


class SubmissionInvalid(RegistrationError):
    """One or more submission fields violate their constraints."""

    def __init__(self, errors: list[FieldError]) -> None:
        self.errors = list(errors)
        fields = ", ".join(error.field for error in self.errors)
        super().__init__(f"Invalid fields: {fields}")


class EmailAlreadyRegistered(RegistrationError):
    """Student email already has a stored registration."""

    pass


class StorageError(RegistrationError):
    """Durable store could not be read or written."""

    pass


class NotificationError(RegistrationError):
    """Confirmation email could not be delivered."""

    pass


class OperatorNotificationError(NotificationError):
    """Operator notice could not be delivered."""

    pass
