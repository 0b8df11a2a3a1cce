"""Validation adapters - Submission schema implementations."""

from .schema import RegistrationSchema, SchemaValidator

__all__ = ["RegistrationSchema", "SchemaValidator"]
