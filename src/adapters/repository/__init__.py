"""Repository adapters - Durable store implementations."""

from .csv_log import CsvRegistrationStore

__all__ = ["CsvRegistrationStore"]
