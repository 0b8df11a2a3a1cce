"""
Duplicate detection over the durable store.

The store is expected to hold human registration volumes, so every check is
a full linear scan and no index is maintained.
"""

from dataclasses import dataclass

from .ports import RegistrationStore


def normalize_email(email: str) -> str:
    """
    Normalize email address for consistent storage and lookup.

    Applies: strip whitespace + lowercase
    """
    return email.strip().lower()


@dataclass
class DuplicateChecker:
    """Answers whether a student email already has a stored registration."""

    store: RegistrationStore

    def is_registered(self, student_email: str) -> bool:
        """
        Check a student email against every stored record.

        Args:
            student_email: Candidate email (normalized before comparison)

        Returns:
            True if any stored record has the same email, ignoring case

        Raises:
            StorageError: If the store cannot be scanned
        """
        candidate = normalize_email(student_email)
        return any(
            normalize_email(record.student_email) == candidate
            for record in self.store.scan_all()
        )
