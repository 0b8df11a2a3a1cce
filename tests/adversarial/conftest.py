"""
Shared fixtures for adversarial tests.

Provides a registration service over a real CSV store for concurrency tests.
"""

import pytest

from src.adapters.repository.csv_log import CsvRegistrationStore
from src.adapters.validation.schema import SchemaValidator
from src.domain.registration import RegistrationService
from tests.doubles import InlineExecutor, RecordingNotifier

# Module-level marker for all adversarial tests
pytestmark = pytest.mark.adversarial


@pytest.fixture
def service(store: CsvRegistrationStore, notifier: RecordingNotifier) -> RegistrationService:
    """Registration service shared by every simulated client."""
    return RegistrationService(
        validator=SchemaValidator(),
        store=store,
        notifier=notifier,
        notice_executor=InlineExecutor(),
    )

