"""
Pytest configuration and shared fixtures.
"""

from typing import Any, Dict, List, Optional, Tuple

import pytest
from asgiref.sync import async_to_sync

from core.domain.events import EventHandler
from core.domain.value_objects import LicenseSource
from core.infrastructure.events import event_bus
from licenses.domain.license import LicenseRecord
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository
from licenses.infrastructure.repositories.in_memory_license_repository import (
    InMemoryLicenseRepository,
)
from notifications.ports.notifier import Notifier
from subscriptions.domain.subscriber import SubscriberAccount
from subscriptions.infrastructure.repositories.django_subscriber_repository import (
    DjangoSubscriberRepository,
)
from subscriptions.infrastructure.repositories.in_memory_subscriber_repository import (
    InMemorySubscriberRepository,
)


class RecordingNotifier(Notifier):
    """Notifier that keeps sent messages in memory."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.sent: List[Tuple[str, str, Dict[str, Any]]] = []

    async def send(
        self, template: str, to_email: str, context: Optional[Dict[str, Any]] = None
    ) -> None:
        if self.fail:
            raise ConnectionError("SMTP server unavailable")
        self.sent.append((template, to_email, context or {}))


class RecordingEventHandler(EventHandler):
    """Event handler collecting published events."""

    def __init__(self):
        self.events = []

    async def handle(self, event) -> None:
        self.events.append(event)


@pytest.fixture
def license_repository():
    """Fixture for an in-memory LicenseRepository."""
    return InMemoryLicenseRepository()


@pytest.fixture
def django_license_repository():
    """Fixture for the Django LicenseRepository."""
    return DjangoLicenseRepository()


@pytest.fixture
def subscriber_repository():
    """Fixture for an in-memory SubscriberRepository."""
    return InMemorySubscriberRepository()


@pytest.fixture
def notifier():
    """Fixture for a notifier recording what it sends."""
    return RecordingNotifier()


@pytest.fixture
def failing_notifier():
    """Fixture for a notifier whose every send fails."""
    return RecordingNotifier(fail=True)


@pytest.fixture
def recorded_events():
    """Capture events published on the global event bus during a test."""
    from activations.domain.events import ActivationRejected, LicenseActivated
    from licenses.domain.events import DeviceReset, LicenseIssued, LicenseRevoked

    handler = RecordingEventHandler()
    saved = dict(event_bus._handlers)  # pylint: disable=protected-access
    event_bus.clear()
    for event_type in (
        LicenseIssued,
        LicenseActivated,
        ActivationRejected,
        DeviceReset,
        LicenseRevoked,
    ):
        event_bus.subscribe(event_type, handler)
    yield handler.events
    event_bus.clear()
    event_bus._handlers.update(saved)  # pylint: disable=protected-access


@pytest.fixture
def sample_license():
    """Fixture for an unbound LicenseRecord."""
    return LicenseRecord.create(user_email="buyer@example.com", note="test")


@pytest.fixture
def stored_license(license_repository, sample_license):
    """Fixture for a LicenseRecord saved in the in-memory repository."""
    async_to_sync(license_repository.insert)(sample_license)
    return sample_license


@pytest.fixture
def db_license(db, django_license_repository):
    """Fixture for a LicenseRecord saved in database."""
    record = LicenseRecord.create(
        user_email="buyer@example.com",
        source=LicenseSource.MANUAL,
    )
    async_to_sync(django_license_repository.insert)(record)
    return record


@pytest.fixture
def db_subscriber(db):
    """Fixture for a SubscriberAccount saved in database."""
    account = SubscriberAccount.create(
        email="owner@example.com",
        company_type="kabushiki",
        industry="it",
        employee_count="10-49",
    )
    return async_to_sync(DjangoSubscriberRepository().save)(account)


@pytest.fixture
def api_client():
    """Fixture for DRF API client."""
    from rest_framework.test import APIClient

    return APIClient()


@pytest.fixture
def admin_api_key(db):
    """Fixture for a raw administrator API key."""
    from core.infrastructure.models import ApiKey

    api_key = ApiKey(name="test admin")
    api_key.save()
    return api_key.raw_key


@pytest.fixture
def admin_client(api_client, admin_api_key):
    """Fixture for an API client authenticated with an admin key."""
    api_client.credentials(HTTP_X_API_KEY=admin_api_key)
    return api_client
