"""
Unit tests for license administration handlers.
"""
from datetime import datetime, timezone

import pytest

from core.domain.value_objects import LicenseStatus
from licenses.application.commands.reset_device import ResetDeviceCommand
from licenses.application.commands.revoke_license import RevokeLicenseCommand
from licenses.application.handlers.license_admin_handlers import (
    ResetDeviceHandler,
    RevokeLicenseHandler,
)
from licenses.application.handlers.list_licenses_by_email_handler import (
    ListLicensesByEmailHandler,
)
from licenses.application.queries.list_licenses_by_email import ListLicensesByEmailQuery
from licenses.domain.events import DeviceReset, LicenseRevoked
from licenses.domain.license import LicenseRecord


async def bind(repository, record, device_id="device-A"):
    await repository.bind_device_if_unbound(record.id, device_id, datetime.now(timezone.utc))


@pytest.mark.asyncio
class TestResetDeviceHandler:
    """Tests for ResetDeviceHandler."""

    async def test_reset_bound_license(self, license_repository, stored_license, recorded_events):
        """Test reset clears the device and returns the license to issued."""
        await bind(license_repository, stored_license)
        handler = ResetDeviceHandler(license_repository=license_repository)

        assert await handler.handle(ResetDeviceCommand(license_key=stored_license.key)) is True

        record = await license_repository.find_by_id(stored_license.id)
        assert record.registered_device_id is None
        assert record.status == LicenseStatus.ISSUED
        assert isinstance(recorded_events[0], DeviceReset)
        assert recorded_events[0].previous_device_id == "device-A"

    async def test_reset_accepts_lowercase_key(self, license_repository, stored_license):
        """Test the key is normalized before lookup."""
        handler = ResetDeviceHandler(license_repository=license_repository)

        assert await handler.handle(ResetDeviceCommand(license_key=stored_license.key.lower()))

    async def test_reset_unknown_key(self, license_repository):
        """Test an unknown key reports not found."""
        handler = ResetDeviceHandler(license_repository=license_repository)

        assert await handler.handle(ResetDeviceCommand(license_key="XD-0000-0000-0000")) is False

    async def test_reset_revoked_license(self, license_repository, stored_license):
        """Test reset is an override that also lifts revocation."""
        await license_repository.update(stored_license.id, status=LicenseStatus.REVOKED)
        handler = ResetDeviceHandler(license_repository=license_repository)

        assert await handler.handle(ResetDeviceCommand(license_key=stored_license.key))

        record = await license_repository.find_by_id(stored_license.id)
        assert record.status == LicenseStatus.ISSUED


@pytest.mark.asyncio
class TestRevokeLicenseHandler:
    """Tests for RevokeLicenseHandler."""

    async def test_revoke_keeps_device(self, license_repository, stored_license, recorded_events):
        """Test revocation keeps the device binding for reference."""
        await bind(license_repository, stored_license)
        handler = RevokeLicenseHandler(license_repository=license_repository)

        assert await handler.handle(RevokeLicenseCommand(license_key=stored_license.key))

        record = await license_repository.find_by_id(stored_license.id)
        assert record.status == LicenseStatus.REVOKED
        assert record.registered_device_id == "device-A"
        assert [type(e) for e in recorded_events] == [LicenseRevoked]

    async def test_revoke_twice_publishes_once(
        self, license_repository, stored_license, recorded_events
    ):
        handler = RevokeLicenseHandler(license_repository=license_repository)

        await handler.handle(RevokeLicenseCommand(license_key=stored_license.key))
        await handler.handle(RevokeLicenseCommand(license_key=stored_license.key))

        assert len(recorded_events) == 1

    async def test_revoke_unknown_key(self, license_repository):
        handler = RevokeLicenseHandler(license_repository=license_repository)

        assert await handler.handle(RevokeLicenseCommand(license_key="XD-0000-0000-0000")) is False


@pytest.mark.asyncio
class TestListLicensesByEmailHandler:
    """Tests for ListLicensesByEmailHandler."""

    async def test_lists_only_owner_licenses(self, license_repository):
        """Test licenses are filtered by owner email, case-insensitively."""
        for email in ("buyer@example.com", "Buyer@Example.com", "other@example.com"):
            await license_repository.insert(LicenseRecord.create(user_email=email))
        handler = ListLicensesByEmailHandler(license_repository=license_repository)

        licenses = await handler.handle(ListLicensesByEmailQuery(user_email=" buyer@example.com "))

        assert len(licenses) == 2
        assert {dto.user_email.lower() for dto in licenses} == {"buyer@example.com"}

    async def test_no_licenses(self, license_repository):
        handler = ListLicensesByEmailHandler(license_repository=license_repository)

        assert await handler.handle(ListLicensesByEmailQuery(user_email="none@example.com")) == []
