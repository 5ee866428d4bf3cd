"""
License administration handlers.

Handlers for resetting device locks and revoking licenses.
"""
import logging

from core.domain.value_objects import LicenseStatus
from core.infrastructure.events import event_bus
from core.metrics import license_device_resets_total
from licenses.application.commands.reset_device import ResetDeviceCommand
from licenses.application.commands.revoke_license import RevokeLicenseCommand
from licenses.domain.events import DeviceReset, LicenseRevoked
from licenses.domain.license_key import normalize_license_key
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)


class ResetDeviceHandler:
    """Handler for ResetDeviceCommand."""

    def __init__(self, license_repository: LicenseRepository):
        """Initialize handler with repositories."""
        self.license_repository = license_repository

    async def handle(self, command: ResetDeviceCommand) -> bool:
        """
        Handle reset device command.

        Clears the device binding and returns the license to ISSUED.
        This is an administrative override and applies to revoked
        licenses as well.

        Args:
            command: ResetDeviceCommand

        Returns:
            True if the license was found and reset, False otherwise
        """
        record = await self.license_repository.find_by_key(
            normalize_license_key(command.license_key)
        )
        if not record:
            return False

        if record.is_revoked:
            logger.warning("Device reset is reactivating revoked license %s", record.key)

        await self.license_repository.update(
            record.id,
            registered_device_id=None,
            status=LicenseStatus.ISSUED,
        )
        license_device_resets_total.inc()
        logger.info(
            "Device lock reset for license %s (was %s)",
            record.key,
            record.registered_device_id,
        )

        await event_bus.publish(
            DeviceReset(license_id=record.id, previous_device_id=record.registered_device_id)
        )
        return True


class RevokeLicenseHandler:
    """Handler for RevokeLicenseCommand."""

    def __init__(self, license_repository: LicenseRepository):
        """Initialize handler with repositories."""
        self.license_repository = license_repository

    async def handle(self, command: RevokeLicenseCommand) -> bool:
        """
        Handle revoke license command.

        The device binding is kept for reference.

        Args:
            command: RevokeLicenseCommand

        Returns:
            True if the license was found, False otherwise
        """
        record = await self.license_repository.find_by_key(
            normalize_license_key(command.license_key)
        )
        if not record:
            return False

        if not record.is_revoked:
            await self.license_repository.update(record.id, status=LicenseStatus.REVOKED)
            logger.info("License %s revoked", record.key)
            await event_bus.publish(LicenseRevoked(license_id=record.id))
        return True
