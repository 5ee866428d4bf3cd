"""
ActivateLicenseHandler.

Handler for validating a license key on a device and binding it on
first use.
"""

import logging

from activations.application.commands.activate_license import ActivateLicenseCommand
from activations.application.dto.activation_dto import ActivationResultDTO
from activations.domain.events import ActivationRejected, LicenseActivated
from activations.domain.services import DeviceBindingService
from core.domain.exceptions import MalformedInputError
from core.domain.value_objects import ActivationReason, DeviceId
from core.infrastructure.events import event_bus
from core.metrics import license_activations_total
from licenses.domain.license_key import normalize_license_key
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)

ACTIVATION_MESSAGES = {
    ActivationReason.FIRST_ACTIVATION: "License activated on this device",
    ActivationReason.ALREADY_BOUND: "License verified",
    ActivationReason.UNKNOWN_KEY: "Invalid license key",
    ActivationReason.REVOKED: "This license has been revoked",
    ActivationReason.DEVICE_MISMATCH: (
        "This license key is already in use on another device. "
        "One license can be used on one PC only."
    ),
}


class ActivateLicenseHandler:
    """Handler for ActivateLicenseCommand."""

    def __init__(self, license_repository: LicenseRepository):
        """Initialize handler with repositories."""
        self.license_repository = license_repository

    async def handle(self, command: ActivateLicenseCommand) -> ActivationResultDTO:
        """
        Handle activate license command.

        Business rejections (unknown key, revoked, device mismatch) are
        returned as results, not raised.

        Args:
            command: ActivateLicenseCommand

        Returns:
            ActivationResultDTO with the outcome

        Raises:
            MalformedInputError: If key or device id is missing or invalid
        """
        license_key = normalize_license_key(command.license_key)
        if not license_key:
            raise MalformedInputError("licenseKey and deviceId are required")
        try:
            device_id = str(DeviceId((command.device_id or "").strip()))
        except ValueError as e:
            raise MalformedInputError(str(e)) from e

        record = await self.license_repository.find_by_key(license_key)
        if record is None:
            return self._result(ActivationReason.UNKNOWN_KEY)

        reason, record = await DeviceBindingService.activate(
            record, device_id, self.license_repository
        )

        if reason == ActivationReason.FIRST_ACTIVATION:
            logger.info("License %s activated on device %s", record.key, device_id)
            await event_bus.publish(LicenseActivated(license_id=record.id, device_id=device_id))
        elif reason == ActivationReason.DEVICE_MISMATCH:
            logger.warning(
                "License %s attempted on %s but bound to %s",
                record.key,
                device_id,
                record.registered_device_id,
            )
            await event_bus.publish(
                ActivationRejected(license_id=record.id, device_id=device_id, reason=reason.value)
            )
        elif reason == ActivationReason.REVOKED:
            logger.info("Revoked license %s attempted on %s", record.key, device_id)
            await event_bus.publish(
                ActivationRejected(license_id=record.id, device_id=device_id, reason=reason.value)
            )

        return self._result(reason, license_id=record.id)

    @staticmethod
    def _result(reason: ActivationReason, license_id=None) -> ActivationResultDTO:
        license_activations_total.labels(reason=reason.value).inc()
        return ActivationResultDTO(
            valid=reason.is_valid,
            reason=reason,
            message=ACTIVATION_MESSAGES[reason],
            license_id=license_id,
        )
