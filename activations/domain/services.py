"""
Activation domain services.

Domain services contain business logic that doesn't naturally
fit within a single entity.
"""

import logging
from datetime import datetime, timezone
from typing import Optional, Tuple

from core.domain.value_objects import ActivationReason
from licenses.domain.license import LicenseRecord
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)


class DeviceBindingService:
    """Domain service for binding licenses to devices."""

    @staticmethod
    def evaluate(record: LicenseRecord, device_id: str) -> Optional[ActivationReason]:
        """
        Decide an activation outcome without touching the store.

        Args:
            record: License record
            device_id: Requesting device

        Returns:
            The outcome, or None when the license is unbound and the
            device should be bound to it
        """
        if record.is_revoked:
            return ActivationReason.REVOKED
        if not record.is_bound:
            return None
        if record.is_bound_to(device_id):
            return ActivationReason.ALREADY_BOUND
        return ActivationReason.DEVICE_MISMATCH

    @staticmethod
    async def activate(
        record: LicenseRecord,
        device_id: str,
        repository: LicenseRepository,
    ) -> Tuple[ActivationReason, LicenseRecord]:
        """
        Activate a license on a device.

        First activation goes through the store's conditional write. When
        another caller wins that race the record is re-read and judged
        against the winner's binding.

        Args:
            record: License record as read by the caller
            device_id: Requesting device
            repository: License repository

        Returns:
            Tuple of (outcome, latest known record)
        """
        reason = DeviceBindingService.evaluate(record, device_id)
        if reason is not None:
            return reason, record

        bound = await repository.bind_device_if_unbound(
            record.id, device_id, datetime.now(timezone.utc)
        )
        if bound:
            return ActivationReason.FIRST_ACTIVATION, record

        latest = await repository.find_by_id(record.id)
        if latest is None:
            return ActivationReason.UNKNOWN_KEY, record

        logger.info("Lost first-activation race for license %s", record.id)
        reason = DeviceBindingService.evaluate(latest, device_id)
        if reason is None:
            # Binding was cleared between our write and the re-read.
            return ActivationReason.DEVICE_MISMATCH, latest
        return reason, latest
