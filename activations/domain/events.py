"""
Activation domain events.

Domain events represent something that happened in the activation domain.
"""
import uuid
from datetime import datetime
from typing import Optional

from core.domain.events import DomainEvent


class LicenseActivated(DomainEvent):
    """Event raised when a license is bound to its first device."""

    def __init__(
        self,
        license_id: uuid.UUID,
        device_id: str,
        occurred_at: Optional[datetime] = None,
    ):
        """
        Initialize LicenseActivated event.

        Args:
            license_id: License record UUID
            device_id: Device the license was bound to
            occurred_at: When the event occurred
        """
        super().__init__(aggregate_id=str(license_id), occurred_at=occurred_at)
        self.license_id = license_id
        self.device_id = device_id

    def to_dict(self):
        data = super().to_dict()
        data["device_id"] = self.device_id
        return data


class ActivationRejected(DomainEvent):
    """Event raised when a known license refuses a device."""

    def __init__(
        self,
        license_id: uuid.UUID,
        device_id: str,
        reason: str,
        occurred_at: Optional[datetime] = None,
    ):
        super().__init__(aggregate_id=str(license_id), occurred_at=occurred_at)
        self.license_id = license_id
        self.device_id = device_id
        self.reason = reason

    def to_dict(self):
        data = super().to_dict()
        data.update({"device_id": self.device_id, "reason": self.reason})
        return data
