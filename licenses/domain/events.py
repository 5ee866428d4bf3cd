"""
License domain events.

Domain events represent something that happened in the license domain.
"""

import uuid
from datetime import datetime
from typing import Optional

from core.domain.events import DomainEvent


class LicenseIssued(DomainEvent):
    """Event raised when a license record is created."""

    def __init__(
        self,
        license_id: uuid.UUID,
        user_email: str,
        source: str,
        transaction_id: Optional[str] = None,
        occurred_at: Optional[datetime] = None,
    ):
        """
        Initialize LicenseIssued event.

        Args:
            license_id: License record UUID
            user_email: Owner email
            source: Issuance source (manual or payment_webhook)
            transaction_id: Payment transaction id, if any
            occurred_at: When the event occurred
        """
        super().__init__(aggregate_id=str(license_id), occurred_at=occurred_at)
        self.license_id = license_id
        self.user_email = user_email
        self.source = source
        self.transaction_id = transaction_id

    def to_dict(self):
        data = super().to_dict()
        data.update(
            {
                "user_email": self.user_email,
                "source": self.source,
                "transaction_id": self.transaction_id,
            }
        )
        return data


class DeviceReset(DomainEvent):
    """Event raised when an administrator clears a device binding."""

    def __init__(
        self,
        license_id: uuid.UUID,
        previous_device_id: Optional[str],
        occurred_at: Optional[datetime] = None,
    ):
        super().__init__(aggregate_id=str(license_id), occurred_at=occurred_at)
        self.license_id = license_id
        self.previous_device_id = previous_device_id

    def to_dict(self):
        data = super().to_dict()
        data["previous_device_id"] = self.previous_device_id
        return data


class LicenseRevoked(DomainEvent):
    """Event raised when a license is revoked."""

    def __init__(self, license_id: uuid.UUID, occurred_at: Optional[datetime] = None):
        super().__init__(aggregate_id=str(license_id), occurred_at=occurred_at)
        self.license_id = license_id
