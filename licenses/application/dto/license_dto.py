"""
License DTOs for API responses.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from licenses.domain.license import LicenseRecord


@dataclass
class LicenseDTO:
    """DTO for license information."""

    id: uuid.UUID
    key: str
    user_email: str
    status: str
    source: str
    registered_device_id: Optional[str]
    transaction_id: Optional[str]
    note: str
    amount: Optional[str]
    currency: Optional[str]
    created_at: datetime
    activated_at: Optional[datetime]

    @classmethod
    def from_record(cls, record: LicenseRecord) -> "LicenseDTO":
        """Build a DTO from a domain record."""
        return cls(
            id=record.id,
            key=record.key,
            user_email=str(record.user_email),
            status=record.status.value,
            source=record.source.value,
            registered_device_id=record.registered_device_id,
            transaction_id=record.transaction_id,
            note=record.note,
            amount=record.amount,
            currency=record.currency,
            created_at=record.created_at,
            activated_at=record.activated_at,
        )


@dataclass
class IssueLicenseResultDTO:
    """DTO for issue license result."""

    license: LicenseDTO
    created: bool
    notified: bool = False
