"""
LicenseRecord domain entity.

This is the core domain entity representing an issued license key,
its lifecycle state and its device binding. It is independent of
infrastructure.
"""
import uuid
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Optional

from core.domain.value_objects import Email, LicenseSource, LicenseStatus
from licenses.domain.license_key import generate_license_key


@dataclass(frozen=True)
class LicenseRecord:
    """
    LicenseRecord domain entity.

    A license is created unbound in the ISSUED state, becomes ACTIVE
    when a device binds to it and may be REVOKED, after which it can
    never be activated again.
    """

    id: uuid.UUID
    key: str
    user_email: Email
    status: LicenseStatus
    source: LicenseSource
    created_at: datetime
    updated_at: datetime
    registered_device_id: Optional[str] = None
    transaction_id: Optional[str] = None
    note: str = ""
    amount: Optional[str] = None
    currency: Optional[str] = None
    activated_at: Optional[datetime] = None

    def __post_init__(self):
        """Validate license record."""
        if not self.key or len(self.key.strip()) == 0:
            raise ValueError("License key cannot be empty")
        if len(self.key) > 64:
            raise ValueError("License key too long")
        if self.status == LicenseStatus.ACTIVE and not self.registered_device_id:
            raise ValueError("An active license must be bound to a device")

    @classmethod
    def create(
        cls,
        user_email: str,
        note: str = "",
        transaction_id: Optional[str] = None,
        amount: Optional[str] = None,
        currency: Optional[str] = None,
        source: LicenseSource = LicenseSource.MANUAL,
        key: Optional[str] = None,
        record_id: Optional[uuid.UUID] = None,
    ) -> "LicenseRecord":
        """
        Create a new, unbound LicenseRecord.

        Args:
            user_email: Owner email address
            note: Free-form administrator note
            transaction_id: Payment transaction id, if issued from a payment
            amount: Paid amount, descriptive only
            currency: Paid currency, descriptive only
            source: Where the license came from
            key: License key (generated if not provided)
            record_id: Optional UUID (generated if not provided)

        Returns:
            LicenseRecord in ISSUED state
        """
        now = datetime.now(timezone.utc)
        return cls(
            id=record_id or uuid.uuid4(),
            key=key or generate_license_key(),
            user_email=Email(user_email),
            status=LicenseStatus.ISSUED,
            source=source,
            created_at=now,
            updated_at=now,
            transaction_id=transaction_id or None,
            note=note or "",
            amount=amount,
            currency=currency,
        )

    @property
    def is_revoked(self) -> bool:
        return self.status == LicenseStatus.REVOKED

    @property
    def is_bound(self) -> bool:
        """True when a device is registered to this license."""
        return bool(self.registered_device_id)

    def is_bound_to(self, device_id: str) -> bool:
        return self.is_bound and self.registered_device_id == device_id

    def with_new_key(self) -> "LicenseRecord":
        """Return a copy carrying a freshly generated key."""
        return replace(self, key=generate_license_key())
