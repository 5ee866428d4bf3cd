"""
In-memory implementation of LicenseRepository port.

Used by unit tests and local runs without a database. Records are
kept as immutable entities; every write swaps a whole entity under a
lock, so readers never observe a partial update.
"""
import asyncio
import threading
import uuid
from dataclasses import replace
from datetime import datetime, timezone
from typing import Dict, List, Optional

from core.domain.exceptions import DuplicateLicenseKeyError, DuplicateTransactionError
from core.domain.value_objects import Email, LicenseStatus
from licenses.domain.license import LicenseRecord
from licenses.ports.license_repository import LicenseRepository


class InMemoryLicenseRepository(LicenseRepository):
    """Dictionary-backed LicenseRepository."""

    def __init__(self):
        self._records: Dict[uuid.UUID, LicenseRecord] = {}
        self._lock = threading.Lock()

    async def insert(self, record: LicenseRecord) -> uuid.UUID:
        await asyncio.sleep(0)
        with self._lock:
            for existing in self._records.values():
                if record.transaction_id and existing.transaction_id == record.transaction_id:
                    raise DuplicateTransactionError(
                        f"License already issued for transaction {record.transaction_id}"
                    )
                if existing.key == record.key:
                    raise DuplicateLicenseKeyError()
            self._records[record.id] = record
        return record.id

    async def update(self, record_id: uuid.UUID, **fields) -> None:
        await asyncio.sleep(0)
        if "user_email" in fields and isinstance(fields["user_email"], str):
            fields["user_email"] = Email(fields["user_email"])
        with self._lock:
            record = self._records.get(record_id)
            if record is None:
                return
            self._records[record_id] = replace(
                record, updated_at=datetime.now(timezone.utc), **fields
            )

    async def bind_device_if_unbound(
        self, record_id: uuid.UUID, device_id: str, activated_at: datetime
    ) -> bool:
        await asyncio.sleep(0)
        with self._lock:
            record = self._records.get(record_id)
            if record is None or record.is_bound or record.is_revoked:
                return False
            self._records[record_id] = replace(
                record,
                status=LicenseStatus.ACTIVE,
                registered_device_id=device_id,
                activated_at=activated_at,
                updated_at=datetime.now(timezone.utc),
            )
            return True

    async def find_by_id(self, record_id: uuid.UUID) -> Optional[LicenseRecord]:
        # Yield like a network round trip would, so concurrent callers interleave.
        await asyncio.sleep(0)
        return self._records.get(record_id)

    async def find_by_key(self, key: str) -> Optional[LicenseRecord]:
        await asyncio.sleep(0)
        return next((r for r in list(self._records.values()) if r.key == key), None)

    async def find_by_transaction_id(self, transaction_id: str) -> Optional[LicenseRecord]:
        await asyncio.sleep(0)
        return next(
            (r for r in list(self._records.values()) if r.transaction_id == transaction_id),
            None,
        )

    async def find_by_user_email(self, email: str) -> List[LicenseRecord]:
        await asyncio.sleep(0)
        records = [
            r for r in list(self._records.values()) if str(r.user_email).lower() == email.lower()
        ]
        return sorted(records, key=lambda r: r.created_at, reverse=True)

    def all(self) -> List[LicenseRecord]:
        """Snapshot of every stored record."""
        return list(self._records.values())
