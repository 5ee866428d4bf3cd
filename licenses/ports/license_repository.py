"""
License repository port (interface).

This defines the contract for license record persistence.
Implementations are in the infrastructure layer.
"""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional
import uuid

from licenses.domain.license import LicenseRecord


class LicenseRepository(ABC):
    """
    Abstract repository for LicenseRecord entities.

    This is a port in hexagonal architecture - it defines
    what operations are available, not how they're implemented.
    Every write is atomic for a single record.
    """

    @abstractmethod
    async def insert(self, record: LicenseRecord) -> uuid.UUID:
        """
        Insert a new license record.

        Args:
            record: LicenseRecord to insert

        Returns:
            Id of the stored record

        Raises:
            DuplicateTransactionError: If a record with the same
                transaction_id already exists
            DuplicateLicenseKeyError: If the key is already taken
        """
        pass

    @abstractmethod
    async def update(self, record_id: uuid.UUID, **fields) -> None:
        """
        Merge fields into a stored record.

        Args:
            record_id: License record UUID
            **fields: Entity field names and their new values
        """
        pass

    @abstractmethod
    async def bind_device_if_unbound(
        self, record_id: uuid.UUID, device_id: str, activated_at: datetime
    ) -> bool:
        """
        Bind a device to a license in one conditional write.

        The write only happens when the record has no registered device
        and is not revoked.

        Args:
            record_id: License record UUID
            device_id: Device identifier to bind
            activated_at: Activation timestamp

        Returns:
            True if this call created the binding, False otherwise
        """
        pass

    @abstractmethod
    async def find_by_id(self, record_id: uuid.UUID) -> Optional[LicenseRecord]:
        """
        Find a license record by ID.

        Args:
            record_id: License record UUID

        Returns:
            LicenseRecord or None if not found
        """
        pass

    @abstractmethod
    async def find_by_key(self, key: str) -> Optional[LicenseRecord]:
        """
        Find a license record by its key.

        Args:
            key: License key string

        Returns:
            LicenseRecord or None if not found
        """
        pass

    @abstractmethod
    async def find_by_transaction_id(
        self, transaction_id: str
    ) -> Optional[LicenseRecord]:
        """
        Find the license record issued for a payment transaction.

        Args:
            transaction_id: Payment provider transaction/resource id

        Returns:
            LicenseRecord or None if not found
        """
        pass

    @abstractmethod
    async def find_by_user_email(self, email: str) -> List[LicenseRecord]:
        """
        Find all license records owned by an email address.

        Args:
            email: Owner email

        Returns:
            List of LicenseRecord, newest first
        """
        pass
