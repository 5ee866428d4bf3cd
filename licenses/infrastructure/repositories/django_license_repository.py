"""
Django implementation of LicenseRepository port.

This adapter converts between domain entities and Django ORM models.
"""
import uuid
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from asgiref.sync import sync_to_async
from django.db import IntegrityError, transaction
from django.db.models import Q
from django.utils import timezone

from core.domain.exceptions import DuplicateLicenseKeyError, DuplicateTransactionError
from core.domain.value_objects import Email, LicenseSource, LicenseStatus
from core.infrastructure.database import translate_database_errors
from licenses.domain.license import LicenseRecord
from licenses.infrastructure.models import License as LicenseModel
from licenses.ports.license_repository import LicenseRepository


class DjangoLicenseRepository(LicenseRepository):
    """
    Django ORM implementation of LicenseRepository.

    This adapter:
    1. Converts Django models to domain entities
    2. Converts domain entities to Django models
    3. Implements every write as a single SQL statement
    """

    def _to_domain(self, model: LicenseModel) -> LicenseRecord:
        """
        Convert Django model to domain entity.

        Args:
            model: Django License model

        Returns:
            LicenseRecord domain entity
        """
        return LicenseRecord(
            id=model.id,
            key=model.key,
            user_email=Email(model.user_email),
            status=LicenseStatus(model.status),
            source=LicenseSource(model.source),
            created_at=model.created_at,
            updated_at=model.updated_at,
            registered_device_id=model.registered_device_id or None,
            transaction_id=model.transaction_id,
            note=model.note,
            amount=model.amount,
            currency=model.currency,
            activated_at=model.activated_at,
        )

    @staticmethod
    def _to_columns(fields: Dict[str, Any]) -> Dict[str, Any]:
        """
        Convert domain field values to column values.

        Args:
            fields: Entity field names and values

        Returns:
            Column values suitable for the ORM
        """
        columns = {}
        for name, value in fields.items():
            if isinstance(value, Enum):
                value = value.value
            elif isinstance(value, Email):
                value = str(value)
            columns[name] = value
        return columns

    @sync_to_async
    def insert(self, record: LicenseRecord) -> uuid.UUID:
        """
        Insert a new license record.

        Args:
            record: LicenseRecord to insert

        Returns:
            Id of the stored record
        """
        columns = self._to_columns(
            {
                "id": record.id,
                "key": record.key,
                "user_email": record.user_email,
                "status": record.status,
                "source": record.source,
                "registered_device_id": record.registered_device_id,
                "transaction_id": record.transaction_id,
                "note": record.note,
                "amount": record.amount,
                "currency": record.currency,
                "created_at": record.created_at,
                "updated_at": record.updated_at,
                "activated_at": record.activated_at,
            }
        )
        with translate_database_errors("licenses.insert"):
            try:
                with transaction.atomic():
                    model = LicenseModel.objects.create(**columns)
            except IntegrityError:
                if (
                    record.transaction_id
                    and LicenseModel.objects.filter(transaction_id=record.transaction_id).exists()
                ):
                    raise DuplicateTransactionError(
                        f"License already issued for transaction {record.transaction_id}"
                    )
                if LicenseModel.objects.filter(key=record.key).exists():
                    raise DuplicateLicenseKeyError()
                raise
        return model.id

    @sync_to_async
    def update(self, record_id: uuid.UUID, **fields) -> None:
        """
        Merge fields into a stored record.

        Args:
            record_id: License record UUID
            **fields: Entity field names and their new values
        """
        columns = self._to_columns(fields)
        columns["updated_at"] = timezone.now()
        with translate_database_errors("licenses.update"):
            LicenseModel.objects.filter(id=record_id).update(**columns)

    @sync_to_async
    def bind_device_if_unbound(
        self, record_id: uuid.UUID, device_id: str, activated_at: datetime
    ) -> bool:
        """
        Bind a device with a single conditional UPDATE.

        Args:
            record_id: License record UUID
            device_id: Device identifier to bind
            activated_at: Activation timestamp

        Returns:
            True if this call created the binding
        """
        unbound = Q(registered_device_id__isnull=True) | Q(registered_device_id="")
        with translate_database_errors("licenses.bind_device_if_unbound"):
            updated = (
                LicenseModel.objects.filter(unbound, id=record_id)
                .exclude(status=LicenseStatus.REVOKED.value)
                .update(
                    status=LicenseStatus.ACTIVE.value,
                    registered_device_id=device_id,
                    activated_at=activated_at,
                    updated_at=timezone.now(),
                )
            )
        return updated == 1

    @sync_to_async
    def find_by_id(self, record_id: uuid.UUID) -> Optional[LicenseRecord]:
        """
        Find a license record by ID.

        Args:
            record_id: License record UUID

        Returns:
            LicenseRecord or None if not found
        """
        with translate_database_errors("licenses.find_by_id"):
            model = LicenseModel.objects.filter(id=record_id).first()
        return self._to_domain(model) if model else None

    @sync_to_async
    def find_by_key(self, key: str) -> Optional[LicenseRecord]:
        """
        Find a license record by its key.

        Args:
            key: License key string

        Returns:
            LicenseRecord or None if not found
        """
        with translate_database_errors("licenses.find_by_key"):
            model = LicenseModel.objects.filter(key=key).first()
        return self._to_domain(model) if model else None

    @sync_to_async
    def find_by_transaction_id(self, transaction_id: str) -> Optional[LicenseRecord]:
        """
        Find the license record issued for a payment transaction.

        Args:
            transaction_id: Payment provider transaction id

        Returns:
            LicenseRecord or None if not found
        """
        with translate_database_errors("licenses.find_by_transaction_id"):
            model = LicenseModel.objects.filter(transaction_id=transaction_id).first()
        return self._to_domain(model) if model else None

    @sync_to_async
    def find_by_user_email(self, email: str) -> List[LicenseRecord]:
        """
        Find all license records owned by an email address.

        Args:
            email: Owner email

        Returns:
            List of LicenseRecord, newest first
        """
        with translate_database_errors("licenses.find_by_user_email"):
            models = list(LicenseModel.objects.filter(user_email__iexact=email))
        return [self._to_domain(model) for model in models]
