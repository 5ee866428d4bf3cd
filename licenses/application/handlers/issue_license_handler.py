"""
IssueLicenseHandler.

Handles manual and payment-triggered license issuance.
"""

import logging
from typing import Optional

from django.conf import settings

from core.domain.exceptions import (
    DuplicateLicenseKeyError,
    DuplicateTransactionError,
    MalformedInputError,
)
from core.infrastructure.events import event_bus
from core.metrics import licenses_issued_total
from licenses.application.commands.issue_license import IssueLicenseCommand
from licenses.application.dto.license_dto import IssueLicenseResultDTO, LicenseDTO
from licenses.domain.events import LicenseIssued
from licenses.domain.license import LicenseRecord
from licenses.ports.license_repository import LicenseRepository
from notifications.ports.notifier import LICENSE_ISSUED, Notifier

logger = logging.getLogger(__name__)

MAX_KEY_ATTEMPTS = 5


class IssueLicenseHandler:
    """Handler for IssueLicenseCommand."""

    def __init__(
        self,
        license_repository: LicenseRepository,
        notifier: Optional[Notifier] = None,
    ):
        """Initialize handler with repositories."""
        self.license_repository = license_repository
        self.notifier = notifier

    async def handle(self, command: IssueLicenseCommand) -> IssueLicenseResultDTO:
        """
        Handle issue license command.

        A command carrying a transaction id that was already processed
        returns the existing license with created=False and sends nothing.

        Args:
            command: IssueLicenseCommand

        Returns:
            IssueLicenseResultDTO with the license and whether it is new

        Raises:
            MalformedInputError: If the email is missing or invalid
        """
        if command.transaction_id:
            existing = await self.license_repository.find_by_transaction_id(
                command.transaction_id
            )
            if existing:
                logger.info(
                    "Transaction %s already issued license %s, skipping",
                    command.transaction_id,
                    existing.key,
                )
                return IssueLicenseResultDTO(license=LicenseDTO.from_record(existing), created=False)

        try:
            record = LicenseRecord.create(
                user_email=(command.user_email or "").strip(),
                note=command.note,
                transaction_id=command.transaction_id,
                amount=command.amount,
                currency=command.currency,
                source=command.source,
            )
        except ValueError as e:
            raise MalformedInputError(str(e)) from e

        try:
            record = await self._insert_with_fresh_key(record)
        except DuplicateTransactionError:
            # A concurrent delivery of the same payment won the insert.
            existing = await self.license_repository.find_by_transaction_id(
                command.transaction_id
            )
            logger.info("Concurrent issuance for transaction %s detected", command.transaction_id)
            return IssueLicenseResultDTO(license=LicenseDTO.from_record(existing), created=False)

        licenses_issued_total.labels(source=record.source.value).inc()
        logger.info("License issued: %s (%s)", record.key, record.source.value)

        await event_bus.publish(
            LicenseIssued(
                license_id=record.id,
                user_email=str(record.user_email),
                source=record.source.value,
                transaction_id=record.transaction_id,
            )
        )

        notified = False
        if command.notify and self.notifier:
            notified = await self.notifier.notify(
                LICENSE_ISSUED,
                str(record.user_email),
                {
                    "license_key": record.key,
                    "download_url": settings.LICENSE_DOWNLOAD_URL,
                    "mypage_url": settings.LICENSE_MYPAGE_URL,
                },
            )

        return IssueLicenseResultDTO(
            license=LicenseDTO.from_record(record), created=True, notified=notified
        )

    async def _insert_with_fresh_key(self, record: LicenseRecord) -> LicenseRecord:
        """Insert the record, drawing a new key on collision."""
        for attempt in range(1, MAX_KEY_ATTEMPTS + 1):
            try:
                await self.license_repository.insert(record)
                return record
            except DuplicateLicenseKeyError:
                if attempt == MAX_KEY_ATTEMPTS:
                    raise
                logger.warning("License key collision on %s, regenerating", record.key)
                record = record.with_new_key()
        return record
