"""
Unit tests for IssueLicenseHandler.
"""
import asyncio
from unittest.mock import patch

import pytest

from core.domain.exceptions import DuplicateLicenseKeyError, MalformedInputError
from core.domain.value_objects import LicenseSource, LicenseStatus
from licenses.application.commands.issue_license import IssueLicenseCommand
from licenses.application.handlers.issue_license_handler import (
    MAX_KEY_ATTEMPTS,
    IssueLicenseHandler,
)
from licenses.domain.events import LicenseIssued
from licenses.domain.license import LicenseRecord
from notifications.ports.notifier import LICENSE_ISSUED


def payment_command(transaction_id="CAPTURE-1"):
    return IssueLicenseCommand(
        user_email="payer@example.com",
        transaction_id=transaction_id,
        amount="4980",
        currency="JPY",
        source=LicenseSource.PAYMENT_WEBHOOK,
        notify=True,
    )


@pytest.mark.asyncio
class TestIssueLicenseHandler:
    """Tests for IssueLicenseHandler."""

    async def test_manual_issuance(self, license_repository, notifier, recorded_events):
        """Test manual issuance creates an unbound license without email."""
        handler = IssueLicenseHandler(license_repository=license_repository, notifier=notifier)

        result = await handler.handle(
            IssueLicenseCommand(user_email="buyer@example.com", note="bank transfer")
        )

        assert result.created is True
        assert result.notified is False
        assert result.license.status == LicenseStatus.ISSUED.value
        assert result.license.source == LicenseSource.MANUAL.value
        assert result.license.registered_device_id is None
        assert len(license_repository.all()) == 1
        assert notifier.sent == []
        assert [type(e) for e in recorded_events] == [LicenseIssued]

    async def test_manual_issuance_with_notify(self, license_repository, notifier):
        """Test the notify flag emails the key to the owner."""
        handler = IssueLicenseHandler(license_repository=license_repository, notifier=notifier)

        result = await handler.handle(
            IssueLicenseCommand(user_email="buyer@example.com", notify=True)
        )

        assert result.notified is True
        template, to_email, context = notifier.sent[0]
        assert template == LICENSE_ISSUED
        assert to_email == "buyer@example.com"
        assert context["license_key"] == result.license.key

    async def test_manual_issuance_twice_creates_two_licenses(self, license_repository):
        """Test manual issuance has no idempotency."""
        handler = IssueLicenseHandler(license_repository=license_repository)
        command = IssueLicenseCommand(user_email="buyer@example.com")

        first = await handler.handle(command)
        second = await handler.handle(command)

        assert first.license.key != second.license.key
        assert len(license_repository.all()) == 2

    async def test_invalid_email(self, license_repository):
        """Test an invalid email is malformed input."""
        handler = IssueLicenseHandler(license_repository=license_repository)

        with pytest.raises(MalformedInputError):
            await handler.handle(IssueLicenseCommand(user_email=""))

    async def test_payment_issuance_sends_key(self, license_repository, notifier):
        """Test payment issuance stores the transaction and emails the payer."""
        handler = IssueLicenseHandler(license_repository=license_repository, notifier=notifier)

        result = await handler.handle(payment_command())

        assert result.created is True
        assert result.license.transaction_id == "CAPTURE-1"
        assert result.license.amount == "4980"
        assert result.license.source == LicenseSource.PAYMENT_WEBHOOK.value
        assert len(notifier.sent) == 1

    async def test_redelivered_payment_is_idempotent(self, license_repository, notifier):
        """Test the same transaction never yields a second license or email."""
        handler = IssueLicenseHandler(license_repository=license_repository, notifier=notifier)

        first = await handler.handle(payment_command())
        second = await handler.handle(payment_command())

        assert first.created is True
        assert second.created is False
        assert second.license.key == first.license.key
        assert len(license_repository.all()) == 1
        assert len(notifier.sent) == 1

    async def test_concurrent_deliveries_issue_one_license(self, license_repository, notifier):
        """Test concurrent deliveries of one payment produce exactly one record."""
        handler = IssueLicenseHandler(license_repository=license_repository, notifier=notifier)

        results = await asyncio.gather(*(handler.handle(payment_command()) for _ in range(5)))

        assert sum(1 for r in results if r.created) == 1
        assert len({r.license.key for r in results}) == 1
        assert len(license_repository.all()) == 1
        assert len(notifier.sent) == 1

    async def test_notifier_failure_does_not_fail_issuance(
        self, license_repository, failing_notifier
    ):
        """Test a failed email still leaves the license issued."""
        handler = IssueLicenseHandler(
            license_repository=license_repository, notifier=failing_notifier
        )

        result = await handler.handle(payment_command())

        assert result.created is True
        assert result.notified is False
        assert len(license_repository.all()) == 1

    async def test_key_collision_regenerates(self, license_repository):
        """Test a colliding key is replaced by a fresh one."""
        taken = LicenseRecord.create(user_email="other@example.com", key="XD-AAAA-BBBB-CCCC")
        await license_repository.insert(taken)
        handler = IssueLicenseHandler(license_repository=license_repository)

        keys = iter(["XD-AAAA-BBBB-CCCC", "XD-DDDD-EEEE-FFFF"])
        with patch("licenses.domain.license.generate_license_key", side_effect=lambda: next(keys)):
            result = await handler.handle(IssueLicenseCommand(user_email="buyer@example.com"))

        assert result.license.key == "XD-DDDD-EEEE-FFFF"
        assert len(license_repository.all()) == 2

    async def test_key_collision_gives_up(self, license_repository):
        """Test collisions stop after a bounded number of attempts."""
        await license_repository.insert(
            LicenseRecord.create(user_email="other@example.com", key="XD-AAAA-BBBB-CCCC")
        )
        handler = IssueLicenseHandler(license_repository=license_repository)

        with patch(
            "licenses.domain.license.generate_license_key", return_value="XD-AAAA-BBBB-CCCC"
        ) as generator:
            with pytest.raises(DuplicateLicenseKeyError):
                await handler.handle(IssueLicenseCommand(user_email="buyer@example.com"))

        assert generator.call_count == MAX_KEY_ATTEMPTS
