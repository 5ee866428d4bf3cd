"""
Unit tests for ActivateLicenseHandler.
"""
import asyncio

import pytest

from activations.application.commands.activate_license import ActivateLicenseCommand
from activations.application.handlers.activate_license_handler import ActivateLicenseHandler
from activations.domain.events import ActivationRejected, LicenseActivated
from core.domain.exceptions import MalformedInputError
from core.domain.value_objects import ActivationReason, LicenseStatus


@pytest.mark.asyncio
class TestActivateLicenseHandler:
    """Tests for ActivateLicenseHandler."""

    async def test_device_lifecycle(self, license_repository, stored_license):
        """Test first use binds, the same device passes, another device fails."""
        handler = ActivateLicenseHandler(license_repository=license_repository)
        key = stored_license.key

        first = await handler.handle(ActivateLicenseCommand(license_key=key, device_id="A"))
        again = await handler.handle(ActivateLicenseCommand(license_key=key, device_id="A"))
        other = await handler.handle(ActivateLicenseCommand(license_key=key, device_id="B"))

        assert (first.valid, first.reason) == (True, ActivationReason.FIRST_ACTIVATION)
        assert (again.valid, again.reason) == (True, ActivationReason.ALREADY_BOUND)
        assert (other.valid, other.reason) == (False, ActivationReason.DEVICE_MISMATCH)
        assert "one PC only" in other.message

        record = await license_repository.find_by_id(stored_license.id)
        assert record.registered_device_id == "A"

    async def test_unknown_key(self, license_repository):
        handler = ActivateLicenseHandler(license_repository=license_repository)

        result = await handler.handle(
            ActivateLicenseCommand(license_key="XD-0000-0000-0000", device_id="A")
        )

        assert result.valid is False
        assert result.reason == ActivationReason.UNKNOWN_KEY
        assert result.license_id is None

    async def test_key_is_normalized(self, license_repository, stored_license):
        """Test surrounding whitespace and lower case are accepted."""
        handler = ActivateLicenseHandler(license_repository=license_repository)

        result = await handler.handle(
            ActivateLicenseCommand(license_key=f"  {stored_license.key.lower()} ", device_id="A")
        )

        assert result.reason == ActivationReason.FIRST_ACTIVATION

    @pytest.mark.parametrize(
        "license_key,device_id",
        [
            ("", "A"),
            ("XD-0000-0000-0000", ""),
            (None, "A"),
            ("XD-0000-0000-0000", "   "),
            ("XD-0000-0000-0000", "x" * 256),
        ],
    )
    async def test_missing_or_invalid_fields(self, license_repository, license_key, device_id):
        handler = ActivateLicenseHandler(license_repository=license_repository)

        with pytest.raises(MalformedInputError):
            await handler.handle(ActivateLicenseCommand(license_key=license_key, device_id=device_id))

    async def test_revoked_license_never_activates(self, license_repository, stored_license):
        """Test a revoked, unbound license stays revoked and unbound."""
        await license_repository.update(stored_license.id, status=LicenseStatus.REVOKED)
        handler = ActivateLicenseHandler(license_repository=license_repository)

        result = await handler.handle(
            ActivateLicenseCommand(license_key=stored_license.key, device_id="A")
        )

        record = await license_repository.find_by_id(stored_license.id)
        assert result.reason == ActivationReason.REVOKED
        assert result.valid is False
        assert record.status == LicenseStatus.REVOKED
        assert record.registered_device_id is None

    async def test_concurrent_first_activations(self, license_repository, stored_license):
        """Test concurrent activations from different devices bind exactly one."""
        handler = ActivateLicenseHandler(license_repository=license_repository)

        results = await asyncio.gather(
            *(
                handler.handle(
                    ActivateLicenseCommand(license_key=stored_license.key, device_id=f"device-{i}")
                )
                for i in range(20)
            )
        )

        reasons = [r.reason for r in results]
        assert reasons.count(ActivationReason.FIRST_ACTIVATION) == 1
        assert reasons.count(ActivationReason.DEVICE_MISMATCH) == 19

        winner = results[reasons.index(ActivationReason.FIRST_ACTIVATION)]
        record = await license_repository.find_by_id(stored_license.id)
        assert record.registered_device_id == f"device-{results.index(winner)}"

    async def test_concurrent_same_device(self, license_repository, stored_license):
        """Test concurrent activations from one device all succeed."""
        handler = ActivateLicenseHandler(license_repository=license_repository)

        results = await asyncio.gather(
            *(
                handler.handle(
                    ActivateLicenseCommand(license_key=stored_license.key, device_id="A")
                )
                for _ in range(5)
            )
        )

        assert all(r.valid for r in results)
        assert [r.reason for r in results].count(ActivationReason.FIRST_ACTIVATION) == 1

    async def test_events_published(self, license_repository, stored_license, recorded_events):
        handler = ActivateLicenseHandler(license_repository=license_repository)

        await handler.handle(ActivateLicenseCommand(license_key=stored_license.key, device_id="A"))
        await handler.handle(ActivateLicenseCommand(license_key=stored_license.key, device_id="B"))

        assert isinstance(recorded_events[0], LicenseActivated)
        assert isinstance(recorded_events[1], ActivationRejected)
        assert recorded_events[1].reason == ActivationReason.DEVICE_MISMATCH.value
