"""
Unit tests for DeviceBindingService.
"""
from dataclasses import replace

import pytest

from activations.domain.services import DeviceBindingService
from core.domain.value_objects import ActivationReason, LicenseStatus


class TestEvaluate:
    """Tests for DeviceBindingService.evaluate."""

    def test_unbound_license_needs_binding(self, sample_license):
        assert DeviceBindingService.evaluate(sample_license, "device-A") is None

    def test_same_device(self, sample_license):
        record = replace(
            sample_license, status=LicenseStatus.ACTIVE, registered_device_id="device-A"
        )

        assert DeviceBindingService.evaluate(record, "device-A") == ActivationReason.ALREADY_BOUND

    def test_other_device(self, sample_license):
        record = replace(
            sample_license, status=LicenseStatus.ACTIVE, registered_device_id="device-A"
        )

        assert (
            DeviceBindingService.evaluate(record, "device-B") == ActivationReason.DEVICE_MISMATCH
        )

    def test_revoked_wins_over_binding(self, sample_license):
        """Test a revoked license is rejected even on its own device."""
        record = replace(
            sample_license, status=LicenseStatus.REVOKED, registered_device_id="device-A"
        )

        assert DeviceBindingService.evaluate(record, "device-A") == ActivationReason.REVOKED


@pytest.mark.asyncio
class TestActivate:
    """Tests for DeviceBindingService.activate."""

    async def test_first_activation_binds(self, license_repository, stored_license):
        reason, _ = await DeviceBindingService.activate(
            stored_license, "device-A", license_repository
        )

        record = await license_repository.find_by_id(stored_license.id)
        assert reason == ActivationReason.FIRST_ACTIVATION
        assert record.status == LicenseStatus.ACTIVE
        assert record.registered_device_id == "device-A"
        assert record.activated_at is not None

    async def test_lost_race_uses_winner_binding(self, license_repository, stored_license):
        """Test a stale read that loses the conditional write is re-judged."""
        stale = stored_license
        await DeviceBindingService.activate(stored_license, "device-A", license_repository)

        reason, latest = await DeviceBindingService.activate(stale, "device-B", license_repository)

        assert reason == ActivationReason.DEVICE_MISMATCH
        assert latest.registered_device_id == "device-A"

    async def test_lost_race_same_device(self, license_repository, stored_license):
        stale = stored_license
        await DeviceBindingService.activate(stored_license, "device-A", license_repository)

        reason, _ = await DeviceBindingService.activate(stale, "device-A", license_repository)

        assert reason == ActivationReason.ALREADY_BOUND
