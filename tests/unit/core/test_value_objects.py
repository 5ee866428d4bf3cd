"""
Unit tests for core value objects.
"""
import pytest

from core.domain.value_objects import ActivationReason, DeviceId, Email, LicenseStatus


class TestEmail:
    """Tests for Email value object."""

    def test_valid_email(self):
        """Test valid email creation."""
        email = Email("test@example.com")
        assert str(email) == "test@example.com"
        assert email.value == "test@example.com"

    def test_invalid_email_no_at(self):
        """Test invalid email without @."""
        with pytest.raises(ValueError, match="Invalid email"):
            Email("invalid-email")

    def test_invalid_email_empty(self):
        """Test invalid empty email."""
        with pytest.raises(ValueError, match="Invalid email"):
            Email("")

    def test_compared_by_value(self):
        assert Email("a@example.com") == Email("a@example.com")
        assert hash(Email("a@example.com")) == hash(Email("a@example.com"))


class TestDeviceId:
    """Tests for DeviceId value object."""

    def test_valid_device(self):
        assert str(DeviceId("HOST-1234")) == "HOST-1234"

    def test_blank_device(self):
        with pytest.raises(ValueError):
            DeviceId("   ")

    def test_too_long(self):
        with pytest.raises(ValueError, match="too long"):
            DeviceId("x" * 256)


class TestLicenseStatus:
    """Tests for LicenseStatus enum."""

    def test_status_values(self):
        """Test status enum values."""
        assert LicenseStatus.ISSUED.value == "issued"
        assert LicenseStatus.ACTIVE.value == "active"
        assert LicenseStatus.REVOKED.value == "revoked"


class TestActivationReason:
    """Tests for ActivationReason enum."""

    @pytest.mark.parametrize(
        "reason,valid",
        [
            (ActivationReason.FIRST_ACTIVATION, True),
            (ActivationReason.ALREADY_BOUND, True),
            (ActivationReason.UNKNOWN_KEY, False),
            (ActivationReason.REVOKED, False),
            (ActivationReason.DEVICE_MISMATCH, False),
        ],
    )
    def test_is_valid(self, reason, valid):
        assert reason.is_valid is valid
