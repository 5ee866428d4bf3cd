"""
Unit tests for license key generation.
"""

from licenses.domain.license_key import (
    LICENSE_KEY_PATTERN,
    generate_license_key,
    normalize_license_key,
)


class TestGenerateLicenseKey:
    """Tests for generate_license_key."""

    def test_key_format(self):
        """Test keys look like XD-XXXX-XXXX-XXXX."""
        key = generate_license_key()

        assert LICENSE_KEY_PATTERN.match(key)
        assert len(key) == 17

    def test_keys_are_well_formed_and_unique(self):
        """Test 10,000 keys all match the format without collisions."""
        keys = [generate_license_key() for _ in range(10_000)]

        assert all(LICENSE_KEY_PATTERN.match(key) for key in keys)
        assert len(set(keys)) == len(keys)

    def test_custom_prefix(self):
        """Test the prefix can be changed."""
        assert generate_license_key(prefix="CN").startswith("CN-")


class TestNormalizeLicenseKey:
    """Tests for normalize_license_key."""

    def test_strips_and_uppercases(self):
        assert normalize_license_key("  xd-ab12-cd34-ef56\n") == "XD-AB12-CD34-EF56"

    def test_none_becomes_empty(self):
        assert normalize_license_key(None) == ""
