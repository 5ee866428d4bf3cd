"""
Serializers for the client activation endpoint.
"""

from rest_framework import serializers


class VerifyLicenseRequestSerializer(serializers.Serializer):
    """
    Serializer for verify license request.

    The desktop client sends camelCase fields; snake_case is accepted too.
    """

    licenseKey = serializers.CharField(required=False, allow_blank=True, max_length=64)
    deviceId = serializers.CharField(required=False, allow_blank=True, max_length=255)
    license_key = serializers.CharField(required=False, allow_blank=True, max_length=64)
    device_id = serializers.CharField(required=False, allow_blank=True, max_length=255)

    def validate(self, attrs):
        """Collapse the camelCase and snake_case spellings."""
        return {
            "license_key": attrs.get("licenseKey") or attrs.get("license_key") or "",
            "device_id": attrs.get("deviceId") or attrs.get("device_id") or "",
        }


class VerifyLicenseResponseSerializer(serializers.Serializer):
    """Serializer for verify license response."""

    valid = serializers.BooleanField()
    message = serializers.CharField()
    reason = serializers.CharField(allow_null=True)
