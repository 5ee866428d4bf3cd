"""
Serializers for the administrator API.
"""

from rest_framework import serializers


class IssueLicenseRequestSerializer(serializers.Serializer):
    """Serializer for manual license issuance."""

    user_email = serializers.EmailField(required=True)
    note = serializers.CharField(required=False, allow_blank=True, default="", max_length=1000)
    notify = serializers.BooleanField(required=False, default=False)


class ResetDeviceRequestSerializer(serializers.Serializer):
    """Serializer for device reset request."""

    license_key = serializers.CharField(required=True, max_length=64)


class LicenseDTOSerializer(serializers.Serializer):
    """Serializer for LicenseDTO."""

    id = serializers.UUIDField()
    key = serializers.CharField()
    user_email = serializers.EmailField()
    status = serializers.CharField()
    source = serializers.CharField()
    registered_device_id = serializers.CharField(allow_null=True)
    transaction_id = serializers.CharField(allow_null=True)
    note = serializers.CharField(allow_blank=True)
    amount = serializers.CharField(allow_null=True)
    currency = serializers.CharField(allow_null=True)
    created_at = serializers.DateTimeField()
    activated_at = serializers.DateTimeField(allow_null=True)


class IssueLicenseResponseSerializer(serializers.Serializer):
    """Serializer for issue license response."""

    license = LicenseDTOSerializer()
    notified = serializers.BooleanField()


class ResetDeviceResponseSerializer(serializers.Serializer):
    """Serializer for device reset response."""

    reset = serializers.BooleanField()
