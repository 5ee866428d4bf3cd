"""
Django admin configuration for licenses app.
"""
from asgiref.sync import async_to_sync
from django.contrib import admin, messages
from django.utils.html import format_html

from licenses.application.commands.reset_device import ResetDeviceCommand
from licenses.application.commands.revoke_license import RevokeLicenseCommand
from licenses.application.handlers.license_admin_handlers import (
    ResetDeviceHandler,
    RevokeLicenseHandler,
)
from licenses.infrastructure.models import License
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository

_license_repo = DjangoLicenseRepository()


@admin.register(License)
class LicenseAdmin(admin.ModelAdmin):
    """Admin interface for License model."""

    list_display = [
        "key",
        "user_email",
        "status_display",
        "registered_device_id",
        "source",
        "created_at",
        "activated_at",
    ]
    list_filter = ["status", "source", "created_at"]
    search_fields = ["key", "user_email", "transaction_id", "registered_device_id"]
    readonly_fields = [
        "id",
        "key",
        "status",
        "registered_device_id",
        "transaction_id",
        "source",
        "amount",
        "currency",
        "created_at",
        "updated_at",
        "activated_at",
    ]
    fieldsets = (
        (
            "Basic Information",
            {
                "fields": ("id", "key", "user_email", "status", "note"),
            },
        ),
        (
            "Device Binding",
            {
                "fields": ("registered_device_id", "activated_at"),
            },
        ),
        (
            "Payment",
            {
                "fields": ("source", "transaction_id", "amount", "currency"),
            },
        ),
        (
            "Timestamps",
            {
                "fields": ("created_at", "updated_at"),
                "classes": ("collapse",),
            },
        ),
    )
    actions = ["reset_device", "revoke"]

    def has_add_permission(self, request):
        # Keys are issued through the API or the issue_license command
        return False

    def status_display(self, obj):
        """Display status with color coding."""
        colors = {
            "issued": "gray",
            "active": "green",
            "revoked": "red",
        }
        return format_html(
            '<span style="color: {}; font-weight: bold;">{}</span>',
            colors.get(obj.status, "black"),
            obj.status.upper(),
        )

    status_display.short_description = "Status"

    @admin.action(description="Reset device binding")
    def reset_device(self, request, queryset):
        handler = ResetDeviceHandler(license_repository=_license_repo)
        count = sum(
            1
            for license_model in queryset
            if async_to_sync(handler.handle)(ResetDeviceCommand(license_key=license_model.key))
        )
        self.message_user(request, f"Reset device binding of {count} license(s)", messages.SUCCESS)

    @admin.action(description="Revoke license")
    def revoke(self, request, queryset):
        handler = RevokeLicenseHandler(license_repository=_license_repo)
        count = sum(
            1
            for license_model in queryset
            if async_to_sync(handler.handle)(RevokeLicenseCommand(license_key=license_model.key))
        )
        self.message_user(request, f"Revoked {count} license(s)", messages.WARNING)
