"""
Django admin configuration for core app.
"""

from django.contrib import admin
from django.utils.html import format_html

from core.infrastructure.models import ApiKey


@admin.register(ApiKey)
class ApiKeyAdmin(admin.ModelAdmin):
    """Admin interface for ApiKey model."""

    list_display = [
        "name",
        "key_prefix_display",
        "is_valid_display",
        "expires_at",
        "last_used_at",
        "created_at",
    ]
    list_filter = ["expires_at", "created_at"]
    search_fields = ["name", "key_prefix"]
    readonly_fields = [
        "id",
        "key_prefix",
        "key_hash",
        "created_at",
        "last_used_at",
        "is_valid_display",
    ]
    fieldsets = (
        (
            "Basic Information",
            {
                "fields": ("id", "name"),
            },
        ),
        (
            "Key Information",
            {
                "fields": ("key_prefix", "key_hash"),
                "description": "The raw key is only shown once when created.",
            },
        ),
        (
            "Validity",
            {
                "fields": ("expires_at", "is_valid_display"),
            },
        ),
        (
            "Timestamps",
            {
                "fields": ("created_at", "last_used_at"),
                "classes": ("collapse",),
            },
        ),
    )

    def key_prefix_display(self, obj):
        return f"{obj.key_prefix}..."

    key_prefix_display.short_description = "Key Prefix"

    def is_valid_display(self, obj):
        """Display validity status with color."""
        if obj.is_valid():
            return format_html('<span style="color: green;">Valid</span>')
        return format_html('<span style="color: red;">Expired</span>')

    is_valid_display.short_description = "Status"

    def save_model(self, request, obj, form, change):
        """Save model and show raw key if new."""
        super().save_model(request, obj, form, change)
        if not change and obj.raw_key:
            self.message_user(
                request,
                f"API Key created! Raw key: {obj.raw_key} "
                "(Save this - it won't be shown again)",
                level="WARNING",
            )
