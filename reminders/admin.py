"""
Django admin configuration for reminders app.
"""
from django.contrib import admin

from reminders.infrastructure.models import DeadlineNotification, Regulation


@admin.register(Regulation)
class RegulationAdmin(admin.ModelAdmin):
    """Admin interface for Regulation model."""

    list_display = ["name", "deadline_type", "deadline_month", "deadline_day"]
    list_filter = ["deadline_type"]
    search_fields = ["name"]


@admin.register(DeadlineNotification)
class DeadlineNotificationAdmin(admin.ModelAdmin):
    """Admin interface for the sent reminder log."""

    list_display = ["regulation_name", "account_id", "notification_type", "deadline_date", "sent_at"]
    list_filter = ["notification_type", "deadline_date"]
    search_fields = ["id", "regulation_name"]
    readonly_fields = [
        "id",
        "account_id",
        "regulation_id",
        "regulation_name",
        "notification_type",
        "deadline_date",
        "sent_at",
    ]
