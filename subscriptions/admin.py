"""
Django admin configuration for subscriptions app.
"""
from django.contrib import admin

from subscriptions.infrastructure.models import SubscriberAccount


@admin.register(SubscriberAccount)
class SubscriberAccountAdmin(admin.ModelAdmin):
    """Admin interface for SubscriberAccount model."""

    list_display = [
        "email",
        "subscription_status",
        "company_type",
        "industry",
        "employee_count",
        "created_at",
    ]
    list_filter = ["subscription_status", "company_type", "industry"]
    search_fields = ["email", "subscription_id"]
    readonly_fields = ["id", "subscription_id", "created_at", "updated_at"]
