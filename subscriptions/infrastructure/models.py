"""
SubscriberAccount model.
"""
import uuid

from django.db import models
from django.utils import timezone


class SubscriberAccount(models.Model):
    """
    Registered account of the compliance reminder service.
    """

    STATUS_CHOICES = [
        ("none", "No subscription"),
        ("active", "Active"),
        ("canceled", "Canceled"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(unique=True)
    subscription_status = models.CharField(max_length=20, choices=STATUS_CHOICES, default="none")
    subscription_id = models.CharField(max_length=255, null=True, blank=True, db_index=True)
    company_type = models.CharField(max_length=100, blank=True, default="")
    industry = models.CharField(max_length=100, blank=True, default="")
    employee_count = models.CharField(max_length=50, blank=True, default="")
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = "subscriber_accounts"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["subscription_status"]),
        ]

    def __str__(self):
        return self.email
