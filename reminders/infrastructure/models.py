"""
Regulation and DeadlineNotification models.
"""
import uuid

from django.db import models


class Regulation(models.Model):
    """
    Regulatory filing deadline master data.
    """

    DEADLINE_TYPE_CHOICES = [
        ("annual", "Annual"),
        ("monthly", "Monthly"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    deadline_type = models.CharField(max_length=20, choices=DEADLINE_TYPE_CHOICES)
    deadline_month = models.PositiveSmallIntegerField(null=True, blank=True)
    deadline_day = models.PositiveSmallIntegerField()
    applicable_company_types = models.JSONField(default=list, blank=True)
    applicable_industries = models.JSONField(default=list, blank=True)
    applicable_employee_ranges = models.JSONField(default=list, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "regulations"
        ordering = ["name"]

    def __str__(self):
        return self.name


class DeadlineNotification(models.Model):
    """
    Log of sent deadline reminders.

    The primary key encodes account, regulation, deadline and offset.
    """

    id = models.CharField(max_length=255, primary_key=True)
    account_id = models.UUIDField(db_index=True)
    regulation_id = models.UUIDField()
    regulation_name = models.CharField(max_length=255)
    notification_type = models.CharField(max_length=20)
    deadline_date = models.DateField()
    sent_at = models.DateTimeField()

    class Meta:
        db_table = "deadline_notifications"
        ordering = ["-sent_at"]

    def __str__(self):
        return self.id
