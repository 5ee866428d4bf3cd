"""
License model.
"""
import uuid

from django.db import models


class License(models.Model):
    """
    An issued license key, its lifecycle state and its device binding.
    """

    STATUS_CHOICES = [
        ("issued", "Issued"),
        ("active", "Active"),
        ("revoked", "Revoked"),
    ]

    SOURCE_CHOICES = [
        ("manual", "Manual"),
        ("payment_webhook", "Payment webhook"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    key = models.CharField(max_length=64, unique=True, db_index=True)
    user_email = models.EmailField(db_index=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default="issued")
    registered_device_id = models.CharField(max_length=255, null=True, blank=True)
    transaction_id = models.CharField(
        max_length=255,
        null=True,
        blank=True,
        unique=True,
        help_text="Payment provider transaction id, used for idempotent issuance",
    )
    source = models.CharField(max_length=32, choices=SOURCE_CHOICES, default="manual")
    note = models.TextField(blank=True, default="")
    amount = models.CharField(max_length=32, null=True, blank=True)
    currency = models.CharField(max_length=8, null=True, blank=True)
    created_at = models.DateTimeField()
    updated_at = models.DateTimeField()
    activated_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = "licenses"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["user_email", "status"]),
            models.Index(fields=["status"]),
        ]

    def __str__(self):
        return self.key

    @property
    def is_bound(self) -> bool:
        return bool(self.registered_device_id)
