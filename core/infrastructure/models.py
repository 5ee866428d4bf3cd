"""
ApiKey model.

Administrator API keys for the admin endpoints. Only a SHA-256 hash
of the key is stored.
"""
import hashlib
import secrets
import uuid

from django.db import models
from django.utils import timezone


def hash_api_key(raw_key: str) -> str:
    return hashlib.sha256(raw_key.encode()).hexdigest()


class ApiKey(models.Model):
    """
    API keys for administrator authentication.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    key_prefix = models.CharField(max_length=8, editable=False)
    key_hash = models.CharField(max_length=64, editable=False, unique=True)
    expires_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    last_used_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = "api_keys"
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.name} - {self.key_prefix}..."

    def save(self, *args, **kwargs):
        """Generate API key on first save."""
        if not self.key_hash:
            raw_key = secrets.token_urlsafe(32)
            self.key_prefix = raw_key[:8]
            self.key_hash = hash_api_key(raw_key)
            # Only available on the instance that created the key
            self._raw_key = raw_key
        super().save(*args, **kwargs)

    @property
    def raw_key(self):
        return getattr(self, "_raw_key", None)

    def is_valid(self) -> bool:
        """True unless the key has expired."""
        return not (self.expires_at and self.expires_at < timezone.now())

    def mark_used(self):
        """Update last_used_at timestamp."""
        self.last_used_at = timezone.now()
        self.save(update_fields=["last_used_at"])
