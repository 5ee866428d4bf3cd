"""
Celery configuration for background tasks.

Used for email delivery and the daily deadline reminder run.
"""
import os

from celery import Celery

# Set default Django settings module
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "StorefrontLicenseService.settings.prod")

app = Celery("StorefrontLicenseService")

# Load configuration from Django settings
app.config_from_object("django.conf:settings", namespace="CELERY")

# Tasks live in core.tasks
app.autodiscover_tasks(["core"])
