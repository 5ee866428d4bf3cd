"""
Notifications module - Templated customer email.

This module handles:
- Notifier port used by issuance, subscriptions and reminders
- Django email adapter rendering text templates
- Celery-queued delivery
"""
