"""
Django management command to send regulatory deadline reminders.

This command should be run once a day (e.g., via cron or Celery beat).
"""

import logging
from datetime import date

from asgiref.sync import async_to_sync
from django.core.management.base import BaseCommand, CommandError

from notifications.infrastructure.email_notifier import get_notifier
from reminders.application.commands.send_deadline_reminders import (
    SendDeadlineRemindersCommand,
)
from reminders.application.handlers.send_deadline_reminders_handler import (
    SendDeadlineRemindersHandler,
)
from reminders.infrastructure.repositories.django_reminder_repositories import (
    DjangoDeadlineNotificationRepository,
    DjangoRegulationRepository,
)
from subscriptions.infrastructure.repositories.django_subscriber_repository import (
    DjangoSubscriberRepository,
)

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    """Command to send deadline reminders due today."""

    help = "Email active subscribers about deadlines 30, 7 and 1 days ahead"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument(
            "--date",
            dest="today",
            help="Reference date in YYYY-MM-DD format (defaults to today)",
        )

    def handle(self, *args, **options):
        """Execute the command."""
        today = None
        if options.get("today"):
            try:
                today = date.fromisoformat(options["today"])
            except ValueError as e:
                raise CommandError(f"Invalid --date: {options['today']}") from e

        handler = SendDeadlineRemindersHandler(
            subscriber_repository=DjangoSubscriberRepository(),
            regulation_repository=DjangoRegulationRepository(),
            notification_repository=DjangoDeadlineNotificationRepository(),
            notifier=get_notifier(),
        )
        sent = async_to_sync(handler.handle)(SendDeadlineRemindersCommand(today=today))

        # pylint: disable=no-member
        self.stdout.write(self.style.SUCCESS(f"Sent {sent} deadline reminder(s)"))
