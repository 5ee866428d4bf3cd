"""
Django management command to issue a license by hand.

Used by support staff, e.g. for bank transfer purchases.
"""

from asgiref.sync import async_to_sync
from django.core.management.base import BaseCommand, CommandError

from core.domain.exceptions import DomainException
from licenses.application.commands.issue_license import IssueLicenseCommand
from licenses.application.handlers.issue_license_handler import IssueLicenseHandler
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository
from notifications.infrastructure.email_notifier import get_notifier


class Command(BaseCommand):
    """Command to issue a license."""

    help = "Issue a new license key for an email address"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument("email", help="Owner email address")
        parser.add_argument("--note", default="", help="Free-form note stored with the license")
        parser.add_argument(
            "--notify",
            action="store_true",
            help="Email the key to the owner",
        )

    def handle(self, *args, **options):
        """Execute the command."""
        handler = IssueLicenseHandler(
            license_repository=DjangoLicenseRepository(),
            notifier=get_notifier(),
        )
        try:
            result = async_to_sync(handler.handle)(
                IssueLicenseCommand(
                    user_email=options["email"],
                    note=options["note"],
                    notify=options["notify"],
                )
            )
        except DomainException as e:
            raise CommandError(e.message) from e

        # pylint: disable=no-member
        self.stdout.write(self.style.SUCCESS(f"Issued {result.license.key} to {options['email']}"))
        if options["notify"] and not result.notified:
            self.stdout.write(self.style.WARNING("License email could not be sent"))
