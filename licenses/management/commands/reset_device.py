"""
Django management command to clear a license's device binding.
"""

from asgiref.sync import async_to_sync
from django.core.management.base import BaseCommand, CommandError

from licenses.application.commands.reset_device import ResetDeviceCommand
from licenses.application.handlers.license_admin_handlers import ResetDeviceHandler
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository


class Command(BaseCommand):
    """Command to reset the device lock of a license."""

    help = "Unbind a license key from its device so it can be used on another PC"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument("license_key", help="License key, e.g. XD-ABCD-1234-EFGH")

    def handle(self, *args, **options):
        """Execute the command."""
        handler = ResetDeviceHandler(license_repository=DjangoLicenseRepository())
        reset = async_to_sync(handler.handle)(ResetDeviceCommand(license_key=options["license_key"]))
        if not reset:
            raise CommandError(f"License key not found: {options['license_key']}")

        # pylint: disable=no-member
        self.stdout.write(self.style.SUCCESS(f"Device binding cleared for {options['license_key']}"))
