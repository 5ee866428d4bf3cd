"""
Django management command to create an administrator API key.

The raw key is printed once and never stored.
"""

from datetime import timedelta

from django.core.management.base import BaseCommand, CommandError
from django.utils import timezone

from core.infrastructure.models import ApiKey


class Command(BaseCommand):
    """Command to create an API key."""

    help = "Create an API key for the admin API"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument("name", help="Who or what the key is for")
        parser.add_argument(
            "--expires-in-days",
            type=int,
            default=None,
            help="Expire the key after this many days (default: never)",
        )

    def handle(self, *args, **options):
        """Execute the command."""
        expires_in_days = options["expires_in_days"]
        if expires_in_days is not None and expires_in_days <= 0:
            raise CommandError("--expires-in-days must be positive")

        api_key = ApiKey(name=options["name"])
        if expires_in_days:
            api_key.expires_at = timezone.now() + timedelta(days=expires_in_days)
        api_key.save()

        # pylint: disable=no-member
        self.stdout.write(self.style.SUCCESS(f"API key created for {api_key.name}"))
        self.stdout.write(f"  Key: {api_key.raw_key}")
        self.stdout.write(self.style.WARNING("  Save this key now. It won't be shown again."))
