"""
Integration tests for management commands.
"""

from io import StringIO

import pytest
from django.core import mail
from django.core.management import CommandError, call_command

from core.infrastructure.models import ApiKey, hash_api_key
from licenses.infrastructure.models import License
from reminders.infrastructure.models import DeadlineNotification, Regulation
from subscriptions.infrastructure.models import SubscriberAccount


def run(*args, **options):
    out = StringIO()
    call_command(*args, stdout=out, **options)
    return out.getvalue()


@pytest.mark.django_db
@pytest.mark.integration
class TestLicenseCommands:
    """Tests for issue_license and reset_device."""

    def test_issue_license(self):
        output = run("issue_license", "buyer@example.com", "--note", "bank transfer")

        license_obj = License.objects.get()
        assert license_obj.key in output
        assert license_obj.note == "bank transfer"
        assert mail.outbox == []

    def test_issue_license_invalid_email(self):
        with pytest.raises(CommandError):
            run("issue_license", "not-an-email")

    def test_reset_device(self, db_license):
        License.objects.filter(id=db_license.id).update(
            status="active", registered_device_id="device-A"
        )

        run("reset_device", db_license.key)

        license_obj = License.objects.get(id=db_license.id)
        assert license_obj.registered_device_id is None
        assert license_obj.status == "issued"

    def test_reset_device_unknown(self):
        with pytest.raises(CommandError):
            run("reset_device", "XD-0000-0000-0000")


@pytest.mark.django_db
@pytest.mark.integration
class TestCreateApiKeyCommand:
    """Tests for create_api_key."""

    def test_prints_raw_key_once(self):
        output = run("create_api_key", "support desk", "--expires-in-days", "30")

        api_key = ApiKey.objects.get()
        raw_key = output.split("Key: ")[1].split()[0]
        assert api_key.key_hash == hash_api_key(raw_key)
        assert api_key.key_prefix == raw_key[:8]
        assert api_key.expires_at is not None


@pytest.mark.django_db
@pytest.mark.integration
class TestSendDeadlineRemindersCommand:
    """Tests for send_deadline_reminders."""

    def test_sends_due_reminders_once(self, db_subscriber):
        SubscriberAccount.objects.filter(id=db_subscriber.id).update(
            subscription_status="active", subscription_id="I-SUB1"
        )
        Regulation.objects.create(
            name="Labor insurance annual report",
            deadline_type="annual",
            deadline_month=7,
            deadline_day=10,
        )

        first = run("send_deadline_reminders", "--date", "2026-07-09")
        second = run("send_deadline_reminders", "--date", "2026-07-09")

        assert "Sent 1 " in first
        assert "Sent 0 " in second
        assert DeadlineNotification.objects.count() == 1
        assert len(mail.outbox) == 1
        assert mail.outbox[0].subject.startswith("[URGENT] ")

    def test_invalid_date(self):
        with pytest.raises(CommandError):
            run("send_deadline_reminders", "--date", "tomorrow")


@pytest.mark.django_db
@pytest.mark.integration
def test_deadline_reminder_task_without_subscribers():
    from core.tasks import send_deadline_reminders_task

    assert send_deadline_reminders_task() == 0
