"""
Unit tests for email rendering and the email notifier.
"""
import pytest
from django.core import mail

from notifications.infrastructure.email_notifier import (
    EmailNotifier,
    QueuedNotifier,
    get_notifier,
    render_email,
)
from notifications.ports.notifier import (
    DEADLINE_REMINDER,
    LICENSE_ISSUED,
    SUBSCRIPTION_WELCOME,
)


class TestRenderEmail:
    """Tests for render_email."""

    def test_license_issued(self, settings):
        settings.LICENSE_PRODUCT_NAME = "Storefront Desktop"

        subject, body = render_email(
            LICENSE_ISSUED,
            "buyer@example.com",
            {
                "license_key": "XD-AB12-CD34-EF56",
                "download_url": "https://example.com/download",
                "mypage_url": "https://example.com/mypage",
            },
        )

        assert subject == "[Storefront Desktop] Your license key"
        assert "XD-AB12-CD34-EF56" in body
        assert "https://example.com/download" in body
        assert "buyer@example.com" in body

    def test_deadline_reminder_subject(self):
        subject, body = render_email(
            DEADLINE_REMINDER,
            "owner@example.com",
            {
                "urgency_prefix": "[URGENT] ",
                "regulation_name": "Labor insurance annual report",
                "deadline": "July 10, 2026",
                "days_left": 1,
                "service_name": "Compliance Reminders",
                "dashboard_url": "https://example.com/dashboard",
            },
        )

        assert subject == (
            "[URGENT] [Compliance Reminders] Deadline reminder: Labor insurance annual report"
        )
        assert "July 10, 2026" in body
        assert "1 day\n" in body

    def test_no_html_escaping(self):
        _, body = render_email(
            SUBSCRIPTION_WELCOME,
            "owner@example.com",
            {"service_name": "A & B", "dashboard_url": "https://example.com/?a=1&b=2"},
        )

        assert "https://example.com/?a=1&b=2" in body


@pytest.mark.asyncio
class TestEmailNotifier:
    """Tests for EmailNotifier."""

    async def test_send(self):
        delivered = await EmailNotifier().notify(
            SUBSCRIPTION_WELCOME,
            "owner@example.com",
            {"service_name": "Compliance Reminders", "dashboard_url": "https://example.com"},
        )

        assert delivered is True
        assert mail.outbox[-1].to == ["owner@example.com"]

    async def test_missing_template_is_reported(self):
        assert await EmailNotifier().notify("no_such_template", "owner@example.com") is False


def test_get_notifier(settings):
    settings.NOTIFICATIONS_USE_QUEUE = True
    assert isinstance(get_notifier(), QueuedNotifier)

    settings.NOTIFICATIONS_USE_QUEUE = False
    assert isinstance(get_notifier(), EmailNotifier)
