"""
SendDeadlineRemindersHandler.

Emails active subscribers about deadlines 30, 7 and 1 days ahead.
"""

import logging

from django.conf import settings
from django.utils import timezone

from core.metrics import deadline_reminders_sent_total
from notifications.ports.notifier import DEADLINE_REMINDER, Notifier
from reminders.application.commands.send_deadline_reminders import (
    SendDeadlineRemindersCommand,
)
from reminders.domain.deadline_notification import DeadlineNotification
from reminders.domain.regulation import REMINDER_OFFSETS
from reminders.ports.reminder_repository import (
    DeadlineNotificationRepository,
    RegulationRepository,
)
from subscriptions.ports.subscriber_repository import SubscriberRepository

logger = logging.getLogger(__name__)

URGENCY_PREFIXES = {
    1: "[URGENT] ",
    7: "[IMPORTANT] ",
}


class SendDeadlineRemindersHandler:
    """Handler for SendDeadlineRemindersCommand."""

    def __init__(
        self,
        subscriber_repository: SubscriberRepository,
        regulation_repository: RegulationRepository,
        notification_repository: DeadlineNotificationRepository,
        notifier: Notifier,
    ):
        self.subscriber_repository = subscriber_repository
        self.regulation_repository = regulation_repository
        self.notification_repository = notification_repository
        self.notifier = notifier

    async def handle(self, command: SendDeadlineRemindersCommand) -> int:
        """
        Send every reminder due today.

        A reminder is recorded before it is sent, so a second run on the
        same day sends nothing.

        Args:
            command: SendDeadlineRemindersCommand

        Returns:
            Number of reminders sent
        """
        today = command.today or timezone.localdate()

        accounts = await self.subscriber_repository.find_active()
        if not accounts:
            logger.info("No active subscribers, no reminders to send")
            return 0

        regulations = await self.regulation_repository.find_all()
        sent = 0

        for account in accounts:
            for regulation in regulations:
                if not regulation.is_applicable(account):
                    continue

                deadline = regulation.calculate_deadline(today)
                days_left = (deadline - today).days
                if days_left not in REMINDER_OFFSETS:
                    continue

                notification = DeadlineNotification.create(
                    account_id=account.id,
                    regulation_id=regulation.id,
                    regulation_name=regulation.name,
                    deadline=deadline,
                    days_left=days_left,
                )
                if not await self.notification_repository.record_if_absent(notification):
                    logger.debug("Reminder %s already sent", notification.id)
                    continue

                delivered = await self.notifier.notify(
                    DEADLINE_REMINDER,
                    str(account.email),
                    {
                        "urgency_prefix": URGENCY_PREFIXES.get(days_left, ""),
                        "regulation_name": regulation.name,
                        "deadline": f"{deadline:%B} {deadline.day}, {deadline.year}",
                        "days_left": days_left,
                        "service_name": settings.COMPLIANCE_SERVICE_NAME,
                        "dashboard_url": settings.COMPLIANCE_DASHBOARD_URL,
                    },
                )
                if delivered:
                    sent += 1
                    deadline_reminders_sent_total.inc()

        logger.info("Sent %d deadline reminder(s) for %s", sent, today.isoformat())
        return sent
