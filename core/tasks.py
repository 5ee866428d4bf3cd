"""
Celery tasks for background processing.

Tasks for notification delivery and scheduled reminders.
"""
import logging

from asgiref.sync import async_to_sync

from StorefrontLicenseService.celery import app

logger = logging.getLogger(__name__)


@app.task(ignore_result=True)
def send_notification_task(template: str, to_email: str, context: dict):
    """
    Celery task for email delivery.

    Failures are logged and not retried.

    Args:
        template: Template name
        to_email: Recipient address
        context: Template variables
    """
    from notifications.infrastructure.email_notifier import deliver_email

    try:
        deliver_email(template, to_email, context)
    except Exception as exc:
        logger.error("Email %s to %s failed: %s", template, to_email, exc, exc_info=True)
        raise


@app.task
def send_deadline_reminders_task() -> int:
    """
    Daily task sending regulatory deadline reminders.

    Returns:
        Number of reminders sent
    """
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

    handler = SendDeadlineRemindersHandler(
        subscriber_repository=DjangoSubscriberRepository(),
        regulation_repository=DjangoRegulationRepository(),
        notification_repository=DjangoDeadlineNotificationRepository(),
        notifier=get_notifier(),
    )
    sent = async_to_sync(handler.handle)(SendDeadlineRemindersCommand())
    logger.info("Deadline reminder task sent %d reminder(s)", sent)
    return sent
