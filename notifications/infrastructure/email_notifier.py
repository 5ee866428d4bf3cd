"""
Email adapters for the Notifier port.

EmailNotifier renders `notifications/<template>_subject.txt` and
`notifications/<template>.txt` and sends them through Django's mail
backend. QueuedNotifier hands the same work to a Celery worker.
"""
import logging
from typing import Any, Dict, Optional

from asgiref.sync import sync_to_async
from django.conf import settings
from django.core.mail import send_mail
from django.template.loader import render_to_string

from notifications.ports.notifier import Notifier

logger = logging.getLogger(__name__)


def render_email(template: str, to_email: str, context: Dict[str, Any]) -> tuple:
    """
    Render subject and body for a template.

    Args:
        template: Template name
        to_email: Recipient address, exposed to templates as `to_email`
        context: Template variables

    Returns:
        Tuple of (subject, body)
    """
    context = {**context, "to_email": to_email}
    context.setdefault("product_name", settings.LICENSE_PRODUCT_NAME)
    subject = render_to_string(f"notifications/{template}_subject.txt", context)
    body = render_to_string(f"notifications/{template}.txt", context)
    # Headers cannot contain newlines.
    subject = " ".join(subject.split())
    return subject, body


def deliver_email(template: str, to_email: str, context: Dict[str, Any]) -> None:
    """Render and send a templated email synchronously."""
    subject, body = render_email(template, to_email, context)
    send_mail(
        subject=subject,
        message=body,
        from_email=settings.DEFAULT_FROM_EMAIL,
        recipient_list=[to_email],
        fail_silently=False,
    )
    logger.info("Email %s sent to %s", template, to_email)


class EmailNotifier(Notifier):
    """Send templated email in-process."""

    async def send(
        self, template: str, to_email: str, context: Optional[Dict[str, Any]] = None
    ) -> None:
        await sync_to_async(deliver_email)(template, to_email, context or {})


class QueuedNotifier(Notifier):
    """Queue templated email for a Celery worker."""

    async def send(
        self, template: str, to_email: str, context: Optional[Dict[str, Any]] = None
    ) -> None:
        from core.tasks import send_notification_task

        await sync_to_async(send_notification_task.delay)(template, to_email, context or {})
        logger.debug("Queued %s notification for %s", template, to_email)


def get_notifier() -> Notifier:
    """Build the notifier selected by NOTIFICATIONS_USE_QUEUE."""
    if settings.NOTIFICATIONS_USE_QUEUE:
        return QueuedNotifier()
    return EmailNotifier()
