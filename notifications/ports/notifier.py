"""
Notifier port (interface).

Notifications are fire-and-forget: a failed send is logged and counted,
never retried and never raised to the caller.
"""
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from core.metrics import notifications_sent_total

logger = logging.getLogger(__name__)

LICENSE_ISSUED = "license_issued"
SUBSCRIPTION_WELCOME = "subscription_welcome"
DEADLINE_REMINDER = "deadline_reminder"


class Notifier(ABC):
    """Abstract notifier sending a named template to an address."""

    @abstractmethod
    async def send(
        self, template: str, to_email: str, context: Optional[Dict[str, Any]] = None
    ) -> None:
        """
        Send a templated message.

        Args:
            template: Template name (e.g. 'license_issued')
            to_email: Recipient address
            context: Template variables

        Raises:
            Exception: Any delivery failure
        """
        pass

    async def notify(
        self, template: str, to_email: str, context: Optional[Dict[str, Any]] = None
    ) -> bool:
        """
        Send a templated message, logging instead of raising on failure.

        Returns:
            True if the message was handed off successfully
        """
        try:
            await self.send(template, to_email, context or {})
        except Exception as e:  # pylint: disable=broad-exception-caught
            notifications_sent_total.labels(template=template, outcome="failed").inc()
            logger.error(
                "Failed to send %s notification to %s: %s",
                template,
                to_email,
                e,
                exc_info=True,
            )
            return False
        notifications_sent_total.labels(template=template, outcome="sent").inc()
        return True
