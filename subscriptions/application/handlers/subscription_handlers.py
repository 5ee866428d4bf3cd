"""
Subscription lifecycle handlers.

These handlers apply billing events to subscriber accounts.
"""

import logging
from typing import Optional

from django.conf import settings

from core.domain.exceptions import MalformedInputError, SubscriberNotFoundError
from notifications.ports.notifier import SUBSCRIPTION_WELCOME, Notifier
from subscriptions.application.commands.activate_subscription import (
    ActivateSubscriptionCommand,
)
from subscriptions.application.commands.cancel_subscription import CancelSubscriptionCommand
from subscriptions.domain.subscriber import SubscriberAccount
from subscriptions.ports.subscriber_repository import SubscriberRepository

logger = logging.getLogger(__name__)


class ActivateSubscriptionHandler:
    """Handler for ActivateSubscriptionCommand."""

    def __init__(
        self,
        subscriber_repository: SubscriberRepository,
        notifier: Optional[Notifier] = None,
    ):
        self.subscriber_repository = subscriber_repository
        self.notifier = notifier

    async def handle(self, command: ActivateSubscriptionCommand) -> SubscriberAccount:
        """
        Activate the subscription of the account registered under the email.

        A welcome message is sent the first time the subscription becomes
        active. Redelivery of the same activation changes nothing.

        Args:
            command: ActivateSubscriptionCommand

        Returns:
            Updated SubscriberAccount

        Raises:
            MalformedInputError: If the email or subscription id is missing
            SubscriberNotFoundError: If no account has this email
        """
        email = (command.email or "").strip()
        if not email or not command.subscription_id:
            raise MalformedInputError("Subscription event is missing email or subscription id")

        account = await self.subscriber_repository.find_by_email(email)
        if not account:
            raise SubscriberNotFoundError(f"No subscriber registered for {email}")

        if account.is_subscribed and account.subscription_id == command.subscription_id:
            logger.info("Subscription %s already active, skipping", command.subscription_id)
            return account

        account = await self.subscriber_repository.save(account.activate(command.subscription_id))
        logger.info("Subscription %s activated for %s", command.subscription_id, email)

        if self.notifier:
            await self.notifier.notify(
                SUBSCRIPTION_WELCOME,
                str(account.email),
                {
                    "service_name": settings.COMPLIANCE_SERVICE_NAME,
                    "dashboard_url": settings.COMPLIANCE_DASHBOARD_URL,
                },
            )
        return account


class CancelSubscriptionHandler:
    """Handler for CancelSubscriptionCommand."""

    def __init__(self, subscriber_repository: SubscriberRepository):
        self.subscriber_repository = subscriber_repository

    async def handle(self, command: CancelSubscriptionCommand) -> SubscriberAccount:
        """
        Cancel the subscription with the given provider id.

        Raises:
            MalformedInputError: If the subscription id is missing
            SubscriberNotFoundError: If no account holds the subscription
        """
        if not command.subscription_id:
            raise MalformedInputError("Subscription event is missing subscription id")

        account = await self.subscriber_repository.find_by_subscription_id(
            command.subscription_id
        )
        if not account:
            raise SubscriberNotFoundError(
                f"No subscriber holds subscription {command.subscription_id}"
            )

        account = await self.subscriber_repository.save(account.cancel())
        logger.info("Subscription %s canceled for %s", command.subscription_id, account.email)
        return account
