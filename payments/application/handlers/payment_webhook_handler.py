"""
PaymentWebhookHandler.

Verifies and dispatches PayPal webhook deliveries.
"""

import logging
from typing import Mapping

from core.domain.exceptions import MalformedInputError, SignatureVerificationError
from core.domain.value_objects import LicenseSource
from core.metrics import payment_webhooks_total
from licenses.application.commands.issue_license import IssueLicenseCommand
from licenses.application.handlers.issue_license_handler import IssueLicenseHandler
from payments.application.dto.webhook_dto import (
    DUPLICATE,
    IGNORED,
    PROCESSED,
    WebhookResultDTO,
)
from payments.domain.payment_event import (
    SUBSCRIPTION_ACTIVATED,
    SUBSCRIPTION_CANCELLED,
    PaymentEvent,
)
from payments.ports.signature_verifier import SignatureVerifier
from subscriptions.application.commands.activate_subscription import (
    ActivateSubscriptionCommand,
)
from subscriptions.application.commands.cancel_subscription import CancelSubscriptionCommand
from subscriptions.application.handlers.subscription_handlers import (
    ActivateSubscriptionHandler,
    CancelSubscriptionHandler,
)

logger = logging.getLogger(__name__)


class PaymentWebhookHandler:
    """Handler for payment provider webhook deliveries."""

    def __init__(
        self,
        signature_verifier: SignatureVerifier,
        issue_license_handler: IssueLicenseHandler,
        activate_subscription_handler: ActivateSubscriptionHandler,
        cancel_subscription_handler: CancelSubscriptionHandler,
    ):
        self.signature_verifier = signature_verifier
        self.issue_license_handler = issue_license_handler
        self.activate_subscription_handler = activate_subscription_handler
        self.cancel_subscription_handler = cancel_subscription_handler

    async def handle(self, payload: bytes, headers: Mapping[str, str]) -> WebhookResultDTO:
        """
        Verify the signature, then apply the event.

        Args:
            payload: Raw request body
            headers: Request headers carrying the transmission signature

        Returns:
            WebhookResultDTO describing what was done

        Raises:
            SignatureVerificationError: If the provider does not vouch for the delivery
            MalformedInputError: If the body cannot be parsed or lacks required fields
            SubscriberNotFoundError: If a subscription event names an unknown account
            UpstreamFailureError: If the provider or the datastore is unreachable
        """
        if not await self.signature_verifier.verify(payload, headers):
            payment_webhooks_total.labels(event_type="unknown", outcome="rejected").inc()
            raise SignatureVerificationError()

        event = PaymentEvent.parse(payload)
        logger.info("Received payment webhook %s (%s)", event.event_type, event.resource_id)

        if event.is_payment_completed:
            result = await self._issue_license(event)
        elif event.event_type == SUBSCRIPTION_ACTIVATED:
            await self.activate_subscription_handler.handle(
                ActivateSubscriptionCommand(
                    email=event.subscriber_email,
                    subscription_id=event.resource_id,
                )
            )
            result = WebhookResultDTO(status=PROCESSED, message="Subscription activated")
        elif event.event_type == SUBSCRIPTION_CANCELLED:
            await self.cancel_subscription_handler.handle(
                CancelSubscriptionCommand(subscription_id=event.resource_id)
            )
            result = WebhookResultDTO(status=PROCESSED, message="Subscription canceled")
        else:
            result = WebhookResultDTO(status=IGNORED, message="Event ignored")

        payment_webhooks_total.labels(event_type=event.event_type, outcome=result.status).inc()
        return result

    async def _issue_license(self, event: PaymentEvent) -> WebhookResultDTO:
        if not event.payer_email:
            raise MalformedInputError("No payer email")
        if not event.resource_id:
            raise MalformedInputError("No transaction id")

        issued = await self.issue_license_handler.handle(
            IssueLicenseCommand(
                user_email=event.payer_email,
                transaction_id=event.resource_id,
                amount=event.amount,
                currency=event.currency,
                source=LicenseSource.PAYMENT_WEBHOOK,
                notify=True,
            )
        )
        if not issued.created:
            return WebhookResultDTO(status=DUPLICATE, message="Already issued")
        return WebhookResultDTO(status=PROCESSED, message="License issued")
